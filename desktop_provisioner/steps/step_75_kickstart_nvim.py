from __future__ import annotations

from pathlib import Path

from ..context import StepContext
from ..lib.checks import path_exists
from ..lib.env import xdg_config_home


def nvim_config_dir() -> Path:
    return Path(xdg_config_home()) / "nvim"


class InstallKickstartNvimStep:
    step_id = "75_kickstart_nvim"
    description = "Install the kickstart.nvim configuration"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return path_exists(nvim_config_dir())

    def run(self, ctx: StepContext) -> None:
        ctx.runner.run(["git", "clone", str(ctx.cfg.repo("kickstart_nvim")["url"]), str(nvim_config_dir())])
