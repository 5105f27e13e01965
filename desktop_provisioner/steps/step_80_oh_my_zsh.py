from __future__ import annotations

from ..context import StepContext
from ..lib.checks import command_exists, path_exists
from ..lib.net import run_remote_script
from ..pipeline import StepFailed

OH_MY_ZSH_DIR = "~/.oh-my-zsh"


class InstallOhMyZshStep:
    step_id = "80_oh_my_zsh"
    description = "Install Oh My Zsh (unattended)"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return path_exists(OH_MY_ZSH_DIR)

    def run(self, ctx: StepContext) -> None:
        if not command_exists("zsh"):
            raise StepFailed("zsh is not installed, cannot install Oh My Zsh")
        run_remote_script(ctx, ctx.cfg.url("oh_my_zsh_installer"), ["--unattended"])
