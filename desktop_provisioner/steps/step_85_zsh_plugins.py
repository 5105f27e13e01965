from __future__ import annotations

import datetime
import logging
import os
import re
import shutil
from pathlib import Path
from typing import List

from ..context import StepContext
from ..lib.checks import all_paths_exist
from ..lib.env import expand
from ..pipeline import StepFailed

logger = logging.getLogger(__name__)

PLUGINS_LINE = re.compile(r"^plugins=\(.*\)$", re.MULTILINE)


def zsh_custom_dir() -> Path:
    return Path(os.environ.get("ZSH_CUSTOM") or expand("~/.oh-my-zsh/custom"))


def rewrite_plugins_line(text: str, plugins: List[str]) -> str:
    """Replace the first plugins=(...) line; text without one is returned unchanged."""
    return PLUGINS_LINE.sub(f"plugins=({' '.join(plugins)})", text, count=1)


class InstallZshPluginsStep:
    step_id = "85_zsh_plugins"
    description = "Install Oh My Zsh plugins and enable them in ~/.zshrc"

    def _plugin_dirs(self, ctx: StepContext) -> dict[str, Path]:
        base = zsh_custom_dir() / "plugins"
        return {name: base / name for name in ctx.cfg.zsh_plugins}

    def is_satisfied(self, ctx: StepContext) -> bool:
        return all_paths_exist(self._plugin_dirs(ctx).values())

    def run(self, ctx: StepContext) -> None:
        failed: List[str] = []
        urls = ctx.cfg.zsh_plugins
        for name, dest in self._plugin_dirs(ctx).items():
            if dest.exists():
                continue
            logger.info("Installing %s...", name)
            if not ctx.runner.run(["git", "clone", urls[name], str(dest)], check=False).ok:
                logger.warning("Failed to install %s", name)
                failed.append(name)

        zshrc = Path(expand("~/.zshrc"))
        if zshrc.is_file() and not ctx.dry_run:
            stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
            shutil.copy2(zshrc, zshrc.with_name(f".zshrc.bak-{stamp}"))
            text = zshrc.read_text(encoding="utf-8")
            if PLUGINS_LINE.search(text):
                zshrc.write_text(rewrite_plugins_line(text, ["git", *urls]), encoding="utf-8")
                logger.info("Updated %s with Oh My Zsh plugins", zshrc)

        if failed:
            raise StepFailed(f"Failed to install plugins: {' '.join(failed)}")
