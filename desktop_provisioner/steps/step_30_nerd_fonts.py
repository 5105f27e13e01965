from __future__ import annotations

import logging
from pathlib import Path

from ..context import StepContext
from ..lib.checks import path_exists
from ..lib.git import clone_repo
from ..pipeline import StepFailed

logger = logging.getLogger(__name__)

# Where the upstream install.sh puts fonts on Linux.
FONTS_DIR = "~/.local/share/fonts/NerdFonts"


class InstallNerdFontsStep:
    step_id = "30_nerd_fonts"
    description = "Install Nerd Fonts from the upstream repository"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return path_exists(FONTS_DIR)

    def run(self, ctx: StepContext) -> None:
        checkout = clone_repo(ctx, ctx.cfg.repo("nerd_fonts"), ctx.downloads_dir / "nerd-fonts")

        script = Path(checkout) / "install.sh"
        if not ctx.dry_run and not script.is_file():
            raise StepFailed(f"install.sh not found in {checkout}")

        ctx.runner.run(["bash", str(script)], cwd=str(checkout))
