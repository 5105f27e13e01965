from __future__ import annotations

import logging
from pathlib import Path

from ..context import StepContext
from ..lib.checks import command_exists
from ..lib.net import download
from ..lib.pkg import dpkg_install
from ..pipeline import StepFailed

logger = logging.getLogger(__name__)


class InstallGhosttyStep:
    step_id = "60_ghostty"
    description = "Install the Ghostty terminal emulator (.deb)"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return command_exists("ghostty")

    def run(self, ctx: StepContext) -> None:
        url = ctx.cfg.url("ghostty_deb")
        deb = ctx.downloads_dir / url.rsplit("/", 1)[-1]

        download(ctx, url, deb)
        if not ctx.dry_run and not deb.is_file():
            raise StepFailed(f"Ghostty .deb not found after download: {deb}")

        try:
            if not dpkg_install(ctx, str(deb)).ok:
                raise StepFailed("Ghostty dpkg installation failed")
        finally:
            if not ctx.dry_run:
                Path(deb).unlink(missing_ok=True)

        if command_exists("ghostty"):
            version = ctx.runner.run(["ghostty", "--version"], check=False).stdout.strip()
            logger.info("Installed %s", version.splitlines()[0] if version else "ghostty")
