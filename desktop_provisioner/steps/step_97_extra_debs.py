from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..context import StepContext
from ..lib.checks import command_exists
from ..lib.net import download
from ..lib.pkg import dpkg_install
from ..pipeline import StepFailed

logger = logging.getLogger(__name__)


class InstallExtraDebsStep:
    step_id = "97_extra_debs"
    description = "Install additional .deb packages downloaded from vendor URLs"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return all(command_exists(d["command"]) for d in ctx.cfg.extra_debs)

    def run(self, ctx: StepContext) -> None:
        failed: List[str] = []
        for entry in ctx.cfg.extra_debs:
            if command_exists(entry["command"]):
                continue
            deb = ctx.downloads_dir / entry["url"].rsplit("/", 1)[-1]
            try:
                download(ctx, entry["url"], deb)
                if not dpkg_install(ctx, str(deb)).ok:
                    failed.append(entry["command"])
            except Exception as e:
                logger.warning("Failed to install %s: %s", entry["command"], e)
                failed.append(entry["command"])
            finally:
                if not ctx.dry_run:
                    Path(deb).unlink(missing_ok=True)

        if failed:
            raise StepFailed(f"Failed to install: {' '.join(failed)}")
