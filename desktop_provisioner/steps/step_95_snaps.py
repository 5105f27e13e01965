from __future__ import annotations

import logging
from typing import List

from ..context import StepContext
from ..lib.checks import command_exists
from ..pipeline import StepFailed

logger = logging.getLogger(__name__)


class InstallSnapsStep:
    step_id = "95_snaps"
    description = "Install snap packages"

    def _installed(self, ctx: StepContext) -> set[str]:
        r = ctx.runner.query(["snap", "list"])
        return {line.split()[0] for line in r.stdout.splitlines()[1:] if line.strip()}

    def is_satisfied(self, ctx: StepContext) -> bool:
        if not command_exists("snap"):
            return False
        installed = self._installed(ctx)
        return all(s["name"] in installed for s in ctx.cfg.snaps)

    def run(self, ctx: StepContext) -> None:
        if not command_exists("snap"):
            raise StepFailed("snapd is not installed, cannot install snap packages")

        installed = self._installed(ctx)
        failed: List[str] = []
        for snap in ctx.cfg.snaps:
            if snap["name"] in installed:
                continue
            argv = ["snap", "install", snap["name"]]
            if snap["classic"]:
                argv.append("--classic")
            if not ctx.runner.run(ctx.as_root(argv), check=False).ok:
                logger.warning("Failed to install %s", snap["name"])
                failed.append(snap["name"])

        if failed:
            raise StepFailed(f"Failed to install snaps: {' '.join(failed)}")
