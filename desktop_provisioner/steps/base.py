from __future__ import annotations

from typing import List

from ..context import StepContext
from ..lib.pkg import apt_install, apt_update, missing_packages
from ..pipeline import StepFailed


class AptPackagesStep:
    """Install a configured package group; satisfied once every package is present."""

    step_id = ""
    description = ""
    group = ""

    def packages(self, ctx: StepContext) -> List[str]:
        return ctx.cfg.packages(self.group)

    def is_satisfied(self, ctx: StepContext) -> bool:
        return not missing_packages(ctx, self.packages(ctx))

    def install(self, ctx: StepContext) -> None:
        missing = missing_packages(ctx, self.packages(ctx))
        if not missing:
            return
        apt_update(ctx)
        failed = apt_install(ctx, missing)
        if failed:
            raise StepFailed(f"Package installation failures: {' '.join(failed)}")

    def run(self, ctx: StepContext) -> None:
        self.install(ctx)
