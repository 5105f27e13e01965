from __future__ import annotations

import logging
from typing import List

from ..context import StepContext
from ..lib.pkg import apt_remove, installed_matching, is_package_installed
from ..pipeline import StepFailed

logger = logging.getLogger(__name__)


class RemoveUnwantedPackagesStep:
    step_id = "10_remove_unwanted"
    description = "Remove unwanted GNOME applications"

    def _installed(self, ctx: StepContext) -> List[str]:
        listed = [p for p in ctx.cfg.remove_packages if is_package_installed(ctx, p)]
        for p in installed_matching(ctx, ctx.cfg.remove_patterns):
            if p not in listed:
                listed.append(p)
        return listed

    def is_satisfied(self, ctx: StepContext) -> bool:
        return not self._installed(ctx)

    def run(self, ctx: StepContext) -> None:
        failed = apt_remove(ctx, self._installed(ctx))

        problems: List[str] = []
        if failed:
            problems.append(f"failed to remove {' '.join(failed)}")
        if not ctx.runner.run(ctx.as_root(["apt", "autoremove", "--purge", "-y"]), check=False).ok:
            problems.append("autoremove failed")
        if not ctx.runner.run(ctx.as_root(["apt", "autoclean"]), check=False).ok:
            problems.append("autoclean failed")

        if problems:
            raise StepFailed("; ".join(problems))
