from __future__ import annotations

import logging
from typing import List

from ..context import StepContext
from ..pipeline import StepFailed
from .base import AptPackagesStep

logger = logging.getLogger(__name__)


class InstallVirtualizationStep(AptPackagesStep):
    step_id = "50_virtualization"
    description = "Install the QEMU/KVM virtualization stack"
    group = "virtualization"

    def run(self, ctx: StepContext) -> None:
        self.install(ctx)

        problems: List[str] = []

        def attempt(argv: List[str], problem: str) -> bool:
            ok = ctx.runner.run(ctx.as_root(argv), check=False).ok
            if not ok:
                problems.append(problem)
            return ok

        nets = ctx.runner.query(ctx.as_root(["virsh", "net-list", "--all"]))
        if "default" not in nets.stdout and not ctx.dry_run:
            problems.append("default libvirt network not found")
        else:
            if not ctx.runner.run(ctx.as_root(["virsh", "net-start", "default"]), check=False).ok:
                logger.info("Default network already started")
            attempt(["virsh", "net-autostart", "default"], "failed to autostart default network")

        attempt(["systemctl", "enable", "libvirtd"], "failed to enable libvirtd")
        attempt(["systemctl", "start", "libvirtd"], "failed to start libvirtd")

        for group in ("libvirt", "libvirt-qemu"):
            if not ctx.runner.run(ctx.as_root(["adduser", ctx.user, group]), check=False).ok:
                logger.info("User %s already in %s group", ctx.user, group)

        if problems:
            raise StepFailed("; ".join(problems))
