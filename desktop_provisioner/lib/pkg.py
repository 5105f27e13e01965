from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from ..context import StepContext
from .command import CmdResult

logger = logging.getLogger(__name__)


def is_package_installed(ctx: StepContext, package: str) -> bool:
    return ctx.runner.query(["dpkg", "-s", package]).ok


def missing_packages(ctx: StepContext, packages: Iterable[str]) -> List[str]:
    return [p for p in packages if not is_package_installed(ctx, p)]


def installed_matching(ctx: StepContext, patterns: Sequence[str]) -> List[str]:
    """Installed package names containing any of the patterns (case-insensitive)."""

    if not patterns:
        return []
    r = ctx.runner.query(["apt", "list", "--installed"])
    needles = [p.lower() for p in patterns]
    found: List[str] = []
    for line in r.stdout.splitlines():
        if "/" not in line:
            continue
        name = line.split("/", 1)[0].strip()
        if any(n in name.lower() for n in needles) and name not in found:
            found.append(name)
    return found


def apt_update(ctx: StepContext) -> None:
    ctx.runner.run(ctx.as_root(["apt", "update"]))


def apt_install(ctx: StepContext, packages: Sequence[str]) -> List[str]:
    """Install packages one at a time. Returns the names that failed."""

    failed: List[str] = []
    for p in packages:
        r = ctx.runner.run(ctx.as_root(["apt", "install", "-y", p]), check=False)
        if not r.ok:
            logger.warning("Failed to install: %s", p)
            failed.append(p)
    return failed


def apt_remove(ctx: StepContext, packages: Sequence[str]) -> List[str]:
    failed: List[str] = []
    for p in packages:
        r = ctx.runner.run(ctx.as_root(["apt", "remove", "-y", p]), check=False)
        if not r.ok:
            logger.warning("Failed to remove: %s", p)
            failed.append(p)
    return failed


def dpkg_install(ctx: StepContext, deb_path: str) -> CmdResult:
    """dpkg -i followed by a dependency fix-up, which runs even if dpkg fails."""

    r = ctx.runner.run(ctx.as_root(["dpkg", "-i", deb_path]), check=False)
    fix = ctx.runner.run(ctx.as_root(["apt-get", "install", "-f", "-y"]), check=False)
    if not fix.ok:
        logger.warning("Failed to fix dependencies after installing %s", deb_path)
    return r
