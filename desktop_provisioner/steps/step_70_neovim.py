from __future__ import annotations

import logging
from pathlib import Path

from ..context import StepContext
from ..lib.checks import command_exists
from ..lib.git import clone_repo
from ..lib.pkg import apt_install, apt_update, missing_packages
from ..pipeline import StepFailed

logger = logging.getLogger(__name__)


class InstallNeovimStep:
    step_id = "70_neovim"
    description = "Build and install Neovim from source"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return command_exists("nvim")

    def run(self, ctx: StepContext) -> None:
        missing = missing_packages(ctx, ctx.cfg.packages("neovim_build"))
        if missing:
            apt_update(ctx)
        failed = apt_install(ctx, missing)
        if failed:
            raise StepFailed(f"Failed to install Neovim build dependencies: {' '.join(failed)}")

        src = clone_repo(ctx, ctx.cfg.repo("neovim"), ctx.downloads_dir / "neovim")

        logger.info("Building Neovim (this may take a while)...")
        ctx.runner.run(["make", "CMAKE_BUILD_TYPE=RelWithDebInfo"], cwd=str(src))

        build = Path(src) / "build"
        ctx.runner.run(["cpack", "-G", "DEB"], cwd=str(build))

        if ctx.dry_run:
            return

        debs = sorted(build.glob("nvim-linux*.deb"))
        if not debs:
            raise StepFailed(f"Neovim .deb package not found in {build}")

        ctx.runner.run(ctx.as_root(["dpkg", "-i", str(debs[0])]))
        if command_exists("nvim"):
            out = ctx.runner.run(["nvim", "--version"], check=False).stdout
            logger.info("Installed %s", out.splitlines()[0] if out else "nvim")
