from __future__ import annotations

from ..context import StepContext
from ..lib.checks import path_exists
from ..lib.git import clone_repo
from ..lib.pkg import apt_install, apt_update, missing_packages
from ..pipeline import StepFailed

EXTENSION_DIR = "~/.local/share/gnome-shell/extensions/pop-shell@system76.com"


class InstallPopShellStep:
    step_id = "90_pop_shell"
    description = "Install the Pop Shell tiling extension for GNOME"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return path_exists(EXTENSION_DIR)

    def run(self, ctx: StepContext) -> None:
        missing = missing_packages(ctx, ctx.cfg.packages("pop_shell_build"))
        if missing:
            apt_update(ctx)
        failed = apt_install(ctx, missing)
        if failed:
            raise StepFailed(f"Failed to install Pop Shell dependencies: {' '.join(failed)}")

        src = clone_repo(ctx, ctx.cfg.repo("pop_shell"), ctx.downloads_dir / "shell")
        ctx.runner.run(["make", "local-install"], cwd=str(src))
