from __future__ import annotations

from .base import AptPackagesStep


class InstallGitStep(AptPackagesStep):
    step_id = "20_install_git"
    description = "Install git"
    group = "git"
