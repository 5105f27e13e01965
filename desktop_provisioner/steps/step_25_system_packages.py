from __future__ import annotations

from .base import AptPackagesStep


class InstallSystemPackagesStep(AptPackagesStep):
    step_id = "25_system_packages"
    description = "Install system packages (shell, CLI tools, OCR, GNOME extensions)"
    group = "system"
