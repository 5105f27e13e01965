from __future__ import annotations

import getpass
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from .config import ProvisionConfig
from .lib.env import is_root


@dataclass(frozen=True)
class StepContext:
    cfg: ProvisionConfig
    runner: Any  # CommandRunner or a test double with the same run() signature
    root: bool = field(default_factory=is_root)
    user: str = field(default_factory=getpass.getuser)

    @property
    def dry_run(self) -> bool:
        return bool(getattr(self.runner, "dry_run", False))

    @property
    def downloads_dir(self) -> Path:
        return Path(self.cfg.downloads_dir)

    def as_root(self, argv: Sequence[str]) -> list[str]:
        """Prefix argv with sudo unless already running as root."""
        if self.root:
            return list(argv)
        return ["sudo", *argv]
