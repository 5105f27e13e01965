"""Idempotency predicates shared by steps."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


def path_exists(path: str | Path) -> bool:
    return Path(path).expanduser().exists()


def all_paths_exist(paths: Iterable[str | Path]) -> bool:
    return all(path_exists(p) for p in paths)
