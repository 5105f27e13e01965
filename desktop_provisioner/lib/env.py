from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    downloads_default: str = "~/Downloads"
    log_default: str = "~/Downloads/install.log"
    config_home_default: str = "~/.config"


PATHS = Paths()


def expand(path: str) -> str:
    return os.path.expandvars(os.path.expanduser(path))


def is_root() -> bool:
    return os.geteuid() == 0


def xdg_config_home() -> str:
    return os.environ.get("XDG_CONFIG_HOME") or expand(PATHS.config_home_default)
