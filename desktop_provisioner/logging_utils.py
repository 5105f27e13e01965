from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path
from typing import Iterator

from .lib.env import PATHS

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

LOG_FORMAT = "%(asctime)s - %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
FALLBACK_LOG_NAME = "desktop-provisioner.log"


def log_success(logger: logging.Logger, msg: str, *args: object) -> None:
    logger.log(SUCCESS, msg, *args)


def _prepare_private_file(path: Path) -> None:
    """Create (or re-permission) the log file as owner read/write only."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o600)
    os.close(fd)
    os.chmod(str(path), 0o600)


def _open_file_handler(log_path: str) -> tuple[logging.FileHandler, str]:
    try:
        p = Path(log_path).expanduser()
        _prepare_private_file(p)
        return logging.FileHandler(str(p), mode="a", encoding="utf-8"), str(p)
    except OSError:
        # Fall back to a writable location next to the working directory.
        fallback = Path.cwd() / FALLBACK_LOG_NAME
        _prepare_private_file(fallback)
        return logging.FileHandler(str(fallback), mode="a", encoding="utf-8"), str(fallback)


@contextlib.contextmanager
def run_log(
    log_path: str = PATHS.log_default,
    *,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Iterator[str]:
    """Attach the run log to the root logger for the duration of a run.

    The file is created with mode 0600 before the first record is written.
    Handlers are detached and closed on every exit path.

    Yields the actual file path being used.
    """

    root = logging.getLogger()
    previous_level = root.level
    root.setLevel(level)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler, chosen_path = _open_file_handler(log_path)
    file_handler.setFormatter(fmt)
    handlers: list[logging.Handler] = [file_handler]

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        root.addHandler(h)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    try:
        yield chosen_path
    finally:
        for h in handlers:
            root.removeHandler(h)
            h.close()
        root.setLevel(previous_level)
