from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class PrivilegeError(RuntimeError):
    pass


def ensure_privileges(runner: Any, *, root: bool) -> None:
    """Fatal precondition: be root, or hold (or obtain) sudo credentials.

    ``sudo -v`` may prompt for a password on the terminal.
    """

    if root:
        return
    if runner.run(["sudo", "-n", "true"], check=False).ok:
        return

    logger.info("This run requires sudo/root privileges.")
    if not runner.run(["sudo", "-v"], check=False).ok:
        raise PrivilegeError("Failed to obtain sudo privileges")
