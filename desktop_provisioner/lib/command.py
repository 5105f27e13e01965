from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandError(RuntimeError):
    def __init__(self, result: CmdResult):
        self.result = result
        detail = result.stderr.strip()
        msg = f"Command failed ({result.returncode}): {fmt_argv(result.argv)}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - Captures stdout/stderr and logs them at DEBUG.
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.info("CMD %s", fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
        )
    except FileNotFoundError:
        # Missing executable behaves like a shell's "command not found".
        result = CmdResult(argv=argv_list, returncode=127, stdout="", stderr=f"{argv_list[0]}: command not found")
    else:
        result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)

    if result.stdout:
        logger.debug("STDOUT %s", result.stdout.strip())
    if result.stderr:
        logger.debug("STDERR %s", result.stderr.strip())

    if check and not result.ok:
        raise CommandError(result)

    return result


class CommandRunner:
    """The single seam through which steps reach the outside world.

    Tests substitute an object with the same ``run`` and ``query`` signatures.
    """

    def __init__(self, *, dry_run: bool = False):
        self.dry_run = dry_run

    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
        input_text: str | None = None,
    ) -> CmdResult:
        return run_cmd(argv, check=check, env=env, cwd=cwd, input_text=input_text, dry_run=self.dry_run)

    def query(self, argv: Sequence[str], *, cwd: str | None = None) -> CmdResult:
        """Run a read-only inspection command; executes even in dry-run."""
        return run_cmd(argv, check=False, cwd=cwd, dry_run=False)
