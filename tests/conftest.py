from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from desktop_provisioner.config import ProvisionConfig, load_config
from desktop_provisioner.context import StepContext
from desktop_provisioner.lib.command import CmdResult, CommandError


class FakeRunner:
    """Records argv and answers from a table of argv prefixes -> (returncode, stdout).

    Answers ignore dry_run, the same way a real read-only query still executes.
    """

    def __init__(self, responses: Optional[Dict[Tuple[str, ...], Tuple[int, str]]] = None, *, dry_run: bool = False):
        self.responses = dict(responses or {})
        self.dry_run = dry_run
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []

    def _lookup(self, argv: List[str]) -> Tuple[int, str]:
        best: Optional[Tuple[str, ...]] = None
        for prefix in self.responses:
            if tuple(argv[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        return self.responses[best] if best is not None else (0, "")

    def run(self, argv: Sequence[str], *, check: bool = True, env=None, cwd=None, input_text=None) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        self.inputs.append(input_text)
        rc, out = self._lookup(argv)
        result = CmdResult(argv=argv, returncode=rc, stdout=out, stderr="" if rc == 0 else "simulated failure")
        if check and rc != 0:
            raise CommandError(result)
        return result

    def query(self, argv: Sequence[str], *, cwd=None) -> CmdResult:
        return self.run(argv, check=False, cwd=cwd)

    def called(self, *prefix: str) -> bool:
        return any(tuple(c[: len(prefix)]) == prefix for c in self.calls)


@pytest.fixture
def cfg(tmp_path) -> ProvisionConfig:
    base = load_config()
    raw = dict(base.raw)
    raw["paths"] = {"downloads_dir": str(tmp_path / "Downloads"), "log_file": str(tmp_path / "install.log")}
    return ProvisionConfig(raw=raw)


@pytest.fixture
def make_ctx(cfg):
    def _make(runner: FakeRunner, *, root: bool = True) -> StepContext:
        return StepContext(cfg=cfg, runner=runner, root=root, user="tester")

    return _make


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("ZSH_CUSTOM", raising=False)
    return home
