from __future__ import annotations

import logging
import os
import re
import stat

import pytest

from desktop_provisioner.logging_utils import log_success, run_log

LINE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - (INFO|WARNING|ERROR|SUCCESS|DEBUG): .+$")


def _mode(path) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


def test_log_file_is_owner_only_before_first_record(tmp_path):
    log = tmp_path / "nested" / "install.log"

    with run_log(str(log), also_console=False) as actual:
        assert actual == str(log)
        assert _mode(log) == 0o600


def test_existing_log_is_tightened_and_appended(tmp_path):
    log = tmp_path / "install.log"
    log.write_text("previous run\n", encoding="utf-8")
    os.chmod(log, 0o644)

    with run_log(str(log), also_console=False):
        logging.getLogger("t").info("second run")

    assert _mode(log) == 0o600
    text = log.read_text(encoding="utf-8")
    assert text.startswith("previous run\n")
    assert "INFO: second run" in text


def test_record_format_and_success_level(tmp_path):
    log = tmp_path / "install.log"

    with run_log(str(log), also_console=False):
        logger = logging.getLogger("t")
        logger.info("hello")
        log_success(logger, "%s installed", "git")
        logger.error("it broke")

    lines = log.read_text(encoding="utf-8").splitlines()
    assert all(LINE.match(l) for l in lines)
    assert lines[-2].endswith("SUCCESS: git installed")
    assert lines[-1].endswith("ERROR: it broke")


def test_handlers_detached_on_exception(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)

    with pytest.raises(RuntimeError):
        with run_log(str(tmp_path / "install.log"), also_console=False):
            raise RuntimeError("abort")

    assert root.handlers == before


def test_unwritable_path_falls_back_to_cwd(tmp_path, monkeypatch):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with run_log(str(blocker / "install.log"), also_console=False) as actual:
        pass

    assert actual == str(tmp_path / "desktop-provisioner.log")
    assert _mode(actual) == 0o600
