from __future__ import annotations

import pytest

from desktop_provisioner.lib.command import CommandError, CommandRunner, run_cmd
from desktop_provisioner.lib.git import clone_or_pull, clone_repo
from desktop_provisioner.lib.pkg import apt_install, dpkg_install, installed_matching, missing_packages
from desktop_provisioner.lib.privilege import PrivilegeError, ensure_privileges

from .conftest import FakeRunner

APT_LIST = """Listing...
thunderbird/noble,now 1:115.10 amd64 [installed]
thunderbird-locale-en/noble,now 1:115.10 all [installed]
libreoffice-core/noble,now 4:24.2 amd64 [installed]
zsh/noble,now 5.9 amd64 [installed]
"""


def test_dry_run_never_executes():
    r = CommandRunner(dry_run=True).run(["definitely-not-a-real-binary-xyz", "--flag"])
    assert r.ok
    assert r.stdout == ""


def test_missing_executable_reports_127():
    r = run_cmd(["definitely-not-a-real-binary-xyz"], check=False)
    assert r.returncode == 127
    with pytest.raises(CommandError) as e:
        run_cmd(["definitely-not-a-real-binary-xyz"])
    assert e.value.result.returncode == 127
    assert "definitely-not-a-real-binary-xyz" in str(e.value)


def test_privileges_root_needs_no_sudo():
    runner = FakeRunner()
    ensure_privileges(runner, root=True)
    assert runner.calls == []


def test_privileges_cached_sudo():
    runner = FakeRunner()
    ensure_privileges(runner, root=False)
    assert runner.calls == [["sudo", "-n", "true"]]


def test_privileges_prompt_then_fail():
    runner = FakeRunner({("sudo", "-n"): (1, ""), ("sudo", "-v"): (1, "")})
    with pytest.raises(PrivilegeError):
        ensure_privileges(runner, root=False)
    assert runner.calls == [["sudo", "-n", "true"], ["sudo", "-v"]]


def test_installed_matching_parses_apt_list(make_ctx):
    ctx = make_ctx(FakeRunner({("apt", "list"): (0, APT_LIST)}))

    assert installed_matching(ctx, ["Thunderbird", "libreoffice"]) == [
        "thunderbird",
        "thunderbird-locale-en",
        "libreoffice-core",
    ]
    assert installed_matching(ctx, []) == []


def test_missing_packages_uses_dpkg_status(make_ctx):
    ctx = make_ctx(FakeRunner({("dpkg", "-s", "btop"): (1, "")}))
    assert missing_packages(ctx, ["zsh", "btop", "fzf"]) == ["btop"]


def test_apt_install_keeps_going_and_reports_failures(make_ctx):
    runner = FakeRunner({("sudo", "apt", "install", "-y", "nala"): (100, "")})
    ctx = make_ctx(runner, root=False)

    assert apt_install(ctx, ["bat", "nala", "eza"]) == ["nala"]
    assert runner.calls == [
        ["sudo", "apt", "install", "-y", "bat"],
        ["sudo", "apt", "install", "-y", "nala"],
        ["sudo", "apt", "install", "-y", "eza"],
    ]


def test_dpkg_install_always_fixes_dependencies(make_ctx):
    runner = FakeRunner({("dpkg", "-i"): (1, "")})
    r = dpkg_install(make_ctx(runner), "/tmp/x.deb")

    assert not r.ok
    assert runner.called("apt-get", "install", "-f", "-y")


def test_clone_when_absent(make_ctx, tmp_path):
    runner = FakeRunner()
    dest = tmp_path / "src" / "neovim"

    clone_repo(make_ctx(runner), {"url": "https://example.test/neovim", "branch": "stable", "depth": 1}, dest)

    assert runner.calls == [["git", "clone", "https://example.test/neovim", "--branch=stable", "--depth=1", str(dest)]]


def test_pull_when_checkout_exists_and_tolerate_failure(make_ctx, tmp_path):
    (tmp_path / "shell" / ".git").mkdir(parents=True)
    runner = FakeRunner({("git", "pull"): (1, "")})

    clone_or_pull(make_ctx(runner), "https://example.test/shell", tmp_path / "shell")

    assert runner.calls == [["git", "pull"]]


def test_failed_clone_raises(make_ctx, tmp_path):
    runner = FakeRunner({("git", "clone"): (128, "")})
    with pytest.raises(CommandError):
        clone_or_pull(make_ctx(runner), "https://example.test/x", tmp_path / "x")


def test_query_executes_even_in_dry_run():
    r = CommandRunner(dry_run=True).query(["definitely-not-a-real-binary-xyz"])
    assert r.returncode == 127
