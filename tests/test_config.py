from __future__ import annotations

import pytest

from desktop_provisioner.config import ConfigError, ProvisionConfig, deep_merge, load_config


def test_bundled_manifest_loads():
    cfg = load_config()

    assert "git" in cfg.packages("git")
    assert "zsh" in cfg.packages("system")
    assert cfg.repo("neovim")["branch"] == "stable"
    assert cfg.url("vivaldi_key").startswith("https://")
    assert cfg.optional_steps == []
    assert set(cfg.zsh_plugins) == {"zsh-syntax-highlighting", "zsh-autosuggestions", "zsh-autocomplete"}
    assert {"name": "vscode", "classic": True} in cfg.snaps


def test_user_file_merges_over_defaults(tmp_path):
    user = tmp_path / "mine.yaml"
    user.write_text(
        "packages:\n  system: [htop]\noptional_steps: [96_locales]\npaths:\n  log_file: ~/setup.log\n",
        encoding="utf-8",
    )

    cfg = load_config(str(user))

    assert cfg.packages("system") == ["htop"]
    assert "qemu-kvm" in cfg.packages("virtualization")
    assert cfg.optional_steps == ["96_locales"]
    assert cfg.log_file.endswith("/setup.log")
    assert not cfg.log_file.startswith("~")


def test_deep_merge_does_not_mutate_base():
    base = {"a": {"x": 1, "y": [1]}, "b": 2}
    merged = deep_merge(base, {"a": {"y": [2]}, "c": 3})

    assert merged == {"a": {"x": 1, "y": [2]}, "b": 2, "c": 3}
    assert base == {"a": {"x": 1, "y": [1]}, "b": 2}


def test_missing_user_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "absent.yaml"))


def test_non_mapping_user_file(tmp_path):
    user = tmp_path / "list.yaml"
    user.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(user))


def test_missing_entries_raise():
    cfg = ProvisionConfig(raw={"packages": {"bad": "not-a-list"}})

    assert cfg.packages("absent") == []
    with pytest.raises(ConfigError):
        cfg.packages("bad")
    with pytest.raises(ConfigError):
        cfg.repo("nerd_fonts")
    with pytest.raises(ConfigError):
        cfg.url("ghostty_deb")
