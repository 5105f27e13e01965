from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .lib.env import PATHS, expand

DEFAULT_MANIFEST = "ubuntu-desktop.yaml"


class ConfigError(ValueError):
    pass


def _manifests_dir() -> Path:
    # desktop_provisioner/config.py -> desktop_provisioner/manifests
    return Path(__file__).resolve().parent / "manifests"


def _load_yaml(p: Path) -> Dict[str, Any]:
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read provisioning configuration") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config must contain a mapping/object: {p}")
    return raw


def deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overlay into a copy of base. Mappings merge; everything else replaces."""

    out = copy.deepcopy(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.raw.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"{name} must be a mapping")
        return section

    @property
    def downloads_dir(self) -> str:
        return expand(str(self._section("paths").get("downloads_dir") or PATHS.downloads_default))

    @property
    def log_file(self) -> str:
        return expand(str(self._section("paths").get("log_file") or PATHS.log_default))

    @property
    def optional_steps(self) -> List[str]:
        return [str(s) for s in (self.raw.get("optional_steps") or [])]

    def packages(self, group: str) -> List[str]:
        pkgs = self._section("packages").get(group) or []
        if not isinstance(pkgs, list):
            raise ConfigError(f"packages.{group} must be a list")
        return [str(p).strip() for p in pkgs if str(p).strip()]

    @property
    def remove_packages(self) -> List[str]:
        return [str(p) for p in (self._section("remove").get("packages") or [])]

    @property
    def remove_patterns(self) -> List[str]:
        return [str(p) for p in (self._section("remove").get("patterns") or [])]

    def repo(self, name: str) -> Dict[str, Any]:
        repo = self._section("repos").get(name)
        if not isinstance(repo, dict) or not repo.get("url"):
            raise ConfigError(f"repos.{name}.url missing")
        return repo

    def url(self, name: str) -> str:
        value = self._section("urls").get(name)
        if not value:
            raise ConfigError(f"urls.{name} missing")
        return str(value)

    @property
    def zsh_plugins(self) -> Dict[str, str]:
        plugins = self._section("zsh").get("plugins") or {}
        if not isinstance(plugins, dict):
            raise ConfigError("zsh.plugins must be a mapping of name -> git url")
        return {str(k): str(v) for k, v in plugins.items()}

    @property
    def snaps(self) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for item in self.raw.get("snaps") or []:
            if isinstance(item, str):
                out.append({"name": item, "classic": False})
            else:
                out.append({"name": str(item["name"]), "classic": bool(item.get("classic", False))})
        return out

    @property
    def locales(self) -> List[str]:
        return [str(l) for l in (self.raw.get("locales") or [])]

    @property
    def extra_debs(self) -> List[Dict[str, str]]:
        out: List[Dict[str, str]] = []
        for item in self.raw.get("extra_debs") or []:
            if not isinstance(item, dict) or not item.get("url") or not item.get("command"):
                raise ConfigError("extra_debs entries need url and command")
            out.append({"url": str(item["url"]), "command": str(item["command"])})
        return out


def load_config(path: Optional[str] = None) -> ProvisionConfig:
    """Load the bundled manifest, deep-merging an optional user file over it."""

    raw = _load_yaml(_manifests_dir() / DEFAULT_MANIFEST)
    if path:
        p = Path(expand(path))
        if not p.exists():
            raise ConfigError(f"Config file not found: {path}")
        if p.suffix.lower() not in {".yaml", ".yml"}:
            raise ConfigError("config must be YAML")
        raw = deep_merge(raw, _load_yaml(p))
    return ProvisionConfig(raw=raw)
