from __future__ import annotations

import logging
from pathlib import Path

from ..context import StepContext
from ..lib.checks import command_exists
from ..lib.pkg import apt_install, apt_update, missing_packages
from ..pipeline import StepFailed

logger = logging.getLogger(__name__)

KEYRING = "/usr/share/keyrings/vivaldi.gpg"
SOURCES_FILE = "/etc/apt/sources.list.d/vivaldi.sources"
LEGACY_LIST = "/etc/apt/sources.list.d/vivaldi.list"


def render_sources(repo_url: str, arch: str) -> str:
    return (
        "Types: deb\n"
        f"URIs: {repo_url}\n"
        "Suites: stable\n"
        "Components: main\n"
        f"Architectures: {arch}\n"
        f"Signed-By: {KEYRING}\n"
    )


class InstallVivaldiStep:
    step_id = "40_vivaldi"
    description = "Install the Vivaldi browser from its apt repository"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return command_exists("vivaldi")

    def _require(self, ctx: StepContext, path: str, what: str) -> None:
        if not ctx.dry_run and not Path(path).exists():
            raise StepFailed(f"{what} not found after writing it: {path}")

    def run(self, ctx: StepContext) -> None:
        deps = missing_packages(ctx, ctx.cfg.packages("vivaldi_deps"))
        if deps:
            apt_update(ctx)
            failed = apt_install(ctx, deps)
            if failed:
                raise StepFailed(f"Failed to install dependencies: {' '.join(failed)}")

        key = ctx.runner.run(["curl", "-fsSL", ctx.cfg.url("vivaldi_key")]).stdout
        ctx.runner.run(ctx.as_root(["gpg", "--batch", "--yes", "--dearmor", "-o", KEYRING]), input_text=key)
        self._require(ctx, KEYRING, "Vivaldi GPG key")
        logger.info("Vivaldi GPG key imported")

        arch = ctx.runner.query(["dpkg", "--print-architecture"]).stdout.strip() or "amd64"
        ctx.runner.run(
            ctx.as_root(["tee", SOURCES_FILE]),
            input_text=render_sources(ctx.cfg.url("vivaldi_repo"), arch),
        )
        self._require(ctx, SOURCES_FILE, "Vivaldi repository file")

        apt_update(ctx)
        if apt_install(ctx, ["vivaldi-stable"]):
            raise StepFailed("vivaldi-stable installation failed")

        if Path(LEGACY_LIST).exists():
            ctx.runner.run(ctx.as_root(["rm", "-f", LEGACY_LIST]), check=False)

        if command_exists("vivaldi"):
            version = ctx.runner.run(["vivaldi", "--version"], check=False).stdout.strip()
            logger.info("Installed %s", version)
