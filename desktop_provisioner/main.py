from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable, List, Optional

from . import __version__
from .config import ConfigError, ProvisionConfig, load_config
from .context import StepContext
from .lib.command import CommandRunner
from .lib.privilege import PrivilegeError, ensure_privileges
from .logging_utils import run_log
from .pipeline import RunResult, Step, run_pipeline
from .steps import (
    InstallExtraDebsStep,
    InstallGhosttyStep,
    InstallGitStep,
    InstallKickstartNvimStep,
    InstallNeovimStep,
    InstallNerdFontsStep,
    InstallOhMyZshStep,
    InstallPopShellStep,
    InstallSnapsStep,
    InstallSystemPackagesStep,
    InstallVirtualizationStep,
    InstallVivaldiStep,
    InstallZshPluginsStep,
    ModifyLocalesStep,
    RemoveUnwantedPackagesStep,
)
from .summary import format_summary

logger = logging.getLogger(__name__)


def build_steps(cfg: ProvisionConfig) -> List[Step]:
    steps: List[Step] = [
        RemoveUnwantedPackagesStep(),
        InstallGitStep(),
        InstallSystemPackagesStep(),
        InstallNerdFontsStep(),
        InstallVivaldiStep(),
        InstallVirtualizationStep(),
        InstallGhosttyStep(),
        InstallNeovimStep(),
        InstallKickstartNvimStep(),
        InstallOhMyZshStep(),
        InstallZshPluginsStep(),
        InstallPopShellStep(),
    ]
    optional: List[Step] = [InstallSnapsStep(), ModifyLocalesStep(), InstallExtraDebsStep()]
    enabled = set(cfg.optional_steps)
    steps += [s for s in optional if s.step_id in enabled]
    return steps


def run(
    *,
    cfg: ProvisionConfig,
    runner: Any,
    log_path: str,
    steps: Optional[List[Step]] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    only: Optional[List[str]] = None,
    force: bool = False,
) -> RunResult:
    """Check the privilege precondition, then run every step best-effort.

    Raises PrivilegeError before any step runs if privileges are missing.
    """

    ctx = StepContext(cfg=cfg, runner=runner)
    if steps is None:
        steps = build_steps(cfg)

    if ctx.dry_run:
        logger.info("Dry run: skipping privilege check")
    else:
        ensure_privileges(runner, root=ctx.root)

    result = run_pipeline(
        steps=steps,
        ctx=ctx,
        start_at=start_at,
        stop_after=stop_after,
        only=only,
        force=force,
        log_path=log_path,
    )
    logger.info("Setup completed with %d errors", result.error_count)
    return result


def maybe_reboot(
    ctx: StepContext,
    mode: str,
    *,
    ask: Callable[[str], str] = input,
    interactive: Optional[bool] = None,
) -> bool:
    """Reboot policy after a completed run. Returns True if a reboot was issued."""

    if interactive is None:
        interactive = sys.stdin.isatty()

    if mode == "never" or (mode == "ask" and not interactive):
        logger.info("Reboot skipped. Please reboot manually when ready.")
        return False
    if mode == "ask":
        reply = ask("Installation completed. Do you want to reboot now? (y/N): ")
        if not reply.strip().lower().startswith("y"):
            logger.info("Reboot skipped. Please reboot manually when ready.")
            return False

    logger.info("Rebooting system...")
    ctx.runner.run(ctx.as_root(["reboot"]), check=False)
    return True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="desktop-provisioner", description="Best-effort Ubuntu desktop setup")
    p.add_argument("--config", default=None, help="YAML file merged over the bundled manifest")
    p.add_argument("--log", default=None, help="Path to run log (default: paths.log_file from config)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    p.add_argument("--force", action="store_true", help="Run steps even if already satisfied")
    p.add_argument("--only", action="append", default=None, metavar="STEP_ID", help="Run only this step (repeatable)")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_vivaldi)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--list-steps", action="store_true", help="List configured steps and exit")
    p.add_argument("--reboot", choices=["ask", "never", "always"], default="ask")
    p.add_argument("-v", "--verbose", action="store_true", help="Log command output (DEBUG)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Optional[list[str]] = None, *, runner: Any = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
        log_file = args.log or cfg.log_file
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.list_steps:
        for step in build_steps(cfg):
            print(f"{step.step_id:<20} {step.description}")
        return 0

    if runner is None:
        runner = CommandRunner(dry_run=bool(args.dry_run))

    ctx = StepContext(cfg=cfg, runner=runner)
    level = logging.DEBUG if args.verbose else logging.INFO
    try:
        with run_log(log_file, level=level) as log_path:
            logger.info("Starting desktop provisioning (user=%s)", ctx.user)
            try:
                result = run(
                    cfg=cfg,
                    runner=runner,
                    log_path=log_path,
                    start_at=args.start_at,
                    stop_after=args.stop_after,
                    only=args.only,
                    force=bool(args.force),
                )
            except PrivilegeError as e:
                logger.error("%s", e)
                return 1
            except ValueError as e:
                # Unknown step ids, invalid configuration.
                logger.error("%s", e)
                return 1

            print(format_summary(result))
            maybe_reboot(ctx, args.reboot)
            return 0
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
