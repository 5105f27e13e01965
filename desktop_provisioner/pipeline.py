from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence

from .context import StepContext
from .logging_utils import log_success

logger = logging.getLogger(__name__)


class StepFailed(RuntimeError):
    """A step diagnosed its own failure (partial install, missing artifact...)."""


class StepStatus(str, enum.Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    detail: str = ""


class Step(Protocol):
    """A single idempotent step."""

    step_id: str
    description: str

    def is_satisfied(self, ctx: StepContext) -> bool:
        ...

    def run(self, ctx: StepContext) -> Optional[ActionResult]:
        ...


@dataclass
class StepOutcome:
    step_id: str
    status: StepStatus = StepStatus.PENDING
    detail: str = ""


@dataclass(frozen=True)
class RunResult:
    outcomes: List[StepOutcome]
    error_count: int
    log_path: Optional[str] = None

    def _ids(self, status: StepStatus) -> List[str]:
        return [o.step_id for o in self.outcomes if o.status is status]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def ran_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes if o.status in (StepStatus.SUCCEEDED, StepStatus.FAILED)]

    @property
    def skipped_steps(self) -> List[str]:
        return self._ids(StepStatus.SKIPPED)

    @property
    def failed_steps(self) -> List[str]:
        return self._ids(StepStatus.FAILED)

    @property
    def succeeded(self) -> bool:
        return self.error_count == 0


def select_steps(
    steps: Sequence[Step],
    *,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    only: Optional[Iterable[str]] = None,
) -> List[Step]:
    known = [s.step_id for s in steps]
    wanted = set(only or [])
    for step_id in [start_at, stop_after, *wanted]:
        if step_id is not None and step_id not in known:
            raise ValueError(f"Unknown step id: {step_id}")

    selected: List[Step] = []
    started = start_at is None
    for step in steps:
        if not started:
            if step.step_id != start_at:
                continue
            started = True
        if not wanted or step.step_id in wanted:
            selected.append(step)
        if stop_after is not None and step.step_id == stop_after:
            break
    return selected


def _execute(step: Step, ctx: StepContext, *, force: bool) -> StepOutcome:
    outcome = StepOutcome(step_id=step.step_id)
    try:
        if (not force) and step.is_satisfied(ctx):
            outcome.status = StepStatus.SKIPPED
            return outcome
        result = step.run(ctx)
    except Exception as e:
        outcome.status = StepStatus.FAILED
        outcome.detail = str(e) or type(e).__name__
        logger.debug("Step %s raised", step.step_id, exc_info=True)
        return outcome

    if result is not None and not result.ok:
        outcome.status = StepStatus.FAILED
        outcome.detail = result.detail or "action reported failure"
    else:
        outcome.status = StepStatus.SUCCEEDED
        outcome.detail = result.detail if result is not None else ""
    return outcome


def run_pipeline(
    *,
    steps: Sequence[Step],
    ctx: StepContext,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    only: Optional[Iterable[str]] = None,
    force: bool = False,
    log_path: Optional[str] = None,
) -> RunResult:
    """Run steps in order, best-effort.

    A failing step is logged at ERROR and counted; the run always continues
    with the next step. This is the only place that writes ERROR records, so
    the returned error_count matches the ERROR lines in the run log.
    """

    selected = select_steps(steps, start_at=start_at, stop_after=stop_after, only=only)

    outcomes: List[StepOutcome] = []
    errors = 0

    for step in selected:
        logger.info("Running step %s: %s", step.step_id, step.description)
        outcome = _execute(step, ctx, force=force)

        if outcome.status is StepStatus.SKIPPED:
            log_success(logger, "%s already satisfied, skipping", step.step_id)
        elif outcome.status is StepStatus.FAILED:
            errors += 1
            logger.error("%s failed: %s", step.step_id, outcome.detail)
        else:
            log_success(logger, "%s completed", step.step_id)

        outcomes.append(outcome)

    return RunResult(outcomes=outcomes, error_count=errors, log_path=log_path)
