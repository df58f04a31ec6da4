"""Step interpreter — runs launch/click/done against one browser session."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Sequence

from webex_agents.domain.errors import PartialStepFailure
from webex_agents.domain.models import ExecutionReport, Step, StepOutcome, StepStatus

if TYPE_CHECKING:
    from webex_agents.ports.outbound import BrowserSession, SessionFactory


def _log(msg: str):
    print(msg, file=sys.stderr)


class StepExecutor:
    """Folds a step sequence into per-step outcomes.

    A failed ``launch`` halts the fold and marks the run aborted; a failed
    ``click`` is recorded and skipped. ``done``, unknown actions and steps
    missing their target are no-ops. The session is closed on every path.
    """

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    async def run(self, steps: Sequence[Step]) -> ExecutionReport:
        report = ExecutionReport()
        async with self._session_factory() as session:
            for step in steps:
                outcome = await self._run_step(session, step)
                report.outcomes.append(outcome)
                if outcome.status is StepStatus.FAILED and step.action == "launch":
                    report.aborted = True
                    report.error = outcome.error
                    break
        _log(f"[STEPS] done: {len(report.outcomes)}/{len(steps)} step(s), aborted={report.aborted}")
        return report

    async def _run_step(self, session: BrowserSession, step: Step) -> StepOutcome:
        if step.needs_target and not step.target:
            _log(f"[STEPS] {step.action} without target, skipping")
            return StepOutcome(step, StepStatus.SKIPPED)

        if step.action == "launch":
            _log(f"[STEPS] launching {step.target}")
            try:
                await session.navigate(step.target)
            except Exception as e:
                return StepOutcome(step, StepStatus.FAILED, error=f"Could not open {step.target}: {e}")
            return StepOutcome(step, StepStatus.OK)

        if step.action == "click":
            _log(f'[STEPS] clicking "{step.target}"')
            try:
                await session.click_text(step.target)
            except Exception as e:
                failure = PartialStepFailure(f'Could not click "{step.target}": {e}')
                _log(f"[STEPS] {failure}")
                return StepOutcome(step, StepStatus.FAILED, error=str(failure))
            return StepOutcome(step, StepStatus.OK)

        if step.action == "done":
            return StepOutcome(step, StepStatus.OK)
        _log(f"[STEPS] unknown action {step.action!r}, skipping")
        return StepOutcome(step, StepStatus.SKIPPED)


def summarize(report: ExecutionReport) -> List[str]:
    """Human-readable lines for failed or skipped steps."""
    return [
        f"{o.step.action} {o.step.target or ''}".strip() + f": {o.error or o.status.value}"
        for o in report.outcomes
        if o.status is not StepStatus.OK
    ]
