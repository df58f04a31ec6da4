"""Drives one Jenkins job from trigger to result, reporting each transition."""

import asyncio
import json
import sys
import time

from webex_agents.config import JenkinsConfig
from webex_agents.domain.ci_lifecycle import Clock, CiEvent, CiRun, Sleep, poll_until
from webex_agents.domain.errors import CommandValidationError, PollTimeout, QueueItemCancelled
from webex_agents.domain.models import BuildStatus, CiTriggerParams
from webex_agents.ports.outbound import CIPort, Notifier


def _log(msg: str):
    print(msg, file=sys.stderr)


def _failure_event(exc: BaseException) -> CiEvent:
    if isinstance(exc, PollTimeout):
        return CiEvent.TIMED_OUT
    if isinstance(exc, QueueItemCancelled):
        return CiEvent.CANCELLED
    return CiEvent.HTTP_ERROR


class CiRunner:
    """Trigger -> queue admission -> build result, single-flight per command.

    Errors propagate to the caller after the failed transition is logged;
    nothing is retried.
    """

    def __init__(
        self,
        ci: CIPort,
        config: JenkinsConfig,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ):
        self._ci = ci
        self._config = config
        self._clock = clock
        self._sleep = sleep

    def check_allowed(self, job_name: str) -> None:
        if not self._config.is_allowed(job_name):
            allowed = ", ".join(self._config.allowed_jobs)
            raise CommandValidationError(f'❗ Job "{job_name}" not allowed. Allowed: {allowed}')

    def _step(self, run: CiRun, event: CiEvent, **changes) -> CiRun:
        run = run.advance(event, **changes)
        _log(f"[JENKINS] {run.job_name}: {event.value} -> {run.state.value}")
        return run

    async def run(self, params: CiTriggerParams, notify: Notifier) -> CiRun:
        self.check_allowed(params.job_name)
        polling = self._config.polling
        job_name = params.job_name

        run = self._step(CiRun(job_name=job_name), CiEvent.START)
        await notify(f"🔧 Triggering Jenkins job {job_name} with {json.dumps(params.parameters)}")
        try:
            crumb = await self._ci.fetch_crumb()
            queue = await self._ci.trigger(job_name, params.parameters, crumb)
            run = self._step(run, CiEvent.TRIGGER_ACCEPTED, queue=queue)
            await notify(f"🔁 Job queued: {queue.url}")

            build = await poll_until(
                lambda: self._ci.fetch_queue_item(queue),
                interval=polling.queue_interval,
                timeout=polling.queue_timeout,
                description="Jenkins queue to produce a build",
                clock=self._clock,
                sleep=self._sleep,
            )
            run = self._step(run, CiEvent.BUILD_STARTED, build=build)
            await notify(f"▶️ Build started: {build.url}")

            result = await poll_until(
                lambda: self._ci.fetch_build(job_name, build.number),
                interval=polling.build_interval,
                timeout=polling.build_timeout,
                description="Jenkins build result",
                clock=self._clock,
                sleep=self._sleep,
            )
        except Exception as e:
            self._step(run, _failure_event(e), failure=str(e))
            raise

        run = self._step(run, CiEvent.RESULT_OBSERVED, result=result)
        icon = "✅" if result.status is BuildStatus.SUCCESS else "⚠️"
        await notify(f"{icon} Build finished: result={result.status.value} ({build.url})")
        return run
