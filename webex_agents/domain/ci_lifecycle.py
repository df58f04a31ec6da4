"""Jenkins trigger/poll lifecycle as an explicit state machine.

``transition`` is pure; ``poll_until`` drives one polling stage with an
injected clock and sleep so the timing can be tested without waiting.
"""

import asyncio
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional, Tuple, TypeVar

from webex_agents.domain.errors import PollTimeout
from webex_agents.domain.models import BuildHandle, BuildResult, QueueHandle

T = TypeVar("T")

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class CiState(str, Enum):
    IDLE = "idle"
    TRIGGERING = "triggering"
    QUEUED = "queued"
    BUILDING = "building"
    RESOLVED = "resolved"
    FAILED = "failed"


class CiEvent(str, Enum):
    START = "start"
    TRIGGER_ACCEPTED = "trigger_accepted"
    BUILD_STARTED = "build_started"
    RESULT_OBSERVED = "result_observed"
    HTTP_ERROR = "http_error"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


class InvalidTransition(ValueError):
    pass


_TRANSITIONS: Dict[Tuple[CiState, CiEvent], CiState] = {
    (CiState.IDLE, CiEvent.START): CiState.TRIGGERING,
    (CiState.TRIGGERING, CiEvent.TRIGGER_ACCEPTED): CiState.QUEUED,
    (CiState.QUEUED, CiEvent.BUILD_STARTED): CiState.BUILDING,
    (CiState.BUILDING, CiEvent.RESULT_OBSERVED): CiState.RESOLVED,
}

_FAILURE_EVENTS = (CiEvent.HTTP_ERROR, CiEvent.TIMED_OUT, CiEvent.CANCELLED)


def transition(state: CiState, event: CiEvent) -> CiState:
    """Next state for ``event``. FAILED and RESOLVED are terminal."""
    if state is CiState.FAILED:
        return CiState.FAILED
    if state is not CiState.RESOLVED and event in _FAILURE_EVENTS:
        return CiState.FAILED
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransition(f"{event.value} not allowed in state {state.value}") from None


@dataclass(frozen=True)
class CiRun:
    """Snapshot of one trigger's progress through the lifecycle."""

    job_name: str
    state: CiState = CiState.IDLE
    queue: Optional[QueueHandle] = None
    build: Optional[BuildHandle] = None
    result: Optional[BuildResult] = None
    failure: Optional[str] = None

    def advance(self, event: CiEvent, **changes) -> "CiRun":
        return replace(self, state=transition(self.state, event), **changes)

    @property
    def is_terminal(self) -> bool:
        return self.state in (CiState.RESOLVED, CiState.FAILED)


async def poll_until(
    probe: Callable[[], Awaitable[Optional[T]]],
    *,
    interval: float,
    timeout: float,
    description: str,
    clock: Clock = time.monotonic,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Call ``probe`` every ``interval`` seconds until it returns a value.

    Fixed interval, no backoff. Raises PollTimeout once ``timeout`` seconds
    have elapsed without a value.
    """
    started = clock()
    while clock() - started < timeout:
        value = await probe()
        if value is not None:
            return value
        await sleep(interval)
    raise PollTimeout(f"Timed out after {timeout:g}s waiting for {description}")
