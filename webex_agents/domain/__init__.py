"""Domain layer — pure Python, no framework dependencies."""

from webex_agents.domain.ci_lifecycle import CiEvent, CiRun, CiState, poll_until, transition
from webex_agents.domain.command_parser import classify, strip_mentions
from webex_agents.domain.models import (
    BuildHandle,
    BuildResult,
    BuildStatus,
    CiTriggerParams,
    Command,
    Echo,
    QueueHandle,
    RunCi,
    RunConfig,
    RunTest,
    Step,
    Unrecognized,
)
from webex_agents.domain.normalize import normalize_document_text
from webex_agents.domain.step_executor import StepExecutor
from webex_agents.domain.step_parser import parse_steps

__all__ = [
    "CiEvent",
    "CiRun",
    "CiState",
    "poll_until",
    "transition",
    "classify",
    "strip_mentions",
    "BuildHandle",
    "BuildResult",
    "BuildStatus",
    "CiTriggerParams",
    "Command",
    "Echo",
    "QueueHandle",
    "RunCi",
    "RunConfig",
    "RunTest",
    "Step",
    "Unrecognized",
    "normalize_document_text",
    "StepExecutor",
    "parse_steps",
]
