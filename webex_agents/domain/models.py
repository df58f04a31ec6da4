"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


# ── Commands ────────────────────────────────────────────────


@dataclass(frozen=True)
class RunCi:
    """Trigger a Jenkins job. ``job_name`` is None when no known job was named."""

    job_name: Optional[str]
    params: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RunConfig:
    attachment_ref: Optional[str] = None


@dataclass(frozen=True)
class RunTest:
    pass


@dataclass(frozen=True)
class Echo:
    text: str


@dataclass(frozen=True)
class Unrecognized:
    pass


Command = Union[RunCi, RunConfig, RunTest, Echo, Unrecognized]


# ── CI ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class CiTriggerParams:
    job_name: str
    parameters: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Crumb:
    """Jenkins CSRF token: header name and value."""

    field: str
    value: str


@dataclass(frozen=True)
class QueueHandle:
    url: str


@dataclass(frozen=True)
class BuildHandle:
    url: str
    number: int


class BuildStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    UNSTABLE = "UNSTABLE"
    ABORTED = "ABORTED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Any) -> "BuildStatus":
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class BuildResult:
    status: BuildStatus
    raw: Dict[str, Any] = field(default_factory=dict)


# ── Browser steps ───────────────────────────────────────────


@dataclass(frozen=True)
class Step:
    """One browser instruction. ``target`` is required for launch/click."""

    action: str
    target: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Step":
        action = str(data.get("action", "")).strip().lower()
        target = data.get("target")
        if target is not None:
            target = str(target).strip() or None
        return cls(action=action, target=target)

    @property
    def needs_target(self) -> bool:
        return self.action in ("launch", "click")


class StepStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class StepOutcome:
    step: Step
    status: StepStatus
    error: Optional[str] = None


@dataclass
class ExecutionReport:
    """Per-step outcomes of one run. ``aborted`` is set when a launch failed."""

    outcomes: List[StepOutcome] = field(default_factory=list)
    aborted: bool = False
    error: Optional[str] = None

    @property
    def failed_clicks(self) -> List[StepOutcome]:
        return [
            o for o in self.outcomes
            if o.status is StepStatus.FAILED and o.step.action == "click"
        ]


# ── Documents ───────────────────────────────────────────────


@dataclass(frozen=True)
class DownloadedFile:
    content: bytes
    filename: str = ""
    content_type: str = ""


@dataclass
class DocumentJob:
    """State threaded through one @config run; discarded afterwards."""

    attachment_ref: str
    local_path: Optional[str] = None
    text: str = ""
    steps: List[Step] = field(default_factory=list)
    report: Optional[ExecutionReport] = None
