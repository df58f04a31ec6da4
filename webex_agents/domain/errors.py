"""Error taxonomy shared by adapters, services and the dispatcher."""

from typing import Optional


class RelayError(Exception):
    """Base class for errors raised while handling one command."""


class TransportError(RelayError):
    """A collaborator answered with a non-success HTTP response."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class PollTimeout(RelayError):
    """A polling loop exceeded its overall bound."""


class QueueItemCancelled(RelayError):
    """The CI queue item was cancelled before a build started."""


class CommandValidationError(RelayError):
    """Input rejected before any external call. The message is user-facing."""


class TranslationError(RelayError):
    """The translator returned output with no parseable step array."""


class StageError(RelayError):
    """A document pipeline stage failed; remaining stages were skipped."""

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause


class PartialStepFailure(RelayError):
    """A single click step failed without aborting the run."""
