"""Webex AI Agents — chat-triggered Jenkins and browser automation relay."""

from webex_agents.config import AppConfig, __version__
from webex_agents.domain.errors import (
    CommandValidationError,
    PollTimeout,
    RelayError,
    StageError,
    TransportError,
)
from webex_agents.ports.inbound import InboundEvent, Message

__all__ = [
    "__version__",
    "AppConfig",
    "CommandValidationError",
    "PollTimeout",
    "RelayError",
    "StageError",
    "TransportError",
    "InboundEvent",
    "Message",
]
