"""Port interfaces (Hexagonal Architecture)."""

from webex_agents.ports.inbound import InboundEvent, Message
from webex_agents.ports.outbound import (
    BrowserSession,
    CIPort,
    MessagingPort,
    Notifier,
    SessionFactory,
    TranslatorPort,
    WebhookAdminPort,
)

__all__ = [
    "InboundEvent",
    "Message",
    "BrowserSession",
    "CIPort",
    "MessagingPort",
    "Notifier",
    "SessionFactory",
    "TranslatorPort",
    "WebhookAdminPort",
]
