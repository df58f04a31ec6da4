"""Inbound port — platform-agnostic event and message representation."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class InboundEvent:
    """Terse webhook notification; only carries the message id."""

    notification_id: Optional[str]


@dataclass(frozen=True)
class Message:
    """Full chat message, fetched by id. The unit of work for one dispatch."""

    id: str
    room_id: str
    person_id: str = ""
    person_email: str = ""
    text: str = ""
    attachments: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Message":
        """Build from a Webex ``GET /messages/{id}`` response body."""
        return cls(
            id=str(data.get("id", "")),
            room_id=str(data.get("roomId", "")),
            person_id=str(data.get("personId", "")),
            person_email=str(data.get("personEmail", "")),
            text=data.get("text") or "",
            attachments=tuple(data.get("files") or ()),
        )
