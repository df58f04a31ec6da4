"""Outbound ports — interfaces for external system adapters."""

from typing import Any, AsyncContextManager, Awaitable, Callable, Dict, List, Optional, Protocol, runtime_checkable

from webex_agents.domain.models import (
    BuildHandle,
    BuildResult,
    Crumb,
    DownloadedFile,
    QueueHandle,
    Step,
)
from webex_agents.ports.inbound import Message


@runtime_checkable
class MessagingPort(Protocol):
    """Chat platform REST client."""

    async def fetch_message(self, message_id: str) -> Message: ...

    async def send_message(self, room_id: str, text: str) -> Dict[str, Any]: ...

    async def download_file(self, file_url: str) -> DownloadedFile: ...


@runtime_checkable
class WebhookAdminPort(Protocol):
    """Webhook registration, used only by the bootstrap script."""

    async def list_webhooks(self) -> List[Dict[str, Any]]: ...

    async def delete_webhook(self, webhook_id: str) -> None: ...

    async def create_webhook(self, target_url: str, name: str = ...) -> Dict[str, Any]: ...


@runtime_checkable
class CIPort(Protocol):
    """Jenkins-style CI server."""

    async def fetch_crumb(self) -> Optional[Crumb]: ...

    async def trigger(
        self, job_name: str, parameters: Dict[str, str], crumb: Optional[Crumb] = None
    ) -> QueueHandle: ...

    async def fetch_queue_item(self, queue: QueueHandle) -> Optional[BuildHandle]: ...

    async def fetch_build(self, job_name: str, number: int) -> Optional[BuildResult]: ...


@runtime_checkable
class TranslatorPort(Protocol):
    """Free text to ordered step list."""

    async def to_steps(self, text: str) -> List[Step]: ...


@runtime_checkable
class BrowserSession(Protocol):
    """A live automation session."""

    async def navigate(self, url: str) -> None: ...

    async def click_text(self, text: str) -> None: ...


# Opens a fresh session; closing happens on context exit.
SessionFactory = Callable[[], AsyncContextManager[BrowserSession]]

# Room-bound progress reporter: ``await notify("text")``.
Notifier = Callable[[str], Awaitable[object]]
