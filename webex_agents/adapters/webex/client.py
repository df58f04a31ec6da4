"""Webex REST client using aiohttp."""

import sys
from typing import Any, Dict, List, Optional

import aiohttp

from webex_agents.config import WebexConfig
from webex_agents.domain.errors import TransportError
from webex_agents.domain.models import DownloadedFile
from webex_agents.ports.inbound import Message

DEFAULT_WEBHOOK_NAME = "webex-agents-webhook"


def _log(msg: str):
    print(msg, file=sys.stderr)


class WebexClient:
    """Async Webex API client authenticated with the bot token."""

    def __init__(self, config: WebexConfig):
        self._config = config

    @property
    def is_configured(self) -> bool:
        return bool(self._config.bot_token)

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._config.bot_token}"}

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self._config.api_base}{path}"
        async with aiohttp.ClientSession() as session:
            async with session.request(method, url, headers=self._headers(), json=payload) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise TransportError(f"Webex API error {resp.status}: {body}", status=resp.status)
                if resp.status == 204:
                    return None
                return await resp.json()

    # -- Messages --

    async def fetch_message(self, message_id: str) -> Message:
        """GET /messages/{id}. The webhook only carries the id."""
        data = await self._request("GET", f"/messages/{message_id}")
        return Message.from_api(data)

    async def send_message(self, room_id: str, text: str) -> Dict[str, Any]:
        return await self._request("POST", "/messages", {"roomId": room_id, "text": text})

    async def download_file(self, file_url: str) -> DownloadedFile:
        """Fetch attachment bytes; file URLs need the same bearer token."""
        async with aiohttp.ClientSession() as session:
            async with session.get(file_url, headers=self._headers()) as resp:
                if resp.status >= 400:
                    raise TransportError(f"Failed to download file: {resp.status}", status=resp.status)
                content = await resp.read()
                disposition = resp.content_disposition
                return DownloadedFile(
                    content=content,
                    filename=(disposition.filename or "") if disposition else "",
                    content_type=resp.content_type or "",
                )

    # -- Webhooks (bootstrap only) --

    async def list_webhooks(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/webhooks")
        return (data or {}).get("items", [])

    async def delete_webhook(self, webhook_id: str) -> None:
        await self._request("DELETE", f"/webhooks/{webhook_id}")

    async def create_webhook(self, target_url: str, name: str = DEFAULT_WEBHOOK_NAME) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/webhooks",
            {
                "name": name,
                "targetUrl": target_url,
                "resource": "messages",
                "event": "created",
            },
        )

    async def reset_webhooks(self, target_url: str, name: str = DEFAULT_WEBHOOK_NAME) -> Dict[str, Any]:
        """Delete every registered webhook, then register ``target_url``."""
        for hook in await self.list_webhooks():
            _log(f"Deleting webhook: {hook.get('id')} -> {hook.get('targetUrl')}")
            await self.delete_webhook(hook["id"])
        created = await self.create_webhook(target_url, name=name)
        _log(f"New webhook created: {created.get('id')} -> {created.get('targetUrl')}")
        return created
