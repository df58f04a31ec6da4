"""Small, focused Jenkins client using aiohttp."""

import asyncio
import sys
from typing import Any, Dict, Optional
from urllib.parse import quote, urljoin

import aiohttp

from webex_agents.config import JenkinsConfig
from webex_agents.domain.errors import QueueItemCancelled, TransportError
from webex_agents.domain.models import BuildHandle, BuildResult, BuildStatus, Crumb, QueueHandle

# Jenkins answers buildWithParameters with 201 + Location; older versions redirect.
TRIGGER_OK_STATUSES = (302,)


def _log(msg: str):
    print(msg, file=sys.stderr)


class JenkinsClient:
    """Trigger jobs and read queue/build state over the Jenkins JSON API."""

    def __init__(self, config: JenkinsConfig):
        self._config = config

    @property
    def base_url(self) -> str:
        return self._config.url.rstrip("/")

    def _auth(self) -> Optional[aiohttp.BasicAuth]:
        if not self._config.user:
            return None
        return aiohttp.BasicAuth(self._config.user, self._config.api_token)

    def job_url(self, job_name: str) -> str:
        return f"{self.base_url}/job/{quote(job_name, safe='')}"

    def resolve_location(self, location: str) -> str:
        """Absolute queue URL for a Location header value."""
        if location.startswith(("http://", "https://")):
            return location
        if location.startswith("/"):
            return f"{self.base_url}{location}"
        return urljoin(f"{self.base_url}/", location)

    async def _get_json(self, url: str) -> Optional[Dict[str, Any]]:
        """GET ``url``; None on any non-200 answer."""
        async with aiohttp.ClientSession() as session:
            async with session.get(url, auth=self._auth()) as resp:
                if resp.status != 200:
                    return None
                return await resp.json()

    async def fetch_crumb(self) -> Optional[Crumb]:
        """CSRF crumb, or None when the server does not issue one."""
        try:
            data = await self._get_json(f"{self.base_url}/crumbIssuer/api/json")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            _log(f"[JENKINS] crumb unavailable: {e}")
            return None
        if not data or "crumb" not in data:
            return None
        return Crumb(field=data.get("crumbRequestField", "Jenkins-Crumb"), value=data["crumb"])

    async def trigger(
        self,
        job_name: str,
        parameters: Dict[str, str],
        crumb: Optional[Crumb] = None,
    ) -> QueueHandle:
        """POST buildWithParameters and return the queue item locator."""
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        if crumb:
            headers[crumb.field] = crumb.value

        async with aiohttp.ClientSession() as session:
            async with session.post(
                f"{self.job_url(job_name)}/buildWithParameters",
                data=dict(parameters),
                headers=headers,
                auth=self._auth(),
                allow_redirects=False,
            ) as resp:
                if 200 <= resp.status < 300 or resp.status in TRIGGER_OK_STATUSES:
                    location = resp.headers.get("Location", "")
                    if not location:
                        raise TransportError(
                            f"Jenkins trigger returned {resp.status} without a queue location",
                            status=resp.status,
                        )
                    return QueueHandle(url=self.resolve_location(location))
                body = await resp.text()
                raise TransportError(f"Jenkins trigger failed {resp.status}: {body}", status=resp.status)

    async def fetch_queue_item(self, queue: QueueHandle) -> Optional[BuildHandle]:
        """BuildHandle once the queue item has an executable, else None."""
        url = queue.url if queue.url.endswith("/") else f"{queue.url}/"
        item = await self._get_json(f"{url}api/json")
        if not item:
            return None
        if item.get("cancelled"):
            raise QueueItemCancelled(f"Jenkins queue item was cancelled: {queue.url}")
        executable = item.get("executable") or {}
        number = executable.get("number")
        if not number:
            return None
        task_name = (item.get("task") or {}).get("name", "")
        build_url = executable.get("url") or f"{self.job_url(task_name)}/{number}/"
        return BuildHandle(url=build_url, number=int(number))

    async def fetch_build(self, job_name: str, number: int) -> Optional[BuildResult]:
        """BuildResult once the build reports a result, else None."""
        build = await self._get_json(f"{self.job_url(job_name)}/{number}/api/json")
        if not build or not build.get("result"):
            return None
        return BuildResult(status=BuildStatus.parse(build["result"]), raw=build)
