"""Shared fakes: aiohttp session, messaging, CI server, clock, browser."""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Tuple

import aiohttp
import pytest

from webex_agents.config import AppConfig, JenkinsConfig, PollingConfig, WebexConfig
from webex_agents.domain.models import Crumb, DownloadedFile, QueueHandle
from webex_agents.ports.inbound import Message

JENKINS_BASE = "http://jenkins.test"
BOT_ID = "bot-person-id"


# ---------------------------------------------------------------------------
# aiohttp
# ---------------------------------------------------------------------------


class FakeResponse:
    def __init__(
        self,
        status: int = 200,
        json_data: Any = None,
        text: str = "",
        headers: Optional[Dict[str, str]] = None,
        content: bytes = b"",
        filename: Optional[str] = None,
        content_type: str = "application/json",
    ):
        self.status = status
        self._json = json_data
        self._text = text
        self.headers = headers or {}
        self._content = content
        self.content_disposition = type("CD", (), {"filename": filename})() if filename else None
        self.content_type = content_type

    async def json(self):
        return self._json

    async def text(self):
        return self._text

    async def read(self):
        return self._content

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeHttp:
    """Route table for a fake aiohttp.ClientSession.

    Each (method, url) holds a queue of responses; the last one repeats.
    Unknown routes answer 404.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], List[FakeResponse]] = {}
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []

    def add(self, method: str, url: str, *responses: FakeResponse):
        self.routes[(method.upper(), url)] = list(responses)

    def calls_to(self, method: str, url: str):
        return [c for c in self.calls if c[0] == method.upper() and c[1] == url]

    def _respond(self, method: str, url: str, kwargs: Dict[str, Any]) -> FakeResponse:
        method = method.upper()
        self.calls.append((method, url, kwargs))
        queue = self.routes.get((method, url))
        if not queue:
            return FakeResponse(status=404, text="not found")
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def session_class(self):
        http = self

        class FakeSession:
            def __init__(self, *args, **kwargs):
                pass

            def request(self, method, url, **kwargs):
                return http._respond(method, url, kwargs)

            def get(self, url, **kwargs):
                return http._respond("GET", url, kwargs)

            def post(self, url, **kwargs):
                return http._respond("POST", url, kwargs)

            async def __aenter__(self):
                return self

            async def __aexit__(self, *args):
                pass

        return FakeSession


@pytest.fixture
def fake_http(monkeypatch):
    http = FakeHttp()
    monkeypatch.setattr(aiohttp, "ClientSession", http.session_class())
    return http


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------


class FakeMessaging:
    def __init__(self, messages: Optional[Dict[str, Message]] = None):
        self.messages = messages or {}
        self.sent: List[Tuple[str, str]] = []
        self.downloads: List[str] = []
        self.download_result = DownloadedFile(content=b"", filename="doc.txt")
        self.download_error: Optional[Exception] = None

    async def fetch_message(self, message_id: str) -> Message:
        return self.messages[message_id]

    async def send_message(self, room_id: str, text: str):
        self.sent.append((room_id, text))
        return {"id": f"reply-{len(self.sent)}"}

    async def download_file(self, file_url: str) -> DownloadedFile:
        self.downloads.append(file_url)
        if self.download_error:
            raise self.download_error
        return self.download_result

    def texts(self) -> List[str]:
        return [text for _, text in self.sent]


class FakeCI:
    """CIPort with scripted queue/build answers."""

    def __init__(self, queue_answers=None, build_answers=None, trigger_error=None, crumb=None):
        self.queue_answers = list(queue_answers or [])
        self.build_answers = list(build_answers or [])
        self.trigger_error = trigger_error
        self.crumb = crumb
        self.triggers: List[Tuple[str, Dict[str, str], Optional[Crumb]]] = []
        self.queue_polls = 0
        self.build_polls = 0

    async def fetch_crumb(self):
        return self.crumb

    async def trigger(self, job_name, parameters, crumb=None):
        self.triggers.append((job_name, dict(parameters), crumb))
        if self.trigger_error:
            raise self.trigger_error
        return QueueHandle(url=f"{JENKINS_BASE}/queue/item/42/")

    async def fetch_queue_item(self, queue):
        self.queue_polls += 1
        if not self.queue_answers:
            return None
        answer = self.queue_answers.pop(0) if len(self.queue_answers) > 1 else self.queue_answers[0]
        return answer

    async def fetch_build(self, job_name, number):
        self.build_polls += 1
        if not self.build_answers:
            return None
        return self.build_answers.pop(0) if len(self.build_answers) > 1 else self.build_answers[0]


class FakeClock:
    """Monotonic clock advanced only by the fake sleep."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeBrowser:
    """Records navigation/clicks; clicks on ``missing`` texts fail."""

    def __init__(self, missing=(), broken_urls=()):
        self.missing = set(missing)
        self.broken_urls = set(broken_urls)
        self.navigations: List[str] = []
        self.clicks: List[str] = []
        self.opened = 0
        self.closed = 0

    async def navigate(self, url: str):
        self.navigations.append(url)
        if url in self.broken_urls:
            raise RuntimeError(f"net::ERR_NAME_NOT_RESOLVED at {url}")

    async def click_text(self, text: str):
        self.clicks.append(text)
        if text in self.missing:
            raise TimeoutError(f"no element with text {text!r}")

    @asynccontextmanager
    async def session(self):
        self.opened += 1
        try:
            yield self
        finally:
            self.closed += 1


@pytest.fixture
def app_config():
    return AppConfig(
        webex=WebexConfig(bot_token="token", bot_id=BOT_ID),
        jenkins=JenkinsConfig(
            url=JENKINS_BASE,
            user="ci",
            api_token="secret",
            polling=PollingConfig(queue_timeout=6, queue_interval=1.5, build_timeout=10, build_interval=2),
        ),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def messaging():
    return FakeMessaging()


@pytest.fixture
def browser():
    return FakeBrowser()


@pytest.fixture
def make_ci():
    return FakeCI


@pytest.fixture
def make_browser():
    return FakeBrowser


@pytest.fixture
def make_response():
    return FakeResponse
