"""Unit tests for JenkinsClient against a fake aiohttp session."""

import aiohttp
import pytest

from webex_agents.adapters.jenkins import JenkinsClient
from webex_agents.domain.errors import QueueItemCancelled, TransportError
from webex_agents.domain.models import BuildHandle, BuildStatus, Crumb, QueueHandle

BASE = "http://jenkins.test"
TRIGGER_URL = f"{BASE}/job/TestPR/buildWithParameters"
QUEUE_URL = f"{BASE}/queue/item/42/"


@pytest.fixture
def client(app_config):
    return JenkinsClient(app_config.jenkins)


class TestUrls:
    def test_job_url_quotes_name(self, client):
        assert client.job_url("my job/x") == f"{BASE}/job/my%20job%2Fx"

    @pytest.mark.parametrize(
        "location,expected",
        [
            ("/queue/item/42/", QUEUE_URL),
            ("http://other.test/queue/item/1/", "http://other.test/queue/item/1/"),
            ("queue/item/7/", f"{BASE}/queue/item/7/"),
        ],
    )
    def test_resolve_location(self, client, location, expected):
        assert client.resolve_location(location) == expected


class TestCrumb:
    @pytest.mark.asyncio
    async def test_crumb_fetched(self, client, fake_http, make_response):
        fake_http.add(
            "GET",
            f"{BASE}/crumbIssuer/api/json",
            make_response(json_data={"crumbRequestField": "Jenkins-Crumb", "crumb": "abc"}),
        )
        assert await client.fetch_crumb() == Crumb(field="Jenkins-Crumb", value="abc")

    @pytest.mark.asyncio
    async def test_crumb_missing_is_none(self, client, fake_http):
        assert await client.fetch_crumb() is None

    @pytest.mark.asyncio
    async def test_crumb_network_error_is_none(self, client, monkeypatch):
        class BrokenSession:
            def __init__(self, *args, **kwargs):
                pass

            async def __aenter__(self):
                raise aiohttp.ClientConnectionError("refused")

            async def __aexit__(self, *args):
                pass

        monkeypatch.setattr(aiohttp, "ClientSession", BrokenSession)
        assert await client.fetch_crumb() is None


class TestTrigger:
    @pytest.mark.asyncio
    async def test_redirect_location_resolved(self, client, fake_http, make_response):
        fake_http.add("POST", TRIGGER_URL, make_response(status=302, headers={"Location": "/queue/item/42/"}))
        queue = await client.trigger("TestPR", {"VERSION": "1.2.3"})
        assert queue == QueueHandle(url=QUEUE_URL)

        _, _, kwargs = fake_http.calls_to("POST", TRIGGER_URL)[0]
        assert kwargs["data"] == {"VERSION": "1.2.3"}
        assert kwargs["allow_redirects"] is False

    @pytest.mark.asyncio
    async def test_created_accepted(self, client, fake_http, make_response):
        fake_http.add("POST", TRIGGER_URL, make_response(status=201, headers={"Location": QUEUE_URL}))
        assert (await client.trigger("TestPR", {})).url == QUEUE_URL

    @pytest.mark.asyncio
    async def test_crumb_header_sent(self, client, fake_http, make_response):
        fake_http.add("POST", TRIGGER_URL, make_response(status=201, headers={"Location": QUEUE_URL}))
        await client.trigger("TestPR", {}, crumb=Crumb(field="Jenkins-Crumb", value="abc"))
        _, _, kwargs = fake_http.calls_to("POST", TRIGGER_URL)[0]
        assert kwargs["headers"]["Jenkins-Crumb"] == "abc"

    @pytest.mark.asyncio
    async def test_no_crumb_header_without_crumb(self, client, fake_http, make_response):
        fake_http.add("POST", TRIGGER_URL, make_response(status=201, headers={"Location": QUEUE_URL}))
        await client.trigger("TestPR", {})
        _, _, kwargs = fake_http.calls_to("POST", TRIGGER_URL)[0]
        assert "Jenkins-Crumb" not in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_error_status_raises(self, client, fake_http, make_response):
        fake_http.add("POST", TRIGGER_URL, make_response(status=403, text="No valid crumb"))
        with pytest.raises(TransportError, match="403") as info:
            await client.trigger("TestPR", {})
        assert info.value.status == 403

    @pytest.mark.asyncio
    async def test_missing_location_raises(self, client, fake_http, make_response):
        fake_http.add("POST", TRIGGER_URL, make_response(status=201))
        with pytest.raises(TransportError):
            await client.trigger("TestPR", {})


class TestQueueAndBuild:
    @pytest.mark.asyncio
    async def test_queue_waiting(self, client, fake_http, make_response):
        fake_http.add("GET", f"{QUEUE_URL}api/json", make_response(json_data={"why": "Waiting"}))
        assert await client.fetch_queue_item(QueueHandle(url=QUEUE_URL)) is None

    @pytest.mark.asyncio
    async def test_queue_executable(self, client, fake_http, make_response):
        fake_http.add(
            "GET",
            f"{QUEUE_URL}api/json",
            make_response(json_data={"executable": {"number": 7, "url": f"{BASE}/job/TestPR/7/"}}),
        )
        build = await client.fetch_queue_item(QueueHandle(url=QUEUE_URL.rstrip("/")))
        assert build == BuildHandle(url=f"{BASE}/job/TestPR/7/", number=7)

    @pytest.mark.asyncio
    async def test_queue_executable_without_url(self, client, fake_http, make_response):
        fake_http.add(
            "GET",
            f"{QUEUE_URL}api/json",
            make_response(json_data={"task": {"name": "TestPR"}, "executable": {"number": 9}}),
        )
        build = await client.fetch_queue_item(QueueHandle(url=QUEUE_URL))
        assert build == BuildHandle(url=f"{BASE}/job/TestPR/9/", number=9)

    @pytest.mark.asyncio
    async def test_queue_cancelled(self, client, fake_http, make_response):
        fake_http.add("GET", f"{QUEUE_URL}api/json", make_response(json_data={"cancelled": True}))
        with pytest.raises(QueueItemCancelled):
            await client.fetch_queue_item(QueueHandle(url=QUEUE_URL))

    @pytest.mark.asyncio
    async def test_queue_http_error_keeps_waiting(self, client, fake_http):
        assert await client.fetch_queue_item(QueueHandle(url=QUEUE_URL)) is None

    @pytest.mark.asyncio
    async def test_build_running(self, client, fake_http, make_response):
        fake_http.add("GET", f"{BASE}/job/TestPR/7/api/json", make_response(json_data={"result": None}))
        assert await client.fetch_build("TestPR", 7) is None

    @pytest.mark.asyncio
    async def test_build_finished(self, client, fake_http, make_response):
        fake_http.add("GET", f"{BASE}/job/TestPR/7/api/json", make_response(json_data={"result": "UNSTABLE"}))
        result = await client.fetch_build("TestPR", 7)
        assert result.status is BuildStatus.UNSTABLE

    @pytest.mark.asyncio
    async def test_auth_sent(self, client, fake_http, make_response):
        fake_http.add("GET", f"{BASE}/job/TestPR/7/api/json", make_response(json_data={"result": "SUCCESS"}))
        await client.fetch_build("TestPR", 7)
        _, _, kwargs = fake_http.calls_to("GET", f"{BASE}/job/TestPR/7/api/json")[0]
        assert kwargs["auth"] == aiohttp.BasicAuth("ci", "secret")
