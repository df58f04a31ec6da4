"""Webex webhook and health routes."""

import sys
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, ValidationError

from webex_agents.config import __version__
from webex_agents.ports.inbound import InboundEvent

webhook_router = APIRouter(tags=["Webex"])


def _log(msg: str):
    print(msg, file=sys.stderr)


class WebhookData(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None


class WebhookEnvelope(BaseModel):
    """Webex "messages created" notification; only ``data.id`` is used."""

    model_config = ConfigDict(extra="allow")

    data: Optional[WebhookData] = None

    def to_event(self) -> InboundEvent:
        return InboundEvent(notification_id=self.data.id if self.data else None)


class WebhookAck(BaseModel):
    status: str = "ok"


class StatusResponse(BaseModel):
    version: str
    inFlight: int
    allowedJobs: List[str]


def parse_event(payload: Any) -> InboundEvent:
    """Lenient parse: anything malformed becomes an event without an id."""
    try:
        return WebhookEnvelope.model_validate(payload).to_event()
    except ValidationError as e:
        _log(f"Webhook payload rejected: {e.error_count()} validation error(s)")
        return InboundEvent(notification_id=None)


@webhook_router.post("/webhook", response_model=WebhookAck)
async def webex_webhook(request: Request):
    """Acknowledge immediately; processing continues in a background task."""
    try:
        payload: Dict[str, Any] = await request.json()
    except ValueError:
        payload = {}
    request.app.state.dispatcher.submit(parse_event(payload))
    return WebhookAck()


@webhook_router.get("/status", response_model=StatusResponse)
async def status(request: Request):
    dispatcher = request.app.state.dispatcher
    return StatusResponse(
        version=__version__,
        inFlight=dispatcher.in_flight,
        allowedJobs=list(request.app.state.config.jenkins.allowed_jobs),
    )


@webhook_router.get("/", response_class=PlainTextResponse)
async def root():
    """Healthcheck"""
    return "Webex AI Agents webhook running ✅"
