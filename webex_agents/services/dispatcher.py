"""Webhook dispatcher — message routing and per-command error boundaries.

Handles one inbound event per task:
- fetch the full message (the webhook only carries its id)
- drop the bot's own messages
- classify and run exactly one command branch
- report every outcome back to the originating room
"""

import asyncio
import sys
from typing import Awaitable, Callable, Dict, Set, Type

from webex_agents.config import AppConfig
from webex_agents.domain.command_parser import classify, strip_mentions
from webex_agents.domain.errors import CommandValidationError
from webex_agents.domain.models import (
    CiTriggerParams,
    Command,
    Echo,
    RunCi,
    RunConfig,
    RunTest,
    Unrecognized,
)
from webex_agents.ports.inbound import InboundEvent, Message
from webex_agents.ports.outbound import MessagingPort, Notifier
from webex_agents.services.ci_runner import CiRunner
from webex_agents.services.document_pipeline import DocumentPipeline


UNKNOWN_JOB_MESSAGE = (
    "🔧 I couldn't identify the job name. Try: `@jenkins run TestPR version 123 on https://...`"
)
TEST_STUB_MESSAGE = "🧪 Got @test command — will run tests when implemented."
HELP_MESSAGE = (
    "🤔 I didn't catch that. Try `@jenkins run TestPR version 1.2.3 on https://...`, "
    "`@config` with a .docx/.pdf attached, or `@test`."
)


def _log(msg: str):
    print(msg, file=sys.stderr)


class Dispatcher:
    """Routes inbound events to the CI runner or the document pipeline."""

    def __init__(
        self,
        config: AppConfig,
        messaging: MessagingPort,
        ci_runner: CiRunner,
        document_pipeline: DocumentPipeline,
    ):
        self._config = config
        self._messaging = messaging
        self._ci_runner = ci_runner
        self._document_pipeline = document_pipeline
        self._tasks: Set[asyncio.Task] = set()
        self._handlers: Dict[Type, Callable[[Command, Notifier], Awaitable[None]]] = {
            RunCi: self._handle_ci,
            RunConfig: self._handle_config,
            RunTest: self._handle_test,
            Echo: self._handle_echo,
            Unrecognized: self._handle_unrecognized,
        }

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def submit(self, event: InboundEvent) -> asyncio.Task:
        """Schedule ``handle`` without waiting for it."""
        task = asyncio.create_task(self.handle(event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def is_own_message(self, message: Message) -> bool:
        webex = self._config.webex
        if webex.bot_id and message.person_id == webex.bot_id:
            return True
        domain = webex.bot_email_domain
        return bool(domain) and message.person_email.lower().endswith(f"@{domain}")

    def _notifier(self, room_id: str) -> Notifier:
        async def notify(text: str):
            return await self._messaging.send_message(room_id, text)

        return notify

    async def handle(self, event: InboundEvent) -> None:
        """One dispatch cycle. Never raises."""
        try:
            await self._dispatch(event)
        except Exception as e:
            _log(f"Error handling webhook {event.notification_id}: {e}")

    async def _dispatch(self, event: InboundEvent) -> None:
        if not event.notification_id:
            _log("Webhook payload missing data.id, ignoring")
            return

        message = await self._messaging.fetch_message(event.notification_id)
        if self.is_own_message(message):
            _log(f"Ignoring message from bot itself: {message.id}")
            return

        _log(
            f'[MSG] id={message.id} room={message.room_id} '
            f'from={message.person_email} text="{strip_mentions(message.text)}"'
        )
        command = classify(message.text, message.attachments, self._config.jenkins.allowed_jobs)
        handler = self._handlers[type(command)]
        await handler(command, self._notifier(message.room_id))

    async def _guarded(self, label: str, work: Awaitable[object], notify: Notifier) -> None:
        """Command-branch boundary: every failure becomes one room message."""
        try:
            await work
        except CommandValidationError as e:
            await notify(str(e))
        except Exception as e:
            _log(f"{label} error: {e}")
            await notify(f"❌ {label} error: {e}")

    # -- Branches --

    async def _handle_ci(self, command: RunCi, notify: Notifier) -> None:
        async def work():
            if not command.job_name:
                raise CommandValidationError(UNKNOWN_JOB_MESSAGE)
            params = CiTriggerParams(job_name=command.job_name, parameters=dict(command.params))
            await self._ci_runner.run(params, notify)

        await self._guarded("Jenkins", work(), notify)

    async def _handle_config(self, command: RunConfig, notify: Notifier) -> None:
        await self._guarded("Config", self._document_pipeline.run(command.attachment_ref, notify), notify)

    async def _handle_test(self, command: RunTest, notify: Notifier) -> None:
        await notify(TEST_STUB_MESSAGE)

    async def _handle_echo(self, command: Echo, notify: Notifier) -> None:
        await notify(f'👋 Hello — I received your message: "{command.text}"')

    async def _handle_unrecognized(self, command: Unrecognized, notify: Notifier) -> None:
        await notify(HELP_MESSAGE)
