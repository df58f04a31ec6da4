"""@config pipeline: attachment -> text -> steps -> browser run.

Stages run strictly in order. The first failing stage aborts the rest and
surfaces as a StageError naming it; validation problems surface as
CommandValidationError with a user-facing message.
"""

import asyncio
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

from webex_agents.adapters.files import discard, extract_file, save_download
from webex_agents.domain.errors import CommandValidationError, StageError, TranslationError
from webex_agents.domain.models import DocumentJob
from webex_agents.domain.normalize import normalize_document_text
from webex_agents.domain.step_executor import StepExecutor, summarize
from webex_agents.ports.outbound import MessagingPort, Notifier, TranslatorPort

T = TypeVar("T")


NO_ATTACHMENT_MESSAGE = "⚠️ Please attach a .docx or .pdf file and try again."
NO_STEPS_MESSAGE = "❌ Could not parse any steps from the document."


def _log(msg: str):
    print(msg, file=sys.stderr)


class DocumentPipeline:
    def __init__(
        self,
        messaging: MessagingPort,
        translator: TranslatorPort,
        executor: StepExecutor,
        download_dir: str = "tmp",
        extract: Callable[[Path], str] = extract_file,
    ):
        self._messaging = messaging
        self._translator = translator
        self._executor = executor
        self._download_dir = download_dir
        self._extract = extract

    async def _stage(self, name: str, work: Awaitable[T]) -> T:
        try:
            return await work
        except CommandValidationError:
            raise
        except Exception as e:
            _log(f"[CONFIG] stage {name} failed: {e}")
            raise StageError(name, e) from e

    async def run(self, attachment_ref: Optional[str], notify: Notifier) -> DocumentJob:
        if not attachment_ref:
            raise CommandValidationError(NO_ATTACHMENT_MESSAGE)

        job = DocumentJob(attachment_ref=attachment_ref)
        _log(f"[CONFIG] using fileUrl: {attachment_ref}")
        await notify(f"📥 Got file: {attachment_ref}")
        try:
            await self._stage("download", self._download(job))
            await self._stage("extract", self._extract_text(job))
            await self._stage("translate", self._translate(job))
            await self._stage("execute", self._execute(job, notify))
        finally:
            discard(job.local_path)
        return job

    async def _download(self, job: DocumentJob) -> None:
        downloaded = await self._messaging.download_file(job.attachment_ref)
        job.local_path = str(save_download(downloaded, self._download_dir))
        _log(f"[CONFIG] downloaded to: {job.local_path}")

    async def _extract_text(self, job: DocumentJob) -> None:
        text = await asyncio.to_thread(self._extract, Path(job.local_path))
        _log(f"[CONFIG] raw parsed text (first 500 chars): {text[:500]}")
        job.text = normalize_document_text(text)
        if not job.text.strip():
            raise CommandValidationError(NO_STEPS_MESSAGE)

    async def _translate(self, job: DocumentJob) -> None:
        try:
            job.steps = await self._translator.to_steps(job.text)
        except TranslationError as e:
            _log(f"[CONFIG] {e}")
            raise CommandValidationError(NO_STEPS_MESSAGE) from e
        _log(f"[CONFIG] parsed steps: {job.steps}")
        if not job.steps:
            raise CommandValidationError(NO_STEPS_MESSAGE)

    async def _execute(self, job: DocumentJob, notify: Notifier) -> None:
        count = len(job.steps)
        await notify(f"▶️ Running {count} step(s) from the document... (this may take a few seconds)")
        job.report = await self._executor.run(job.steps)
        if job.report.aborted:
            raise RuntimeError(job.report.error or "navigation failed")

        message = f"✅ Config completed successfully with {count} steps."
        problems = summarize(job.report)
        if problems:
            message += f"\n⚠️ {len(problems)} step(s) skipped:\n" + "\n".join(f"- {p}" for p in problems)
        await notify(message)
