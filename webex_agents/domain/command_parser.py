"""Command classification — ordered keyword rules over immutable text.

Pure Python, no framework dependencies.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from webex_agents.domain.models import (
    Command,
    Echo,
    RunCi,
    RunConfig,
    RunTest,
    Unrecognized,
)

MENTION_RE = re.compile(r"@\S+")

URL_RE = re.compile(r"https?://[^\s)]+", re.IGNORECASE)

# First matching pattern wins: explicit label, semantic version, bare number.
VERSION_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"\bversion\b\s*[:=]?\s*([A-Za-z0-9._-]+)", re.IGNORECASE),
    re.compile(r"\bv?(\d+\.\d+\.\d+)\b", re.IGNORECASE),
    re.compile(r"\b(\d{2,})\b"),
)

CI_PARAM_URL = "INSTANCE_URL"
CI_PARAM_VERSION = "VERSION"


@dataclass(frozen=True)
class CommandText:
    """Raw and mention-stripped forms of one message."""

    raw: str
    cleaned: str
    attachments: Tuple[str, ...] = ()

    @classmethod
    def of(cls, raw: str, attachments: Sequence[str] = ()) -> "CommandText":
        return cls(raw=raw, cleaned=strip_mentions(raw), attachments=tuple(attachments))

    def mentions(self, keyword: str) -> bool:
        """Case-insensitive: ``@keyword`` in the raw text or ``keyword`` in the cleaned text."""
        keyword = keyword.lower()
        return f"@{keyword}" in self.raw.lower() or keyword in self.cleaned.lower()


@dataclass(frozen=True)
class CommandRule:
    name: str
    matches: Callable[[CommandText], bool]
    build: Callable[[CommandText, Sequence[str]], Command]


def strip_mentions(text: str) -> str:
    """Remove ``@something`` tokens and surrounding whitespace."""
    return MENTION_RE.sub("", text).strip()


def find_job_name(text: str, allowed_jobs: Sequence[str]) -> Optional[str]:
    """Return the first allow-listed job whose name occurs in ``text``."""
    lowered = text.lower()
    for job in allowed_jobs:
        if job.lower() in lowered:
            return job
    return None


def find_url(text: str) -> Optional[str]:
    match = URL_RE.search(text)
    return match.group(0) if match else None


def find_version(text: str) -> Optional[str]:
    """Best-effort version guess. URLs are removed first so host digits never count."""
    without_urls = URL_RE.sub(" ", text)
    for pattern in VERSION_PATTERNS:
        match = pattern.search(without_urls)
        if match:
            return match.group(1)
    return None


def parse_ci_command(text: CommandText, allowed_jobs: Sequence[str]) -> RunCi:
    """Extract job name and INSTANCE_URL / VERSION parameters."""
    source = text.cleaned or text.raw
    params: Dict[str, str] = {}
    url = find_url(source)
    if url:
        params[CI_PARAM_URL] = url
    version = find_version(source)
    if version:
        params[CI_PARAM_VERSION] = version
    job_name = find_job_name(f"{text.raw} {text.cleaned}", allowed_jobs)
    return RunCi(job_name=job_name, params=params)


def _fallback(text: CommandText, _jobs: Sequence[str]) -> Command:
    if not text.raw.strip():
        return Unrecognized()
    return Echo(text=text.cleaned or text.raw)


# Priority order is the tie-break: "run jenkins test config" is a CI command.
COMMAND_RULES: List[CommandRule] = [
    CommandRule("jenkins", lambda t: t.mentions("jenkins"), parse_ci_command),
    CommandRule(
        "config",
        lambda t: t.mentions("config"),
        lambda t, _jobs: RunConfig(attachment_ref=t.attachments[0] if t.attachments else None),
    ),
    CommandRule("test", lambda t: t.mentions("test"), lambda _t, _jobs: RunTest()),
    CommandRule("echo", lambda _t: True, _fallback),
]


def classify(
    raw_text: str,
    attachments: Sequence[str] = (),
    allowed_jobs: Sequence[str] = (),
) -> Command:
    """Map one message to a Command. First matching rule wins."""
    text = CommandText.of(raw_text or "", attachments)
    for rule in COMMAND_RULES:
        if rule.matches(text):
            return rule.build(text, allowed_jobs)
    return Unrecognized()
