"""Configuration loaded once at startup, read-only afterwards."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

DEFAULT_ALLOWED_JOBS = ("TestPR", "TESTCDH")


def _env_str(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
    return default


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


@dataclass(frozen=True)
class WebexConfig:
    bot_token: str = ""
    bot_id: str = ""
    api_base: str = "https://webexapis.com/v1"
    bot_email_domain: str = "webex.bot"


@dataclass(frozen=True)
class PollingConfig:
    """Bounds for the two Jenkins polling stages (seconds)."""

    queue_timeout: float = 120.0
    queue_interval: float = 1.5
    build_timeout: float = 180.0
    build_interval: float = 2.0


@dataclass(frozen=True)
class JenkinsConfig:
    url: str = "http://localhost:8080"
    user: str = ""
    api_token: str = ""
    allowed_jobs: Tuple[str, ...] = DEFAULT_ALLOWED_JOBS
    polling: PollingConfig = field(default_factory=PollingConfig)

    def is_allowed(self, job_name: str) -> bool:
        return job_name.lower() in {job.lower() for job in self.allowed_jobs}


@dataclass(frozen=True)
class TranslatorConfig:
    url: str = "http://localhost:11434"
    model: str = "gemma3:1b"
    timeout: float = 120.0


@dataclass(frozen=True)
class BrowserConfig:
    headless: bool = False
    slow_mo_ms: int = 500
    click_timeout_ms: int = 10000


@dataclass(frozen=True)
class AppConfig:
    """Typed process configuration, passed explicitly into each component."""

    port: int = 3000
    download_dir: str = "tmp"
    webex: WebexConfig = field(default_factory=WebexConfig)
    jenkins: JenkinsConfig = field(default_factory=JenkinsConfig)
    translator: TranslatorConfig = field(default_factory=TranslatorConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            port=_env_int("PORT", 3000),
            download_dir=_env_str("DOWNLOAD_DIR", "tmp") or "tmp",
            webex=WebexConfig(
                bot_token=_env_str("WEBEX_BOT_TOKEN"),
                bot_id=_env_str("WEBEX_BOT_ID"),
                api_base=_env_str("WEBEX_API_BASE", "https://webexapis.com/v1").rstrip("/"),
                bot_email_domain=_env_str("WEBEX_BOT_EMAIL_DOMAIN", "webex.bot").lower(),
            ),
            jenkins=JenkinsConfig(
                url=_env_str("JENKINS_URL", "http://localhost:8080").rstrip("/"),
                user=_env_str("JENKINS_USER"),
                api_token=_env_str("JENKINS_API_TOKEN"),
                allowed_jobs=_env_list("JENKINS_ALLOWED_JOBS", DEFAULT_ALLOWED_JOBS),
                polling=PollingConfig(
                    queue_timeout=_env_float("JENKINS_QUEUE_TIMEOUT", 120.0),
                    queue_interval=_env_float("JENKINS_QUEUE_INTERVAL", 1.5),
                    build_timeout=_env_float("JENKINS_BUILD_TIMEOUT", 180.0),
                    build_interval=_env_float("JENKINS_BUILD_INTERVAL", 2.0),
                ),
            ),
            translator=TranslatorConfig(
                url=_env_str("OLLAMA_URL", "http://localhost:11434").rstrip("/"),
                model=_env_str("OLLAMA_MODEL", "gemma3:1b"),
                timeout=_env_float("OLLAMA_TIMEOUT", 120.0),
            ),
            browser=BrowserConfig(
                headless=_env_bool("BROWSER_HEADLESS", False),
                slow_mo_ms=_env_int("BROWSER_SLOW_MO_MS", 500),
                click_timeout_ms=_env_int("BROWSER_CLICK_TIMEOUT_MS", 10000),
            ),
        )
