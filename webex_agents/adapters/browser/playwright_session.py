"""Playwright adapter — one Chromium browser per run."""

import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from playwright.async_api import async_playwright

from webex_agents.config import BrowserConfig
from webex_agents.ports.outbound import SessionFactory


def _log(msg: str):
    print(msg, file=sys.stderr)


class PlaywrightSession:
    """BrowserSession over a single Playwright page."""

    def __init__(self, page: Any, click_timeout_ms: int = 10000):
        self._page = page
        self._click_timeout_ms = click_timeout_ms

    async def navigate(self, url: str) -> None:
        await self._page.goto(url)

    async def click_text(self, text: str) -> None:
        # exact=False: case-insensitive substring match on visible text
        locator = self._page.get_by_text(text, exact=False).first
        await locator.click(timeout=self._click_timeout_ms)


@asynccontextmanager
async def open_session(config: BrowserConfig) -> AsyncIterator[PlaywrightSession]:
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=config.headless,
            slow_mo=config.slow_mo_ms,
        )
        _log(f"[BROWSER] chromium launched (headless={config.headless})")
        try:
            page = await browser.new_page()
            yield PlaywrightSession(page, click_timeout_ms=config.click_timeout_ms)
        finally:
            await browser.close()
            _log("[BROWSER] closed")


def session_factory(config: BrowserConfig) -> SessionFactory:
    return lambda: open_session(config)
