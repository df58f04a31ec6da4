"""Browser automation adapter (Playwright)."""

from webex_agents.adapters.browser.playwright_session import PlaywrightSession, open_session, session_factory

__all__ = ["PlaywrightSession", "open_session", "session_factory"]
