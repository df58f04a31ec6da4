"""Webex messaging adapter."""

from webex_agents.adapters.webex.client import WebexClient

__all__ = ["WebexClient"]
