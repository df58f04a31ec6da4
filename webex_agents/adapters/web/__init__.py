"""HTTP surface (FastAPI routes)."""

from webex_agents.adapters.web.webhook_routes import webhook_router

__all__ = ["webhook_router"]
