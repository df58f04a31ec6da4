#!/usr/bin/env python3
"""
Webex webhook registration

Deletes every webhook registered for the bot and creates a fresh one that
points at <public-url>/webhook (resource "messages", event "created").
Run it whenever the public URL of the server changes.

Usage:
    python scripts/register_webhook.py https://example.ngrok.app
    python scripts/register_webhook.py https://bot.example.com --name prod-webhook
"""

import argparse
import asyncio
import sys

from webex_agents.adapters.webex import WebexClient
from webex_agents.adapters.webex.client import DEFAULT_WEBHOOK_NAME
from webex_agents.config import AppConfig
from webex_agents.domain.errors import TransportError


async def register(public_url: str, name: str) -> int:
    config = AppConfig.from_env()
    client = WebexClient(config.webex)
    if not client.is_configured:
        print("Missing WEBEX_BOT_TOKEN in .env, please add it and re-run.", file=sys.stderr)
        return 1

    target = f"{public_url.rstrip('/')}/webhook"
    try:
        created = await client.reset_webhooks(target, name=name)
    except TransportError as e:
        print(f"Failed to reset webhooks: {e}", file=sys.stderr)
        return 1

    print(f"Webhook {created.get('id')} -> {created.get('targetUrl')}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Point the Webex bot webhook at this server")
    parser.add_argument("public_url", help="Public base URL of the running server")
    parser.add_argument("--name", default=DEFAULT_WEBHOOK_NAME, help="Webhook display name")
    args = parser.parse_args(argv)
    return asyncio.run(register(args.public_url, args.name))


if __name__ == "__main__":
    sys.exit(main())
