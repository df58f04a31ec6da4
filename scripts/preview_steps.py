#!/usr/bin/env python3
"""
Document -> steps dry run

Runs extraction, normalization and translation on a local file and prints
the resulting steps. With --run the steps are also executed in a browser.

Usage:
    python scripts/preview_steps.py docs/setup.docx
    python scripts/preview_steps.py docs/setup.pdf --run
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from webex_agents.adapters.browser import session_factory
from webex_agents.adapters.files import extract_file
from webex_agents.adapters.llm import OllamaTranslator
from webex_agents.config import AppConfig
from webex_agents.domain.errors import RelayError
from webex_agents.domain.normalize import normalize_document_text
from webex_agents.domain.step_executor import StepExecutor, summarize


async def preview(path: Path, run: bool) -> int:
    config = AppConfig.from_env()
    text = normalize_document_text(extract_file(path))
    print("Normalized text:\n" + text + "\n")
    if not text.strip():
        print("No text could be extracted.", file=sys.stderr)
        return 1

    try:
        steps = await OllamaTranslator(config.translator).to_steps(text)
    except RelayError as e:
        print(f"Translation failed: {e}", file=sys.stderr)
        return 1
    print(json.dumps([{"action": s.action, "target": s.target} for s in steps], indent=2))

    if run and steps:
        report = await StepExecutor(session_factory(config.browser)).run(steps)
        for line in summarize(report):
            print(f"- {line}")
        return 1 if report.aborted else 0
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Preview the browser steps for a document")
    parser.add_argument("path", type=Path, help=".docx, .pdf or text file")
    parser.add_argument("--run", action="store_true", help="Also execute the steps")
    args = parser.parse_args(argv)
    if not args.path.exists():
        parser.error(f"{args.path} does not exist")
    return asyncio.run(preview(args.path, args.run))


if __name__ == "__main__":
    sys.exit(main())
