"""Ollama adapter — turns document text into browser steps. Implements TranslatorPort."""

import sys
from datetime import datetime
from typing import List

import aiohttp

from webex_agents.config import TranslatorConfig
from webex_agents.domain.errors import TransportError
from webex_agents.domain.models import Step
from webex_agents.domain.step_parser import parse_steps

PLANNER_PROMPT = """You are an automation planner.
Convert the following document into a JSON array of steps.
Each step must be an object: {{ "action": string, "target": string? }}.
Valid actions: "launch", "click", "done".
"launch" needs the URL to open as target, "click" needs the visible text to click as target.
Reply with the JSON array only.
Doc:
{document}
"""


def _log(msg: str):
    print(msg, file=sys.stderr)


class OllamaTranslator:
    """Calls a local Ollama model (non-streaming /api/generate)."""

    def __init__(self, config: TranslatorConfig):
        self._config = config

    def build_prompt(self, text: str) -> str:
        return PLANNER_PROMPT.format(document=text)

    async def generate(self, prompt: str) -> str:
        payload = {"model": self._config.model, "prompt": prompt, "stream": False}
        timeout = aiohttp.ClientTimeout(total=self._config.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(f"{self._config.url}/api/generate", json=payload) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise TransportError(f"Ollama error {resp.status}: {body}", status=resp.status)
                data = await resp.json()
        return str(data.get("response", "")).strip()

    async def to_steps(self, text: str) -> List[Step]:
        _log(f"[{datetime.now().isoformat()}] Translating with Ollama ({self._config.model})")
        raw = await self.generate(self.build_prompt(text))
        try:
            steps = parse_steps(raw)
        except Exception:
            _log(f"[LLM] failed to parse output: {raw[:500]}")
            raise
        _log(f"[LLM] parsed {len(steps)} step(s)")
        return steps
