"""Extract the step array from free-form model output."""

import json
from typing import List

from webex_agents.domain.errors import TranslationError
from webex_agents.domain.models import Step


def parse_steps(raw: str) -> List[Step]:
    """Parse the outermost ``[...]`` in ``raw`` into Steps.

    Models tend to wrap the array in prose or code fences, so everything
    outside the first ``[`` and the last ``]`` is ignored. Non-object items
    are dropped. Raises TranslationError when no array can be decoded.
    """
    start = raw.find("[")
    end = raw.rfind("]")
    if start == -1 or end < start:
        raise TranslationError("No JSON array in translator output")
    try:
        items = json.loads(raw[start:end + 1])
    except json.JSONDecodeError as e:
        raise TranslationError(f"Could not parse JSON steps: {e}") from e
    if not isinstance(items, list):
        raise TranslationError("Translator output is not a JSON array")
    return [Step.from_dict(item) for item in items if isinstance(item, dict)]
