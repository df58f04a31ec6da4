"""Textual repairs applied to extracted documents before translation.

Both rewrites are idempotent: text whose ``Step`` tokens already start a
line comes back unchanged.
"""

import re

STEP_TOKEN_RE = re.compile(r"Step(?=\d)")

URL_TOKEN_RE = re.compile(r"https?://\S+")

# Only spaces/tabs may sit between a URL and the "Step" it runs into.
STEP_AHEAD_RE = re.compile(r"[ \t]*Step")


def _at_line_start(text: str, index: int) -> bool:
    line_start = text.rfind("\n", 0, index) + 1
    return not text[line_start:index].strip()


def split_steps(text: str) -> str:
    """Insert a line break before every ``Step<digit>`` not already starting a line."""
    pieces = []
    last = 0
    for match in STEP_TOKEN_RE.finditer(text):
        if _at_line_start(text, match.start()):
            continue
        pieces.append(text[last:match.start()])
        pieces.append("\n")
        last = match.start()
    pieces.append(text[last:])
    return "".join(pieces)


def separate_urls(text: str) -> str:
    """Insert a line break right after a URL that runs into a ``Step`` token.

    The whole URL token is matched first, so ``Step`` inside a path stays put.
    """
    pieces = []
    last = 0
    for match in URL_TOKEN_RE.finditer(text):
        if STEP_AHEAD_RE.match(text, match.end()):
            pieces.append(text[last:match.end()])
            pieces.append("\n")
            last = match.end()
    pieces.append(text[last:])
    return "".join(pieces)


def normalize_document_text(text: str) -> str:
    return separate_urls(split_steps(text))
