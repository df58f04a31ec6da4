"""Attachment storage and text extraction."""

from webex_agents.adapters.files.extractor import detect_format, extract_file, extract_text
from webex_agents.adapters.files.storage import discard, save_download

__all__ = ["detect_format", "extract_file", "extract_text", "discard", "save_download"]
