"""LLM adapters — document-to-steps translation."""

from webex_agents.adapters.llm.ollama_translator import OllamaTranslator

__all__ = ["OllamaTranslator"]
