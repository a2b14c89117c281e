"""Resolve a request's provider name to a completion provider."""

from __future__ import annotations

from research_assistant.exceptions import UnsupportedProviderError
from research_assistant.protocols.llm import LLMProvider

KNOWN_UNIMPLEMENTED = frozenset({"anthropic", "openai"})


class ProviderRegistry:
    def __init__(self) -> None:
        self._providers: dict[str, LLMProvider] = {}

    def register(self, name: str, provider: LLMProvider) -> None:
        self._providers[name.lower()] = provider

    def get(self, name: str) -> LLMProvider:
        key = name.lower()
        if key in self._providers:
            return self._providers[key]
        if key in KNOWN_UNIMPLEMENTED:
            raise UnsupportedProviderError("Provider not implemented yet")
        raise UnsupportedProviderError(f"Unsupported provider: {name}")
