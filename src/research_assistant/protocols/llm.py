"""Protocol for completion providers."""

from __future__ import annotations

from typing import Protocol


class LLMProvider(Protocol):
    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> str: ...
