"""Protocol for message annotators."""

from __future__ import annotations

from typing import Protocol

from research_assistant.models.domain import Annotation


class TextAnnotator(Protocol):
    async def annotate(self, content: str) -> Annotation: ...
