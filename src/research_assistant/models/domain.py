"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from research_assistant.models.metadata import (
        AssistantMessageMetadata,
        UserMessageMetadata,
    )


@dataclass(frozen=True)
class Citation:
    text: str
    title: str | None = None
    url: str | None = None
    message_id: str | None = None  # assigned once the owning message is stored
    citation_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ExtractionResult:
    clean_text: str
    citations: list[Citation]


@dataclass(frozen=True)
class Annotation:
    sentiment: float
    complexity: float
    key_terms: list[str]


def neutral_annotation() -> Annotation:
    """Fallback scores for when a remote scorer is unavailable. A new object per call."""
    return Annotation(sentiment=0.5, complexity=0.5, key_terms=[])


@dataclass(frozen=True)
class TokenMetrics:
    input_tokens: int
    output_tokens: int
    total_cost: float


@dataclass
class Message:
    message_id: str
    conversation_id: str | None
    role: str  # "user", "assistant"
    content: str
    model_name: str
    metadata: UserMessageMetadata | AssistantMessageMetadata
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Bookmark:
    bookmark_id: str
    message_id: str | None
    note: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ResearchOutcome:
    message_id: str
    generated_text: str
    citations: list[Citation]
    rejected_citations: list[Citation]
    failed_citations: list[Citation]
    annotation: Annotation | None
