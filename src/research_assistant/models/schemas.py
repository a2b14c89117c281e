"""Pydantic models for API request/response serialization.

Wire field names are camelCase (``keyTerms``, ``generatedText``); Python code
uses the snake_case attribute names.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from research_assistant.models.domain import Citation


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ModelConfig(CamelModel):
    provider: str = "google"
    model: str = "gemini-2.0-flash"
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)


class ResearchRequest(CamelModel):
    prompt: str = Field(min_length=1)
    config: ModelConfig = Field(default_factory=ModelConfig)
    conversation_id: str | None = None


class CitationOut(CamelModel):
    id: str
    message_id: str | None = None
    title: str | None = None
    url: str | None = None
    text: str
    created_at: datetime

    @classmethod
    def from_domain(cls, citation: Citation) -> CitationOut:
        return cls(
            id=citation.citation_id,
            message_id=citation.message_id,
            title=citation.title,
            url=citation.url,
            text=citation.text,
            created_at=citation.created_at,
        )


class ResearchResponse(CamelModel):
    generated_text: str
    citations: list[CitationOut]
    message_id: str
    rejected_citations: int = 0
    failed_citations: int = 0


class AnalyzeRequest(CamelModel):
    content: str


class AnalyzeResponse(CamelModel):
    sentiment: float = Field(ge=0.0, le=1.0)
    complexity: float = Field(ge=0.0, le=1.0)
    key_terms: list[str] = Field(default_factory=list, max_length=5)


class CitationCreate(CamelModel):
    message_id: str | None = None
    title: str | None = None
    url: str | None = None
    text: str


class CitationUpdate(CamelModel):
    title: str | None = None
    url: str | None = None
    text: str | None = None


class BookmarkOut(CamelModel):
    id: str
    message_id: str | None = None
    note: str
    created_at: datetime


class HealthResponse(CamelModel):
    status: str
    message_count: int
    citation_count: int
