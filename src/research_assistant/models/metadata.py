"""Versioned message metadata, one tagged variant per message role.

Stored as JSON alongside each message. ``kind`` selects the variant and
``schema_version`` pins the field set, so readers never see an open bag of keys.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from research_assistant.models.domain import Annotation, TokenMetrics


class TokenMetricsModel(BaseModel):
    input_tokens: int
    output_tokens: int = 0
    total_cost: float

    @classmethod
    def from_domain(cls, metrics: TokenMetrics) -> TokenMetricsModel:
        return cls(
            input_tokens=metrics.input_tokens,
            output_tokens=metrics.output_tokens,
            total_cost=metrics.total_cost,
        )


class AnnotationModel(BaseModel):
    sentiment: float = Field(ge=0.0, le=1.0)
    complexity: float = Field(ge=0.0, le=1.0)
    key_terms: list[str] = Field(default_factory=list, max_length=5)

    @classmethod
    def from_domain(cls, annotation: Annotation) -> AnnotationModel:
        return cls(
            sentiment=annotation.sentiment,
            complexity=annotation.complexity,
            key_terms=list(annotation.key_terms),
        )


class _BaseMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal[1] = 1
    is_pinned: bool = False
    is_edited: bool = False
    edited_at: datetime | None = None
    token_metrics: TokenMetricsModel | None = None
    annotation: AnnotationModel | None = None


class UserMessageMetadata(_BaseMetadata):
    kind: Literal["user"] = "user"


class AssistantMessageMetadata(_BaseMetadata):
    kind: Literal["assistant"] = "assistant"
    model: str
    temperature: float
    max_tokens: int
    citation_count: int = 0


MessageMetadata = Annotated[
    Union[UserMessageMetadata, AssistantMessageMetadata],
    Field(discriminator="kind"),
]

metadata_adapter: TypeAdapter[MessageMetadata] = TypeAdapter(MessageMetadata)


def dump_metadata(metadata: UserMessageMetadata | AssistantMessageMetadata) -> str:
    return metadata.model_dump_json()


def load_metadata(raw: str) -> UserMessageMetadata | AssistantMessageMetadata:
    return metadata_adapter.validate_json(raw)
