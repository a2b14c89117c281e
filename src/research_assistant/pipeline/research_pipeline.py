"""End-to-end handling of one research prompt.

generate -> extract citations -> annotate (best effort) -> store message
-> store each citation against the new message id
"""

from __future__ import annotations

import dataclasses
from uuid import uuid4

from research_assistant.citations.extractor import extract_citations
from research_assistant.config.settings import Settings
from research_assistant.exceptions import CitationValidationError, StorageError
from research_assistant.generation.prompt_templates import RESEARCH_SYSTEM, build_research_prompt
from research_assistant.generation.providers import ProviderRegistry
from research_assistant.generation.token_metrics import calculate_token_metrics
from research_assistant.models.domain import Annotation, Citation, Message, ResearchOutcome
from research_assistant.models.metadata import (
    AnnotationModel,
    AssistantMessageMetadata,
    TokenMetricsModel,
)
from research_assistant.models.schemas import ModelConfig
from research_assistant.observability.logger import get_logger
from research_assistant.protocols.annotator import TextAnnotator
from research_assistant.storage.sqlite_citation_store import SQLiteCitationStore
from research_assistant.storage.sqlite_message_store import SQLiteMessageStore

logger = get_logger("pipeline")


class ResearchPipeline:
    def __init__(
        self,
        providers: ProviderRegistry,
        annotator: TextAnnotator,
        message_store: SQLiteMessageStore,
        citation_store: SQLiteCitationStore,
        settings: Settings,
    ) -> None:
        self.providers = providers
        self.annotator = annotator
        self.message_store = message_store
        self.citation_store = citation_store
        self.settings = settings

    async def run(
        self,
        prompt: str,
        config: ModelConfig,
        conversation_id: str | None = None,
    ) -> ResearchOutcome:
        llm = self.providers.get(config.provider)
        temperature = (
            config.temperature if config.temperature is not None else self.settings.gemini_temperature
        )
        max_tokens = config.max_tokens or self.settings.gemini_max_tokens

        raw = await llm.generate(
            build_research_prompt(prompt),
            system=RESEARCH_SYSTEM,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        extraction = extract_citations(raw)
        annotation = await self._annotate(extraction.clean_text)

        metadata = AssistantMessageMetadata(
            model=config.model,
            temperature=temperature,
            max_tokens=max_tokens,
            citation_count=len(extraction.citations),
            token_metrics=TokenMetricsModel.from_domain(
                calculate_token_metrics(extraction.clean_text, self.settings.cost_per_1k_tokens)
            ),
            annotation=AnnotationModel.from_domain(annotation) if annotation else None,
        )
        message_id = await self.message_store.save_message(
            Message(
                message_id=str(uuid4()),
                conversation_id=conversation_id,
                role="assistant",
                content=extraction.clean_text,
                model_name=config.model,
                metadata=metadata,
            )
        )

        saved, rejected, failed = await self.save_citations(message_id, extraction.citations)

        logger.info(
            "research_completed",
            message_id=message_id,
            citations=len(saved),
            rejected=len(rejected),
            failed=len(failed),
            annotated=annotation is not None,
        )

        return ResearchOutcome(
            message_id=message_id,
            generated_text=extraction.clean_text,
            citations=saved,
            rejected_citations=rejected,
            failed_citations=failed,
            annotation=annotation,
        )

    async def save_citations(
        self, message_id: str, citations: list[Citation]
    ) -> tuple[list[Citation], list[Citation], list[Citation]]:
        """Write each citation separately; returns (saved, rejected, failed)."""
        saved: list[Citation] = []
        rejected: list[Citation] = []
        failed: list[Citation] = []

        for citation in citations:
            owned = dataclasses.replace(citation, message_id=message_id)
            try:
                await self.citation_store.save_citation(owned)
            except CitationValidationError as e:
                logger.warning("citation_rejected", message_id=message_id, reason=str(e))
                rejected.append(owned)
            except StorageError as e:
                logger.error("citation_save_failed", message_id=message_id, error=str(e))
                failed.append(owned)
            else:
                saved.append(owned)

        return saved, rejected, failed

    async def _annotate(self, content: str) -> Annotation | None:
        try:
            return await self.annotator.annotate(content)
        except Exception as e:
            logger.warning("annotation_skipped", error=str(e))
            return None
