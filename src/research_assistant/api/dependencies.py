"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from research_assistant.pipeline.research_pipeline import ResearchPipeline
from research_assistant.protocols.annotator import TextAnnotator
from research_assistant.storage.sqlite_citation_store import SQLiteCitationStore
from research_assistant.storage.sqlite_message_store import SQLiteMessageStore


def get_research_pipeline(request: Request) -> ResearchPipeline:
    return request.app.state.research_pipeline


def get_annotator(request: Request) -> TextAnnotator:
    return request.app.state.annotator


def get_message_store(request: Request) -> SQLiteMessageStore:
    return request.app.state.message_store


def get_citation_store(request: Request) -> SQLiteCitationStore:
    return request.app.state.citation_store
