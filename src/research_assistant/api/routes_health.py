"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from research_assistant.api.dependencies import get_citation_store, get_message_store
from research_assistant.models.schemas import HealthResponse
from research_assistant.storage.sqlite_citation_store import SQLiteCitationStore
from research_assistant.storage.sqlite_message_store import SQLiteMessageStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    message_store: SQLiteMessageStore = Depends(get_message_store),
    citation_store: SQLiteCitationStore = Depends(get_citation_store),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        message_count=await message_store.count_messages(),
        citation_count=await citation_store.count_citations(),
    )
