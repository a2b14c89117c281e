"""Citation management endpoints."""

from __future__ import annotations

import asyncio
import json

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import StreamingResponse

from research_assistant.api.dependencies import get_citation_store
from research_assistant.api.rate_limiter import rate_limit
from research_assistant.citations.subscriptions import CitationSubscription
from research_assistant.exceptions import CitationValidationError, NotFoundError, StorageError
from research_assistant.models.domain import Citation
from research_assistant.models.schemas import (
    BookmarkOut,
    CitationCreate,
    CitationOut,
    CitationUpdate,
)
from research_assistant.storage.sqlite_citation_store import SQLiteCitationStore

router = APIRouter(prefix="/citations")

KEEPALIVE_SECONDS = 30.0


@router.get("", response_model=list[CitationOut])
async def list_citations(
    message_id: str | None = Query(None, alias="messageId"),
    limit: int = Query(100, ge=1, le=1000),
    store: SQLiteCitationStore = Depends(get_citation_store),
    _auth: dict = Depends(rate_limit),
) -> list[CitationOut]:
    citations = await store.list_citations(message_id=message_id, limit=limit)
    return [CitationOut.from_domain(c) for c in citations]


@router.get("/stream")
async def stream_citations(
    message_id: str | None = Query(None, alias="messageId"),
    store: SQLiteCitationStore = Depends(get_citation_store),
    _auth: dict = Depends(rate_limit),
):
    """Push the refreshed citation list via Server-Sent Events after every change."""
    updates: asyncio.Queue[list[Citation]] = asyncio.Queue()

    subscription = CitationSubscription(
        feed=store.feed,
        fetch=lambda: store.list_citations(message_id=message_id),
        on_update=updates.put_nowait,
        message_id=message_id,
    )

    async def event_generator():
        subscription.start()
        try:
            while True:
                try:
                    citations = await asyncio.wait_for(updates.get(), timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield "event: keepalive\ndata: \n\n"
                    continue
                data = json.dumps(
                    [CitationOut.from_domain(c).model_dump(mode="json", by_alias=True) for c in citations]
                )
                yield f"event: citations\ndata: {data}\n\n"
        finally:
            await subscription.stop()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.get("/{citation_id}", response_model=CitationOut)
async def get_citation(
    citation_id: str,
    store: SQLiteCitationStore = Depends(get_citation_store),
    _auth: dict = Depends(rate_limit),
) -> CitationOut:
    citation = await store.get_citation(citation_id)
    if citation is None:
        raise HTTPException(status_code=404, detail="Citation not found")
    return CitationOut.from_domain(citation)


@router.post("", response_model=CitationOut, status_code=201)
async def create_citation(
    body: CitationCreate,
    store: SQLiteCitationStore = Depends(get_citation_store),
    _auth: dict = Depends(rate_limit),
) -> CitationOut:
    citation = Citation(text=body.text, title=body.title, url=body.url, message_id=body.message_id)
    try:
        await store.save_citation(citation)
    except CitationValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return CitationOut.from_domain(citation)


@router.patch("/{citation_id}", response_model=CitationOut)
async def update_citation(
    citation_id: str,
    body: CitationUpdate,
    store: SQLiteCitationStore = Depends(get_citation_store),
    _auth: dict = Depends(rate_limit),
) -> CitationOut:
    try:
        updated = await store.update_citation(
            citation_id, title=body.title, url=body.url, text=body.text
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CitationValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return CitationOut.from_domain(updated)


@router.delete("/{citation_id}", status_code=204)
async def delete_citation(
    citation_id: str,
    store: SQLiteCitationStore = Depends(get_citation_store),
    _auth: dict = Depends(rate_limit),
) -> Response:
    try:
        await store.delete_citation(citation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=204)


@router.post("/{citation_id}/bookmark", response_model=BookmarkOut, status_code=201)
async def bookmark_citation(
    citation_id: str,
    store: SQLiteCitationStore = Depends(get_citation_store),
    _auth: dict = Depends(rate_limit),
) -> BookmarkOut:
    try:
        bookmark = await store.bookmark_citation(citation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return BookmarkOut(
        id=bookmark.bookmark_id,
        message_id=bookmark.message_id,
        note=bookmark.note,
        created_at=bookmark.created_at,
    )
