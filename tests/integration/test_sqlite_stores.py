"""Integration tests for SQLite message and citation stores."""

from uuid import uuid4

import aiosqlite
import pytest

from research_assistant.exceptions import CitationValidationError, NotFoundError, StorageError
from research_assistant.models.domain import Citation, Message
from research_assistant.models.metadata import AssistantMessageMetadata, UserMessageMetadata


def _assistant_message(**overrides) -> Message:
    fields = dict(
        message_id=str(uuid4()),
        conversation_id="conv-1",
        role="assistant",
        content="Answer (Paper A)",
        model_name="gemini-2.0-flash",
        metadata=AssistantMessageMetadata(
            model="gemini-2.0-flash", temperature=0.7, max_tokens=2048, citation_count=1
        ),
    )
    fields.update(overrides)
    return Message(**fields)


async def test_save_and_get_message(message_store):
    message = _assistant_message()
    await message_store.save_message(message)
    retrieved = await message_store.get_message(message.message_id)
    assert retrieved is not None
    assert retrieved.content == "Answer (Paper A)"
    assert isinstance(retrieved.metadata, AssistantMessageMetadata)
    assert retrieved.metadata.citation_count == 1


async def test_get_missing_message(message_store):
    assert await message_store.get_message("nope") is None


async def test_update_message(message_store):
    message = _assistant_message()
    await message_store.save_message(message)
    edited = message.metadata.model_copy(update={"is_edited": True})
    await message_store.update_message(message.message_id, "Edited", edited)
    retrieved = await message_store.get_message(message.message_id)
    assert retrieved.content == "Edited"
    assert retrieved.metadata.is_edited


async def test_update_missing_message(message_store):
    with pytest.raises(NotFoundError):
        await message_store.update_message("nope", "x", UserMessageMetadata())


async def test_conversation_listing(message_store):
    await message_store.save_message(_assistant_message(conversation_id="c9"))
    await message_store.save_message(
        _assistant_message(conversation_id="c9", role="user", metadata=UserMessageMetadata())
    )
    await message_store.save_message(_assistant_message(conversation_id="other"))
    assert len(await message_store.get_conversation("c9")) == 2
    assert await message_store.count_messages() == 3


async def test_save_and_list_citations(citation_store):
    for i in range(3):
        await citation_store.save_citation(
            Citation(text=f"quote {i}", title=f"T{i}", url="http://x", message_id="m1")
        )
    await citation_store.save_citation(Citation(text="other", message_id="m2"))

    assert len(await citation_store.list_citations(message_id="m1")) == 3
    assert len(await citation_store.list_citations()) == 4
    assert await citation_store.count_citations() == 4


async def test_blank_citation_rejected(citation_store):
    with pytest.raises(CitationValidationError, match="Citation text is required"):
        await citation_store.save_citation(Citation(text="   ", message_id="m1"))
    assert await citation_store.count_citations() == 0


async def test_update_citation(citation_store):
    citation = Citation(text="old", title="T", message_id="m1")
    await citation_store.save_citation(citation)
    updated = await citation_store.update_citation(citation.citation_id, text="new")
    assert updated.text == "new"
    assert updated.title == "T"
    stored = await citation_store.get_citation(citation.citation_id)
    assert stored.text == "new"


async def test_update_citation_validation(citation_store):
    citation = Citation(text="old", message_id="m1")
    await citation_store.save_citation(citation)
    with pytest.raises(CitationValidationError):
        await citation_store.update_citation(citation.citation_id, text=" ")


async def test_delete_citation(citation_store):
    citation = Citation(text="q", message_id="m1")
    await citation_store.save_citation(citation)
    await citation_store.delete_citation(citation.citation_id)
    assert await citation_store.get_citation(citation.citation_id) is None
    with pytest.raises(NotFoundError):
        await citation_store.delete_citation(citation.citation_id)


async def test_bookmark_note(citation_store):
    titled = Citation(text="q", title="Paper A", message_id="m1")
    untitled = Citation(text="q", message_id="m1")
    await citation_store.save_citation(titled)
    await citation_store.save_citation(untitled)
    assert (await citation_store.bookmark_citation(titled.citation_id)).note == "Citation from: Paper A"
    assert (
        await citation_store.bookmark_citation(untitled.citation_id)
    ).note == "Citation from: Unknown source"


async def test_writes_publish_changes(citation_store):
    queue = citation_store.feed.subscribe()
    citation = Citation(text="q", message_id="m1")
    await citation_store.save_citation(citation)
    await citation_store.update_citation(citation.citation_id, title="T")
    await citation_store.delete_citation(citation.citation_id)
    events = [queue.get_nowait().event for _ in range(queue.qsize())]
    assert events == ["insert", "update", "delete"]


async def test_citation_writes_wrap_driver_errors(citation_store, settings):
    citation = Citation(text="q", message_id="m1")
    await citation_store.save_citation(citation)
    async with aiosqlite.connect(settings.sqlite_db_path) as db:
        await db.executescript(
            "CREATE TRIGGER no_update BEFORE UPDATE ON citations "
            "BEGIN SELECT RAISE(ABORT, 'read only'); END;"
            "CREATE TRIGGER no_delete BEFORE DELETE ON citations "
            "BEGIN SELECT RAISE(ABORT, 'read only'); END;"
            "DROP TABLE bookmarks;"
        )
        await db.commit()

    with pytest.raises(StorageError, match="read only"):
        await citation_store.update_citation(citation.citation_id, text="new")
    with pytest.raises(StorageError, match="read only"):
        await citation_store.delete_citation(citation.citation_id)
    with pytest.raises(StorageError, match="no such table"):
        await citation_store.bookmark_citation(citation.citation_id)

    stored = await citation_store.get_citation(citation.citation_id)
    assert stored.text == "q"


async def test_citation_reads_wrap_driver_errors(citation_store, settings):
    async with aiosqlite.connect(settings.sqlite_db_path) as db:
        await db.execute("DROP TABLE citations")
        await db.commit()

    with pytest.raises(StorageError):
        await citation_store.get_citation("any")
    with pytest.raises(StorageError):
        await citation_store.list_citations()
