"""SQLite-backed citation and bookmark store."""

from __future__ import annotations

import dataclasses
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from uuid import uuid4

import aiosqlite

from research_assistant.citations.subscriptions import CitationChange, CitationChangeFeed
from research_assistant.citations.validation import validate_citation
from research_assistant.exceptions import NotFoundError, StorageError
from research_assistant.models.domain import Bookmark, Citation
from research_assistant.observability.logger import get_logger
from research_assistant.storage.migrations import initialize_db

logger = get_logger("citation_store")


class SQLiteCitationStore:
    def __init__(self, db_path: str, feed: CitationChangeFeed | None = None) -> None:
        self._db_path = db_path
        self._feed = feed or CitationChangeFeed()

    @property
    def feed(self) -> CitationChangeFeed:
        return self._feed

    async def initialize(self) -> None:
        await initialize_db(self._db_path)

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection; driver errors surface as ``StorageError``."""
        try:
            async with aiosqlite.connect(self._db_path) as db:
                yield db
        except aiosqlite.Error as e:
            raise StorageError(f"Citation store failure: {e}") from e

    async def save_citation(self, citation: Citation) -> str:
        """Validate and insert one citation. One call is one independent write."""
        validate_citation(citation)
        async with self._connect() as db:
            await db.execute(
                "INSERT INTO citations "
                "(citation_id, message_id, source_title, source_url, citation_text, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    citation.citation_id,
                    citation.message_id,
                    citation.title,
                    citation.url,
                    citation.text,
                    citation.created_at.isoformat(),
                ),
            )
            await db.commit()

        self._feed.publish(CitationChange("insert", citation.citation_id, citation.message_id))
        return citation.citation_id

    async def update_citation(
        self,
        citation_id: str,
        title: str | None = None,
        url: str | None = None,
        text: str | None = None,
    ) -> Citation:
        current = await self.get_citation(citation_id)
        if current is None:
            raise NotFoundError(f"Citation {citation_id} not found")

        changes = {k: v for k, v in {"title": title, "url": url, "text": text}.items() if v is not None}
        updated = validate_citation(dataclasses.replace(current, **changes))

        async with self._connect() as db:
            await db.execute(
                "UPDATE citations SET source_title = ?, source_url = ?, citation_text = ? "
                "WHERE citation_id = ?",
                (updated.title, updated.url, updated.text, citation_id),
            )
            await db.commit()

        self._feed.publish(CitationChange("update", citation_id, updated.message_id))
        return updated

    async def delete_citation(self, citation_id: str) -> None:
        current = await self.get_citation(citation_id)
        if current is None:
            raise NotFoundError(f"Citation {citation_id} not found")

        async with self._connect() as db:
            await db.execute("DELETE FROM citations WHERE citation_id = ?", (citation_id,))
            await db.commit()

        self._feed.publish(CitationChange("delete", citation_id, current.message_id))

    async def get_citation(self, citation_id: str) -> Citation | None:
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM citations WHERE citation_id = ?", (citation_id,)
            ) as cursor:
                row = await cursor.fetchone()
                if row is None:
                    return None
                return self._row_to_citation(row)

    async def list_citations(self, message_id: str | None = None, limit: int = 100) -> list[Citation]:
        """Newest first, optionally restricted to one message."""
        query = "SELECT * FROM citations"
        params: tuple = ()
        if message_id is not None:
            query += " WHERE message_id = ?"
            params = (message_id,)
        query += " ORDER BY created_at DESC LIMIT ?"
        params += (limit,)

        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(query, params) as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_citation(row) for row in rows]

    async def count_citations(self) -> int:
        async with self._connect() as db:
            async with db.execute("SELECT COUNT(*) FROM citations") as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def bookmark_citation(self, citation_id: str) -> Bookmark:
        citation = await self.get_citation(citation_id)
        if citation is None:
            raise NotFoundError(f"Citation {citation_id} not found")

        bookmark = Bookmark(
            bookmark_id=str(uuid4()),
            message_id=citation.message_id,
            note=f"Citation from: {citation.title or 'Unknown source'}",
        )
        async with self._connect() as db:
            await db.execute(
                "INSERT INTO bookmarks (bookmark_id, message_id, note, created_at) VALUES (?, ?, ?, ?)",
                (
                    bookmark.bookmark_id,
                    bookmark.message_id,
                    bookmark.note,
                    bookmark.created_at.isoformat(),
                ),
            )
            await db.commit()

        logger.info("citation_bookmarked", citation_id=citation_id)
        return bookmark

    @staticmethod
    def _row_to_citation(row: aiosqlite.Row) -> Citation:
        return Citation(
            citation_id=row["citation_id"],
            message_id=row["message_id"],
            title=row["source_title"],
            url=row["source_url"],
            text=row["citation_text"],
            created_at=datetime.fromisoformat(row["created_at"]).replace(tzinfo=timezone.utc),
        )
