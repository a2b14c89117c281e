"""SQLite-backed message store."""

from __future__ import annotations

from datetime import datetime, timezone

import aiosqlite

from research_assistant.exceptions import NotFoundError
from research_assistant.models.domain import Message
from research_assistant.models.metadata import (
    AssistantMessageMetadata,
    UserMessageMetadata,
    dump_metadata,
    load_metadata,
)
from research_assistant.storage.migrations import initialize_db


class SQLiteMessageStore:
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    async def initialize(self) -> None:
        await initialize_db(self._db_path)

    async def save_message(self, message: Message) -> str:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "INSERT INTO messages "
                "(message_id, conversation_id, role, content, model_name, metadata, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    message.message_id,
                    message.conversation_id,
                    message.role,
                    message.content,
                    message.model_name,
                    dump_metadata(message.metadata),
                    message.created_at.isoformat(),
                ),
            )
            await db.commit()
        return message.message_id

    async def update_message(
        self,
        message_id: str,
        content: str,
        metadata: UserMessageMetadata | AssistantMessageMetadata,
    ) -> None:
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute(
                "UPDATE messages SET content = ?, metadata = ? WHERE message_id = ?",
                (content, dump_metadata(metadata), message_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise NotFoundError(f"Message {message_id} not found")

    async def get_message(self, message_id: str) -> Message | None:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM messages WHERE message_id = ?", (message_id,)
            ) as cursor:
                row = await cursor.fetchone()
                if row is None:
                    return None
                return self._row_to_message(row)

    async def get_conversation(self, conversation_id: str) -> list[Message]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM messages WHERE conversation_id = ? ORDER BY created_at",
                (conversation_id,),
            ) as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_message(row) for row in rows]

    async def count_messages(self) -> int:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute("SELECT COUNT(*) FROM messages") as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    @staticmethod
    def _row_to_message(row: aiosqlite.Row) -> Message:
        return Message(
            message_id=row["message_id"],
            conversation_id=row["conversation_id"],
            role=row["role"],
            content=row["content"],
            model_name=row["model_name"],
            metadata=load_metadata(row["metadata"]),
            created_at=datetime.fromisoformat(row["created_at"]).replace(tzinfo=timezone.utc),
        )
