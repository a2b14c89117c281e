"""Idempotent database schema creation."""

from __future__ import annotations

import aiosqlite

MESSAGES_TABLE = """
CREATE TABLE IF NOT EXISTS messages (
    message_id TEXT PRIMARY KEY,
    conversation_id TEXT,
    role TEXT NOT NULL,
    content TEXT NOT NULL,
    model_name TEXT NOT NULL DEFAULT '',
    metadata TEXT NOT NULL,
    created_at TEXT NOT NULL
)
"""

MESSAGES_CONVERSATION_INDEX = """
CREATE INDEX IF NOT EXISTS idx_messages_conversation_id ON messages(conversation_id)
"""

CITATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS citations (
    citation_id TEXT PRIMARY KEY,
    message_id TEXT,
    source_title TEXT,
    source_url TEXT,
    citation_text TEXT NOT NULL,
    created_at TEXT NOT NULL,
    FOREIGN KEY (message_id) REFERENCES messages(message_id)
)
"""

CITATIONS_MESSAGE_INDEX = """
CREATE INDEX IF NOT EXISTS idx_citations_message_id ON citations(message_id)
"""

BOOKMARKS_TABLE = """
CREATE TABLE IF NOT EXISTS bookmarks (
    bookmark_id TEXT PRIMARY KEY,
    message_id TEXT,
    note TEXT NOT NULL,
    created_at TEXT NOT NULL,
    FOREIGN KEY (message_id) REFERENCES messages(message_id)
)
"""


async def initialize_db(db_path: str) -> None:
    async with aiosqlite.connect(db_path) as db:
        await db.execute(MESSAGES_TABLE)
        await db.execute(MESSAGES_CONVERSATION_INDEX)
        await db.execute(CITATIONS_TABLE)
        await db.execute(CITATIONS_MESSAGE_INDEX)
        await db.execute(BOOKMARKS_TABLE)
        await db.commit()
