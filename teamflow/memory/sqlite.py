"""SQLite-backed conversation memory."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path
import sqlite3
from threading import Lock

from ..models.base import ChatMessage
from .base import BaseMemory


_SCHEMA = """
CREATE TABLE IF NOT EXISTS memory (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    role TEXT NOT NULL,
    content TEXT NOT NULL,
    timestamp TEXT NOT NULL
)
"""


class SqliteMemory(BaseMemory):
    """Persistent memory stored in a single SQLite table.

    Every operation opens its own connection in a worker thread; a lock keeps
    writers to one file strictly sequential within the process.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.path))

    def _init_db(self) -> None:
        conn = self._connect()
        try:
            conn.execute(_SCHEMA)
            conn.commit()
        finally:
            conn.close()

    def _store_sync(self, role: str, content: str) -> None:
        timestamp = datetime.now(tz=timezone.utc).isoformat()
        with self._lock:
            conn = self._connect()
            try:
                conn.execute(
                    "INSERT INTO memory (role, content, timestamp) VALUES (?, ?, ?)",
                    (role, content, timestamp),
                )
                conn.commit()
            finally:
                conn.close()

    def _load_sync(self) -> list[ChatMessage]:
        with self._lock:
            conn = self._connect()
            try:
                rows = conn.execute("SELECT role, content FROM memory ORDER BY id ASC").fetchall()
            finally:
                conn.close()
        return [ChatMessage(role=row[0], content=row[1]) for row in rows]

    def _recall_sync(self, key: str) -> str | None:
        with self._lock:
            conn = self._connect()
            try:
                row = conn.execute(
                    "SELECT content FROM memory WHERE instr(content, ?) > 0 ORDER BY id DESC LIMIT 1",
                    (key,),
                ).fetchone()
            finally:
                conn.close()
        return row[0] if row else None

    def _clear_sync(self) -> None:
        with self._lock:
            conn = self._connect()
            try:
                conn.execute("DELETE FROM memory")
                conn.commit()
            finally:
                conn.close()

    async def store(self, role: str, content: str) -> None:
        await asyncio.to_thread(self._store_sync, role, content)

    async def load(self) -> list[ChatMessage]:
        return await asyncio.to_thread(self._load_sync)

    async def recall(self, key: str) -> str | None:
        return await asyncio.to_thread(self._recall_sync, key)

    async def clear(self) -> None:
        await asyncio.to_thread(self._clear_sync)
