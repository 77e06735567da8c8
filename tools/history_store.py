"""Outfit history persistence used for repetition avoidance."""
from __future__ import annotations

import asyncio
import json
import sqlite3
from pathlib import Path
from typing import Iterable, List, Optional

from models.outfit import PlannedOutfit


class HistoryProvider:
    """Interface for previously planned outfits."""

    async def recent_outfits(self, limit: Optional[int] = None) -> List[PlannedOutfit]:
        raise NotImplementedError

    async def record(self, outfit: PlannedOutfit) -> None:
        raise NotImplementedError


class InMemoryHistoryStore(HistoryProvider):
    """Keeps planned outfits in recording order."""

    def __init__(self, outfits: Iterable[PlannedOutfit] = ()) -> None:
        self._outfits: List[PlannedOutfit] = list(outfits)

    async def recent_outfits(self, limit: Optional[int] = None) -> List[PlannedOutfit]:
        if limit is None:
            return list(self._outfits)
        return self._outfits[-limit:] if limit > 0 else []

    async def record(self, outfit: PlannedOutfit) -> None:
        self._outfits.append(outfit)


class SQLiteHistoryStore(HistoryProvider):
    """SQLite-backed history storing each outfit as a JSON record."""

    def __init__(self, database_path: str | Path = "data/history.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS outfit_history (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    outfit_id TEXT NOT NULL UNIQUE,
                    event_id TEXT NOT NULL,
                    event_date TEXT,
                    record TEXT NOT NULL
                );
                """
            )

    def list_outfits(self, limit: Optional[int] = None) -> List[PlannedOutfit]:
        with self._connect() as conn:
            if limit is None:
                rows = conn.execute("SELECT record FROM outfit_history ORDER BY seq").fetchall()
            else:
                rows = conn.execute(
                    "SELECT record FROM (SELECT seq, record FROM outfit_history ORDER BY seq DESC LIMIT ?) ORDER BY seq",
                    (max(limit, 0),),
                ).fetchall()
        return [PlannedOutfit.from_record(json.loads(row["record"])) for row in rows]

    def save_outfit(self, outfit: PlannedOutfit) -> None:
        record = outfit.to_record()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO outfit_history (outfit_id, event_id, event_date, record)
                VALUES (?, ?, ?, ?)
                """,
                (outfit.outfit_id, outfit.event_id, record["event_date"], json.dumps(record)),
            )

    async def recent_outfits(self, limit: Optional[int] = None) -> List[PlannedOutfit]:
        return await asyncio.to_thread(self.list_outfits, limit)

    async def record(self, outfit: PlannedOutfit) -> None:
        await asyncio.to_thread(self.save_outfit, outfit)


__all__ = ["HistoryProvider", "InMemoryHistoryStore", "SQLiteHistoryStore"]
