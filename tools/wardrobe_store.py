"""Wardrobe storage abstractions with in-memory and SQLite implementations."""
from __future__ import annotations

import asyncio
import json
import sqlite3
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from models.taxonomy import Category, parse_enum
from models.wardrobe_item import WardrobeItem, from_raw_metadata


class WardrobeProvider:
    """Read interface the planner awaits for a wardrobe snapshot."""

    async def fetch_items(self) -> List[WardrobeItem]:
        raise NotImplementedError


class WardrobeStore(WardrobeProvider):
    """Persistence interface for wardrobe items."""

    def add_item(self, item: WardrobeItem) -> WardrobeItem:
        raise NotImplementedError

    def get_item(self, item_id: str) -> Optional[WardrobeItem]:
        raise NotImplementedError

    def list_items(self) -> List[WardrobeItem]:
        raise NotImplementedError

    def delete_item(self, item_id: str) -> bool:
        raise NotImplementedError

    def search_items(self, filters: Dict[str, object]) -> List[WardrobeItem]:
        """Filter by ``category``, ``color`` and ``style`` keys; unknown categories match nothing."""

        items = self.list_items()
        category = None
        if filters.get("category"):
            try:
                category = parse_enum(Category, filters["category"])
            except ValueError:
                return []
        color = str(filters.get("color") or "").strip().lower()
        style = str(filters.get("style") or "").strip().lower()

        def matches(item: WardrobeItem) -> bool:
            if category and item.category != category:
                return False
            if color and item.color != color:
                return False
            if style and item.style.value != style:
                return False
            return True

        return [item for item in items if matches(item)]

    def add_items(self, items: Iterable[WardrobeItem]) -> List[WardrobeItem]:
        return [self.add_item(item) for item in items]


class InMemoryWardrobeStore(WardrobeStore):
    """Dictionary-backed store preserving insertion order."""

    def __init__(self, items: Iterable[WardrobeItem] = ()) -> None:
        self._items: Dict[str, WardrobeItem] = {}
        self.add_items(items)

    def add_item(self, item: WardrobeItem) -> WardrobeItem:
        self._items[item.item_id] = item
        return item

    def get_item(self, item_id: str) -> Optional[WardrobeItem]:
        return self._items.get(item_id)

    def list_items(self) -> List[WardrobeItem]:
        return list(self._items.values())

    def delete_item(self, item_id: str) -> bool:
        return self._items.pop(item_id, None) is not None

    async def fetch_items(self) -> List[WardrobeItem]:
        return self.list_items()


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store for wardrobe items."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
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
                CREATE TABLE IF NOT EXISTS wardrobe_items (
                    item_id TEXT PRIMARY KEY,
                    category TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    record TEXT NOT NULL
                );
                """
            )

    def add_item(self, item: WardrobeItem) -> WardrobeItem:
        with self._connect() as conn:
            existing = conn.execute(
                "SELECT position FROM wardrobe_items WHERE item_id = ?", (item.item_id,)
            ).fetchone()
            if existing:
                position = existing["position"]
            else:
                position = conn.execute("SELECT COALESCE(MAX(position), -1) + 1 FROM wardrobe_items").fetchone()[0]
            conn.execute(
                """
                INSERT OR REPLACE INTO wardrobe_items (item_id, category, position, record)
                VALUES (?, ?, ?, ?)
                """,
                (item.item_id, item.category.value, position, json.dumps(item.to_record())),
            )
        return item

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> WardrobeItem:
        return from_raw_metadata(json.loads(row["record"]))

    def get_item(self, item_id: str) -> Optional[WardrobeItem]:
        with self._connect() as conn:
            row = conn.execute("SELECT record FROM wardrobe_items WHERE item_id = ?", (item_id,)).fetchone()
            return self._row_to_item(row) if row else None

    def list_items(self) -> List[WardrobeItem]:
        with self._connect() as conn:
            cursor = conn.execute("SELECT record FROM wardrobe_items ORDER BY position")
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def delete_item(self, item_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM wardrobe_items WHERE item_id = ?", (item_id,))
            return cursor.rowcount > 0

    async def fetch_items(self) -> List[WardrobeItem]:
        return await asyncio.to_thread(self.list_items)


__all__ = ["InMemoryWardrobeStore", "SQLiteWardrobeStore", "WardrobeProvider", "WardrobeStore"]
