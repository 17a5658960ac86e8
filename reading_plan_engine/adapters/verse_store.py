"""Persistent verse store adapter implementing the TinyDB-backed port.

One document per resolved chapter in the ``verses`` table, keyed by
``(book_code, chapter, version_code)``. TinyDB is blocking and not
thread-safe, so calls run in the default executor behind a lock.
"""

from __future__ import annotations

import asyncio
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, cast

from tinydb import Query, TinyDB

from reading_plan_engine.core.config import config
from reading_plan_engine.core.models import VerseCollection
from reading_plan_engine.core.ports import VerseStorePort

# Provide a QueryLike alias for static checkers; at runtime use Any.
if TYPE_CHECKING:  # pragma: no cover - typing only
    from tinydb.queries import QueryLike  # type: ignore
else:
    QueryLike = Any  # type: ignore[misc,assignment]

VERSES_TABLE = "verses"


def default_db_path() -> Path:
    """Return ``DATA_DIR/verses.json``, creating the directory if needed."""
    data_dir = Path(getattr(config, "DATA_DIR", Path("data")))
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "verses.json"


class TinyDBVerseStore(VerseStorePort):
    """Concrete adapter storing chapters in a TinyDB JSON file."""

    def __init__(self, db: Optional[TinyDB] = None) -> None:
        self._db = db if db is not None else TinyDB(str(default_db_path()))
        self._lock = threading.Lock()

    @staticmethod
    def _condition(book_code: str, chapter: int, version_code: str) -> QueryLike:
        q = Query()
        return cast(
            QueryLike,
            (q.book_code == book_code) & (q.chapter == chapter) & (q.version_code == version_code),
        )

    def _fetch_sync(
        self, book_code: str, chapter: int, version_code: str
    ) -> Optional[VerseCollection]:
        with self._lock:
            raw = self._db.table(VERSES_TABLE).get(
                self._condition(book_code, chapter, version_code)
            )
        row = cast(Optional[Dict[str, Any]], raw)
        if not row:
            return None
        verses = row.get("verses") or []
        return tuple(str(verse) for verse in verses)

    def _upsert_sync(
        self, book_code: str, chapter: int, version_code: str, verses: VerseCollection
    ) -> None:
        document = {
            "book_code": book_code,
            "chapter": chapter,
            "version_code": version_code,
            "verses": list(verses),
            "written_at": time.time(),
        }
        with self._lock:
            self._db.table(VERSES_TABLE).upsert(
                document, self._condition(book_code, chapter, version_code)
            )

    def _count_sync(self) -> int:
        with self._lock:
            return len(self._db.table(VERSES_TABLE))

    async def fetch_chapter(
        self, book_code: str, chapter: int, version_code: str
    ) -> Optional[VerseCollection]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self._fetch_sync, book_code, chapter, version_code
        )

    async def upsert_chapter(
        self, book_code: str, chapter: int, version_code: str, verses: VerseCollection
    ) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, self._upsert_sync, book_code, chapter, version_code, tuple(verses)
        )

    async def count(self) -> int:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._count_sync)

    def close(self) -> None:
        with self._lock:
            self._db.close()


__all__ = ["TinyDBVerseStore", "VERSES_TABLE", "default_db_path"]
