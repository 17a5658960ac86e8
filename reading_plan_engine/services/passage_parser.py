"""Parse free-text reading-plan passages into a book code and chapter range.

Passages look like ``"Gênesis 1 - 3"``, ``"Salmos 23"`` or
``"Mateus 5-7 / Salmos 1"``; only the first ``/``-separated segment is used.
Parsing never fails: text without a ``<name> <number>`` shape yields the
default reference (Gênesis 1).
"""

from __future__ import annotations

import re

from reading_plan_engine.core.books import DEFAULT_BOOK_CODE, DEFAULT_BOOK_NAME, lookup_book_code
from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.core.models import PassageReference

logger = get_logger(__name__)

_PASSAGE_PATTERN = re.compile(r"^\s*(.+?)\s+(\d+)(?:\s*[-–]\s*(\d+))?")

DEFAULT_PASSAGE = PassageReference(
    book_name=DEFAULT_BOOK_NAME,
    book_code=DEFAULT_BOOK_CODE,
    start_chapter=1,
    end_chapter=1,
)


def fallback_book_code(book_name: str) -> str:
    """Crude code for unmapped names: first two characters, lower-cased."""
    return book_name.strip()[:2].lower()


def parse_passage(raw_passage: str) -> PassageReference:
    """Return the book and chapter range named by ``raw_passage``."""
    first_segment = (raw_passage or "").split("/", 1)[0]
    match = _PASSAGE_PATTERN.match(first_segment)
    if not match:
        logger.debug("[parser] no passage shape in %r; using default", raw_passage)
        return DEFAULT_PASSAGE

    book_name = match.group(1).strip()
    first = int(match.group(2))
    second = int(match.group(3)) if match.group(3) else first
    start_chapter = max(1, min(first, second))
    end_chapter = max(1, first, second)

    book_code = lookup_book_code(book_name)
    known_book = book_code is not None
    if book_code is None:
        book_code = fallback_book_code(book_name)
        logger.warning(
            "[parser] unmapped book name %r; falling back to code %r", book_name, book_code
        )

    return PassageReference(
        book_name=book_name,
        book_code=book_code,
        start_chapter=start_chapter,
        end_chapter=end_chapter,
        known_book=known_book,
    )


__all__ = ["DEFAULT_PASSAGE", "fallback_book_code", "parse_passage"]
