"""Turn provider response bodies into ordered, cleaned verse texts.

Two strategies exist and each provider declares which one its responses need
(see :class:`~reading_plan_engine.core.models.ResponseShape`):

* ``STRUCTURED`` walks a parsed JSON document. Verse numbers are read from
  conventional fields (``verse``, ``number``, ...) or from ``attrs`` on
  USX-like nodes (``verseId``, ``sid``, ``number`` on verse tags). A marker
  stays in effect until the next one, so both record lists and milestone
  trees work. Numeric-only fragments are verse labels, not content.
* ``PLAIN_TEXT`` scans a text blob for 1-3 digit markers at line start or
  after whitespace; each marker opens a verse that runs to the next marker.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence

from reading_plan_engine.core.models import ResponseShape, VerseCollection

VERSE_NUMBER_FIELDS = ("verse", "number", "verseNumber", "verse_number", "verse_nr")
VERSE_ID_ATTRIBUTES = ("verseId", "sid")
# Keys whose values are walked for text; everything else is metadata.
CONTENT_FIELDS = ("text", "content", "items", "verses", "children", "data")

# Collections at least this long must also pass the numeric-ratio guard.
MIN_RATIO_SAMPLE = 3
MAX_NUMERIC_RATIO = 0.3

_TAG = re.compile(r"<[^>]+>")
_ENTITIES = (
    ("&nbsp;", " "),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)
_REFERENCE_ARTIFACT = re.compile(r"\b\d?[A-Za-z]{2,4}\.\d+\.\d+\b")
_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([,.;:!?])")
_LEADING_NUMBER = re.compile(r"^\s*(\d{1,3})")
_TRAILING_NUMBER = re.compile(r"(\d{1,3})\s*$")
_PLAIN_MARKER = re.compile(r"(?:^|(?<=\s))\[?(\d{1,3})\]?\s+", re.MULTILINE)


def clean_text(text: str) -> str:
    """Strip markup, entities and reference codes; normalize spacing."""
    text = _TAG.sub(" ", text)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    text = _REFERENCE_ARTIFACT.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)


def _is_numeric(text: str) -> bool:
    return text.strip().isdigit()


def is_plausible(verses: Sequence[str]) -> bool:
    """Reject empty results and verse-number noise posing as verse text."""
    if not verses:
        return False
    if not any(any(ch.isalpha() for ch in verse) for verse in verses):
        return False
    if len(verses) < MIN_RATIO_SAMPLE:
        return True
    numeric = sum(1 for verse in verses if _is_numeric(verse))
    return numeric / len(verses) < MAX_NUMERIC_RATIO


def _as_verse_number(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match and int(match.group(1)) > 0:
            return int(match.group(1))
    return None


def _verse_from_id(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value > 0 else None
    if isinstance(value, str):
        match = _TRAILING_NUMBER.search(value)
        if match and int(match.group(1)) > 0:
            return int(match.group(1))
    return None


def _verse_marker(node: Dict[str, Any]) -> Optional[int]:
    for field in VERSE_NUMBER_FIELDS:
        number = _as_verse_number(node.get(field))
        if number is not None:
            return number
    attrs = node.get("attrs")
    if not isinstance(attrs, dict):
        return None
    if node.get("name") == "verse" or attrs.get("style") == "v":
        number = _as_verse_number(attrs.get("number"))
        if number is not None:
            return number
    for field in VERSE_ID_ATTRIBUTES:
        number = _verse_from_id(attrs.get(field))
        if number is not None:
            return number
    return None


class _VerseAccumulator:
    """Collects text fragments under the verse marker currently in effect."""

    def __init__(self) -> None:
        self.current: Optional[int] = None
        self.parts: Dict[int, List[str]] = {}

    def walk(self, node: Any) -> None:
        if isinstance(node, str):
            self.add(node)
        elif isinstance(node, list):
            for item in node:
                self.walk(item)
        elif isinstance(node, dict):
            marker = _verse_marker(node)
            if marker is not None:
                self.current = marker
            for field in CONTENT_FIELDS:
                value = node.get(field)
                if value is not None:
                    self.walk(value)

    def add(self, fragment: str) -> None:
        if self.current is None or not fragment.strip() or _is_numeric(fragment):
            return
        self.parts.setdefault(self.current, []).append(fragment)

    def verses(self) -> VerseCollection:
        ordered = []
        for number in sorted(self.parts):
            text = clean_text(" ".join(self.parts[number]))
            if text:
                ordered.append(text)
        return tuple(ordered)


def extract_structured(document: Any) -> VerseCollection:
    """Extract verses from a parsed JSON document, ordered by verse number."""
    accumulator = _VerseAccumulator()
    accumulator.walk(document)
    return accumulator.verses()


def extract_plain_text(blob: Any) -> VerseCollection:
    """Extract verses from text with inline verse-number markers."""
    if not isinstance(blob, str):
        return ()
    text = _TAG.sub(" ", blob)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    text = _REFERENCE_ARTIFACT.sub(" ", text)

    markers = list(_PLAIN_MARKER.finditer(text))
    verses = []
    for index, marker in enumerate(markers):
        end = markers[index + 1].start() if index + 1 < len(markers) else len(text)
        cleaned = clean_text(text[marker.end():end])
        if cleaned:
            verses.append(cleaned)
    return tuple(verses)


def extract_verses(body: Any, shape: ResponseShape) -> VerseCollection:
    """Dispatch to the extraction strategy a provider declared."""
    if shape is ResponseShape.PLAIN_TEXT:
        return extract_plain_text(body)
    return extract_structured(body)


__all__ = [
    "MAX_NUMERIC_RATIO",
    "MIN_RATIO_SAMPLE",
    "clean_text",
    "extract_plain_text",
    "extract_structured",
    "extract_verses",
    "is_plausible",
]
