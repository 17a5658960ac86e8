"""Canonical book tables shared by the passage parser and provider adapters.

Book codes follow the short Portuguese abbreviations used by the reading plan
(``gn``, ``sl``, ``1co`` ...). Two codes are shared by different books in that
scheme: ``ez`` (Ezequiel and Esdras) and ``jo`` (João and Jó). The canonical
book key resolves the collision using the display name, so cache keys and
provider lookups never mix the two books.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Dict, Optional, Tuple

# Display name (source locale) to book code, in canonical order.
BOOK_CODES: Dict[str, str] = {
    # Pentateuco
    "Gênesis": "gn",
    "Êxodo": "ex",
    "Levítico": "lv",
    "Números": "nm",
    "Deuteronômio": "dt",
    # Históricos
    "Josué": "js",
    "Juízes": "jz",
    "Rute": "rt",
    "1 Samuel": "1sm",
    "2 Samuel": "2sm",
    "1 Reis": "1rs",
    "2 Reis": "2rs",
    "1 Crônicas": "1cr",
    "2 Crônicas": "2cr",
    "Esdras": "ez",
    "Neemias": "ne",
    "Ester": "et",
    # Poéticos
    "Jó": "jo",
    "Salmos": "sl",
    "Provérbios": "pv",
    "Eclesiastes": "ec",
    "Cantares": "ct",
    # Profetas maiores
    "Isaías": "is",
    "Jeremias": "jr",
    "Lamentações": "lm",
    "Ezequiel": "ez",
    "Daniel": "dn",
    # Profetas menores
    "Oseias": "os",
    "Joel": "jl",
    "Amós": "am",
    "Obadias": "ob",
    "Jonas": "jn",
    "Miqueias": "mq",
    "Naum": "na",
    "Habacuque": "hc",
    "Sofonias": "sf",
    "Ageu": "ag",
    "Zacarias": "zc",
    "Malaquias": "ml",
    # Evangelhos e Atos
    "Mateus": "mt",
    "Marcos": "mc",
    "Lucas": "lc",
    "João": "jo",
    "Atos": "at",
    # Cartas
    "Romanos": "rm",
    "1 Coríntios": "1co",
    "2 Coríntios": "2co",
    "Gálatas": "gl",
    "Efésios": "ef",
    "Filipenses": "fp",
    "Colossenses": "cl",
    "1 Tessalonicenses": "1ts",
    "2 Tessalonicenses": "2ts",
    "1 Timóteo": "1ti",
    "2 Timóteo": "2ti",
    "Tito": "tt",
    "Filemom": "fm",
    "Hebreus": "hb",
    "Tiago": "tg",
    "1 Pedro": "1pe",
    "2 Pedro": "2pe",
    "1 João": "1jo",
    "2 João": "2jo",
    "3 João": "3jo",
    "Judas": "jd",
    "Apocalipse": "ap",
}

# Alternate spellings seen in plan data.
BOOK_NAME_ALIASES: Dict[str, str] = {
    "Salmo": "sl",
    "Cântico dos Cânticos": "ct",
    "Cânticos": "ct",
    "Cantares de Salomão": "ct",
    "Oséias": "os",
    "Miquéias": "mq",
    "Habacuc": "hc",
    "Filemon": "fm",
    "Atos dos Apóstolos": "at",
}

DEFAULT_BOOK_CODE = "gn"
DEFAULT_BOOK_NAME = "Gênesis"

# Codes shared by two books: code -> {folded display name of the second book: its key}.
# Without a display name the first book in BOOK_CODES order for the code wins.
AMBIGUOUS_BOOK_CODES: Dict[str, Dict[str, str]] = {
    "ez": {"esdras": "ed"},
    "jo": {"jo": "job"},
}

# Unique keys for all 66 books, in canonical order.
CANONICAL_BOOK_KEYS: Tuple[str, ...] = (
    "gn", "ex", "lv", "nm", "dt", "js", "jz", "rt", "1sm", "2sm",
    "1rs", "2rs", "1cr", "2cr", "ed", "ne", "et", "job", "sl", "pv",
    "ec", "ct", "is", "jr", "lm", "ez", "dn", "os", "jl", "am",
    "ob", "jn", "mq", "na", "hc", "sf", "ag", "zc", "ml",
    "mt", "mc", "lc", "jo", "at", "rm", "1co", "2co", "gl", "ef",
    "fp", "cl", "1ts", "2ts", "1ti", "2ti", "tt", "fm", "hb", "tg",
    "1pe", "2pe", "1jo", "2jo", "3jo", "jd", "ap",
)

# Chapters per canonical book key.
CHAPTER_COUNTS: Dict[str, int] = {
    "gn": 50, "ex": 40, "lv": 27, "nm": 36, "dt": 34, "js": 24, "jz": 21,
    "rt": 4, "1sm": 31, "2sm": 24, "1rs": 22, "2rs": 25, "1cr": 29, "2cr": 36,
    "ed": 10, "ne": 13, "et": 10, "job": 42, "sl": 150, "pv": 31, "ec": 12,
    "ct": 8, "is": 66, "jr": 52, "lm": 5, "ez": 48, "dn": 12, "os": 14,
    "jl": 3, "am": 9, "ob": 1, "jn": 4, "mq": 7, "na": 3, "hc": 3, "sf": 3,
    "ag": 2, "zc": 14, "ml": 4,
    "mt": 28, "mc": 16, "lc": 24, "jo": 21, "at": 28, "rm": 16, "1co": 16,
    "2co": 13, "gl": 6, "ef": 6, "fp": 4, "cl": 4, "1ts": 5, "2ts": 3,
    "1ti": 6, "2ti": 4, "tt": 3, "fm": 1, "hb": 13, "tg": 5, "1pe": 5,
    "2pe": 3, "1jo": 5, "2jo": 1, "3jo": 1, "jd": 1, "ap": 22,
}

# Upper bound for books without a known chapter count.
MAX_BOOK_CHAPTERS = max(CHAPTER_COUNTS.values())

_WHITESPACE = re.compile(r"\s+")


def fold_name(name: str) -> str:
    """Lower-case, strip accents and collapse whitespace for lookups."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", stripped).strip().lower()


_FOLDED_CODES: Dict[str, str] = {
    fold_name(name): code for name, code in {**BOOK_CODES, **BOOK_NAME_ALIASES}.items()
}


def lookup_book_code(book_name: str) -> Optional[str]:
    """Return the book code for a display name, or None when unmapped."""
    return _FOLDED_CODES.get(fold_name(book_name))


def canonical_book_key(book_code: str, book_name: Optional[str] = None) -> str:
    """Return the unique key for ``book_code``, disambiguated by ``book_name``."""
    code = book_code.strip().lower()
    alternates = AMBIGUOUS_BOOK_CODES.get(code)
    if alternates and book_name:
        return alternates.get(fold_name(book_name), code)
    return code


def is_known_book_key(key: str) -> bool:
    """Return True when ``key`` names one of the 66 canonical books."""
    return key in _KEY_SET


def chapter_count(key: str) -> int:
    """Number of chapters in the book, or the largest book's count when unknown."""
    return CHAPTER_COUNTS.get(key, MAX_BOOK_CHAPTERS)


def book_ordinal(key: str) -> Optional[int]:
    """Return the 1-based canonical position of a book key (Gênesis = 1)."""
    try:
        return CANONICAL_BOOK_KEYS.index(key) + 1
    except ValueError:
        return None


_KEY_SET = frozenset(CANONICAL_BOOK_KEYS)


__all__ = [
    "AMBIGUOUS_BOOK_CODES",
    "BOOK_CODES",
    "BOOK_NAME_ALIASES",
    "CANONICAL_BOOK_KEYS",
    "CHAPTER_COUNTS",
    "DEFAULT_BOOK_CODE",
    "DEFAULT_BOOK_NAME",
    "MAX_BOOK_CHAPTERS",
    "book_ordinal",
    "canonical_book_key",
    "chapter_count",
    "fold_name",
    "is_known_book_key",
    "lookup_book_code",
]
