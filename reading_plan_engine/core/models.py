"""Core data transfer objects shared across layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple

# Ordered verse texts, index 0 = verse 1.
VerseCollection = Tuple[str, ...]


@dataclass(slots=True)
class RequestContext:
    """Metadata describing an inbound API request."""

    correlation_id: str
    path: str
    method: str
    user_agent: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PassageReference:
    """A parsed passage: book and an inclusive chapter range."""

    book_name: str
    book_code: str
    start_chapter: int
    end_chapter: int
    known_book: bool = True

    @property
    def chapters(self) -> range:
        return range(self.start_chapter, self.end_chapter + 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "book_name": self.book_name,
            "book_code": self.book_code,
            "start_chapter": self.start_chapter,
            "end_chapter": self.end_chapter,
            "known_book": self.known_book,
        }


class ResponseShape(str, Enum):
    """How a provider's response body is laid out."""

    STRUCTURED = "structured"
    PLAIN_TEXT = "plain_text"


class FailureReason(str, Enum):
    """Why a provider produced no usable verses."""

    TRANSPORT = "transport"
    STATUS = "status"
    PARSE = "parse"
    TIMEOUT = "timeout"
    EMPTY = "empty"
    IMPLAUSIBLE = "implausible"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class ProviderFailure:
    """A provider attempt that yielded nothing usable."""

    provider: str
    reason: FailureReason
    detail: str = ""


@dataclass(frozen=True, slots=True)
class ProviderResult:
    """Either the verses a provider returned or the reason it failed."""

    provider: str
    verses: VerseCollection = ()
    failure: Optional[ProviderFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None and bool(self.verses)

    @classmethod
    def success(cls, provider: str, verses: VerseCollection) -> "ProviderResult":
        return cls(provider=provider, verses=tuple(verses))

    @classmethod
    def failed(cls, provider: str, reason: FailureReason, detail: str = "") -> "ProviderResult":
        return cls(provider=provider, failure=ProviderFailure(provider, reason, detail))


@dataclass(frozen=True, slots=True)
class ChainOutcome:
    """Result of walking the provider chain for one chapter."""

    verses: VerseCollection = ()
    provider: Optional[str] = None
    failures: Tuple[ProviderFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return bool(self.verses)


__all__ = [
    "ChainOutcome",
    "FailureReason",
    "PassageReference",
    "ProviderFailure",
    "ProviderResult",
    "RequestContext",
    "ResponseShape",
    "VerseCollection",
]
