"""Daily reading plan: which passage belongs to which day of the year."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from reading_plan_engine.core.exceptions import PlanDayNotFoundError
from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.core.models import PassageReference, VerseCollection

from .bible_service import BibleService
from .versions import normalize_version

logger = get_logger(__name__)

DEFAULT_PLAN_PATH = Path(__file__).resolve().parent.parent / "data" / "reading_plan.json"


@dataclass(frozen=True, slots=True)
class ReadingPlanDay:
    """One entry of the plan as stored on disk."""

    day: int
    passage: str
    theme: str = ""
    category: str = ""
    book: str = ""
    estimated_time: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ReadingPlanDay":
        return cls(
            day=int(raw["day"]),
            passage=str(raw["passage"]),
            theme=str(raw.get("theme", "")),
            category=str(raw.get("category", "")),
            book=str(raw.get("book", "")),
            estimated_time=str(raw.get("estimatedTime", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "passage": self.passage,
            "theme": self.theme,
            "category": self.category,
            "book": self.book,
            "estimatedTime": self.estimated_time,
        }


@dataclass(frozen=True, slots=True)
class ResolvedPlanDay:
    """A plan day together with its parsed reference and verse text."""

    plan_day: ReadingPlanDay
    reference: PassageReference
    version: str
    verses: VerseCollection

    @property
    def available(self) -> bool:
        return bool(self.verses)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.plan_day.to_dict(),
            "reference": self.reference.to_dict(),
            "version": self.version,
            "verses": list(self.verses),
            "available": self.available,
        }


def load_plan(path: Path) -> List[ReadingPlanDay]:
    """Read plan days from a JSON array file."""
    with path.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)
    if not isinstance(raw, list):
        raise ValueError(f"Reading plan at {path} must be a JSON array")
    return [ReadingPlanDay.from_dict(entry) for entry in raw]


class ReadingPlanService:
    """Look up plan days and resolve their passages."""

    def __init__(
        self,
        days: Iterable[ReadingPlanDay],
        *,
        total_days: int = 365,
        bible: Optional[BibleService] = None,
    ) -> None:
        self._days: Dict[int, ReadingPlanDay] = {entry.day: entry for entry in days}
        self._total_days = total_days
        self._bible = bible

    @classmethod
    def from_file(
        cls,
        path: Optional[Path] = None,
        *,
        total_days: int = 365,
        bible: Optional[BibleService] = None,
    ) -> "ReadingPlanService":
        plan_path = path or DEFAULT_PLAN_PATH
        days = load_plan(plan_path)
        logger.info("[plan] loaded %d plan days from %s", len(days), plan_path)
        return cls(days, total_days=total_days, bible=bible)

    def attach_bible(self, bible: BibleService) -> None:
        self._bible = bible

    def get_plan_for_day(self, day: int) -> Optional[ReadingPlanDay]:
        return self._days.get(day)

    def get_current_day(self, today: Optional[date] = None) -> int:
        """Day of the year for ``today``, kept within ``1..total_days``."""
        current = today or date.today()
        return min(max(current.timetuple().tm_yday, 1), self._total_days)

    def get_total_days(self) -> int:
        return self._total_days

    async def resolve_day(self, day: int, version: Optional[str] = None) -> ResolvedPlanDay:
        plan_day = self.get_plan_for_day(day)
        if plan_day is None:
            raise PlanDayNotFoundError(f"No reading plan entry for day {day}")
        if self._bible is None:
            raise RuntimeError("Reading plan has no Bible service configured.")
        reference = self._bible.parse_passage(plan_day.passage)
        verses = await self._bible.resolve_passage(plan_day.passage, version)
        return ResolvedPlanDay(
            plan_day=plan_day,
            reference=reference,
            version=normalize_version(version),
            verses=verses,
        )


__all__ = [
    "DEFAULT_PLAN_PATH",
    "ReadingPlanDay",
    "ReadingPlanService",
    "ResolvedPlanDay",
    "load_plan",
]
