"""Reading plan routes."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, status

from reading_plan_engine.core.exceptions import PlanDayNotFoundError
from reading_plan_engine.services.reading_plan import ReadingPlanService

from ..dependencies import get_reading_plan

router = APIRouter(prefix="/plan", tags=["plan"])


async def _plan_day_payload(
    plan: ReadingPlanService, day: int, version: Optional[str], include_text: bool
) -> dict[str, object]:
    if not include_text:
        entry = plan.get_plan_for_day(day)
        if entry is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"No plan entry for day {day}")
        return {**entry.to_dict(), "total_days": plan.get_total_days()}
    try:
        resolved = await plan.resolve_day(day, version)
    except PlanDayNotFoundError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return {**resolved.to_dict(), "total_days": plan.get_total_days()}


@router.get("/today")
async def get_today(
    plan: Annotated[ReadingPlanService, Depends(get_reading_plan)],
    version: Optional[str] = None,
    include_text: bool = True,
) -> dict[str, object]:
    return await _plan_day_payload(plan, plan.get_current_day(), version, include_text)


@router.get("/{day}")
async def get_day(
    day: Annotated[int, Path(ge=1)],
    plan: Annotated[ReadingPlanService, Depends(get_reading_plan)],
    version: Optional[str] = None,
    include_text: bool = True,
) -> dict[str, object]:
    """Plan entry for ``day``; with ``include_text`` the passage is resolved too."""
    return await _plan_day_payload(plan, day, version, include_text)


__all__ = ["router"]
