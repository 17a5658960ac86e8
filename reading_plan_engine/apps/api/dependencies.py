"""Shared FastAPI dependencies for token validation and service access."""

import hmac
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status

from reading_plan_engine.core.config import config
from reading_plan_engine.services import ServiceContainer, runtime
from reading_plan_engine.services.bible_service import BibleService
from reading_plan_engine.services.reading_plan import ReadingPlanService


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _check_token(expected: Optional[str], authorization: Optional[str], x_admin_token: Optional[str]) -> None:
    """Accept ``Authorization: Bearer <token>`` or ``X-Admin-Token``."""
    if not expected:
        raise _unauthorized("Token not configured")
    provided = None
    if authorization and authorization.lower().startswith("bearer "):
        provided = authorization.split(" ", 1)[1].strip()
    elif x_admin_token:
        provided = x_admin_token.strip()
    if not provided:
        raise _unauthorized("Missing credentials")
    if not hmac.compare_digest(provided, expected):
        raise _unauthorized("Invalid credentials")


async def require_admin_token(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    x_admin_token: Annotated[Optional[str], Header(alias="X-Admin-Token")] = None,
) -> None:
    """Guard for cache administration endpoints."""
    if config.ENABLE_ADMIN_AUTH:
        _check_token(config.ADMIN_API_TOKEN, authorization, x_admin_token)


async def require_healthcheck_token(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    x_admin_token: Annotated[Optional[str], Header(alias="X-Admin-Token")] = None,
) -> None:
    if config.ENABLE_ADMIN_AUTH:
        _check_token(config.HEALTHCHECK_API_TOKEN, authorization, x_admin_token)


def get_service_container() -> ServiceContainer:
    """Resolve the globally configured service container."""
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


def get_bible_service(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> BibleService:
    return container.bible


def get_reading_plan(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> ReadingPlanService:
    if container.reading_plan is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reading plan is not loaded",
        )
    return container.reading_plan


__all__ = [
    "get_bible_service",
    "get_reading_plan",
    "get_service_container",
    "require_admin_token",
    "require_healthcheck_token",
]
