"""Health and readiness routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import require_healthcheck_token

router = APIRouter()


@router.get("/")
def read_root() -> dict[str, str]:
    return {"message": "Reading plan engine. Refer to /docs for available endpoints."}


@router.get("/alive")
async def alive_check(_: None = Depends(require_healthcheck_token)) -> JSONResponse:
    """Authenticated health check endpoint for infrastructure monitoring."""
    return JSONResponse({"status": "ok", "message": "Reading plan engine is alive."})


__all__ = ["router"]
