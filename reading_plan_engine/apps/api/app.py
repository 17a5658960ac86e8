"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from reading_plan_engine.apps.api.middleware import CorrelationIdMiddleware
from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.services import ServiceContainer, runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register services at startup; flush cache writes and close clients on shutdown."""
    logger.info("Initializing reading plan engine...")
    services = getattr(app.state, "services", None)
    if isinstance(services, ServiceContainer):
        runtime.set_services(services)
        logger.info("providers: %s", ", ".join(services.bible.chain.names) or "none")
    try:
        yield
    finally:
        if isinstance(services, ServiceContainer):
            await services.aclose()
        logger.info("reading plan engine stopped.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(lifespan=lifespan)
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)

    # pylint: disable=import-outside-toplevel
    from .routes import admin_cache, health, passages, plan

    app.include_router(health.router)
    app.include_router(passages.router)
    app.include_router(plan.router)
    app.include_router(admin_cache.router)
    return app


__all__ = ["create_app", "lifespan"]
