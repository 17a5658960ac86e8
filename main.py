"""ASGI entrypoint exposing the default application as ``main:app``."""

from reading_plan_engine.api_factory import create_app

app = create_app()

__all__ = ["app"]
