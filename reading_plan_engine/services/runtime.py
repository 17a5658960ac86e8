"""Runtime service container registry.

The FastAPI app registers the active :class:`ServiceContainer` at startup so
route dependencies can resolve services without importing adapter modules.
Tests may replace it with containers built around fake providers.
"""

from __future__ import annotations

from typing import Optional

from . import ServiceContainer

_registry: dict[str, Optional[ServiceContainer]] = {"services": None}


def set_services(container: ServiceContainer) -> None:
    """Register the active service container."""
    _registry["services"] = container


def get_services() -> ServiceContainer:
    """Return the registered service container or raise if missing."""
    container = _registry.get("services")
    if container is None:
        raise RuntimeError("Service container has not been configured.")
    return container


def clear_services() -> None:
    _registry["services"] = None


__all__ = ["set_services", "get_services", "clear_services"]
