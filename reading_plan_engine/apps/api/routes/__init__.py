"""Router namespace exports for FastAPI include hooks."""

from . import admin_cache, health, passages, plan

__all__ = ["admin_cache", "health", "passages", "plan"]
