"""Fire-and-forget task dispatch with a logging error channel.

Tasks are scheduled on the running event loop with ``asyncio.create_task``;
references are retained until each task finishes so they are not collected
mid-flight. Failures never reach the code that scheduled the work.
"""

from __future__ import annotations

import asyncio
from typing import Any, Coroutine, Set

from reading_plan_engine.core.logging import get_logger

logger = get_logger(__name__)


class BackgroundTaskRunner:
    """Dispatch coroutines without awaiting them and log their failures."""

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task[Any]] = set()
        self.failures = 0

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
        """Schedule ``coro`` and return its task; the caller need not await it."""
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.info("[background] task %s cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            self.failures += 1
            logger.warning(
                "[background] task %s failed: %s",
                task.get_name(),
                exc,
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def drain(self) -> None:
        """Wait for every outstanding task (shutdown and tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


__all__ = ["BackgroundTaskRunner"]
