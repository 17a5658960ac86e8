"""ASGI middleware binding a correlation id to every HTTP request."""

from __future__ import annotations

import time
import uuid

from reading_plan_engine.core.logging import (
    bind_correlation_id,
    bind_request_context,
    get_logger,
    reset_correlation_id,
    reset_request_context,
)
from reading_plan_engine.core.models import RequestContext

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware:  # pylint: disable=too-few-public-methods
    """Reuse the caller's request or correlation id (or mint one) and echo it back.

    Log records emitted while the request is handled, including those from
    provider adapters, carry the id through the logging context filter.
    """

    def __init__(self, app) -> None:  # type: ignore[no-untyped-def]
        self.app = app

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode("latin-1").lower(): v.decode("latin-1") for k, v in scope.get("headers", [])}
        correlation_id = (
            headers.get(REQUEST_ID_HEADER.lower())
            or headers.get(CORRELATION_ID_HEADER.lower())
            or uuid.uuid4().hex
        )
        context = RequestContext(
            correlation_id=correlation_id,
            path=scope.get("path", ""),
            method=scope.get("method", ""),
            user_agent=headers.get("user-agent"),
        )
        scope.setdefault("state", {})["request_context"] = context
        id_token = bind_correlation_id(correlation_id)
        context_token = bind_request_context(context)
        started = time.perf_counter()
        status_code = 500

        async def send_with_id(message):  # type: ignore[no-untyped-def]
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = int(message.get("status") or 500)
                outgoing = list(message.get("headers", []))
                present = {name.decode("latin-1").lower() for name, _ in outgoing}
                outgoing.extend(
                    (header.encode(), correlation_id.encode())
                    for header in (REQUEST_ID_HEADER, CORRELATION_ID_HEADER)
                    if header.lower() not in present
                )
                message["headers"] = outgoing
            await send(message)

        try:
            await self.app(scope, receive, send_with_id)
        finally:
            logger.info(
                "%s %s -> %s",
                context.method,
                context.path,
                status_code,
                extra={
                    "event": "http_request",
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                },
            )
            reset_request_context(context_token)
            reset_correlation_id(id_token)


__all__ = ["CORRELATION_ID_HEADER", "CorrelationIdMiddleware", "REQUEST_ID_HEADER"]
