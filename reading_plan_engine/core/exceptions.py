"""Core exception types shared across layers."""

from reading_plan_engine.core.models import FailureReason


class ProviderError(Exception):
    """Raised inside a provider adapter; converted to a failure at its boundary."""

    def __init__(self, reason: FailureReason, detail: str = "") -> None:
        super().__init__(detail or reason.value)
        self.reason = reason
        self.detail = detail


class PlanDayNotFoundError(LookupError):
    """Raised when a reading plan has no entry for the requested day."""


__all__ = ["PlanDayNotFoundError", "ProviderError"]
