"""Error taxonomy for the signal core.

Insufficient history is a policy, not an exception: indicators fall back to
neutral defaults and the aggregator returns a low-confidence signal.
``InsufficientDataError`` exists for callers that opt into strict mode.
"""

from __future__ import annotations

from typing import Any


class SignalCoreError(Exception):
    """Base class for all signal core errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class InvalidInputError(SignalCoreError, ValueError):
    """Caller-supplied input rejected at the boundary (bad periods, price, bars)."""


class InsufficientDataError(SignalCoreError):
    """Not enough bars for the requested computation (strict mode only)."""

    def __init__(self, message: str, available: int, required: int, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.available = available
        self.required = required
