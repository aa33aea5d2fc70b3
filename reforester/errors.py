"""Exception taxonomy for the estimation engine.

Only :class:`InputValidationError` and :class:`FallbackDisabledError` ever
reach a caller. Source and advisory failures are absorbed into fallbacks.
"""

from __future__ import annotations

from typing import Literal

FailureReason = Literal["timeout", "http_status", "network", "bad_payload"]


class ReforesterError(Exception):
    """Base exception for ReForester"""
    pass


class InputValidationError(ReforesterError, ValueError):
    """Malformed coordinate, soil or weather input (a caller bug)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class SourceFailure(ReforesterError):
    """An external data source failed, timed out or returned unusable data."""

    def __init__(self, source: str, reason: FailureReason, message: str) -> None:
        super().__init__(f"{source} {reason}: {message}")
        self.source = source
        self.reason = reason


class AdvisoryError(ReforesterError):
    """The advisory (LLM) call failed or returned an empty answer."""

    def __init__(self, message: str, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


class FallbackDisabledError(ReforesterError):
    """Advisory call failed while the mock fallback is switched off.

    Distinct from validation errors: the request was well formed and may be
    retried by the caller.
    """

    retryable = True

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
