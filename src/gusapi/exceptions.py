"""Exceptions raised by the GUS client."""

from __future__ import annotations


class GusApiError(RuntimeError):
    """Base class for all errors reported by ``gusapi``."""


class InvalidUserKeyError(GusApiError):
    """Raised when no user key is configured or the service rejects it."""

    def __init__(self, message: str, *, user_key: str | None = None) -> None:
        super().__init__(message)
        self.user_key = user_key


class InvalidReportTypeError(GusApiError, ValueError):
    """Raised for a report name outside the known list."""

    def __init__(self, report_type: str, allowed: frozenset[str]) -> None:
        super().__init__(
            f"Invalid report type: '{report_type}', use one of: {', '.join(sorted(allowed))}"
        )
        self.report_type = report_type


class InvalidServerResponseError(GusApiError):
    """Raised when a service payload cannot be interpreted."""


class InvalidSessionError(GusApiError):
    """Raised when an operation needs a session that does not exist."""


class NotFoundError(GusApiError):
    """Raised when the service finds no matching entities."""

    def __init__(self, message: str, *, message_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.message_code = message_code


class TransportError(GusApiError):
    """Raised for SOAP faults and HTTP failures of the transport."""


__all__ = [
    "GusApiError",
    "InvalidReportTypeError",
    "InvalidServerResponseError",
    "InvalidSessionError",
    "InvalidUserKeyError",
    "NotFoundError",
    "TransportError",
]
