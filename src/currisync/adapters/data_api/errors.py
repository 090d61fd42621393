"""Errors raised by the data API adapter."""

from __future__ import annotations


class DataApiError(RuntimeError):
    """Raised when the data API answers with a payload the adapter cannot use."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
