# SPDX-License-Identifier: MIT
"""Error handling abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod

import logfire


class ErrorHandler(ABC):
    """Interface for reporting errors.

    Implementations should avoid raising further exceptions and should emit
    concise diagnostics suitable for production logs.
    """

    @abstractmethod
    def handle(self, message: str, exc: Exception | None = None) -> None:
        """Record ``message`` with optional ``exc`` context."""


class LoggingErrorHandler(ErrorHandler):
    """Error handler that logs via ``logfire``."""

    def handle(self, message: str, exc: Exception | None = None) -> None:
        """Log an error message with optional exception context.

        Args:
            message: Description of the error to record.
            exc: Exception instance providing additional context.
        """
        if exc:
            logfire.error(
                "{context}: {error}",
                context=message,
                error=str(exc),
                error_type=type(exc).__name__,
            )
        else:
            logfire.error("{context}", context=message)


__all__ = ["ErrorHandler", "LoggingErrorHandler"]
