"""Domain exceptions raised by the monitoring engine."""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised at construction time when a parameter is out of range.

    Values are never clamped silently.
    """


class InvalidSample(ValueError):
    """Raised by the classifier when a sample has a non-finite component."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid sample: {reason}")


class SourceExhausted(Exception):
    """Raised by a finite sample source once it has nothing left to give."""


class SourceUnavailable(RuntimeError):
    """Raised when the sample source keeps failing and monitoring must end."""

    def __init__(self, consecutive_failures: int, last_error: BaseException | None = None) -> None:
        self.consecutive_failures = consecutive_failures
        self.last_error = last_error
        detail = f": {last_error}" if last_error is not None else ""
        super().__init__(
            f"Sample source unavailable after {consecutive_failures} consecutive failures{detail}"
        )
