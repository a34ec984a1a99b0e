"""
Exceptions raised by ecmcheck.

All custom exceptions inherit from EcmCheckError so callers can catch every
analysis-specific failure with a single except clause.
"""

from __future__ import annotations

from typing import Optional


class EcmCheckError(Exception):
    """Base exception for all ecmcheck errors."""


class MissingInputCollection(EcmCheckError):
    """Raised when the configured particle collection is absent from an event."""

    def __init__(self, collection: str, event_number: Optional[int] = None):
        self.collection = collection
        self.event_number = event_number
        msg = f"Collection '{collection}' not found"
        if event_number is not None:
            msg += f" in event {event_number}"
        super().__init__(msg)


class CapacityExceeded(EcmCheckError):
    """Raised when a cut-table ordinal falls outside the table capacity."""

    def __init__(self, ordinal: int, capacity: int):
        self.ordinal = ordinal
        self.capacity = capacity
        super().__init__(f"Cut ordinal {ordinal} outside cut table capacity [0, {capacity})")


class UnknownStage(EcmCheckError):
    """Raised when a pass is recorded on a cut ordinal that was never declared."""

    def __init__(self, ordinal: int):
        self.ordinal = ordinal
        super().__init__(f"Cut ordinal {ordinal} has not been declared")


class OutputWriteFailure(EcmCheckError):
    """Raised when the output destination cannot be opened, written or closed."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        msg = f"Cannot write output '{path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
