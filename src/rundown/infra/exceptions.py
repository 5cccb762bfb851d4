"""
Custom exceptions for rundown operations.

This module provides custom exception classes for the errors that can occur
while loading rundown snapshots and computing timestamps.
"""


class RundownError(Exception):
    """Base exception for all rundown errors."""

    pass


class ValidationError(RundownError):
    """Raised when snapshot data can not be turned into domain objects."""

    pass


class TimestampsError(RundownError, ValueError):
    """Raised when a timestamp computation precondition is violated."""

    def __init__(self, message: str, cue_id: str | None = None):
        """
        Initialize a timestamps error.

        Args:
            message: Human-readable error message
            cue_id: Id of the cue the violation relates to, if any
        """
        super().__init__(message)
        self.message = message
        self.cue_id = cue_id

    def __str__(self) -> str:
        if self.cue_id is not None:
            return f"{self.message} (cue_id={self.cue_id})"
        return self.message
