"""
Name: Typed Anchoring Exceptions

Responsibilities:
  - Provide consistent internal errors with a stable error_code
  - Generate an error_id for correlation with logs
  - Carry a human-readable message (never secrets or document bodies)

Collaborators:
  - anchoring: raises OutOfRangeError, MatchAbortedError
  - anchoring.service: raises SelectionNotFoundError
  - exception_handlers.py: maps these to RFC 7807 responses

Notes:
  - NotFound from the window matcher is NOT an exception (returns None)
  - OutOfRangeError is also a ValueError so plain callers can catch it
"""

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """R: Minimal error payload for consistent responses."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class AnchoringError(Exception):
    """
    R: Base for internal errors of the anchoring engine.

    Attributes:
        message: Human-readable description
        error_id: UUID used to correlate the error with log lines
    """

    error_code: str = "ANCHORING_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """R: Payload placed in the problem response errors list."""
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class OutOfRangeError(AnchoringError, ValueError):
    """Invalid offset bounds (caller error, never retried)."""

    error_code: str = "OUT_OF_RANGE"


class SelectionNotFoundError(AnchoringError):
    """The selected substring does not occur in the logical text."""

    error_code: str = "SELECTION_NOT_FOUND"


class MatchAbortedError(AnchoringError):
    """The window scan was stopped before exhausting the document."""

    error_code: str = "MATCH_ABORTED"

    def __init__(self, message: str, *, scanned_positions: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.scanned_positions = scanned_positions


class MatchTimeoutError(MatchAbortedError):
    error_code: str = "MATCH_TIMEOUT"


class MatchCancelledError(MatchAbortedError):
    error_code: str = "MATCH_CANCELLED"
