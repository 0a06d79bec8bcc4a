"""
Name: FastAPI Exception Handlers

Responsibilities:
  - Convert anchoring exceptions into RFC 7807 responses
  - Log every handled error with its error_id

Collaborators:
  - main.py: Registers these handlers
  - exceptions.py: OutOfRangeError, SelectionNotFoundError, MatchAbortedError
  - error_responses.py: AppHTTPException, app_exception_handler

Constraints:
  - Caller errors (OutOfRange, SelectionNotFound) → 422
  - Aborted scans (timeout/cancel) → 503, the client may retry later
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from .error_responses import AppHTTPException, ErrorCode, app_exception_handler
from .exceptions import (
    AnchoringError,
    MatchAbortedError,
    OutOfRangeError,
    SelectionNotFoundError,
)
from .logger import logger


async def _as_problem(
    request: Request, exc: AnchoringError, status_code: int, code: ErrorCode
) -> JSONResponse:
    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=exc.message,
        errors=[exc.to_response().to_dict()],
    )
    return await app_exception_handler(request, app_exc)


async def out_of_range_handler(request: Request, exc: OutOfRangeError) -> JSONResponse:
    logger.info(
        "Out of range", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    return await _as_problem(request, exc, 422, ErrorCode.OUT_OF_RANGE)


async def selection_not_found_handler(
    request: Request, exc: SelectionNotFoundError
) -> JSONResponse:
    logger.info(
        "Selection not found",
        extra={"error_id": exc.error_id, "error_message": exc.message},
    )
    return await _as_problem(request, exc, 422, ErrorCode.SELECTION_NOT_FOUND)


async def match_aborted_handler(request: Request, exc: MatchAbortedError) -> JSONResponse:
    logger.warning(
        "Fingerprint scan aborted",
        extra={
            "error_id": exc.error_id,
            "error_message": exc.message,
            "scanned_positions": exc.scanned_positions,
        },
    )
    return await _as_problem(request, exc, 503, ErrorCode.MATCH_ABORTED)


async def anchoring_error_handler(request: Request, exc: AnchoringError) -> JSONResponse:
    """Handle any other anchoring error."""
    logger.error(
        "Anchoring error", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    return await _as_problem(request, exc, 500, ErrorCode.INTERNAL_ERROR)


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers on the FastAPI app.

    Usage:
        from .exception_handlers import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(OutOfRangeError, out_of_range_handler)
    app.add_exception_handler(SelectionNotFoundError, selection_not_found_handler)
    app.add_exception_handler(MatchAbortedError, match_aborted_handler)
    app.add_exception_handler(AnchoringError, anchoring_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
