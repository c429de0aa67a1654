"""
Shared response helpers for routers.

Failed use case results are rendered as ``{"success": false, "error": ...}``
with the HTTP status mapped from their ErrorCode.
"""

import logging
from typing import Optional

from fastapi.responses import JSONResponse

from application.ports.session_repository import ErrorCode

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.STORE_ERROR: 500,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_for(error_code: Optional[ErrorCode]) -> int:
    """HTTP status for an error code; unknown codes are server errors."""
    return ERROR_STATUS_CODES.get(error_code, 500)


def error_response(error: Optional[str], error_code: Optional[ErrorCode]) -> JSONResponse:
    """Build the error body for a failed result. Store details are not exposed."""
    status_code = status_for(error_code)
    if status_code >= 500:
        logger.error(f"Request failed ({error_code}): {error}")
        error = INTERNAL_ERROR_MESSAGE
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
    )
