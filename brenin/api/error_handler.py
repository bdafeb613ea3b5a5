"""
API error handlers
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from brenin.utils.exceptions import (
    SessionNotFoundError,
    InvalidInputError
)
from brenin.utils.response import error_response
from brenin.utils.logger import get_logger

logger = get_logger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation error handler"""
    errors = exc.errors()
    error_details = {
        "field": errors[0].get("loc")[-1] if errors else None,
        "message": errors[0].get("msg") if errors else "validation error"
    }

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response(
            code="VALIDATION_ERROR",
            message="Request validation failed",
            details=error_details
        )
    )


async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    """Unknown session handler"""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_response(
            code="SESSION_NOT_FOUND",
            message=str(exc),
            details={"session_id": exc.session_id}
        )
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError):
    """Invalid input handler"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response(
            code="INVALID_INPUT",
            message=str(exc),
            details={"field": exc.field} if exc.field else None
        )
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Fallback handler"""
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            code="INTERNAL_SERVER_ERROR",
            message="Internal server error."
        )
    )
