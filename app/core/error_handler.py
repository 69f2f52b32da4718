"""
Simple error handling for the application.

Every error response carries only the generic status phrase; the detail of
the original failure goes to the log.
"""

import logging
from http import HTTPStatus

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import (
    ValidationError,
    NotFoundError,
    DatabaseError,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": HTTPStatus(status_code).phrase}},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Simple global exception handler for FastAPI."""

    if isinstance(exc, DatabaseError):
        logger.error(f"Application error on {request.url.path}: {exc.detail}")
        return error_response(exc.status_code)
    elif isinstance(exc, (ValidationError, NotFoundError)):
        logger.warning(f"Application error on {request.url.path}: {exc.detail}")
        return error_response(exc.status_code)
    elif isinstance(exc, StarletteHTTPException):
        logger.warning(f"HTTP exception on {request.url.path}: {exc.detail}")
        return error_response(exc.status_code)
    elif isinstance(exc, RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST)
    elif isinstance(exc, SQLAlchemyError):
        logger.error(f"Database error on {request.url.path}: {str(exc)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR)
    else:
        logger.error(f"Unexpected error on {request.url.path}: {str(exc)}", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR)
