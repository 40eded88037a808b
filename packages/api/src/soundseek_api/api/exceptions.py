"""Error handlers for the API.

All API errors use a consistent response format:
{
    "error": "Human-readable description",
    "code": "error_code",
    "details": "underlying message (development only)"
}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from soundseek import CatalogError

from soundseek_api.settings import get_settings

logger = logging.getLogger(__name__)

# Shown instead of the underlying message outside development
SERVER_ERROR_MESSAGE = "Catalog request failed"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    code: str
    details: str | None = None


def _error_response(
    status_code: int, message: str, code: str, details: str | None = None
) -> JSONResponse:
    body = ErrorResponse(error=message, code=code, details=details)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on the FastAPI app."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(
        request: Request, exc: CatalogError
    ) -> JSONResponse:
        """Map every soundseek error to its status code.

        Client errors (4xx) carry their message. Server errors only expose
        the underlying message in development.
        """
        if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
            return _error_response(exc.status_code, exc.message, exc.error_code)

        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        details = exc.message if get_settings().is_development else None
        return _error_response(
            exc.status_code, SERVER_ERROR_MESSAGE, exc.error_code, details
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed parameters as 400 with the first problem."""
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ())[1:])
            msg = first.get("msg")
            message = f"{location}: {msg}" if location else msg
        else:
            message = "Invalid request"
        return _error_response(
            status.HTTP_400_BAD_REQUEST, str(message), "invalid_input"
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last resort: never let an exception reach the transport unmapped."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        details = str(exc) if get_settings().is_development else None
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_ERROR_MESSAGE,
            "internal_error",
            details,
        )
