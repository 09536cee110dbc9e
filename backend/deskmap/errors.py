"""
DeskMap - Error Taxonomy
Domain errors raised by validation, storage and access checks, plus the
FastAPI handlers that turn them into `{"error": <message>}` responses.
"""
import logging
from typing import Dict, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from deskmap.config import get_settings

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Base class for every error reported to API callers."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers

    def to_response(self, debug: bool = False) -> dict:
        return {"error": self.message}


class MissingFieldError(DirectoryError):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(to_camel(f) for f in self.fields)}")


class MissingImageError(DirectoryError):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Image file is required"):
        super().__init__(message)


class InvalidImageError(DirectoryError):
    """Upload rejected before it reaches storage (extension or size)."""
    http_status = status.HTTP_400_BAD_REQUEST


class DuplicateEmailError(DirectoryError):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, email: str):
        self.email = email
        super().__init__("Employee with this email already exists")


class CoordinateRangeError(DirectoryError):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, axis: str):
        self.axis = axis
        super().__init__(f"{axis.upper()} coordinate must be between 0 and 1")


class NotFoundError(DirectoryError):
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class UnauthenticatedError(DirectoryError):
    http_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InsufficientRoleError(DirectoryError):
    http_status = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message)


class UnexpectedStoreError(DirectoryError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store failure during {operation}: {cause}")

    def to_response(self, debug: bool = False) -> dict:
        if debug:
            return {"error": self.message}
        return {"error": "Internal server error"}


class StoreConflictError(UnexpectedStoreError):
    """A write broke a uniqueness or foreign-key constraint."""


# ============================================================
# Handlers
# ============================================================

def _current_settings(request: Request):
    # Honour dependency_overrides so the handlers see the same settings as the routes
    provider = request.app.dependency_overrides.get(get_settings, get_settings)
    return provider()


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError):
        if exc.http_status >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
                exc_info=exc
            )
        else:
            logger.warning(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
            )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(debug=_current_settings(request).debug),
            headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request data",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                    }
                    for e in exc.errors()
                ],
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = "Route not found"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
