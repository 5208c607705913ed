"""Service error kinds and their conversion to JSON responses."""
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceError(HTTPException):
    """Base class for errors reported to the caller as ``{"message": ...}``."""

    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        super().__init__(status_code=status_code or self.default_status, detail=message)
        logger.warning(f"{self.__class__.__name__} ({self.status_code}): {message}")


class ValidationError(ServiceError):
    """Malformed or missing input."""
    default_status = status.HTTP_400_BAD_REQUEST


class ConflictError(ServiceError):
    """The request collides with the current state of a record."""
    default_status = status.HTTP_409_CONFLICT


class NotFoundError(ServiceError):
    """Missing account, submission or file."""
    default_status = status.HTTP_404_NOT_FOUND


class UnauthorizedError(ServiceError):
    """Credential mismatch or unusable access token."""
    default_status = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ServiceError):
    """The caller's role or identity does not allow the operation."""
    default_status = status.HTTP_403_FORBIDDEN


class DeliveryError(ServiceError):
    """The mail transport failed to deliver a message."""
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR


class InternalError(ServiceError):
    """Unclassified store failure."""
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "form"))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    logger.warning(f"Rejected request to {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors raised by the framework itself (unknown path, wrong method)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to the application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
