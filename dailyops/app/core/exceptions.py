"""
Custom exceptions and error handlers for consistent error responses.

Provides standardized error codes and global exception handlers.
"""

import logging
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from typing import Any, Dict

logger = logging.getLogger("dailyops")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class InvalidCredentialsError(AppException):
    """Raised when a username/password pair matches no user."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_001",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class InvalidTokenError(AppException):
    """Raised when a session token cannot be decoded."""

    def __init__(self, message: str = "Could not validate session token"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_002",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class ValidationFailureError(AppException):
    """Raised when a required input is missing or blank."""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message=message,
            error_code="ERR_VALIDATION_001",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field} if field else {}
        )


class DuplicateValueError(AppException):
    """Raised when a unique field value is already taken by another record."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            message=f"{field.capitalize()} already registered",
            error_code="ERR_CONFLICT_001",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field, "value": value}
        )


class InvalidTransitionError(AppException):
    """Raised when a task progress status change is not allowed."""

    def __init__(self, task_id: str, current: str, target: str):
        super().__init__(
            message=f"Cannot move task {task_id} from {current} to {target}",
            error_code="ERR_STATE_001",
            status_code=status.HTTP_409_CONFLICT,
            details={"task_id": task_id, "current_status": current, "target_status": target}
        )


class PersistenceError(AppException):
    """Raised when a collection snapshot could not be written."""

    def __init__(self, collection: str, reason: str = None):
        super().__init__(
            message=f"Failed to save {collection}",
            error_code="ERR_STORAGE_001",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"collection": collection, "reason": reason}
        )


class RecordValidationError(AppException):
    """Raised when a merged or inserted record does not match its schema."""

    def __init__(self, collection: str, errors: list):
        super().__init__(
            message=f"Invalid {collection} record",
            error_code="ERR_VALIDATION_002",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"collection": collection, "errors": errors}
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder({
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        })
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException with standardized format."""
    # Map status code to error code
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        405: "ERR_METHOD_NOT_ALLOWED",
        500: "ERR_INTERNAL_SERVER"
    }

    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": exc.detail,
            "details": {}
        },
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({
            "error_code": "ERR_VALIDATION",
            "message": "Validation error",
            "details": {
                "errors": exc.errors()
            }
        })
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception("Unhandled exception: %s: %s", type(exc).__name__, exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "ERR_INTERNAL_SERVER",
            "message": "An internal server error occurred",
            "details": {}
        }
    )
