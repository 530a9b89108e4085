from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from datetime import datetime, timezone
import logging
import traceback
import uuid

from app.core.constants import ErrorMessages, ErrorCodes

logger = logging.getLogger(__name__)


# =============================================================================
# Domain errors
# =============================================================================

class BoothsError(Exception):
    """Base class for every typed failure reported by the core."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCodes.INTERNAL_ERROR
    default_message = ErrorMessages.INTERNAL_ERROR

    def __init__(self, message: str = None, **context):
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)


class NotFound(BoothsError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCodes.RESOURCE_NOT_FOUND
    default_message = "Resource not found"


class InvalidRole(BoothsError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = ErrorCodes.INVALID_ROLE
    default_message = ErrorMessages.INVALID_ROLE


class NotAuthorized(BoothsError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = ErrorCodes.INSUFFICIENT_PERMISSIONS
    default_message = ErrorMessages.NOT_AUTHORIZED


class DuplicateName(BoothsError):
    status_code = status.HTTP_409_CONFLICT
    error_code = ErrorCodes.DUPLICATE_RESOURCE
    default_message = ErrorMessages.DUPLICATE_NAME


class UserNotFound(BoothsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCodes.USER_NOT_FOUND
    default_message = ErrorMessages.USER_NOT_FOUND


class AccountDeactivated(BoothsError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = ErrorCodes.ACCOUNT_DEACTIVATED
    default_message = ErrorMessages.ACCOUNT_DEACTIVATED


class InvalidCredential(BoothsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCodes.INVALID_CREDENTIALS
    default_message = ErrorMessages.INVALID_CREDENTIALS


class OutOfRange(BoothsError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = ErrorCodes.VOTE_OUT_OF_RANGE
    default_message = ErrorMessages.VOTE_OUT_OF_RANGE


class StoreUnavailable(BoothsError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = ErrorCodes.DATABASE_ERROR
    default_message = ErrorMessages.DATABASE_ERROR


# =============================================================================
# FastAPI exception handlers
# =============================================================================

def _error_body(request: Request, request_id: str, message: str, error_code: str, **extra):
    return {
        "message": message,
        "error_code": error_code,
        **extra,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": str(request.url.path),
        "request_id": request_id
    }


async def booths_exception_handler(request: Request, exc: BoothsError):
    """
    Handler for typed domain failures raised by the services.

    Rule violations are client errors and logged as warnings; a store outage
    is logged as an error.
    """
    request_id = str(uuid.uuid4())[:8]

    if isinstance(exc, StoreUnavailable):
        logger.error(
            f"Store unavailable [ID: {request_id}] - "
            f"Path: {request.url.path} - "
            f"Detail: {exc.message}"
        )
    else:
        logger.warning(
            f"Rule violation [ID: {request_id}] - "
            f"Path: {request.url.path} - "
            f"Type: {type(exc).__name__} - "
            f"Detail: {exc.message}"
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, request_id, exc.message, exc.error_code, **exc.context)
    )


def _plain_errors(exc):
    # ctx may hold exception instances that are not JSON serializable
    return [
        {key: value for key, value in error.items() if key not in ("ctx", "url")}
        for error in exc.errors()
    ]


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Custom handler for request body and Pydantic validation errors"""
    request_id = str(uuid.uuid4())[:8]
    client_ip = request.client.host if request.client else "unknown"

    logger.warning(
        f"Validation error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"IP: {client_ip} - "
        f"Errors: {len(exc.errors())}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            request, request_id,
            ErrorMessages.VALIDATION_ERROR,
            ErrorCodes.VALIDATION_ERROR,
            errors=_plain_errors(exc)
        )
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Enhanced HTTP exception handler"""
    request_id = str(uuid.uuid4())[:8]
    client_ip = request.client.host if request.client else "unknown"

    if exc.status_code >= 500:
        logger.error(
            f"Server error [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Path: {request.url.path} - "
            f"IP: {client_ip} - "
            f"Detail: {exc.detail}"
        )
    elif exc.status_code >= 400:
        logger.warning(
            f"Client error [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Path: {request.url.path} - "
            f"IP: {client_ip}"
        )

    if isinstance(exc.detail, dict):
        response_content = {
            **exc.detail,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": str(request.url.path),
            "request_id": request_id
        }
    else:
        response_content = _error_body(request, request_id, str(exc.detail), "HTTP_ERROR")

    return JSONResponse(
        status_code=exc.status_code,
        content=response_content,
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler for unexpected errors"""
    request_id = str(uuid.uuid4())[:8]
    tb_str = traceback.format_exc()

    logger.critical(
        f"Unexpected error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"Error: {str(exc)} - "
        f"Type: {type(exc).__name__} - "
        f"Traceback: {tb_str}"
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, request_id, ErrorMessages.INTERNAL_ERROR, ErrorCodes.INTERNAL_ERROR)
    )
