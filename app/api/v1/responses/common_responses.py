"""
Common reusable response definitions for FastAPI endpoints.

This module contains response configurations that are shared across multiple endpoints,
promoting consistency and reducing duplication in OpenAPI documentation.
"""

from app.schemas.error import (
    ValidationErrorResponse,
    BusinessErrorResponse,
    AuthErrorResponse,
    ServerErrorResponse
)

# Constants for common values
CONTENT_TYPE_JSON = "application/json"
EXAMPLE_TIMESTAMP = "2024-01-01T12:00:00Z"
EXAMPLE_API_PATH = "/api/v1/endpoint"
VALIDATION_FAILED_MESSAGE = "Validation failed"
VALIDATION_ERROR_CODE = "VALIDATION_ERROR"


# Common authentication error response
AUTH_ERROR_RESPONSE = {
    "description": "Authentication required",
    "model": AuthErrorResponse,
    "content": {
        CONTENT_TYPE_JSON: {
            "example": {
                "message": "Could not validate credentials",
                "error_code": "AUTH_ERROR",
                "timestamp": EXAMPLE_TIMESTAMP,
                "path": EXAMPLE_API_PATH
            }
        }
    }
}


def get_business_error_response(description: str, message: str, error_code: str, path: str = EXAMPLE_API_PATH, **extra):
    """Generate a rule-violation response with one example."""
    return {
        "description": description,
        "model": BusinessErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": {
                    "message": message,
                    "error_code": error_code,
                    **extra,
                    "timestamp": EXAMPLE_TIMESTAMP,
                    "path": path
                }
            }
        }
    }


def get_not_found_response(resource: str, path: str = EXAMPLE_API_PATH):
    return get_business_error_response(
        f"{resource} not found",
        f"{resource} not found",
        "RESOURCE_NOT_FOUND",
        path
    )


def get_forbidden_response(path: str = EXAMPLE_API_PATH):
    return get_business_error_response(
        "Outside the caller's hierarchy",
        "Not authorized to access this resource",
        "INSUFFICIENT_PERMISSIONS",
        path
    )


# Common validation error response with a context-specific path
def get_validation_error_response(path: str = EXAMPLE_API_PATH, field: str = "name"):
    """Generate validation error response with context-specific path."""
    return {
        "description": "Validation error",
        "model": ValidationErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": {
                    "message": VALIDATION_FAILED_MESSAGE,
                    "error_code": VALIDATION_ERROR_CODE,
                    "errors": [
                        {
                            "loc": ["body", field],
                            "msg": "Field required",
                            "type": "missing"
                        }
                    ],
                    "timestamp": EXAMPLE_TIMESTAMP,
                    "path": path
                }
            }
        }
    }


# Common server error response
def get_server_error_response(error_code: str = "INTERNAL_ERROR", path: str = EXAMPLE_API_PATH):
    """Generate server error response with context-specific error code and path."""
    return {
        "description": "Internal server error",
        "model": ServerErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": {
                    "message": "An unexpected error occurred",
                    "error_code": error_code,
                    "timestamp": EXAMPLE_TIMESTAMP,
                    "path": path
                }
            }
        }
    }


STORE_UNAVAILABLE_RESPONSE = {
    "description": "Store unavailable",
    "model": ServerErrorResponse,
    "content": {
        CONTENT_TYPE_JSON: {
            "example": {
                "message": "Database operation failed",
                "error_code": "DATABASE_ERROR",
                "timestamp": EXAMPLE_TIMESTAMP,
                "path": EXAMPLE_API_PATH
            }
        }
    }
}

# Shorthand references for common responses
VALIDATION_ERROR_RESPONSE = get_validation_error_response()
SERVER_ERROR_RESPONSE = get_server_error_response()
