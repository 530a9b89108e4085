"""
Authentication-specific response definitions for FastAPI endpoints.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    CONTENT_TYPE_JSON,
    EXAMPLE_TIMESTAMP,
    STORE_UNAVAILABLE_RESPONSE,
    get_business_error_response,
    get_validation_error_response,
    get_server_error_response
)

# Constants for auth paths
AUTH_BASE_PATH = "/api/v1/auth"
LOGIN_PATH = f"{AUTH_BASE_PATH}/login"
TOKEN_PATH = f"{AUTH_BASE_PATH}/token"

ACCOUNT_EXAMPLE = {
    "id": 4,
    "display_name": "charlie",
    "role": "leaf",
    "created_by": 3,
    "active": True,
    "email": None,
    "avatar_url": "https://picsum.photos/seed/avatarcharlie/100/100"
}

TOKEN_SUCCESS_EXAMPLE = {
    "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "token_type": "bearer",
    "account": ACCOUNT_EXAMPLE
}

LOGIN_FAILURE_EXAMPLES = {
    "user_not_found": {
        "summary": "No account with this name",
        "value": {
            "message": "User not found.",
            "error_code": "USER_NOT_FOUND",
            "timestamp": EXAMPLE_TIMESTAMP,
            "path": LOGIN_PATH
        }
    },
    "invalid_credentials": {
        "summary": "Wrong passcode",
        "value": {
            "message": "Invalid username or passcode.",
            "error_code": "INVALID_CREDENTIALS",
            "timestamp": EXAMPLE_TIMESTAMP,
            "path": LOGIN_PATH
        }
    }
}


def _login_responses(path: str):
    return {
        200: {
            "description": "Login successful",
            "content": {CONTENT_TYPE_JSON: {"example": TOKEN_SUCCESS_EXAMPLE}}
        },
        401: {
            "description": "Unknown account or wrong passcode",
            "content": {CONTENT_TYPE_JSON: {"examples": LOGIN_FAILURE_EXAMPLES}}
        },
        403: get_business_error_response(
            "Account deactivated",
            "This account has been deactivated.",
            "ACCOUNT_DEACTIVATED",
            path
        ),
        422: get_validation_error_response(path, "display_name"),
        503: STORE_UNAVAILABLE_RESPONSE,
        500: get_server_error_response("LOGIN_FAILED", path)
    }


def get_login_responses():
    """Generate complete response set for the JSON login endpoint."""
    return _login_responses(LOGIN_PATH)


def get_token_responses():
    """Generate complete response set for the OAuth2 token endpoint."""
    return _login_responses(TOKEN_PATH)


def get_me_responses():
    return {
        200: {
            "description": "Current account",
            "content": {CONTENT_TYPE_JSON: {"example": ACCOUNT_EXAMPLE}}
        },
        401: AUTH_ERROR_RESPONSE
    }
