"""
Response definitions for FastAPI endpoints.

This module provides centralized response configurations for OpenAPI documentation,
promoting reusability and maintainability across all API endpoints.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    VALIDATION_ERROR_RESPONSE,
    SERVER_ERROR_RESPONSE,
    STORE_UNAVAILABLE_RESPONSE,
    get_validation_error_response,
    get_server_error_response,
)

from .auth_responses import (
    get_login_responses,
    get_token_responses,
    get_me_responses,
)

from .account_responses import (
    get_account_create_responses,
    get_account_update_responses,
    get_account_delete_responses,
    get_account_status_responses,
    get_account_votes_responses,
)

from .booth_responses import (
    get_booth_create_responses,
    get_booth_detail_responses,
    get_booth_selection_responses,
)

__all__ = [
    "AUTH_ERROR_RESPONSE",
    "VALIDATION_ERROR_RESPONSE",
    "SERVER_ERROR_RESPONSE",
    "STORE_UNAVAILABLE_RESPONSE",
    "get_validation_error_response",
    "get_server_error_response",
    "get_login_responses",
    "get_token_responses",
    "get_me_responses",
    "get_account_create_responses",
    "get_account_update_responses",
    "get_account_delete_responses",
    "get_account_status_responses",
    "get_account_votes_responses",
    "get_booth_create_responses",
    "get_booth_detail_responses",
    "get_booth_selection_responses",
]
