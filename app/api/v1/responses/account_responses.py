"""
Account-management response definitions for FastAPI endpoints.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    CONTENT_TYPE_JSON,
    STORE_UNAVAILABLE_RESPONSE,
    get_business_error_response,
    get_forbidden_response,
    get_not_found_response,
    get_validation_error_response,
    get_server_error_response
)
from .auth_responses import ACCOUNT_EXAMPLE

ACCOUNTS_PATH = "/api/v1/accounts"
ACCOUNT_PATH = f"{ACCOUNTS_PATH}/{{account_id}}"

DUPLICATE_NAME_RESPONSE = get_business_error_response(
    "Name already used in this hierarchy",
    "A user with this name already exists in this hierarchy.",
    "DUPLICATE_RESOURCE",
    ACCOUNTS_PATH,
    display_name="charlie"
)


def get_account_create_responses():
    return {
        201: {
            "description": "Account created",
            "content": {CONTENT_TYPE_JSON: {"example": ACCOUNT_EXAMPLE}}
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_business_error_response(
            "Role not creatable by the caller",
            "A User cannot create a User",
            "INVALID_ROLE",
            ACCOUNTS_PATH
        ),
        409: DUPLICATE_NAME_RESPONSE,
        422: get_validation_error_response(ACCOUNTS_PATH, "passcode"),
        503: STORE_UNAVAILABLE_RESPONSE,
        500: get_server_error_response("ACCOUNT_CREATION_FAILED", ACCOUNTS_PATH)
    }


def get_account_update_responses():
    return {
        200: {
            "description": "Account updated",
            "content": {CONTENT_TYPE_JSON: {"example": ACCOUNT_EXAMPLE}}
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response(ACCOUNT_PATH),
        404: get_not_found_response("Account", ACCOUNT_PATH),
        409: DUPLICATE_NAME_RESPONSE,
        422: get_validation_error_response(ACCOUNT_PATH, "passcode"),
        503: STORE_UNAVAILABLE_RESPONSE
    }


def get_account_delete_responses():
    return {
        200: {
            "description": "Account and all of its descendants deleted",
            "content": {
                CONTENT_TYPE_JSON: {
                    "example": {"deleted_account_ids": [3, 4, 5], "orphaned_booth_ids": [1, 2, 3]}
                }
            }
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response(ACCOUNT_PATH),
        404: get_not_found_response("Account", ACCOUNT_PATH),
        503: STORE_UNAVAILABLE_RESPONSE
    }


def get_account_status_responses():
    return {
        200: {
            "description": "Account status flipped",
            "content": {CONTENT_TYPE_JSON: {"example": {**ACCOUNT_EXAMPLE, "active": False}}}
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response(ACCOUNT_PATH),
        404: get_not_found_response("Account", ACCOUNT_PATH),
        503: STORE_UNAVAILABLE_RESPONSE
    }


def get_account_votes_responses():
    return {
        200: {
            "description": "Vote totals across the user's booths",
            "content": {CONTENT_TYPE_JSON: {"example": {"selected": 15, "total": 250, "percentage": 6.0}}}
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response(f"{ACCOUNT_PATH}/votes"),
        404: get_not_found_response("Account", f"{ACCOUNT_PATH}/votes")
    }
