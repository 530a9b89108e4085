"""
Booth response definitions for FastAPI endpoints.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    CONTENT_TYPE_JSON,
    EXAMPLE_TIMESTAMP,
    STORE_UNAVAILABLE_RESPONSE,
    get_business_error_response,
    get_forbidden_response,
    get_not_found_response,
    get_validation_error_response,
    get_server_error_response
)
from app.schemas.error import VoteRangeErrorResponse

BOOTHS_PATH = "/api/v1/booths"
BOOTH_PATH = f"{BOOTHS_PATH}/{{booth_id}}"
SELECTION_PATH = f"{BOOTH_PATH}/selection"

BOOTH_EXAMPLE = {
    "id": 1,
    "name": "Main Hall - Section A",
    "vote_count": 100,
    "assigned_to": 4,
    "created_by": 3,
    "selected_votes": [5, 12, 25, 67, 89]
}

BOOTH_DETAIL_EXAMPLE = {
    **BOOTH_EXAMPLE,
    "summary": {"selected": 5, "total": 100, "percentage": 5.0}
}

OUT_OF_RANGE_RESPONSE = {
    "description": "Vote number outside the booth's range; nothing was saved",
    "model": VoteRangeErrorResponse,
    "content": {
        CONTENT_TYPE_JSON: {
            "example": {
                "message": "Vote numbers must be between 1 and 100",
                "error_code": "VOTE_OUT_OF_RANGE",
                "booth_id": 1,
                "invalid_votes": [0, 10000000],
                "timestamp": EXAMPLE_TIMESTAMP,
                "path": SELECTION_PATH
            }
        }
    }
}


def get_booth_create_responses():
    return {
        201: {
            "description": "Booth created",
            "content": {CONTENT_TYPE_JSON: {"example": BOOTH_EXAMPLE}}
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_business_error_response(
            "Caller cannot create booths or assign to this user",
            "A Admin cannot create booths",
            "INVALID_ROLE",
            BOOTHS_PATH
        ),
        404: get_not_found_response("Account", BOOTHS_PATH),
        422: get_validation_error_response(BOOTHS_PATH, "vote_count"),
        503: STORE_UNAVAILABLE_RESPONSE,
        500: get_server_error_response("BOOTH_CREATION_FAILED", BOOTHS_PATH)
    }


def get_booth_detail_responses():
    return {
        200: {
            "description": "Booth with selection summary",
            "content": {CONTENT_TYPE_JSON: {"example": BOOTH_DETAIL_EXAMPLE}}
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response(BOOTH_PATH),
        404: get_not_found_response("Booth", BOOTH_PATH)
    }


def get_booth_selection_responses():
    return {
        200: {
            "description": "Selection replaced",
            "content": {CONTENT_TYPE_JSON: {"example": BOOTH_DETAIL_EXAMPLE}}
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response(SELECTION_PATH),
        404: get_not_found_response("Booth", SELECTION_PATH),
        422: OUT_OF_RANGE_RESPONSE,
        503: STORE_UNAVAILABLE_RESPONSE
    }
