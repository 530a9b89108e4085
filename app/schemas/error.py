from pydantic import BaseModel
from typing import Optional, Any, List

class ErrorDetail(BaseModel):
    """Individual error detail for validation errors"""
    loc: List[Any]  # Location of the error (field path)
    msg: str        # Error message
    type: str       # Error type

class ValidationErrorResponse(BaseModel):
    """Response schema for validation errors (422)"""
    message: str = "Validation failed"
    error_code: str = "VALIDATION_ERROR"
    errors: List[ErrorDetail]
    timestamp: str
    path: str
    request_id: Optional[str] = None

class BusinessErrorResponse(BaseModel):
    """Response schema for hierarchy rule violations (403, 404, 409, 422)"""
    message: str
    error_code: str
    timestamp: str
    path: str
    request_id: Optional[str] = None

    model_config = {"extra": "allow"}

class AuthErrorResponse(BaseModel):
    """Response schema for authentication errors (401)"""
    message: str = "Authentication required"
    error_code: str = "AUTH_ERROR"
    timestamp: str
    path: str
    request_id: Optional[str] = None

class ServerErrorResponse(BaseModel):
    """Response schema for internal server and store errors (500, 503)"""
    message: str = "Internal server error"
    error_code: str = "INTERNAL_ERROR"
    request_id: Optional[str] = None  # For tracking
    timestamp: str
    path: str

class VoteRangeErrorResponse(BaseModel):
    """Response schema for a selection rejected because of out-of-range votes (422)"""
    message: str
    error_code: str = "VOTE_OUT_OF_RANGE"
    booth_id: int
    invalid_votes: List[Any]  # Offending values, each listed once
    timestamp: str
    path: str
    request_id: Optional[str] = None
