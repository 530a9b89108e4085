from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List
from app.core.constants import AuthConfig, BusinessLimits
from app.core.roles import Role


def _check_display_name(v: str) -> str:
    if any(ch.isspace() for ch in v):
        raise ValueError('Username cannot contain spaces.')
    return v


# Schema for creating a new account
class AccountCreate(BaseModel):
    display_name: str = Field(
        ...,
        min_length=BusinessLimits.MIN_DISPLAY_NAME_LENGTH,
        max_length=BusinessLimits.MAX_DISPLAY_NAME_LENGTH,
        description="Login name, unique within the creator's hierarchy",
        json_schema_extra={"example": "charlie"}
    )
    passcode: str = Field(
        ...,
        pattern=AuthConfig.PASSCODE_PATTERN,
        description="5-digit passcode",
        json_schema_extra={"example": "12345"}
    )
    role: Optional[Role] = Field(
        None,
        description="Role of the new account. Defaults to the only role the caller may create"
    )

    @field_validator('display_name')
    def validate_display_name(cls, v):
        return _check_display_name(v)


# Schema for partial account updates
class AccountUpdate(BaseModel):
    display_name: Optional[str] = Field(
        None,
        min_length=BusinessLimits.MIN_DISPLAY_NAME_LENGTH,
        max_length=BusinessLimits.MAX_DISPLAY_NAME_LENGTH
    )
    passcode: Optional[str] = Field(None, pattern=AuthConfig.PASSCODE_PATTERN)

    @field_validator('display_name')
    def validate_display_name(cls, v):
        if v is None:
            return v
        return _check_display_name(v)


# Schema for reading account data
class AccountRead(BaseModel):
    id: int
    display_name: str
    role: Role
    created_by: Optional[int] = None
    active: bool
    email: Optional[str] = None
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AccountDeleteResponse(BaseModel):
    deleted_account_ids: List[int]
    orphaned_booth_ids: List[int]
