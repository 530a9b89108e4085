from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List
from app.core.constants import BusinessLimits


# Schema for creating a new booth
class BoothCreate(BaseModel):
    name: str = Field(
        ...,
        min_length=BusinessLimits.MIN_BOOTH_NAME_LENGTH,
        max_length=BusinessLimits.MAX_BOOTH_NAME_LENGTH,
        json_schema_extra={"example": "Main Hall - Section A"}
    )
    vote_count: int = Field(
        ...,
        ge=BusinessLimits.MIN_VOTE_COUNT,
        le=BusinessLimits.MAX_VOTE_COUNT,
        description=f"Number of vote slots ({BusinessLimits.MIN_VOTE_COUNT}-{BusinessLimits.MAX_VOTE_COUNT})"
    )
    assigned_to: Optional[int] = Field(None, description="Id of the user working this booth")

    @field_validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Booth name cannot be empty or just whitespace')
        return ' '.join(v.split())


class BoothSelectionUpdate(BaseModel):
    """Full replacement of a booth's selected votes"""
    selected_votes: List[int] = Field(..., json_schema_extra={"example": [5, 12, 25]})


class SelectionSummaryRead(BaseModel):
    selected: int
    total: int
    percentage: float

    model_config = ConfigDict(from_attributes=True)


# Schema for reading booth data
class BoothRead(BaseModel):
    id: int
    name: str
    vote_count: int
    assigned_to: Optional[int] = None
    created_by: int
    selected_votes: List[int] = []

    model_config = ConfigDict(from_attributes=True)


class BoothDetail(BoothRead):
    summary: SelectionSummaryRead
