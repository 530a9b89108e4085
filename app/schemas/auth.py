from pydantic import BaseModel
from app.schemas.account import AccountRead


class LoginRequest(BaseModel):
    display_name: str
    passcode: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account: AccountRead
