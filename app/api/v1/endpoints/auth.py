from datetime import timedelta
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from typing import Optional
import logging

from app.models.account import Account
from app.schemas.account import AccountRead
from app.schemas.auth import LoginRequest, Token
from app.core.security import create_access_token, ACCESS_TOKEN_EXPIRE_MINUTES
from app.services.auth_gate import AuthGate
from app.api.v1.endpoints.dependencies import (
    get_auth_gate,
    get_current_account,
    get_current_account_optional
)
from app.api.v1.responses import (
    get_login_responses,
    get_token_responses,
    get_me_responses
)

# Setup logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_token(account: Account) -> Token:
    access_token = create_access_token(
        data={"sub": str(account.id), "role": account.role.value, "ver": account.token_version},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    logger.info(f"Token issued for account {account.id}")
    return Token(access_token=access_token, account=AccountRead.model_validate(account))


@router.post("/login", response_model=Token, responses=get_login_responses())
def login(login_data: LoginRequest, gate: AuthGate = Depends(get_auth_gate)):
    """
    Log in with a display name and passcode.

    Names match case-insensitively. Every account except the Super-Admin also
    accepts the shared master passcode.
    """
    account = gate.login(login_data.display_name, login_data.passcode)
    return _issue_token(account)


@router.post("/token", response_model=Token, responses=get_token_responses())
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    gate: AuthGate = Depends(get_auth_gate)
):
    """
    OAuth2 compatible login. Put the display name in 'username' and the passcode in 'password'.
    """
    account = gate.login(form_data.username, form_data.password)
    return _issue_token(account)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    gate: AuthGate = Depends(get_auth_gate),
    current_account: Optional[Account] = Depends(get_current_account_optional)
):
    """
    End the session and revoke the caller's tokens. Always succeeds.
    """
    if current_account is not None:
        gate.resume(current_account)
    gate.logout()


@router.get("/me", response_model=AccountRead, responses=get_me_responses())
def read_current_account(current_account: Account = Depends(get_current_account)):
    """Return the account bound to the current session."""
    return current_account
