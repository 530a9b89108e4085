from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Optional
from app.db.database import get_db
from app.db.store import ACCOUNTS, EntityStore
from app.models.account import Account
from app.core.constants import ErrorMessages, ErrorCodes
from app.core.security import decode_access_token
from app.services.auth_gate import AuthGate
from app.services.hierarchy import HierarchyResolver
from app.services.mutations import MutationEngine
from app.services.selection import SelectionLedger

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


def get_store(db: Session = Depends(get_db)) -> EntityStore:
    return EntityStore(db)


def get_engine(store: EntityStore = Depends(get_store)) -> MutationEngine:
    return MutationEngine(store)


def get_resolver(store: EntityStore = Depends(get_store)) -> HierarchyResolver:
    return HierarchyResolver(store)


def get_ledger(engine: MutationEngine = Depends(get_engine)) -> SelectionLedger:
    return SelectionLedger(engine)


def get_auth_gate(store: EntityStore = Depends(get_store)) -> AuthGate:
    return AuthGate(store)


def _resolve_account(store: EntityStore, token: Optional[str]) -> Optional[Account]:
    if token is None:
        return None
    claims = decode_access_token(token)
    if claims is None:
        return None
    account_id, token_version = claims
    account = store.find(ACCOUNTS, account_id)
    # Token version changes on logout; a stale version means a revoked token
    if account is None or not account.active or account.token_version != token_version:
        return None
    return account


def get_current_account(
    store: EntityStore = Depends(get_store),
    token: str = Depends(oauth2_scheme)
) -> Account:
    """Get the account bound to the bearer token.
    Any endpoint that requires authentication can use this dependency.
    """
    account = _resolve_account(store, token)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "message": ErrorMessages.INVALID_TOKEN,
                "error_code": ErrorCodes.AUTH_ERROR
            },
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account


def get_current_account_optional(
    store: EntityStore = Depends(get_store),
    token: Optional[str] = Depends(optional_oauth2_scheme)
) -> Optional[Account]:
    """Like get_current_account but returns None instead of failing."""
    return _resolve_account(store, token)
