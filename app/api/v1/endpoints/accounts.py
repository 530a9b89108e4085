from fastapi import APIRouter, Depends, status
import logging

from app.models.account import Account
from app.schemas.account import AccountCreate, AccountRead, AccountUpdate, AccountDeleteResponse
from app.schemas.booth import SelectionSummaryRead
from app.core.exception import InvalidRole, NotAuthorized
from app.core.roles import Role, child_role
from app.services.mutations import MutationEngine
from app.services.selection import SelectionLedger
from app.api.v1.endpoints.dependencies import get_current_account, get_engine, get_ledger
from app.api.v1.responses import (
    get_account_create_responses,
    get_account_update_responses,
    get_account_delete_responses,
    get_account_status_responses,
    get_account_votes_responses
)

# Setup logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("/", response_model=AccountRead, status_code=status.HTTP_201_CREATED, responses=get_account_create_responses())
def create_account(
    account: AccountCreate,
    current_account: Account = Depends(get_current_account),
    engine: MutationEngine = Depends(get_engine)
):
    """
    Create an account one level below the caller.

    Super-Admins create Admins, Admins create Sub Admins and Sub Admins create
    Users. The role may be omitted.
    """
    role = account.role or child_role(current_account.role)
    if role is None:
        raise InvalidRole(f"A {current_account.role.label} cannot create accounts")
    return engine.create_account(current_account, account.display_name, account.passcode, role)


@router.put("/{account_id}", response_model=AccountRead, responses=get_account_update_responses())
def update_account(
    account_id: int,
    account_update: AccountUpdate,
    current_account: Account = Depends(get_current_account),
    engine: MutationEngine = Depends(get_engine)
):
    """Change the display name and/or passcode. Omitted fields are left as they are."""
    update_data = account_update.model_dump(exclude_unset=True, exclude_none=True)
    return engine.update_account(
        current_account,
        account_id,
        display_name=update_data.get("display_name"),
        credential=update_data.get("passcode")
    )


@router.delete("/{account_id}", response_model=AccountDeleteResponse, responses=get_account_delete_responses())
def delete_account(
    account_id: int,
    current_account: Account = Depends(get_current_account),
    engine: MutationEngine = Depends(get_engine)
):
    """
    Delete an account together with every account below it.

    Booths assigned to a deleted user are kept and become unassigned.
    """
    result = engine.delete_account(current_account, account_id)
    return AccountDeleteResponse(
        deleted_account_ids=result.deleted_account_ids,
        orphaned_booth_ids=result.orphaned_booth_ids
    )


@router.post("/{account_id}/toggle-status", response_model=AccountRead, responses=get_account_status_responses())
def toggle_account_status(
    account_id: int,
    current_account: Account = Depends(get_current_account),
    engine: MutationEngine = Depends(get_engine)
):
    """Activate or deactivate one account. Accounts below it are not affected."""
    return engine.toggle_account_status(current_account, account_id)


@router.get("/{account_id}/votes", response_model=SelectionSummaryRead, responses=get_account_votes_responses())
def read_account_votes(
    account_id: int,
    current_account: Account = Depends(get_current_account),
    engine: MutationEngine = Depends(get_engine),
    ledger: SelectionLedger = Depends(get_ledger)
):
    """Selected and total votes across every booth assigned to a user."""
    account = engine.get_account(account_id)
    if account.id != current_account.id and not engine.resolver.can_see_account(current_account, account):
        raise NotAuthorized(account_id=account_id)
    if account.role is not Role.LEAF:
        raise InvalidRole("Vote overviews exist for users only", account_id=account_id)
    return SelectionSummaryRead.model_validate(ledger.leaf_overview(account.id))
