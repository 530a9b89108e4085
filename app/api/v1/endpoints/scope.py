from fastapi import APIRouter, Depends
import logging

from app.models.account import Account
from app.schemas.account import AccountRead
from app.schemas.booth import SelectionSummaryRead
from app.schemas.scope import ScopeRead
from app.services.hierarchy import HierarchyResolver
from app.services.selection import combined_summary
from app.api.v1.endpoints.booths import to_booth_detail
from app.api.v1.endpoints.dependencies import get_current_account, get_resolver
from app.api.v1.responses import AUTH_ERROR_RESPONSE

# Setup logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scope", tags=["scope"])


@router.get("", response_model=ScopeRead, responses={401: AUTH_ERROR_RESPONSE})
def read_scope(
    current_account: Account = Depends(get_current_account),
    resolver: HierarchyResolver = Depends(get_resolver)
):
    """
    Accounts and booths visible to the caller, with selection totals.

    This is the data behind every role's dashboard.
    """
    scope = resolver.scope(current_account)
    logger.info(
        f"Scope for account {current_account.id}: "
        f"{len(scope.visible_accounts)} accounts, {len(scope.visible_booths)} booths"
    )
    return ScopeRead(
        identity=AccountRead.model_validate(current_account),
        accounts=[AccountRead.model_validate(account) for account in scope.visible_accounts],
        booths=[to_booth_detail(booth) for booth in scope.visible_booths],
        totals=SelectionSummaryRead.model_validate(combined_summary(scope.visible_booths))
    )
