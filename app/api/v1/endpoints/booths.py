from fastapi import APIRouter, Depends, Path, status
import logging

from app.models.account import Account
from app.models.booth import Booth
from app.schemas.booth import BoothCreate, BoothRead, BoothDetail, BoothSelectionUpdate, SelectionSummaryRead
from app.core.constants import BusinessLimits
from app.core.exception import NotAuthorized
from app.services.mutations import MutationEngine
from app.services.selection import SelectionLedger, booth_summary
from app.api.v1.endpoints.dependencies import get_current_account, get_engine, get_ledger
from app.api.v1.responses import (
    get_booth_create_responses,
    get_booth_detail_responses,
    get_booth_selection_responses
)

# Setup logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/booths", tags=["booths"])


def to_booth_detail(booth: Booth) -> BoothDetail:
    return BoothDetail(
        **BoothRead.model_validate(booth).model_dump(),
        summary=SelectionSummaryRead.model_validate(booth_summary(booth))
    )


@router.post("/", response_model=BoothRead, status_code=status.HTTP_201_CREATED, responses=get_booth_create_responses())
def create_booth(
    booth: BoothCreate,
    current_account: Account = Depends(get_current_account),
    engine: MutationEngine = Depends(get_engine)
):
    """Create a booth, optionally assigned to one of the caller's users."""
    return engine.create_booth(current_account, booth.name, booth.vote_count, booth.assigned_to)


@router.get("/{booth_id}", response_model=BoothDetail, responses=get_booth_detail_responses())
def read_booth(
    booth_id: int,
    current_account: Account = Depends(get_current_account),
    engine: MutationEngine = Depends(get_engine)
):
    booth = engine.get_booth(booth_id)
    if not engine.resolver.can_see_booth(current_account, booth):
        raise NotAuthorized(booth_id=booth_id)
    return to_booth_detail(booth)


@router.put("/{booth_id}/selection", response_model=BoothDetail, responses=get_booth_selection_responses())
def update_booth_selection(
    booth_id: int,
    selection: BoothSelectionUpdate,
    current_account: Account = Depends(get_current_account),
    ledger: SelectionLedger = Depends(get_ledger)
):
    """
    Replace the booth's selected votes.

    The request is rejected as a whole when any number lies outside
    1..vote_count; nothing is saved in that case.
    """
    booth = ledger.replace_selection(current_account, booth_id, selection.selected_votes)
    return to_booth_detail(booth)


@router.post("/{booth_id}/votes/{vote}/toggle", response_model=BoothDetail, responses=get_booth_selection_responses())
def toggle_vote(
    booth_id: int,
    vote: int = Path(..., ge=1, le=BusinessLimits.MAX_VOTE_COUNT),
    current_account: Account = Depends(get_current_account),
    ledger: SelectionLedger = Depends(get_ledger)
):
    """Select a vote if it is not selected, otherwise unselect it."""
    booth = ledger.toggle_vote(current_account, booth_id, vote)
    return to_booth_detail(booth)
