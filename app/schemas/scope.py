from pydantic import BaseModel
from typing import List
from app.schemas.account import AccountRead
from app.schemas.booth import BoothDetail, SelectionSummaryRead


class ScopeRead(BaseModel):
    """Everything the current account may see, with dashboard totals"""
    identity: AccountRead
    accounts: List[AccountRead]
    booths: List[BoothDetail]
    totals: SelectionSummaryRead
