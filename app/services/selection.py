"""
Selection ledger.

A booth's `selected_votes` is the ledger: the set of vote numbers the
assigned user has marked. Writes always replace the whole set and go through
the mutation engine; this module adds validation, single-vote toggling and
the summary figures shown on dashboards.
"""

from dataclasses import dataclass
from typing import Iterable, List
import logging

from app.core.exception import OutOfRange
from app.db.store import BOOTHS
from app.models.account import Account
from app.models.booth import Booth

logger = logging.getLogger(__name__)


@dataclass
class SelectionSummary:
    selected: int
    total: int

    @property
    def percentage(self) -> float:
        if self.total <= 0:
            return 0.0
        return round(self.selected / self.total * 100, 1)


def validate_votes(booth: Booth, votes: Iterable[int]) -> List[int]:
    """Return `votes` as a sorted duplicate-free list, or raise OutOfRange."""
    selection = set()
    invalid = []
    for vote in votes:
        if isinstance(vote, bool) or not isinstance(vote, int) or not 1 <= vote <= booth.vote_count:
            invalid.append(vote)
        else:
            selection.add(vote)
    if invalid:
        raise OutOfRange(
            f"Vote numbers must be between 1 and {booth.vote_count}",
            booth_id=booth.id,
            invalid_votes=list(dict.fromkeys(invalid))
        )
    return sorted(selection)


def booth_summary(booth: Booth) -> SelectionSummary:
    return SelectionSummary(selected=len(booth.selected_votes or []), total=booth.vote_count)


def combined_summary(booths: Iterable[Booth]) -> SelectionSummary:
    summaries = [booth_summary(booth) for booth in booths]
    return SelectionSummary(
        selected=sum(summary.selected for summary in summaries),
        total=sum(summary.total for summary in summaries)
    )


class SelectionLedger:
    """Selection operations for booths, written through a MutationEngine."""

    def __init__(self, engine):
        self.engine = engine
        self.store = engine.store

    def replace_selection(self, actor: Account, booth_id: int, votes: Iterable[int]) -> Booth:
        return self.engine.update_booth_selection(actor, booth_id, votes)

    def toggle_vote(self, actor: Account, booth_id: int, vote: int) -> Booth:
        booth = self.engine.get_booth(booth_id)
        selection = set(booth.selected_votes or [])
        if vote in selection:
            selection.remove(vote)
        else:
            selection.add(vote)
        logger.debug(f"Booth {booth_id} vote {vote} toggled by {actor.id}")
        return self.engine.update_booth_selection(actor, booth_id, selection)

    def leaf_overview(self, leaf_id: int) -> SelectionSummary:
        """Totals across every booth assigned to one user."""
        return combined_summary(self.store.query(BOOTHS, assigned_to=leaf_id))
