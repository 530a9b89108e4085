"""
Mutation engine.

Validates and applies every write against accounts and booths on behalf of an
authenticated actor. Each operation is a single store call or a single store
batch, so a failure never leaves a partial write behind.

When `enforce_scope` is on (the default) the engine also checks that targets
lie inside the actor's scope. With it off the engine checks existence only.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set
import logging

from app.core.constants import BusinessLimits, ErrorMessages
from app.core.exception import DuplicateName, InvalidRole, NotAuthorized, NotFound, OutOfRange
from app.core.roles import Role, can_create
from app.core.security import hash_credential
from app.db.store import ACCOUNTS, BOOTHS, Delete, EntityStore, Update
from app.models.account import Account, name_key
from app.models.booth import Booth
from app.services.hierarchy import HierarchyResolver
from app.services.selection import validate_votes

logger = logging.getLogger(__name__)

AVATAR_URL_TEMPLATE = "https://picsum.photos/seed/avatar{seed}/100/100"


@dataclass
class DeletionResult:
    deleted_account_ids: List[int] = field(default_factory=list)
    orphaned_booth_ids: List[int] = field(default_factory=list)


class MutationEngine:
    def __init__(self, store: EntityStore, enforce_scope: Optional[bool] = None):
        self.store = store
        self.resolver = HierarchyResolver(store)
        self.enforce_scope = BusinessLimits.ENFORCE_SCOPE if enforce_scope is None else enforce_scope

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def create_account(self, actor: Account, display_name: str, credential: str, role: Role) -> Account:
        logger.info(f"Account {actor.id} creating {role.value} '{display_name}'")

        if not can_create(actor.role, role):
            logger.warning(f"Account {actor.id} ({actor.role.value}) may not create {role.value}")
            raise InvalidRole(
                f"A {actor.role.label} cannot create a {role.label}",
                actor_role=actor.role.value,
                requested_role=role.value
            )

        self._check_unique_name(display_name, role, actor.id)

        account = self.store.insert(ACCOUNTS, {
            "display_name": display_name,
            "hashed_credential": hash_credential(credential),
            "role": role,
            "created_by": actor.id,
            "active": True,
            "avatar_url": AVATAR_URL_TEMPLATE.format(seed=name_key(display_name)),
        })
        logger.info(f"Account created: ID {account.id}, role {role.value}")
        return account

    def update_account(
        self,
        actor: Account,
        target_id: int,
        display_name: Optional[str] = None,
        credential: Optional[str] = None
    ) -> Account:
        target = self.get_account(target_id)
        self._check_account_scope(actor, target)

        fields = {}
        if display_name is not None and display_name != target.display_name:
            self._check_unique_name(display_name, target.role, target.created_by, exclude_id=target.id)
            fields["display_name"] = display_name
        if credential is not None:
            fields["hashed_credential"] = hash_credential(credential)

        if not fields:
            logger.info(f"No changes for account {target_id}")
            return target

        self.store.update(ACCOUNTS, target_id, fields)
        logger.info(f"Account {target_id} updated by {actor.id}: {sorted(fields)}")
        return self.store.get(ACCOUNTS, target_id)

    def delete_account(self, actor: Account, target_id: int) -> DeletionResult:
        """Delete an account with all of its descendants and orphan their booths."""
        target = self.get_account(target_id)
        self._check_account_scope(actor, target)

        layers = self._descendant_layers(target.id)
        closure = {account_id for layer in layers for account_id in layer}
        orphaned = self.store.query(BOOTHS, assigned_to=closure)

        ops = [Update(BOOTHS, booth.id, {"assigned_to": None}) for booth in orphaned]
        # Deepest layer first so no remaining account points at a deleted one
        for layer in reversed(layers):
            ops.extend(Delete(ACCOUNTS, account_id) for account_id in sorted(layer))
        self.store.batch(ops)

        result = DeletionResult(
            deleted_account_ids=sorted(closure),
            orphaned_booth_ids=[booth.id for booth in orphaned]
        )
        logger.info(
            f"Account {target_id} deleted by {actor.id}: "
            f"{len(result.deleted_account_ids)} accounts removed, "
            f"{len(result.orphaned_booth_ids)} booths orphaned"
        )
        return result

    def toggle_account_status(self, actor: Account, target_id: int) -> Account:
        target = self.get_account(target_id)
        self._check_account_scope(actor, target)

        new_status = not target.active
        self.store.update(ACCOUNTS, target_id, {"active": new_status})
        logger.info(f"Account {target_id} {'activated' if new_status else 'deactivated'} by {actor.id}")
        return self.store.get(ACCOUNTS, target_id)

    # ------------------------------------------------------------------
    # Booths
    # ------------------------------------------------------------------

    def create_booth(self, actor: Account, name: str, vote_count: int, assigned_to: Optional[int] = None) -> Booth:
        logger.info(f"Account {actor.id} creating booth '{name}' with {vote_count} votes")

        if self.enforce_scope and actor.role is not Role.SUB_ADMIN:
            raise InvalidRole(f"A {actor.role.label} cannot create booths", actor_role=actor.role.value)

        if not BusinessLimits.MIN_VOTE_COUNT <= vote_count <= BusinessLimits.MAX_VOTE_COUNT:
            raise OutOfRange(
                f"Vote count must be between {BusinessLimits.MIN_VOTE_COUNT} "
                f"and {BusinessLimits.MAX_VOTE_COUNT}",
                vote_count=vote_count
            )

        if assigned_to is not None:
            assignee = self.get_account(assigned_to)
            if assignee.role is not Role.LEAF:
                raise InvalidRole("Booths can only be assigned to users", assigned_to=assigned_to)
            if self.enforce_scope and assignee.created_by != actor.id:
                raise NotAuthorized(assigned_to=assigned_to)

        booth = self.store.insert(BOOTHS, {
            "name": name,
            "vote_count": vote_count,
            "assigned_to": assigned_to,
            "created_by": actor.id,
            "selected_votes": [],
        })
        logger.info(f"Booth created: ID {booth.id}, assigned to {assigned_to}")
        return booth

    def update_booth_selection(self, actor: Account, booth_id: int, votes: Iterable[int]) -> Booth:
        """Replace the booth's selected votes with `votes`.

        Any number outside [1, vote_count] rejects the whole request and
        nothing is written. Duplicates collapse.
        """
        booth = self.get_booth(booth_id)
        if self.enforce_scope and actor.id not in (booth.assigned_to, booth.created_by):
            raise NotAuthorized(booth_id=booth_id)

        selection = validate_votes(booth, votes)
        self.store.update(BOOTHS, booth_id, {"selected_votes": selection})
        logger.info(f"Booth {booth_id} selection set by {actor.id}: {len(selection)} votes")
        return self.store.get(BOOTHS, booth_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def get_account(self, account_id: int) -> Account:
        account = self.store.find(ACCOUNTS, account_id)
        if account is None:
            raise NotFound(ErrorMessages.ACCOUNT_NOT_FOUND, account_id=account_id)
        return account

    def get_booth(self, booth_id: int) -> Booth:
        booth = self.store.find(BOOTHS, booth_id)
        if booth is None:
            raise NotFound(ErrorMessages.BOOTH_NOT_FOUND, booth_id=booth_id)
        return booth

    def _check_account_scope(self, actor: Account, target: Account) -> None:
        if self.enforce_scope and not self.resolver.can_see_account(actor, target):
            logger.warning(f"Account {actor.id} attempted to modify out-of-scope account {target.id}")
            raise NotAuthorized(account_id=target.id)

    def _check_unique_name(
        self,
        display_name: str,
        role: Role,
        created_by: Optional[int],
        exclude_id: Optional[int] = None
    ) -> None:
        filters = {"role": role, "display_name_key": name_key(display_name)}
        # Admins share one flat namespace regardless of creator
        if role is not Role.ADMIN:
            filters["created_by"] = created_by

        for account in self.store.query(ACCOUNTS, **filters):
            if account.id != exclude_id:
                logger.warning(f"Duplicate {role.value} name '{display_name}' under {created_by}")
                raise DuplicateName(display_name=display_name)

    def _descendant_layers(self, root_id: int) -> List[Set[int]]:
        """Breadth-first layers of the created_by tree starting at root_id."""
        children: Dict[int, Set[int]] = defaultdict(set)
        for account in self.store.query(ACCOUNTS):
            if account.created_by is not None:
                children[account.created_by].add(account.id)

        layers = []
        seen = {root_id}
        queue = deque([{root_id}])
        while queue:
            layer = queue.popleft()
            layers.append(layer)
            next_layer = {
                child_id
                for parent_id in layer
                for child_id in children.get(parent_id, ())
                if child_id not in seen
            }
            if next_layer:
                seen |= next_layer
                queue.append(next_layer)
        return layers
