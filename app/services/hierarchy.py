"""
Hierarchy resolver.

Computes which accounts and booths an identity can see:

    root       all admins                     all booths
    admin      sub admins it created          booths created by those sub admins
    sub_admin  leaf accounts it created       booths it created
    leaf       nothing                        booths assigned to it

Nothing outside this table is ever visible: no siblings, no ancestors and no
descendants of other branches.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List

from app.core.roles import Role
from app.db.store import ACCOUNTS, BOOTHS, EntityStore
from app.models.account import Account
from app.models.booth import Booth


@dataclass
class Scope:
    identity: Account
    visible_accounts: List[Account] = field(default_factory=list)
    visible_booths: List[Booth] = field(default_factory=list)

    @property
    def account_ids(self) -> FrozenSet[int]:
        return frozenset(account.id for account in self.visible_accounts)

    @property
    def booth_ids(self) -> FrozenSet[int]:
        return frozenset(booth.id for booth in self.visible_booths)


class HierarchyResolver:
    def __init__(self, store: EntityStore):
        self.store = store

    def scope(self, identity: Account) -> Scope:
        role = identity.role

        if role is Role.ROOT:
            accounts = self.store.query(ACCOUNTS, role=Role.ADMIN)
            booths = self.store.query(BOOTHS)
        elif role is Role.ADMIN:
            accounts = self.store.query(ACCOUNTS, role=Role.SUB_ADMIN, created_by=identity.id)
            booths = self.store.query(BOOTHS, created_by={account.id for account in accounts})
        elif role is Role.SUB_ADMIN:
            accounts = self.store.query(ACCOUNTS, role=Role.LEAF, created_by=identity.id)
            booths = self.store.query(BOOTHS, created_by=identity.id)
        else:
            accounts = []
            booths = self.store.query(BOOTHS, assigned_to=identity.id)

        return Scope(identity=identity, visible_accounts=accounts, visible_booths=booths)

    def can_see_account(self, identity: Account, account: Account) -> bool:
        role = identity.role
        if role is Role.ROOT:
            return account.role is Role.ADMIN
        if role is Role.ADMIN:
            return account.role is Role.SUB_ADMIN and account.created_by == identity.id
        if role is Role.SUB_ADMIN:
            return account.role is Role.LEAF and account.created_by == identity.id
        return False

    def can_see_booth(self, identity: Account, booth: Booth) -> bool:
        role = identity.role
        if role is Role.ROOT:
            return True
        if role is Role.ADMIN:
            creator = self.store.find(ACCOUNTS, booth.created_by)
            return (
                creator is not None
                and creator.role is Role.SUB_ADMIN
                and creator.created_by == identity.id
            )
        if role is Role.SUB_ADMIN:
            return booth.created_by == identity.id
        return booth.assigned_to == identity.id
