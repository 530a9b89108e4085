"""
Startup data.

The hierarchy needs exactly one root account to bootstrap everything else.
The demo hierarchy mirrors the sample data the product was prototyped with.
"""

import logging

from app.core.constants import AuthConfig
from app.core.roles import Role
from app.core.security import hash_credential
from app.db.store import ACCOUNTS, BOOTHS, EntityStore
from app.models.account import Account
from app.services.mutations import MutationEngine

logger = logging.getLogger(__name__)

DEMO_ADMINS = [("Alice-Admin", "11111")]

# (name, passcode, admin)
DEMO_SUB_ADMINS = [
    ("Bob-Sub-Admin", "55555", "Alice-Admin"),
    ("Eve-Sub-Admin", "66666", "Alice-Admin"),
]

# (name, passcode, sub admin)
DEMO_USERS = [
    ("charlie", "12345", "Bob-Sub-Admin"),
    ("diana", "54321", "Bob-Sub-Admin"),
    ("frank", "67890", "Eve-Sub-Admin"),
]

# (name, vote count, assignee, sub admin, selected votes)
DEMO_BOOTHS = [
    ("Main Hall - Section A", 100, "charlie", "Bob-Sub-Admin", [5, 12, 25, 67, 89]),
    ("Main Hall - Section B", 150, "charlie", "Bob-Sub-Admin", []),
    ("Exhibition Area", 50, "diana", "Bob-Sub-Admin", [1, 2, 3, 4, 5, 10, 20, 30, 40, 50]),
    ("West Wing", 200, "frank", "Eve-Sub-Admin", list(range(10, 35))),
    ("East Wing", 1500, None, "Eve-Sub-Admin", []),
]


def ensure_root_account(store: EntityStore) -> Account:
    """Create the root account unless one already exists."""
    existing = store.query(ACCOUNTS, role=Role.ROOT)
    if existing:
        return existing[0]

    root = store.insert(ACCOUNTS, {
        "display_name": AuthConfig.ROOT_NAME,
        "hashed_credential": hash_credential(AuthConfig.ROOT_PASSCODE),
        "role": Role.ROOT,
        "email": AuthConfig.ROOT_EMAIL,
        "created_by": None,
        "active": True,
    })
    logger.info(f"Root account created: ID {root.id}")
    return root


def load_demo_data(store: EntityStore) -> None:
    """Install the demo hierarchy below the root account, once."""
    root = ensure_root_account(store)
    if store.query(ACCOUNTS, role=Role.ADMIN):
        logger.info("Accounts already present, skipping demo data")
        return

    engine = MutationEngine(store, enforce_scope=True)
    accounts = {}
    for name, passcode in DEMO_ADMINS:
        accounts[name] = engine.create_account(root, name, passcode, Role.ADMIN)
    for name, passcode, parent in DEMO_SUB_ADMINS:
        accounts[name] = engine.create_account(accounts[parent], name, passcode, Role.SUB_ADMIN)
    for name, passcode, parent in DEMO_USERS:
        accounts[name] = engine.create_account(accounts[parent], name, passcode, Role.LEAF)

    for name, vote_count, assignee, creator, selected in DEMO_BOOTHS:
        booth = engine.create_booth(
            accounts[creator],
            name,
            vote_count,
            accounts[assignee].id if assignee else None
        )
        if selected:
            store.update(BOOTHS, booth.id, {"selected_votes": sorted(selected)})

    logger.info(f"Demo data loaded: {len(accounts)} accounts, {len(DEMO_BOOTHS)} booths")
