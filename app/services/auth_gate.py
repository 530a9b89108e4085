"""
Session / auth gate.

Tracks who is logged in. A gate starts anonymous, passes through
authenticating while a login attempt is checked and ends authenticated
(bound to one account) until logout. A failed attempt falls back to
anonymous.

An account authenticates with its own passcode, or, unless it is the root
account, with the shared master passcode.
Logging out bumps the account's token version, which revokes every token
issued to it before.
"""

from enum import Enum
from typing import Optional
import hmac
import logging

from app.core.constants import AuthConfig
from app.core.exception import AccountDeactivated, InvalidCredential, UserNotFound
from app.core.roles import Role
from app.core.security import verify_credential
from app.db.store import ACCOUNTS, EntityStore
from app.models.account import Account, name_key

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class AuthGate:
    def __init__(self, store: EntityStore, master_passcode: Optional[str] = None):
        self.store = store
        self.master_passcode = AuthConfig.MASTER_PASSCODE if master_passcode is None else master_passcode
        self.state = SessionState.ANONYMOUS
        self._current: Optional[Account] = None

    @property
    def current(self) -> Optional[Account]:
        """The authenticated account, or None."""
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def login(self, display_name: str, credential: str) -> Account:
        self.state = SessionState.AUTHENTICATING
        try:
            account = self.authenticate(display_name, credential)
        except Exception:
            self.state = SessionState.ANONYMOUS
            self._current = None
            raise
        self._current = account
        self.state = SessionState.AUTHENTICATED
        return account

    def resume(self, account: Account) -> None:
        """Bind the gate to an account whose token was already verified."""
        self._current = account
        self.state = SessionState.AUTHENTICATED

    def logout(self) -> None:
        """End the session and revoke every token issued to its account so far."""
        if self._current is not None:
            account = self._current
            self.store.update(ACCOUNTS, account.id, {"token_version": account.token_version + 1})
            logger.info(f"Account {account.id} logged out")
        self._current = None
        self.state = SessionState.ANONYMOUS

    def authenticate(self, display_name: str, credential: str) -> Account:
        """Check a login attempt without touching session state."""
        logger.info(f"Login attempt for '{display_name}'")

        account = self.find_by_name(display_name)
        if account is None:
            logger.warning(f"Login failed: no account named '{display_name}'")
            raise UserNotFound()

        if not account.active:
            logger.warning(f"Login refused for deactivated account {account.id}")
            raise AccountDeactivated()

        if verify_credential(credential, account.hashed_credential):
            logger.info(f"Login successful for account {account.id}")
            return account

        if account.role is not Role.ROOT and self._is_master(credential):
            logger.info(f"Login with master passcode for account {account.id}")
            return account

        logger.warning(f"Login failed: wrong passcode for account {account.id}")
        raise InvalidCredential()

    def find_by_name(self, display_name: str) -> Optional[Account]:
        # Names are only unique per creator, so the earliest account wins
        matches = self.store.query(ACCOUNTS, display_name_key=name_key(display_name))
        return matches[0] if matches else None

    def _is_master(self, credential: str) -> bool:
        if not self.master_passcode or credential is None:
            return False
        return hmac.compare_digest(credential.encode("utf-8"), self.master_passcode.encode("utf-8"))
