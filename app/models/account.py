import unicodedata

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import validates
from app.db.database import Base
from app.core.roles import Role


def name_key(display_name: str) -> str:
    """Case-insensitive lookup key for a display name."""
    return unicodedata.normalize("NFC", display_name).casefold()


# Define the Account model
class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    display_name = Column(String, nullable=False)
    # Unique per (role, created_by), checked by the engine; login matches on it
    display_name_key = Column(String, index=True, nullable=False)
    hashed_credential = Column(String, nullable=False)
    role = Column(SQLEnum(Role, name="account_role"), index=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    email = Column(String, nullable=True)  # Only set for the root account
    avatar_url = Column(String, nullable=True)

    # Bumped on logout; tokens carrying an older value are rejected
    token_version = Column(Integer, default=0, nullable=False)

    # Back-reference to the creating account, null only for root
    created_by = Column(Integer, ForeignKey("accounts.id"), index=True, nullable=True)

    @validates("display_name")
    def _sync_name_key(self, key, value):
        self.display_name_key = name_key(value)
        return value

    def __repr__(self):
        return f"<Account id={self.id} name={self.display_name!r} role={self.role.value}>"
