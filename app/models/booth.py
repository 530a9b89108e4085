from sqlalchemy import Column, Integer, String, ForeignKey, JSON
from app.db.database import Base

# Define Booth model
class Booth(Base):
    __tablename__ = "booths"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    vote_count = Column(Integer, nullable=False)

    # Leaf account working this booth; cleared when that account is deleted
    assigned_to = Column(Integer, ForeignKey("accounts.id"), index=True, nullable=True)
    # Creating sub admin. Booths outlive their creator so this is not a foreign key
    created_by = Column(Integer, index=True, nullable=False)

    # Sorted, duplicate free vote numbers within [1, vote_count]
    selected_votes = Column(JSON, default=list, nullable=False)

    def __repr__(self):
        return f"<Booth id={self.id} name={self.name!r} votes={self.vote_count}>"
