from sqlalchemy import Column, Integer, String, ForeignKey

from crushmatch.database import Base


class Interest(Base):
    __tablename__ = "interests"

    # Insertion order; ``id`` stays the public identifier.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, unique=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    created_at = Column(String, nullable=False)
