from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from ari.core.database import Base


class User(Base):
    """
    User model, also the credential store.

    Passwords are stored as bcrypt hashes, never plaintext. Records are looked
    up by id or email only.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Unique constraint backs the duplicate check done on registration
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    # Tenant the user belongs to
    base_id = Column(Integer, ForeignKey("bases.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
