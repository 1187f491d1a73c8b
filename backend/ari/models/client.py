from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Numeric
from sqlalchemy.sql import func
from ari.core.database import Base


class Client(Base):
    """
    Client ("cliente") of a base, with its credit standing.
    """
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    # Person (individual or company) this client record refers to
    person_id = Column(Integer, nullable=False, index=True)
    # Salesperson in charge, optional
    seller_id = Column(Integer, nullable=True)
    credit_limit = Column(Numeric(12, 2), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    notes = Column(String(500), nullable=True)
    score = Column(Integer, nullable=True)
    last_purchase_at = Column(DateTime(timezone=True), nullable=True)
    last_purchase_amount = Column(Numeric(12, 2), nullable=True)
    # Has credit restrictions
    delinquent = Column(Boolean, nullable=False, default=False)
    blocked = Column(Boolean, nullable=False, default=False)
    base_id = Column(Integer, ForeignKey("bases.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
