import logging
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from ari.models.base import TenantBase

logger = logging.getLogger(__name__)


class BaseService:
    """
    CRUD over bases (tenants).

    Duplicate names and deleting a base that still has users or clients are
    left to the database constraints; the store error handler turns them into
    409 and 400 responses.
    """

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[TenantBase]:
        logger.info("Finding all bases")
        return self.db.query(TenantBase).order_by(TenantBase.id).all()

    def get(self, base_id: int) -> TenantBase:
        logger.info(f"Finding base with ID: {base_id}")
        return self.db.query(TenantBase).filter(TenantBase.id == base_id).one()

    def create(self, data: Dict[str, Any]) -> TenantBase:
        logger.info(f"Creating base: {data.get('name')}")
        base = TenantBase(**data)
        self.db.add(base)
        self.db.commit()
        self.db.refresh(base)
        return base

    def update(self, base_id: int, changes: Dict[str, Any]) -> TenantBase:
        logger.info(f"Updating base with ID: {base_id}")
        base = self.get(base_id)
        for key, value in changes.items():
            setattr(base, key, value)
        self.db.commit()
        self.db.refresh(base)
        return base

    def delete(self, base_id: int) -> None:
        logger.info(f"Deleting base with ID: {base_id}")
        self.db.delete(self.get(base_id))
        self.db.commit()
