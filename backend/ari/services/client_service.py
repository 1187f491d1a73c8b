import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from ari.models.client import Client

logger = logging.getLogger(__name__)


class ClientService:
    """
    CRUD over clients.

    Lookups use Query.one(), so a missing client raises NoResultFound and the
    store error handler answers 404.
    """

    def __init__(self, db: Session):
        self.db = db

    def list(self, base_id: Optional[int] = None) -> List[Client]:
        logger.info("Finding all clients")
        query = self.db.query(Client)
        if base_id is not None:
            query = query.filter(Client.base_id == base_id)
        return query.order_by(Client.id).all()

    def get(self, client_id: int) -> Client:
        logger.info(f"Finding client with ID: {client_id}")
        return self.db.query(Client).filter(Client.id == client_id).one()

    def create(self, data: Dict[str, Any]) -> Client:
        logger.info(f"Creating client for person {data.get('person_id')}")
        client = Client(**data)
        self.db.add(client)
        self.db.commit()
        self.db.refresh(client)
        return client

    def update(self, client_id: int, changes: Dict[str, Any]) -> Client:
        logger.info(f"Updating client with ID: {client_id}")
        client = self.get(client_id)
        for key, value in changes.items():
            setattr(client, key, value)
        self.db.commit()
        self.db.refresh(client)
        return client

    def delete(self, client_id: int) -> None:
        logger.info(f"Deleting client with ID: {client_id}")
        self.db.delete(self.get(client_id))
        self.db.commit()
