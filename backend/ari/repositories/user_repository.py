import logging
from typing import Any, List, Optional
from sqlalchemy.orm import Session
from ari.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Credential store backed by the users table.

    Every call is a fresh read or write on the request's session; nothing is
    cached between calls.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def list(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def insert(self, **fields: Any) -> User:
        """Insert a user and return it with id and timestamps loaded"""
        user = User(**fields)
        self.db.add(user)
        # A duplicate email that slipped past the service check fails here
        # with an IntegrityError, translated to 409 by the store error handler
        self.db.commit()
        self.db.refresh(user)
        logger.debug(f"Inserted user {user.id}")
        return user

    def update(self, user: User, **fields: Any) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()
