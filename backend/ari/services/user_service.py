import logging
from typing import Any, Dict, List
from ari.core.exceptions import ConflictError, NotFoundError
from ari.core.security import PasswordHasher
from ari.models.user import User
from ari.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"


class UserService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    async def create(self, data: Dict[str, Any]) -> User:
        """Create a user from validated input, hashing the password"""
        logger.info("Creating user")
        if self.users.find_by_email(data["email"]) is not None:
            raise ConflictError("Email already registered")

        fields = {k: v for k, v in data.items() if k != "password"}
        fields["hashed_password"] = await self.hasher.hash(data["password"])
        return self.users.insert(**fields)

    def list(self) -> List[User]:
        logger.info("Finding all users")
        return self.users.list()

    def get(self, user_id: int) -> User:
        logger.info(f"Finding user with ID: {user_id}")
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user

    async def update(self, user_id: int, changes: Dict[str, Any]) -> User:
        """
        Apply a partial update.

        A new password replaces the hash with a fresh hash; the stored hash is
        never set from anything else.
        """
        logger.info(f"Updating user with ID: {user_id}")
        user = self.get(user_id)

        email = changes.get("email")
        if email is not None and email != user.email and self.users.find_by_email(email) is not None:
            raise ConflictError("Email already registered")

        fields = {k: v for k, v in changes.items() if k != "password"}
        if changes.get("password") is not None:
            fields["hashed_password"] = await self.hasher.hash(changes["password"])
        return self.users.update(user, **fields)

    def delete(self, user_id: int) -> None:
        logger.info(f"Deleting user with ID: {user_id}")
        self.users.delete(self.get(user_id))
