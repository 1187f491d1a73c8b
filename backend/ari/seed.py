"""
Seed the database with demo users.

Run with ``python -m ari.seed``. Existing users keep their row and get their
password re-hashed, so the script can be run any number of times.
"""

import logging
from sqlalchemy.orm import Session
from ari.core.database import Base, SessionLocal, engine
from ari.core.logging import setup_logging
from ari.core.security import PasswordHasher, password_hasher
from ari.models import base, client  # noqa: F401  registers the tables
from ari.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"email": "alice@example.com", "name": "Alice", "password": "password123"},
    {"email": "bob@example.com", "name": "Bob", "password": "password456"},
]


def seed_users(db: Session, hasher: PasswordHasher, demo_users=DEMO_USERS) -> list:
    users = UserRepository(db)
    seeded = []
    for entry in demo_users:
        hashed_password = hasher.hash_sync(entry["password"])
        user = users.find_by_email(entry["email"])
        if user is None:
            user = users.insert(
                email=entry["email"],
                name=entry["name"],
                hashed_password=hashed_password,
                is_active=True,
            )
            logger.info(f"Created user {user.email}")
        else:
            user = users.update(user, hashed_password=hashed_password)
            logger.info(f"Updated password of {user.email}")
        seeded.append(user)
    return seeded


def main():
    setup_logging()
    logger.info("Start seeding ...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seeded = seed_users(db, password_hasher)
    finally:
        db.close()
    logger.info(f"Seeding finished, {len(seeded)} users")


if __name__ == "__main__":
    main()
