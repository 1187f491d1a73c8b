import logging
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from ari.api.validation import MAX_ID
from ari.core.database import get_db
from ari.core.exceptions import ForbiddenError, UnauthorizedError
from ari.core.security import PasswordHasher, TokenError, TokenService, password_hasher, token_service
from ari.models.user import User
from ari.repositories.user_repository import UserRepository
from ari.services.auth_service import AuthService
from ari.services.base_service import BaseService
from ari.services.client_service import ClientService
from ari.services.user_service import UserService

logger = logging.getLogger(__name__)

# Extracts the token from "Authorization: Bearer <token>"
# tokenUrl points Swagger UI's Authorize dialog at the form login endpoint
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_token_service() -> TokenService:
    return token_service


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(users, hasher, tokens)


def get_user_service(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(users, hasher)


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    return ClientService(db)


def get_base_service(db: Session = Depends(get_db)) -> BaseService:
    return BaseService(db)


async def get_current_user(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """
    Resolve the bearer token of the request to a user.

    Steps run in order and any failure rejects the request with 401:
    no token, token that fails signature/expiry checks, subject that is not
    an id, id with no user behind it (e.g. deleted after the token was
    issued). A deactivated user gets 403. On success the user is also put on
    request.state.user.
    """
    # No Authorization header, or not a Bearer one
    if not token:
        raise UnauthorizedError()

    # Signature, expiry and presence of 'sub' are checked by the token service
    try:
        claims = tokens.verify(token)
    except TokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise UnauthorizedError()

    # 'sub' is the user id as a string
    try:
        user_id = int(claims["sub"])
    except (ValueError, TypeError):
        raise UnauthorizedError()
    # An id no users row can have is rejected before reaching the database
    if user_id < 0 or user_id > MAX_ID:
        raise UnauthorizedError()

    # The user may have been deleted after the token was issued
    user = users.find_by_id(user_id)
    if user is None:
        logger.info(f"Token subject {user_id} has no matching user")
        raise UnauthorizedError()

    if not user.is_active:
        raise ForbiddenError()

    # Route handlers can read the user without declaring the dependency
    request.state.user = user
    return user
