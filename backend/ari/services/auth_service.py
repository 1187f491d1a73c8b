import logging
from ari.core.config import settings
from ari.core.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from ari.core.security import PasswordHasher, TokenService
from ari.repositories.user_repository import UserRepository
from ari.schemas.user import UserPublic

logger = logging.getLogger(__name__)


class AuthService:
    """
    Login and registration on top of the credential store.

    Collaborators are passed in explicitly; the API layer builds one per
    request from the request's database session.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        default_base_id: int | None = None,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        # Unset means the tenant configured at the time the service is built
        if default_base_id is None:
            default_base_id = settings.DEFAULT_BASE_ID
        self.default_base_id = default_base_id

    async def login(self, email: str, password: str) -> str:
        """
        Check credentials and return a signed access token.

        An unknown email is a 404 and a wrong password a 401. Telling them
        apart lets clients know whether the account exists, which the product
        accepts.
        """
        logger.info(f"Logging in user: {email}")

        user = self.users.find_by_email(email)
        if user is None:
            logger.warning(f"No user found for email: {email}")
            raise NotFoundError(f"No user found for email: {email}")

        if not await self.hasher.verify(password, user.hashed_password):
            logger.warning(f"Invalid password for user: {email}")
            raise UnauthorizedError("Invalid credentials")

        if not user.is_active:
            logger.warning(f"Inactive user tried to log in: {email}")
            raise ForbiddenError()

        access_token = self.tokens.sign(user.id)
        logger.info(f"User logged in successfully: {email}")
        return access_token

    async def register(self, email: str, password: str, name: str) -> UserPublic:
        """Create a user; a second registration with the same email is a 409"""
        logger.info(f"Registering user: {email}")

        if self.users.find_by_email(email) is not None:
            logger.warning(f"User already exists for email: {email}")
            raise ConflictError(f"User already exists for email: {email}")

        hashed_password = await self.hasher.hash(password)
        user = self.users.insert(
            email=email,
            hashed_password=hashed_password,
            name=name,
            is_active=True,
            base_id=self.default_base_id,
        )

        logger.info(f"User registered successfully: {email}")
        return UserPublic.model_validate(user)
