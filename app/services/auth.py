"""Authentication service: registration and password login."""

from app.auth.identity import Identity
from app.errors.auth import AccountDeactivatedError, InvalidLoginError
from app.managers.password_manager import hash_password, verify_password
from app.managers.token_manager import create_access_token
from app.models.user import Role
from app.monitoring import get_logger
from app.repositories import UserRepository
from app.schemas.user import LoginRequest, UserCreate

logger = get_logger(__name__)


class AuthService:
    """Service issuing credentials the identity gate accepts."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def register(self, data: UserCreate) -> tuple[Identity, str]:
        """
        Register a member account and sign a credential for it.

        Args:
            data: Registration payload

        Returns:
            tuple[Identity, str]: The new identity and its access token

        Raises:
            DuplicateEntryError: If username or email already exists
        """
        password_hash = await hash_password(data.password.get_secret_value())
        user = await self.user_repo.create(data, password_hash=password_hash, role=Role.MEMBER)
        logger.info("User registered", user_id=str(user.uuid))
        return Identity.from_user(user), create_access_token(user.uuid)

    async def login(self, data: LoginRequest) -> tuple[Identity, str]:
        """
        Authenticate by email and password.

        Args:
            data: Login payload

        Returns:
            tuple[Identity, str]: The identity and a fresh access token

        Raises:
            InvalidLoginError: If the email is unknown or the password wrong
            AccountDeactivatedError: If the account is deactivated
        """
        user = await self.user_repo.get_by_email(str(data.email))
        # Unknown emails still pay for a (dummy) verification
        password_hash = user.password_hash if user else None
        verified = await verify_password(data.password.get_secret_value(), password_hash)
        if user is None or not verified:
            logger.info("Failed login attempt")
            raise InvalidLoginError

        if not user.is_active:
            raise AccountDeactivatedError

        return Identity.from_user(user), create_access_token(user.uuid)
