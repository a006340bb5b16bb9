"""Authentication and authorization errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.configs.settings import DEACTIVATED_MESSAGE, INVALID_TOKEN_MESSAGE, NO_TOKEN_MESSAGE
from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class AuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    code = "AuthenticationError"

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class MissingCredentialError(AuthenticationError):
    """Raised when neither the header nor the cookie carries a credential."""

    code = "MissingCredential"

    def __init__(self) -> None:
        super().__init__(NO_TOKEN_MESSAGE)


class InvalidCredentialError(AuthenticationError):
    """Raised on bad signature, malformed payload, expiry or unknown identity."""

    code = "InvalidCredential"

    def __init__(self) -> None:
        super().__init__(INVALID_TOKEN_MESSAGE)


class AccountDeactivatedError(AuthenticationError):
    """Raised when the credential resolves to a deactivated identity."""

    code = "AccountDeactivated"

    def __init__(self) -> None:
        super().__init__(DEACTIVATED_MESSAGE)


class InvalidLoginError(AuthenticationError):
    """Raised when email or password do not match."""

    code = "InvalidLogin"

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class AuthorizationError(BaseAppError):
    """Base class for role and ownership failures."""

    code = "AuthorizationError"

    def __init__(
        self,
        detail: str = "Not authorized",
        status_code: int = HTTP_403_FORBIDDEN,
    ) -> None:
        super().__init__(detail, status_code)


class InsufficientRoleError(AuthorizationError):
    """Raised when the identity's role does not allow the action."""

    code = "InsufficientRole"

    def __init__(self) -> None:
        super().__init__("Access denied. Admin privileges required.", HTTP_403_FORBIDDEN)


class NotOwnerError(AuthorizationError):
    """Raised when a non-admin identity touches a post it did not write."""

    code = "NotOwner"

    def __init__(self, action: str = "modify") -> None:
        super().__init__(f"Not authorized to {action} this post", HTTP_401_UNAUTHORIZED)


auth_exception_handler = create_exception_handler(logger)
