from app.errors.auth import (
    AccountDeactivatedError,
    AuthenticationError,
    AuthorizationError,
    InsufficientRoleError,
    InvalidCredentialError,
    InvalidLoginError,
    MissingCredentialError,
    NotOwnerError,
    auth_exception_handler,
)
from app.errors.base import (
    BaseAppError,
    InternalError,
    create_exception_handler,
    create_unhandled_exception_handler,
)
from app.errors.database import (
    CategoryNotFoundError,
    ConflictError,
    DatabaseConnectionError,
    DatabaseError,
    DependencyError,
    DuplicateEntryError,
    DuplicateNameError,
    NotFoundError,
    database_exception_handler,
)
from app.errors.password_hasher import PasswordHashingError
from app.errors.validation import ValidationError, validation_exception_handler

__all__ = [
    "AccountDeactivatedError",
    "AuthenticationError",
    "AuthorizationError",
    "BaseAppError",
    "CategoryNotFoundError",
    "ConflictError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DependencyError",
    "DuplicateEntryError",
    "DuplicateNameError",
    "InsufficientRoleError",
    "InternalError",
    "InvalidCredentialError",
    "InvalidLoginError",
    "MissingCredentialError",
    "NotFoundError",
    "NotOwnerError",
    "PasswordHashingError",
    "ValidationError",
    "auth_exception_handler",
    "create_exception_handler",
    "create_unhandled_exception_handler",
    "database_exception_handler",
    "validation_exception_handler",
]
