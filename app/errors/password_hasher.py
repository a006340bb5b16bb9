from app.errors.base import BaseAppError


class PasswordHashingError(BaseAppError):
    """Base error for password hasher module."""

    code = "PasswordHashingError"

    def __init__(self, detail: str = "Password hashing failed") -> None:
        super().__init__(detail)
