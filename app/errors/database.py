from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class DatabaseError(BaseAppError):
    """Base exception for store failures. Rendered without internal detail."""

    code = "DatabaseError"

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)

    def to_content(self) -> dict:
        if self.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            return {"success": False, "error": "Server Error", "code": self.code}
        return super().to_content()


class DatabaseConnectionError(DatabaseError):
    """Exception raised when the store cannot be reached."""

    code = "DatabaseConnectionError"

    def __init__(self, detail: str = "Failed to connect to the database") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class ConflictError(DatabaseError):
    """Exception raised when a unique field collides with an existing record."""

    code = "Conflict"

    def __init__(self, detail: str = "A record with this value already exists") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class DuplicateNameError(ConflictError):
    """Exception raised when a category name is already taken."""

    code = "DuplicateName"

    def __init__(self) -> None:
        super().__init__("A category with this name already exists")


class DuplicateEntryError(ConflictError):
    """Exception raised for any other unique violation."""

    code = "DuplicateEntry"


class NotFoundError(DatabaseError):
    """Exception raised when a record is not found."""

    code = "NotFound"

    def __init__(self, detail: str = "Record not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class CategoryNotFoundError(DatabaseError):
    """A post write references a category that does not exist."""

    code = "CategoryNotFound"

    def __init__(self) -> None:
        super().__init__("Category not found", HTTP_400_BAD_REQUEST)


class DependencyError(DatabaseError):
    """Exception raised when a delete is blocked by existing references."""

    code = "HasDependents"

    def __init__(
        self,
        detail: str = (
            "Cannot delete category that has posts. "
            "Please reassign or delete the posts first."
        ),
    ) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


database_exception_handler = create_exception_handler(logger)
