# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before app is imported anywhere
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy-0123456789"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["LIMITER_ENABLED"] = "false"
os.environ["LOG_TO_FILE"] = "false"

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from app.auth.identity import Identity
from app.managers.token_manager import create_access_token
from app.models import Role, UserDB


def make_user(username: str, role: Role = Role.MEMBER, *, is_active: bool = True) -> UserDB:
    return UserDB(
        uuid=uuid4(),
        username=username,
        email=f"{username}@example.com",
        password_hash="$argon2id$v=19$m=19456,t=2,p=1$somesalt$somehash",
        first_name=username.capitalize(),
        last_name="Tester",
        role=role,
        is_active=is_active,
        created_at=datetime.now(tz=UTC),
    )


@pytest.fixture
def member_user() -> UserDB:
    return make_user("alice")


@pytest.fixture
def other_user() -> UserDB:
    return make_user("bob")


@pytest.fixture
def admin_user() -> UserDB:
    return make_user("root", Role.ADMIN)


@pytest.fixture
def inactive_user() -> UserDB:
    return make_user("ghost", is_active=False)


@pytest.fixture
def member(member_user: UserDB) -> Identity:
    return Identity.from_user(member_user)


@pytest.fixture
def other(other_user: UserDB) -> Identity:
    return Identity.from_user(other_user)


@pytest.fixture
def admin(admin_user: UserDB) -> Identity:
    return Identity.from_user(admin_user)


def bearer(user: UserDB) -> dict[str, str]:
    """Authorization header carrying a fresh credential for `user`."""
    return {"Authorization": f"Bearer {create_access_token(user.uuid)}"}


@pytest.fixture
def member_headers(member_user: UserDB) -> dict[str, str]:
    return bearer(member_user)


@pytest.fixture
def other_headers(other_user: UserDB) -> dict[str, str]:
    return bearer(other_user)


@pytest.fixture
def admin_headers(admin_user: UserDB) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture
def user_factory():
    """Build unsaved users: ``user_factory("carol", Role.ADMIN)``."""
    return make_user


@pytest.fixture
def headers_for():
    """Build auth headers for any user: ``headers_for(user)``."""
    return bearer
