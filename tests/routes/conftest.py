# tests/routes/conftest.py
"""
Pytest fixtures for route tests.

Routes run against the real services, policy and identity gate. Only the
repositories are replaced by in-memory ones sharing a :class:`Store`.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.dependencies import get_category_repository, get_post_repository, get_user_repository
from app.main import app
from app.managers.rate_limiter import limiter
from app.models import CategoryDB, PostDB, UserDB
from tests._support.memory_store import (
    MemoryCategoryRepository,
    MemoryPostRepository,
    MemoryUserRepository,
    Store,
)


@pytest.fixture
def store(member_user: UserDB, other_user: UserDB, admin_user: UserDB) -> Store:
    """Store holding a member, a second member and an admin."""
    store = Store()
    for user in (member_user, other_user, admin_user):
        store.add_user(user)
    return store


@pytest.fixture
def tech(store: Store) -> CategoryDB:
    return store.add_category("Tech")


@pytest.fixture
def member_post(store: Store, member_user: UserDB, tech: CategoryDB) -> PostDB:
    return store.add_post(member_user, tech, "Alice Writes")


@pytest.fixture
async def client(store: Store) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client bound to the in-memory store."""
    app.dependency_overrides[get_user_repository] = lambda: MemoryUserRepository(store)
    app.dependency_overrides[get_category_repository] = lambda: MemoryCategoryRepository(store)
    app.dependency_overrides[get_post_repository] = lambda: MemoryPostRepository(store)
    enabled = limiter.enabled
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = enabled
    app.dependency_overrides.clear()


@pytest.fixture
def data_of() -> Callable[[Any], Any]:
    """Return the `data` member of a successful envelope."""

    def extract(response: Any) -> Any:
        body = response.json()
        assert body["success"] is True, body
        return body["data"]

    return extract
