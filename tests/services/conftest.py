# tests/services/conftest.py
"""Mocked repositories for service tests."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

from app.models import CategoryDB, PostDB


@pytest.fixture
def category() -> CategoryDB:
    return CategoryDB(id=uuid4(), name="Tech", slug="tech", created_at=datetime.now(tz=UTC))


@pytest.fixture
def post_factory(category: CategoryDB):
    def build(author_id: UUID, **overrides) -> PostDB:
        values = {
            "id": uuid4(),
            "author_id": author_id,
            "category_id": category.id,
            "title": "Hello World",
            "slug": "hello-world",
            "content": "Some meaningful content",
            "tags": [],
            "is_published": True,
            "view_count": 0,
            "created_at": datetime.now(tz=UTC),
        }
        values.update(overrides)
        return PostDB(**values)

    return build


@pytest.fixture
def categories(category: CategoryDB) -> MagicMock:
    repo = MagicMock()
    repo.list_active = AsyncMock(return_value=[category])
    repo.get_by_id = AsyncMock(return_value=category)
    repo.exists = AsyncMock(return_value=True)
    repo.create = AsyncMock(return_value=category)
    repo.update = AsyncMock(return_value=category)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def posts() -> MagicMock:
    repo = MagicMock()
    repo.count_by_category = AsyncMock(return_value=0)
    repo.comments_for = AsyncMock(return_value=[])
    repo.populate = AsyncMock(side_effect=lambda documents, expansions: documents)
    repo.delete = AsyncMock()
    return repo
