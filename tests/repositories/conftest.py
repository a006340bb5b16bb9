# tests/repositories/conftest.py
"""Mocked async session for repository tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.execute = AsyncMock()
    return session


def integrity_error(message: str) -> IntegrityError:
    """IntegrityError as raised by the driver for `message`."""
    return IntegrityError("INSERT ...", {}, Exception(message))


@pytest.fixture
def unique_violation() -> IntegrityError:
    return integrity_error('duplicate key value violates unique constraint "ix_categories_name"')


@pytest.fixture
def fk_violation() -> IntegrityError:
    return integrity_error('insert or update on table "posts" violates foreign key constraint')
