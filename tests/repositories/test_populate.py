"""Tests for reference expansion on BaseRepository."""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import UUID, uuid4

import pytest

from app.models import PUBLIC_USER_FIELDS, CategoryDB, UserDB
from app.repositories import CategoryRepository, Expansion
from app.services.query import AUTHOR, CATEGORY, COMMENT_AUTHOR


def store_lookup(store: dict[UUID, dict]):
    """Fake `_lookup` answering from `store`, recording each batch of ids."""
    batches: list[set[UUID]] = []

    async def lookup(expansion: Expansion, ids: set[UUID]) -> dict[UUID, dict]:
        batches.append(set(ids))
        return {
            i: {"id": i, **{name: store[i][name] for name in expansion.fields}}
            for i in ids
            if i in store
        }

    return lookup, batches


@pytest.fixture
def repo(session: MagicMock) -> CategoryRepository:
    return CategoryRepository(session)


class TestExpand:
    async def test_author_expanded_to_public_fields(self, repo: CategoryRepository) -> None:
        author_id = uuid4()
        store = {
            author_id: {
                "username": "alice",
                "first_name": "Alice",
                "last_name": "Tester",
                "password_hash": "secret",
            },
        }
        lookup, _ = store_lookup(store)
        documents = [{"author_id": author_id, "title": "Hello"}]

        with patch.object(repo, "_lookup", lookup):
            await repo.populate(documents, [AUTHOR])

        assert documents[0]["author"] == {
            "id": author_id,
            "username": "alice",
            "first_name": "Alice",
            "last_name": "Tester",
        }
        assert "password_hash" not in documents[0]["author"]

    async def test_one_batch_per_expansion(self, repo: CategoryRepository) -> None:
        authors = [uuid4(), uuid4()]
        category_id = uuid4()
        store = {a: dict.fromkeys(PUBLIC_USER_FIELDS, "x") for a in authors}
        store[category_id] = {"name": "Tech", "slug": "tech"}
        lookup, batches = store_lookup(store)
        documents = [
            {"author_id": authors[0], "category_id": category_id},
            {"author_id": authors[1], "category_id": category_id},
            {"author_id": authors[0], "category_id": category_id},
        ]

        with patch.object(repo, "_lookup", lookup):
            await repo.populate(documents, [AUTHOR, CATEGORY])

        assert batches == [set(authors), {category_id}]
        assert all(doc["category"]["slug"] == "tech" for doc in documents)

    async def test_dangling_reference_becomes_none(self, repo: CategoryRepository) -> None:
        lookup, _ = store_lookup({})
        documents = [{"category_id": uuid4()}]

        with patch.object(repo, "_lookup", lookup):
            await repo.populate(documents, [CATEGORY])

        assert documents[0]["category"] is None

    async def test_nested_comment_authors(self, repo: CategoryRepository) -> None:
        alice, bob = uuid4(), uuid4()
        store = {
            alice: {"username": "alice", "first_name": None, "last_name": None},
            bob: {"username": "bob", "first_name": "Bob", "last_name": None},
        }
        lookup, batches = store_lookup(store)
        documents = [
            {"comments": [{"user_id": alice, "content": "a"}, {"user_id": bob, "content": "b"}]},
            {"comments": []},
        ]

        with patch.object(repo, "_lookup", lookup):
            await repo.populate(documents, [COMMENT_AUTHOR])

        first, second = documents[0]["comments"]
        assert first["user"]["username"] == "alice"
        assert second["user"]["first_name"] == "Bob"
        assert batches == [{alice, bob}]
        assert "user" not in documents[1]

    async def test_returns_same_documents(self, repo: CategoryRepository) -> None:
        documents: list[dict] = []
        assert await repo.populate(documents, [AUTHOR]) is documents


class TestLookup:
    async def test_no_ids_no_query(self, repo: CategoryRepository, session: MagicMock) -> None:
        assert await repo._lookup(CATEGORY, set()) == {}
        session.execute.assert_not_awaited()

    async def test_rows_keyed_by_id(self, repo: CategoryRepository, session: MagicMock) -> None:
        category_id = uuid4()
        result = MagicMock()
        result.all.return_value = [(category_id, "Tech", "tech")]
        session.execute = AsyncMock(return_value=result)

        lookup = await repo._lookup(CATEGORY, {category_id})

        assert lookup == {category_id: {"id": category_id, "name": "Tech", "slug": "tech"}}

    async def test_selects_only_requested_columns(
        self,
        repo: CategoryRepository,
        session: MagicMock,
    ) -> None:
        result = MagicMock()
        result.all.return_value = []
        session.execute = AsyncMock(return_value=result)

        await repo._lookup(AUTHOR, {uuid4()})

        statement = session.execute.await_args.args[0]
        selected = [column.name for column in statement.selected_columns]
        assert selected == ["uuid", "username", "first_name", "last_name"]
        assert "password_hash" not in selected


def test_expansions_target_expected_tables() -> None:
    assert AUTHOR.model is UserDB
    assert CATEGORY.model is CategoryDB
    assert COMMENT_AUTHOR.path == "comments.user"
