"""Tests for the concrete repositories: derived fields and error mapping."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.errors import (
    CategoryNotFoundError,
    DatabaseConnectionError,
    DatabaseError,
    DependencyError,
    DuplicateEntryError,
    DuplicateNameError,
)
from app.models import CategoryDB, Role
from app.repositories import CategoryRepository, PostRepository, UserRepository
from app.schemas import CategoryCreate, CategoryUpdate, PostCreate, UserCreate


class TestCategoryRepository:
    async def test_create_derives_slug(self, session: MagicMock) -> None:
        repo = CategoryRepository(session)

        category = await repo.create(CategoryCreate(name="Machine Learning"))

        assert category.slug == "machine-learning"
        session.add.assert_called_once_with(category)
        session.flush.assert_awaited_once()

    def test_only_name_is_unique(self) -> None:
        columns = CategoryDB.__table__.c

        assert columns.name.unique
        assert not columns.slug.unique

    async def test_duplicate_name(
        self,
        session: MagicMock,
        unique_violation: IntegrityError,
    ) -> None:
        session.flush.side_effect = unique_violation
        repo = CategoryRepository(session)

        with pytest.raises(DuplicateNameError) as exc_info:
            await repo.create(CategoryCreate(name="Tech"))

        assert exc_info.value.code == "DuplicateName"
        session.rollback.assert_awaited_once()

    async def test_update_reslugs_on_rename(self, session: MagicMock) -> None:
        repo = CategoryRepository(session)
        category = CategoryDB(name="Tech", slug="tech")

        await repo.update(category, CategoryUpdate(name="Tech News"))

        assert category.name == "Tech News"
        assert category.slug == "tech-news"
        assert category.updated_at is not None

    async def test_update_keeps_slug_otherwise(self, session: MagicMock) -> None:
        repo = CategoryRepository(session)
        category = CategoryDB(name="Tech", slug="tech")

        await repo.update(category, CategoryUpdate(description="Gadgets"))

        assert category.slug == "tech"
        assert category.description == "Gadgets"

    async def test_delete_blocked_by_foreign_key(
        self,
        session: MagicMock,
        fk_violation: IntegrityError,
    ) -> None:
        session.flush.side_effect = fk_violation
        repo = CategoryRepository(session)

        with pytest.raises(DependencyError):
            await repo.delete(CategoryDB(name="Tech", slug="tech"))


class TestPostRepository:
    def payload(self) -> PostCreate:
        return PostCreate(
            title="Hello World",
            content="Some meaningful content",
            category=uuid4(),
            tags=["Python", "python", " web "],
        )

    async def test_create_stamps_author(self, session: MagicMock) -> None:
        author_id = uuid4()
        data = self.payload()

        post = await PostRepository(session).create(data, author_id=author_id)

        assert post.author_id == author_id
        assert post.category_id == data.category_id
        assert post.slug == "hello-world"
        assert post.tags == ["python", "web"]

    async def test_dangling_category(
        self,
        session: MagicMock,
        fk_violation: IntegrityError,
    ) -> None:
        session.flush.side_effect = fk_violation

        with pytest.raises(CategoryNotFoundError):
            await PostRepository(session).create(self.payload(), author_id=uuid4())

    async def test_duplicate_slug(
        self,
        session: MagicMock,
        unique_violation: IntegrityError,
    ) -> None:
        session.flush.side_effect = unique_violation

        with pytest.raises(DuplicateEntryError, match="A post with this title already exists"):
            await PostRepository(session).create(self.payload(), author_id=uuid4())

    async def test_other_integrity_error(self, session: MagicMock) -> None:
        session.flush.side_effect = IntegrityError("INSERT", {}, Exception("check constraint"))

        with pytest.raises(DatabaseError) as exc_info:
            await PostRepository(session).create(self.payload(), author_id=uuid4())

        assert exc_info.value.status_code == 500
        assert exc_info.value.to_content()["error"] == "Server Error"

    async def test_connection_failure(self, session: MagicMock) -> None:
        session.flush.side_effect = OperationalError("INSERT", {}, Exception("connection refused"))

        with pytest.raises(DatabaseConnectionError):
            await PostRepository(session).create(self.payload(), author_id=uuid4())

    async def test_add_comment(self, session: MagicMock) -> None:
        post_id, user_id = uuid4(), uuid4()

        comment = await PostRepository(session).add_comment(post_id, user_id, "Nice post")

        assert comment.post_id == post_id
        assert comment.user_id == user_id
        assert comment.content == "Nice post"
        session.add.assert_called_once_with(comment)


class TestUserRepository:
    def payload(self) -> UserCreate:
        return UserCreate(username="alice", email="Alice@Example.com", password="secret123")

    async def test_create_lowercases_email(self, session: MagicMock) -> None:
        user = await UserRepository(session).create(self.payload(), password_hash="hashed")

        assert user.email == "alice@example.com"
        assert user.role == Role.MEMBER
        assert user.password_hash == "hashed"

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ('unique constraint "ix_users_username"', "Username already exists"),
            ('unique constraint "ix_users_email"', "Email already exists"),
            ("duplicate key value", "User already exists"),
        ],
    )
    async def test_duplicate_messages(
        self,
        session: MagicMock,
        message: str,
        expected: str,
    ) -> None:
        session.flush.side_effect = IntegrityError("INSERT", {}, Exception(message))

        with pytest.raises(DuplicateEntryError, match=expected):
            await UserRepository(session).create(self.payload(), password_hash="hashed")

    async def test_identity_without_password(self, session: MagicMock) -> None:
        user_id = uuid4()
        row = MagicMock(
            uuid=user_id,
            username="alice",
            email="alice@example.com",
            role="admin",
            is_active=True,
            first_name=None,
            last_name=None,
        )
        result = MagicMock()
        result.one_or_none.return_value = row
        session.execute.return_value = result

        identity = await UserRepository(session).get_identity(user_id)

        assert identity is not None
        assert identity.role is Role.ADMIN
        assert not hasattr(identity, "password_hash")
        statement = session.execute.await_args.args[0]
        assert "password_hash" not in [c.name for c in statement.selected_columns]

    async def test_identity_missing(self, session: MagicMock) -> None:
        result = MagicMock()
        result.one_or_none.return_value = None
        session.execute.return_value = result

        assert await UserRepository(session).get_identity(uuid4()) is None

    async def test_lookup_by_email_is_lowercased(self, session: MagicMock) -> None:
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session.execute.return_value = result

        assert await UserRepository(session).get_by_email("Alice@Example.COM") is None

        statement = session.execute.await_args.args[0]
        params = statement.compile().params
        assert list(params.values()) == ["alice@example.com"]
