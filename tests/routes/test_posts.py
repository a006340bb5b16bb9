"""Tests for post and comment routes."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.models import CategoryDB, PostDB, UserDB
from tests._support.memory_store import Store


def new_post(category: CategoryDB, /, **overrides) -> dict:
    payload = {
        "title": "Getting Started",
        "content": "FastAPI is a modern web framework",
        "category": str(category.id),
        "isPublished": True,
    }
    payload.update(overrides)
    return payload


class TestList:
    async def test_second_page(
        self,
        client: AsyncClient,
        store: Store,
        member_user: UserDB,
        tech: CategoryDB,
    ) -> None:
        for age in range(12):
            store.add_post(member_user, tech, f"Post number {age}", age=age)

        response = await client.get("/api/posts", params={"page": 2, "limit": 5})

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 5
        assert body["pagination"] == {"page": 2, "limit": 5, "total": 12, "pages": 3}
        assert [p["title"] for p in body["data"]] == [f"Post number {i}" for i in range(5, 10)]

    async def test_only_published(
        self,
        client: AsyncClient,
        store: Store,
        member_user: UserDB,
        tech: CategoryDB,
        data_of,
    ) -> None:
        store.add_post(member_user, tech, "Visible")
        store.add_post(member_user, tech, "Hidden Draft", is_published=False)

        response = await client.get("/api/posts")

        assert [p["title"] for p in data_of(response)] == ["Visible"]

    async def test_author_and_category_populated(
        self,
        client: AsyncClient,
        member_post: PostDB,
        data_of,
    ) -> None:
        response = await client.get("/api/posts")

        (post,) = data_of(response)
        assert post["author"] == {
            "id": str(member_post.author_id),
            "username": "alice",
            "firstName": "Alice",
            "lastName": "Tester",
        }
        assert post["category"]["name"] == "Tech"
        assert "comments" not in post
        assert "password" not in response.text.lower()

    async def test_category_narrows(
        self,
        client: AsyncClient,
        store: Store,
        member_user: UserDB,
        tech: CategoryDB,
        data_of,
    ) -> None:
        travel = store.add_category("Travel")
        store.add_post(member_user, tech, "Async Python")
        store.add_post(member_user, travel, "Lisbon Weekend", age=1)
        store.add_post(member_user, travel, "Porto Draft", is_published=False)

        response = await client.get("/api/posts", params={"category": str(travel.id)})

        assert [p["title"] for p in data_of(response)] == ["Lisbon Weekend"]
        assert response.json()["pagination"]["total"] == 1

    async def test_search_matches_title_or_content(
        self,
        client: AsyncClient,
        store: Store,
        member_user: UserDB,
        tech: CategoryDB,
        data_of,
    ) -> None:
        store.add_post(member_user, tech, "FastAPI in Practice")
        store.add_post(
            member_user,
            tech,
            "Routing Notes",
            content="Path operations the fastapi way, step by step",
            age=1,
        )
        store.add_post(member_user, tech, "Django Tips", age=2)

        response = await client.get("/api/posts", params={"search": "FASTapi"})

        assert [p["title"] for p in data_of(response)] == ["FastAPI in Practice", "Routing Notes"]
        assert response.json()["pagination"]["total"] == 2

    async def test_search_and_category_combined(
        self,
        client: AsyncClient,
        store: Store,
        member_user: UserDB,
        tech: CategoryDB,
        data_of,
    ) -> None:
        travel = store.add_category("Travel")
        store.add_post(member_user, tech, "Python Packaging")
        store.add_post(member_user, travel, "Python Meetup in Lisbon", age=1)

        response = await client.get(
            "/api/posts",
            params={"category": str(tech.id), "search": "python"},
        )

        assert [p["title"] for p in data_of(response)] == ["Python Packaging"]

    async def test_search_wildcards_literal(
        self,
        client: AsyncClient,
        store: Store,
        member_user: UserDB,
        tech: CategoryDB,
        data_of,
    ) -> None:
        store.add_post(member_user, tech, "100% Coverage")
        store.add_post(member_user, tech, "Plain Title", age=1)

        percent = await client.get("/api/posts", params={"search": "%"})
        underscore = await client.get("/api/posts", params={"search": "_"})

        assert [p["title"] for p in data_of(percent)] == ["100% Coverage"]
        assert data_of(underscore) == []

    async def test_filters_forwarded(
        self,
        client: AsyncClient,
        store: Store,
        tech: CategoryDB,
    ) -> None:
        response = await client.get(
            "/api/posts",
            params={"category": str(tech.id), "search": "fastapi"},
        )

        assert response.status_code == 200
        assert len(store.last_filters) == 3

    async def test_blank_search_ignored(self, client: AsyncClient, store: Store) -> None:
        await client.get("/api/posts", params={"search": "   "})

        assert len(store.last_filters) == 1

    @pytest.mark.parametrize(
        ("params", "field"),
        [
            ({"page": 0}, "page"),
            ({"limit": 0}, "limit"),
            ({"limit": 101}, "limit"),
            ({"category": "tech"}, "category"),
        ],
    )
    async def test_invalid_query(self, client: AsyncClient, params: dict, field: str) -> None:
        response = await client.get("/api/posts", params=params)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field


class TestGet:
    async def test_counts_views(
        self,
        client: AsyncClient,
        member_post: PostDB,
        data_of,
    ) -> None:
        first = await client.get(f"/api/posts/{member_post.id}")
        second = await client.get(f"/api/posts/{member_post.id}")

        assert data_of(first)["viewCount"] == 1
        assert data_of(second)["viewCount"] == 2
        assert data_of(second)["comments"] == []

    async def test_unknown(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/posts/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Post not found"

    async def test_malformed_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/posts/123")

        assert response.status_code == 400


class TestCreate:
    async def test_author_from_credential(
        self,
        client: AsyncClient,
        store: Store,
        tech: CategoryDB,
        member_user: UserDB,
        other_user: UserDB,
        member_headers: dict[str, str],
        data_of,
    ) -> None:
        response = await client.post(
            "/api/posts",
            json=new_post(tech, author=str(other_user.uuid)),
            headers=member_headers,
        )

        assert response.status_code == 201
        data = data_of(response)
        assert data["author"]["username"] == "alice"
        assert data["slug"] == "getting-started"
        (post,) = store.posts.values()
        assert post.author_id == member_user.uuid

    async def test_unknown_category_creates_nothing(
        self,
        client: AsyncClient,
        store: Store,
        tech: CategoryDB,
        member_headers: dict[str, str],
    ) -> None:
        response = await client.post(
            "/api/posts",
            json=new_post(tech, category=str(uuid4())),
            headers=member_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CategoryNotFound"
        assert store.posts == {}

    async def test_duplicate_title(
        self,
        client: AsyncClient,
        tech: CategoryDB,
        member_post: PostDB,
        member_headers: dict[str, str],
    ) -> None:
        response = await client.post(
            "/api/posts",
            json=new_post(tech, title=member_post.title),
            headers=member_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "A post with this title already exists"

    async def test_non_latin_titles_coexist(
        self,
        client: AsyncClient,
        store: Store,
        tech: CategoryDB,
        member_headers: dict[str, str],
    ) -> None:
        for title in ("東京の週末", "Летние заметки"):
            response = await client.post(
                "/api/posts",
                json=new_post(tech, title=title),
                headers=member_headers,
            )
            assert response.status_code == 201, response.json()

        assert len({post.slug for post in store.posts.values()}) == 2

    async def test_short_content(
        self,
        client: AsyncClient,
        tech: CategoryDB,
        member_headers: dict[str, str],
    ) -> None:
        response = await client.post(
            "/api/posts",
            json=new_post(tech, content="too short"),
            headers=member_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "content"


class TestUpdate:
    async def test_author_updates(
        self,
        client: AsyncClient,
        member_post: PostDB,
        member_headers: dict[str, str],
        data_of,
    ) -> None:
        response = await client.put(
            f"/api/posts/{member_post.id}",
            json={"title": "Alice Rewrites"},
            headers=member_headers,
        )

        assert response.status_code == 200
        data = data_of(response)
        assert data["title"] == "Alice Rewrites"
        assert data["slug"] == "alice-rewrites"
        assert data["content"] == member_post.content

    async def test_sent_fields_validated(
        self,
        client: AsyncClient,
        member_post: PostDB,
        member_headers: dict[str, str],
    ) -> None:
        response = await client.put(
            f"/api/posts/{member_post.id}",
            json={"content": "too short"},
            headers=member_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "content"
        assert member_post.content == "Alice Writes has some meaningful content"

    async def test_admin_updates(
        self,
        client: AsyncClient,
        member_post: PostDB,
        admin_headers: dict[str, str],
    ) -> None:
        response = await client.put(
            f"/api/posts/{member_post.id}",
            json={"isPublished": False},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert member_post.is_published is False

    async def test_non_author_refused(
        self,
        client: AsyncClient,
        member_post: PostDB,
        other_headers: dict[str, str],
    ) -> None:
        response = await client.put(
            f"/api/posts/{member_post.id}",
            json={"title": "Bob Was Here"},
            headers=other_headers,
        )

        assert response.status_code == 401
        assert response.json()["code"] == "NotOwner"
        assert member_post.title == "Alice Writes"

    async def test_unknown_category(
        self,
        client: AsyncClient,
        member_post: PostDB,
        member_headers: dict[str, str],
    ) -> None:
        response = await client.put(
            f"/api/posts/{member_post.id}",
            json={"category": str(uuid4())},
            headers=member_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CategoryNotFound"

    async def test_unknown_post(self, client: AsyncClient, member_headers: dict[str, str]) -> None:
        response = await client.put(
            f"/api/posts/{uuid4()}",
            json={"title": "Nothing Here"},
            headers=member_headers,
        )

        assert response.status_code == 404


class TestDelete:
    async def test_non_author_refused(
        self,
        client: AsyncClient,
        store: Store,
        member_post: PostDB,
        other_headers: dict[str, str],
    ) -> None:
        response = await client.delete(f"/api/posts/{member_post.id}", headers=other_headers)

        assert response.status_code == 401
        assert member_post.id in store.posts

    @pytest.mark.parametrize("headers", ["member_headers", "admin_headers"])
    async def test_author_or_admin(
        self,
        client: AsyncClient,
        store: Store,
        member_post: PostDB,
        headers: str,
        request: pytest.FixtureRequest,
    ) -> None:
        response = await client.delete(
            f"/api/posts/{member_post.id}",
            headers=request.getfixturevalue(headers),
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Post deleted successfully"
        assert store.posts == {}


class TestComments:
    async def test_comment_author_populated(
        self,
        client: AsyncClient,
        member_post: PostDB,
        other_headers: dict[str, str],
        data_of,
    ) -> None:
        created = await client.post(
            f"/api/posts/{member_post.id}/comments",
            json={"content": "Great write-up!"},
            headers=other_headers,
        )
        assert created.status_code == 200
        assert data_of(created)["comments"][0]["user"]["username"] == "bob"

        fetched = await client.get(f"/api/posts/{member_post.id}")

        (comment,) = data_of(fetched)["comments"]
        assert comment["content"] == "Great write-up!"
        assert comment["user"]["username"] == "bob"
        assert set(comment["user"]) == {"id", "username", "firstName", "lastName"}
        assert "password" not in fetched.text.lower()

    async def test_comments_in_order(
        self,
        client: AsyncClient,
        member_post: PostDB,
        member_headers: dict[str, str],
        other_headers: dict[str, str],
        data_of,
    ) -> None:
        url = f"/api/posts/{member_post.id}/comments"
        await client.post(url, json={"content": "first"}, headers=other_headers)
        response = await client.post(url, json={"content": "second"}, headers=member_headers)

        comments = data_of(response)["comments"]
        assert [c["content"] for c in comments] == ["first", "second"]
        assert [c["user"]["username"] for c in comments] == ["bob", "alice"]

    async def test_requires_credential(self, client: AsyncClient, member_post: PostDB) -> None:
        response = await client.post(
            f"/api/posts/{member_post.id}/comments",
            json={"content": "anonymous"},
        )

        assert response.status_code == 401

    async def test_unknown_post(self, client: AsyncClient, member_headers: dict[str, str]) -> None:
        response = await client.post(
            f"/api/posts/{uuid4()}/comments",
            json={"content": "Hello?"},
            headers=member_headers,
        )

        assert response.status_code == 404

    @pytest.mark.parametrize("content", ["", "x" * 501])
    async def test_invalid_content(
        self,
        client: AsyncClient,
        member_post: PostDB,
        member_headers: dict[str, str],
        content: str,
    ) -> None:
        response = await client.post(
            f"/api/posts/{member_post.id}/comments",
            json={"content": content},
            headers=member_headers,
        )

        assert response.status_code == 400
