"""Tests for app/utils/helpers.py."""

from unittest.mock import MagicMock

import pytest

from app.utils.helpers import host, page_count, slugify, today_str


class TestSlugify:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Hello, World!", "hello-world"),
            ("  Café  Culture ", "cafe-culture"),
            ("Python 3.12 Tips", "python-3-12-tips"),
        ],
    )
    def test_slugs(self, text: str, expected: str) -> None:
        assert slugify(text) == expected

    def test_case_insensitive(self) -> None:
        assert slugify("Tech") == slugify("tech")

    @pytest.mark.parametrize("text", ["---", "Кино", "日本", "!!"])
    def test_never_empty(self, text: str) -> None:
        slug = slugify(text)
        assert len(slug) == 8
        assert all(char in "0123456789abcdef" for char in slug)

    def test_non_ascii_slugs_differ(self) -> None:
        assert slugify("Кино") != slugify("Музыка")

    def test_symbols_collapse(self) -> None:
        assert slugify("C++") == slugify("C#") == "c"


class TestPageCount:
    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(12, 5, 3), (10, 5, 2), (0, 10, 0), (1, 10, 1), (5, 0, 0)],
    )
    def test_pages(self, total: int, limit: int, expected: int) -> None:
        assert page_count(total, limit) == expected


class TestHost:
    def test_client_host(self) -> None:
        request = MagicMock()
        request.client.host = "10.1.2.3"
        assert host(request) == "10.1.2.3"

    def test_missing_client(self) -> None:
        request = MagicMock()
        request.client = None
        assert host(request) == "unknown"


def test_today_str_format() -> None:
    value = today_str()
    assert len(value) == 19
    assert value[4] == "-" and value[10] == " " and value[13] == ":"
