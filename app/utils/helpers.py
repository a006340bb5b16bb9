from collections.abc import MutableMapping
from datetime import datetime
from math import ceil
from re import sub
from typing import Any
from unicodedata import normalize
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Match


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return the current local date and time as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(
        "%Y-%m-%d %H:%M:%S",
    )


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    for route in routes:
        if type(route) is APIRoute and route.matches(scope)[0] == Match.FULL:
            return route.summary

    return None


def slugify(text: str) -> str:
    """
    Build a URL-friendly slug.

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
        >>> slugify("  Café  Culture ")
        'cafe-culture'

    Text with no ASCII letters or digits left, such as "Кино", gets a
    random 8-character hex slug instead of an empty one.
    """
    ascii_text = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = sub(r"[^a-z0-9]+", "-", ascii_text.lower())
    return slug.strip("-") or uuid4().hex[:8]


def page_count(total: int, limit: int) -> int:
    """Number of pages needed to show `total` items, `limit` per page."""
    return ceil(total / limit) if limit > 0 else 0
