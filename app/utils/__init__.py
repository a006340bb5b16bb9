"""Utility helper functions."""

from app.utils.helpers import get_summary, host, page_count, slugify, today_str

__all__ = [
    "get_summary",
    "host",
    "page_count",
    "slugify",
    "today_str",
]
