"""Helpers to tell a closed or crashed page apart from an ordinary failure."""

from __future__ import annotations

from typing import Any


def page_is_closed(page: Any | None) -> bool:
    if page is None:
        return True
    checker = getattr(page, "is_closed", None)
    if callable(checker):
        try:
            return bool(checker())
        except Exception:
            return True
    return False


def is_page_closed_error(exc: BaseException) -> bool:
    msg = str(exc or "").lower()
    return (
        ("target page" in msg and "closed" in msg)
        or "context or browser has been closed" in msg
        or "page closed" in msg
        or "browser has been closed" in msg
        or "target closed" in msg
        or "execution context was destroyed" in msg
    )
