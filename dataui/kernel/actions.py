"""
DataUI Kernel — Action Construction

Factory functions for creating well-formed actions.
Used by the table adapter to turn user events into reducer input,
and by tests to build actions concisely.
"""

from __future__ import annotations

from typing import Any

from dataui.kernel.types import Action


def make_action(type: str, **payload: Any) -> Action:
    """Build an Action from a type and keyword payload."""
    return Action(type=type, payload=payload)


def search(term: str) -> Action:
    return make_action("view.search", term=term)


def column_filter(key: str, value: Any) -> Action:
    return make_action("view.filter", key=key, value=value)


def sort(field: str) -> Action:
    return make_action("view.sort", field=field)


def page(n: int) -> Action:
    return make_action("view.page", page=n)


def next_page() -> Action:
    return make_action("view.page_next")


def prev_page() -> Action:
    return make_action("view.page_prev")


def page_size(n: int) -> Action:
    return make_action("view.page_size", page_size=n)
