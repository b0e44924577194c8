"""
DataUI Kernel — Text Renderer

Renders a derived table view as plain text (terminal, logs, snapshots in
tests). Cell formatting follows the column's value kind.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from dataui.kernel.types import ASC, MISSING_DISPLAY, ColumnSpec, Derived, ViewState
from dataui.kernel.values import MISSING, NUMBER, classify, get_field, to_text

SORT_ARROWS: dict[str, str] = {"ASC": "↑", "DESC": "↓"}

LOADING_TEXT = "Loading data..."
EMPTY_TEXT = "No data found"


# ---------------------------------------------------------------------------
# Cell formatting
# ---------------------------------------------------------------------------


def format_cell(value: Any, column: ColumnSpec) -> str:
    """Display text for one cell. Missing values always show as "-"."""
    if classify(value) == MISSING:
        return MISSING_DISPLAY

    if column.value_kind == "date":
        return _format_date(value)
    if column.value_kind == "number" and classify(value) == NUMBER:
        return _format_number(value)
    return to_text(value)


def _format_date(value: Any) -> str:
    """M/D/YYYY. Strings are parsed as ISO; anything unparseable is shown as-is."""
    d: date | None = None
    if isinstance(value, date):
        d = value
    elif isinstance(value, str):
        try:
            d = datetime.fromisoformat(value.strip())
        except ValueError:
            d = None
    if d is None:
        return to_text(value)
    return f"{d.month}/{d.day}/{d.year}"


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.3f}".rstrip("0").rstrip(".")
    return f"{int(value):,}"


# ---------------------------------------------------------------------------
# Table rendering
# ---------------------------------------------------------------------------


def summary_lines(derived: Derived) -> list[str]:
    return [
        f"Showing {len(derived.page_rows)} of {derived.total} results",
        f"Page {derived.page} of {derived.total_pages}",
    ]


def header_label(column: ColumnSpec, state: ViewState) -> str:
    label = column.label or column.key
    if column.sortable and state.sort is not None and state.sort.field == column.key:
        return f"{label} {SORT_ARROWS.get(state.sort.direction, SORT_ARROWS[ASC])}"
    return label


def render_text(
    title: str,
    columns: Sequence[ColumnSpec],
    derived: Derived,
    state: ViewState,
    *,
    loading: bool = False,
    description: str | None = None,
) -> str:
    """Render the current page as a fixed-width text table."""
    parts: list[str] = []

    if title:
        parts.append(title)
        parts.append("=" * len(title))
    if description:
        parts.append(description)
    if parts:
        parts.append("")

    parts.extend(summary_lines(derived))
    parts.append("")

    headers = [header_label(col, state) for col in columns]
    if loading:
        body: list[list[str]] = []
    else:
        body = [[format_cell(get_field(row, col.key), col) for col in columns] for row in derived.page_rows]

    widths = [len(h) for h in headers]
    for row in body:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    parts.append(_join_row(headers, widths))
    parts.append("-+-".join("-" * w for w in widths))

    if loading:
        parts.append(LOADING_TEXT)
    elif not body:
        parts.append(EMPTY_TEXT)
    else:
        for row in body:
            parts.append(_join_row(row, widths))

    if derived.total_pages > 1:
        parts.append("")
        parts.append(f"{derived.page} / {derived.total_pages}")

    return "\n".join(line.rstrip() for line in parts).rstrip()


def _join_row(cells: list[str], widths: list[int]) -> str:
    return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths, strict=True))
