"""
DataUI Kernel — View State Reducer

Pure functions over (records, ViewState):

  reduce(state, action, records, columns) → ReduceResult
  derive(records, state, columns)         → Derived
  build_query_options(columns, state)     → QueryOptions

No side effects. No IO. Deterministic. The input state is never modified;
accepted actions return a new ViewState.

Pipeline order is fixed: search → column filters → stable sort → page slice.
"""

from __future__ import annotations

import copy
import math
import re
from collections.abc import Iterable, Sequence
from typing import Any

from dataui.kernel.types import (
    ASC,
    DEFAULT_PAGE_SIZE,
    DESC,
    FILTER_ALL,
    Action,
    ColumnSpec,
    Derived,
    QueryOptions,
    ReduceResult,
    SortSpec,
    ViewState,
    Warning,
)
from dataui.kernel.values import coerce, get_field, matches, record_values, sort_key, to_text

_INT_RE = re.compile(r"-?\d+", re.ASCII)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_view_state(page_size: int = DEFAULT_PAGE_SIZE) -> ViewState:
    """No search, no filters, no sort, first page."""
    return ViewState(page_size=page_size)


def reduce(
    state: ViewState,
    action: Action,
    records: Sequence[Any] = (),
    columns: Sequence[ColumnSpec] | None = None,
) -> ReduceResult:
    """
    Apply one action to the current view state.

    `records` is only read to keep current_page in range after actions
    that can shrink the filtered set. `columns`, when given, lets the
    reducer reject sorts on undeclared columns.
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return ReduceResult(
            state=state,
            applied=False,
            error=f"UNKNOWN_ACTION: {action.type}",
        )

    new_state = copy.deepcopy(state)
    payload = action.payload if isinstance(action.payload, dict) else {}
    return handler(new_state, payload, records, columns, state)


def replay(
    actions: Iterable[Action],
    records: Sequence[Any] = (),
    columns: Sequence[ColumnSpec] | None = None,
    state: ViewState | None = None,
) -> ViewState:
    """
    Fold a sequence of actions over a view state.
    Rejected actions are skipped.
    """
    current = state if state is not None else empty_view_state()
    for action in actions:
        result = reduce(current, action, records, columns)
        if result.applied:
            current = result.state
    return current


def filter_records(records: Iterable[Any], state: ViewState) -> list[Any]:
    """Free-text search ANDed with every active column filter. Input order is kept."""
    term = state.search_term or ""
    filters = [(k, v) for k, v in state.column_filters.items() if _is_active_filter(v)]

    result = []
    for record in records:
        if term and not any(matches(v, term) for v in record_values(record)):
            continue
        if all(matches(get_field(record, key), to_text(value)) for key, value in filters):
            result.append(record)
    return result


def sort_records(
    rows: list[Any],
    sort: SortSpec | None,
    columns: Sequence[ColumnSpec] | None = None,
) -> list[Any]:
    """
    Stable sort under the total order in values.sort_key. No sort keeps input order.

    When the sorted column is declared, string values are first read as its
    value kind, so "9" sorts before "10" in a number column.
    """
    if sort is None:
        return list(rows)
    column = next((c for c in columns or () if c.key == sort.field), None)
    kind = column.value_kind if column is not None else "text"
    return sorted(
        rows,
        key=lambda r: sort_key(coerce(get_field(r, sort.field), kind)),
        reverse=sort.direction == DESC,
    )


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 1
    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, total: int, page_size: int) -> int:
    return min(max(1, page), page_count(total, page_size))


def derive(
    records: Sequence[Any],
    state: ViewState,
    columns: Sequence[ColumnSpec] | None = None,
) -> Derived:
    """
    Returns, in order: the full filtered+sorted rows, the current page slice,
    the filtered count and the page count. The slice always uses a page
    clamped into range, even if the state itself is stale.
    """
    rows = sort_records(filter_records(records, state), state.sort, columns)
    total = len(rows)
    page_size = state.page_size if state.page_size > 0 else DEFAULT_PAGE_SIZE
    pages = page_count(total, page_size)
    page = clamp_page(state.current_page, total, page_size)
    start = (page - 1) * page_size
    return Derived(
        rows=rows,
        page_rows=rows[start : start + page_size],
        total=total,
        total_pages=pages,
        page=page,
    )


def build_query_options(columns: Sequence[ColumnSpec], state: ViewState) -> QueryOptions:
    """
    Snapshot the view state for the remote API.

    The free-text search term is client-only and is not included.
    reset_cache is always set so every explicit query bypasses caches.
    """
    return QueryOptions(
        fields=tuple(col.key for col in columns),
        search={k: v for k, v in state.column_filters.items() if _is_active_filter(v)},
        sort=(state.sort,) if state.sort else (),
        page=state.current_page,
        limit=state.page_size,
        reset_cache=True,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(state: ViewState, code: str, msg: str) -> ReduceResult:
    return ReduceResult(state=state, applied=False, error=f"{code}: {msg}")


def _ok(state: ViewState, warnings: list[Warning] | None = None) -> ReduceResult:
    return ReduceResult(state=state, applied=True, warnings=warnings or [])


def _is_active_filter(value: Any) -> bool:
    return value is not None and value != "" and value != FILTER_ALL


def _as_int(value: Any) -> int | None:
    """Accept ints, integral floats and digit strings (select boxes hand back strings)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        return int(value.strip())
    return None


def _clamp(state: ViewState, records: Sequence[Any]) -> ViewState:
    total = len(filter_records(records, state))
    state.current_page = clamp_page(state.current_page, total, state.page_size)
    return state


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_search(state, p, records, columns, original) -> ReduceResult:
    term = p.get("term")
    state.search_term = term if isinstance(term, str) else to_text(term)
    return _ok(_clamp(state, records))


def _handle_filter(state, p, records, columns, original) -> ReduceResult:
    key = p.get("key")
    if not isinstance(key, str) or not key:
        return _reject(original, "UNKNOWN_COLUMN", f"invalid filter key {key!r}")

    value = p.get("value")
    if not _is_active_filter(value):
        state.column_filters.pop(key, None)
    else:
        state.column_filters[key] = value if isinstance(value, str) else to_text(value)
    return _ok(_clamp(state, records))


def _handle_sort(state, p, records, columns, original) -> ReduceResult:
    field_name = p.get("field")
    if not isinstance(field_name, str) or not field_name:
        return _reject(original, "UNKNOWN_COLUMN", f"invalid sort field {field_name!r}")

    warnings: list[Warning] = []
    if columns is not None:
        column = next((c for c in columns if c.key == field_name), None)
        if column is None:
            return _reject(original, "UNKNOWN_COLUMN", f"no column {field_name!r}")
        if not column.sortable:
            warnings.append(Warning(
                code="NOT_SORTABLE",
                message=f"column {field_name!r} is not declared sortable",
                details={"field": field_name},
            ))

    if state.sort is not None and state.sort.field == field_name:
        state.sort = state.sort.flipped()
    else:
        state.sort = SortSpec(field=field_name, direction=ASC)
    return _ok(state, warnings)


def _handle_page(state, p, records, columns, original) -> ReduceResult:
    n = _as_int(p.get("page"))
    if n is None:
        return _reject(original, "INVALID_PAGE", f"page must be an integer, got {p.get('page')!r}")
    state.current_page = n
    return _ok(_clamp(state, records))


def _handle_page_next(state, p, records, columns, original) -> ReduceResult:
    state.current_page += 1
    return _ok(_clamp(state, records))


def _handle_page_prev(state, p, records, columns, original) -> ReduceResult:
    state.current_page -= 1
    return _ok(_clamp(state, records))


def _handle_page_size(state, p, records, columns, original) -> ReduceResult:
    n = _as_int(p.get("page_size"))
    if n is None or n <= 0:
        return _reject(original, "INVALID_PAGE_SIZE", f"page size must be a positive integer, got {p.get('page_size')!r}")
    # Record positions shift with the page size, so prior offsets are meaningless.
    state.page_size = n
    state.current_page = 1
    return _ok(state)


_HANDLERS: dict[str, Any] = {
    "view.search": _handle_search,
    "view.filter": _handle_filter,
    "view.sort": _handle_sort,
    "view.page": _handle_page,
    "view.page_next": _handle_page_next,
    "view.page_prev": _handle_page_prev,
    "view.page_size": _handle_page_size,
}
