"""
DataUI Kernel — Table Adapter

Sits between the pure functions (reducer, query builder, renderer) and the
UI collaborator. One DataTable per rendered table; it exclusively owns that
table's ViewState.

Operations: apply_search, apply_column_filter, apply_sort, set_page,
set_page_size, next_page, prev_page, set_records, derive, query, refresh.

The adapter performs no IO itself. `query()` hands the encoded query string
to the caller's `on_query` callback and `refresh()` calls `on_refresh`;
whatever transport sits behind them is the collaborator's business.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from dataui.kernel import actions
from dataui.kernel.query_builder import RequestQueryBuilder
from dataui.kernel.reducer import build_query_options, derive, empty_view_state, reduce
from dataui.kernel.renderer import render_text
from dataui.kernel.types import (
    DEFAULT_PAGE_SIZE,
    Action,
    ColumnSpec,
    Derived,
    QueryOptions,
    ReduceResult,
    ViewState,
)

logger = logging.getLogger(__name__)


class DataTable:
    """Stateful adapter for one table instance."""

    def __init__(
        self,
        columns: Sequence[ColumnSpec | dict[str, Any]],
        records: Sequence[Any] = (),
        *,
        title: str = "",
        description: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        state: ViewState | None = None,
        on_query: Callable[[str], Any] | None = None,
        on_refresh: Callable[[], Any] | None = None,
    ) -> None:
        self.columns: tuple[ColumnSpec, ...] = tuple(
            c if isinstance(c, ColumnSpec) else ColumnSpec.from_dict(c) for c in columns
        )
        self.records: list[Any] = list(records)
        self.title = title
        self.description = description
        self.state: ViewState = state if state is not None else empty_view_state(page_size)
        # A caller-supplied state may point past the last page of these records.
        self.state = reduce(self.state, actions.page(self.state.current_page), self.records).state
        self.loading = False
        self.on_query = on_query
        self.on_refresh = on_refresh

    # -- user actions -------------------------------------------------------

    def dispatch(self, action: Action) -> ReduceResult:
        """Run one action through the reducer and keep the new state if accepted."""
        result = reduce(self.state, action, self.records, self.columns)
        if result.applied:
            self.state = result.state
        else:
            logger.warning("DataTable %r: rejected %s: %s", self.title, action.type, result.error)
        for w in result.warnings:
            logger.info("DataTable %r: %s: %s", self.title, w.code, w.message)
        return result

    def apply_search(self, term: str) -> ReduceResult:
        return self.dispatch(actions.search(term))

    def apply_column_filter(self, key: str, value: Any) -> ReduceResult:
        return self.dispatch(actions.column_filter(key, value))

    def apply_sort(self, field: str) -> ReduceResult:
        return self.dispatch(actions.sort(field))

    def set_page(self, n: int) -> ReduceResult:
        return self.dispatch(actions.page(n))

    def next_page(self) -> ReduceResult:
        return self.dispatch(actions.next_page())

    def prev_page(self) -> ReduceResult:
        return self.dispatch(actions.prev_page())

    def set_page_size(self, n: int) -> ReduceResult:
        return self.dispatch(actions.page_size(n))

    # -- data from the collaborator -----------------------------------------

    def set_records(self, records: Sequence[Any]) -> None:
        """Replace the record list wholesale and pull current_page back into range."""
        self.records = list(records)
        self.loading = False
        self.state = reduce(self.state, actions.page(self.state.current_page), self.records).state

    def set_loading(self, loading: bool) -> None:
        self.loading = bool(loading)

    # -- outputs ------------------------------------------------------------

    def derive(self) -> Derived:
        return derive(self.records, self.state, self.columns)

    def build_query_options(self) -> QueryOptions:
        return build_query_options(self.columns, self.state)

    def query(self) -> str:
        """Encode the current view as a query string and hand it to on_query."""
        query_string = RequestQueryBuilder.create(self.build_query_options()).query()
        logger.debug("DataTable %r: query %s", self.title, query_string)
        if self.on_query is not None:
            self.on_query(query_string)
        return query_string

    def refresh(self) -> None:
        logger.debug("DataTable %r: refresh requested", self.title)
        if self.on_refresh is not None:
            self.on_refresh()

    def render(self) -> str:
        return render_text(
            self.title,
            self.columns,
            self.derive(),
            self.state,
            loading=self.loading,
            description=self.description,
        )
