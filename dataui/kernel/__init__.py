"""
DataUI Kernel — the pure data-browsing core.

Components:
  reducer        — (view state, action) → view state, and records + state → visible slice
  query_builder  — query options → URL query string  (pure, deterministic)
  table          — one table's adapter: owns the view state, talks to callbacks

Helpers:
  values         — stringification and total order for record values
  renderer       — plain-text table rendering
"""

from dataui.kernel.query_builder import RequestQueryBuilder, encode_query
from dataui.kernel.reducer import (
    build_query_options,
    derive,
    empty_view_state,
    reduce,
    replay,
)
from dataui.kernel.renderer import format_cell, render_text
from dataui.kernel.table import DataTable
from dataui.kernel.types import ColumnSpec, QueryOptions, SortSpec, ViewState

__all__ = [
    "reduce",
    "replay",
    "derive",
    "empty_view_state",
    "build_query_options",
    "encode_query",
    "RequestQueryBuilder",
    "format_cell",
    "render_text",
    "DataTable",
    "ColumnSpec",
    "QueryOptions",
    "SortSpec",
    "ViewState",
]
