"""
DataUI Kernel — Shared Types

Data classes used across values, reducer, query builder, renderer and table.
These are the contracts that bind the kernel together.

- ColumnSpec  — one declared table column (immutable, supplied once per table)
- ViewState   — search / column filters / sort / pagination for one table
- QueryOptions — serializable snapshot of a query for the remote API
- Derived     — (rows, page_rows, total, total_pages) derived from records + state
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VALUE_KINDS: set[str] = {"text", "number", "date", "status"}

ASC = "ASC"
DESC = "DESC"

# Column filter value meaning "no constraint". Distinct from "".
FILTER_ALL = "all"

# Display sentinel for missing / None record values.
MISSING_DISPLAY = "-"

DEFAULT_PAGE_SIZE = 10


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColumnSpec:
    """A declared table column."""

    key: str
    label: str = ""
    sortable: bool = False
    filterable: bool = False
    value_kind: str = "text"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ColumnSpec:
        kind = d.get("value_kind", d.get("type", "text"))
        return cls(
            key=d["key"],
            label=d.get("label", d["key"]),
            sortable=bool(d.get("sortable", False)),
            filterable=bool(d.get("filterable", False)),
            value_kind=kind if kind in VALUE_KINDS else "text",
        )


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: str = ASC

    def flipped(self) -> SortSpec:
        return SortSpec(field=self.field, direction=DESC if self.direction == ASC else ASC)

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "order": self.direction}


@dataclass(frozen=True)
class JoinSpec:
    field: str


@dataclass
class ViewState:
    """
    Client-side snapshot of one table's selections.

    Owned by exactly one table. The reducer never mutates a ViewState it
    was handed; every accepted action produces a new one.
    """

    search_term: str = ""
    column_filters: dict[str, str] = field(default_factory=dict)
    sort: SortSpec | None = None
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def to_dict(self) -> dict[str, Any]:
        return {
            "search_term": self.search_term,
            "column_filters": dict(self.column_filters),
            "sort": self.sort.to_dict() if self.sort else None,
            "current_page": self.current_page,
            "page_size": self.page_size,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ViewState:
        sort = d.get("sort")
        return cls(
            search_term=d.get("search_term", ""),
            column_filters=dict(d.get("column_filters", {})),
            sort=SortSpec(field=sort["field"], direction=sort.get("order", ASC)) if sort else None,
            current_page=d.get("current_page", 1),
            page_size=d.get("page_size", DEFAULT_PAGE_SIZE),
        )


@dataclass(frozen=True)
class QueryOptions:
    """
    Structured representation of a query intended for a remote API.
    Built once per "query" action; never modified afterwards.
    """

    fields: tuple[str, ...] = ()
    search: dict[str, Any] = field(default_factory=dict)
    joins: tuple[JoinSpec, ...] = ()
    sort: tuple[SortSpec, ...] = ()
    page: int = 0
    limit: int = 0
    reset_cache: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": list(self.fields),
            "search": dict(self.search),
            "joins": [{"field": j.field} for j in self.joins],
            "sort": [s.to_dict() for s in self.sort],
            "page": self.page,
            "limit": self.limit,
            "reset_cache": self.reset_cache,
        }


@dataclass
class Action:
    """A user action fed to the reducer. The reducer reads `type` and `payload`."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class Warning:
    """A non-fatal issue encountered during reduction."""

    code: str
    message: str
    details: dict[str, Any] | None = None


@dataclass
class ReduceResult:
    """
    Result of applying one action to a view state.
    The reducer never throws; it always returns one of these.
    """

    state: ViewState
    applied: bool
    warnings: list[Warning] = field(default_factory=list)
    error: str | None = None


class Derived(NamedTuple):
    """The visible slice of a table plus its counts, in this order."""

    rows: list[dict[str, Any]]
    page_rows: list[dict[str, Any]]
    total: int
    total_pages: int
    page: int = 1
