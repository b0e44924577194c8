"""Table configuration models for data supplied by the UI collaborator."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from dataui.kernel.types import ASC, DEFAULT_PAGE_SIZE, FILTER_ALL, ColumnSpec, SortSpec, ViewState


class ColumnModel(BaseModel):
    """One column as declared by the collaborator (`type` is the value kind)."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    key: str = Field(min_length=1)
    label: str = ""
    sortable: bool = False
    filterable: bool = False
    value_kind: Literal["text", "number", "date", "status"] = Field(default="text", alias="type")

    def to_spec(self) -> ColumnSpec:
        return ColumnSpec(
            key=self.key,
            label=self.label or self.key,
            sortable=self.sortable,
            filterable=self.filterable,
            value_kind=self.value_kind,
        )


class SortModel(BaseModel):
    model_config = {"extra": "forbid"}

    field: str = Field(min_length=1)
    order: Literal["ASC", "DESC"] = ASC


class ViewStateModel(BaseModel):
    """Initial selections for a table."""

    model_config = {"extra": "forbid"}

    search: str = ""
    filters: dict[str, str] = Field(default_factory=dict)
    sort: SortModel | None = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)

    def to_state(self) -> ViewState:
        return ViewState(
            search_term=self.search,
            column_filters={k: v for k, v in self.filters.items() if v not in ("", FILTER_ALL)},
            sort=SortSpec(field=self.sort.field, direction=self.sort.order) if self.sort else None,
            current_page=self.page,
            page_size=self.page_size,
        )


class TableConfig(BaseModel):
    """A complete table: columns, records and optional initial view state."""

    model_config = {"extra": "forbid"}

    title: str = ""
    description: str | None = None
    resource: str | None = None  # remote API resource name, e.g. "students"
    columns: list[ColumnModel] = Field(min_length=1)
    data: list[dict[str, Any]] = Field(default_factory=list)
    view: ViewStateModel | None = None

    @field_validator("columns")
    @classmethod
    def unique_keys(cls, columns: list[ColumnModel]) -> list[ColumnModel]:
        seen: set[str] = set()
        for col in columns:
            if col.key in seen:
                raise ValueError(f"duplicate column key: {col.key}")
            seen.add(col.key)
        return columns

    def column_specs(self) -> list[ColumnSpec]:
        return [col.to_spec() for col in self.columns]
