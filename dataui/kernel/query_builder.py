"""
DataUI Kernel — Query Encoder

Pure mapping: QueryOptions → URL query string.

Parameter order is part of the contract:

  fields=a,b
  search[<key>]=<value>          (insertion order, empty values skipped)
  join[<i>]=<field>
  sort[<i>][field]=..., sort[<i>][order]=...
  page, limit                    (only when truthy)
  resetCache=true                (only when set)

Never raises. Options may be a QueryOptions or a plain mapping with the same
keys; absent or malformed optional entries are simply omitted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus, urlencode

from dataui.kernel.types import QueryOptions
from dataui.kernel.values import to_text

# Mapping-style options may use the wire spelling of these keys.
_ALIASES: dict[str, tuple[str, ...]] = {
    "joins": ("joins", "join"),
    "reset_cache": ("reset_cache", "resetCache"),
}


def encode_query(options: QueryOptions | Mapping[str, Any] | None) -> str:
    """Encode query options as a URL query string."""
    return urlencode(query_params(options), quote_via=_form_quote)


def query_params(options: QueryOptions | Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """The ordered (name, value) pairs that encode_query serializes."""
    params: list[tuple[str, str]] = []
    if options is None:
        return params

    fields = [to_text(f) for f in _seq(_get(options, "fields")) if to_text(f)]
    if fields:
        params.append(("fields", ",".join(fields)))

    search = _get(options, "search")
    if isinstance(search, Mapping):
        for key, value in search.items():
            if value is None or value == "":
                continue
            params.append((f"search[{key}]", to_text(value)))

    for i, join in enumerate(_seq(_get(options, "joins"))):
        field_name = _get(join, "field")
        if field_name is not None:
            params.append((f"join[{i}]", to_text(field_name)))

    for i, sort in enumerate(_seq(_get(options, "sort"))):
        field_name = _get(sort, "field")
        order = _get(sort, "direction")
        if order is None:
            order = _get(sort, "order")
        if field_name is None or order is None:
            continue
        params.append((f"sort[{i}][field]", to_text(field_name)))
        params.append((f"sort[{i}][order]", to_text(order)))

    page = _get(options, "page")
    if _truthy_number(page):
        params.append(("page", to_text(page)))

    limit = _get(options, "limit")
    if _truthy_number(limit):
        params.append(("limit", to_text(limit)))

    if _get(options, "reset_cache") is True:
        params.append(("resetCache", "true"))

    return params


class RequestQueryBuilder:
    """
    Holds one set of query options and encodes them on demand.

    Usage:
        RequestQueryBuilder.create(options).query()
    """

    def __init__(self) -> None:
        self._options: QueryOptions | Mapping[str, Any] = QueryOptions()

    @classmethod
    def create(cls, options: QueryOptions | Mapping[str, Any] | None = None) -> RequestQueryBuilder:
        builder = cls()
        if options is not None:
            builder._options = options
        return builder

    def query(self) -> str:
        return encode_query(self._options)

    def get_options(self) -> QueryOptions | Mapping[str, Any]:
        return self._options


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _get(obj: Any, name: str) -> Any:
    """Read an option from a mapping or an attribute, honoring wire-name aliases."""
    names = _ALIASES.get(name, (name,))
    if isinstance(obj, Mapping):
        for n in names:
            if n in obj:
                return obj[n]
        return None
    for n in names:
        if hasattr(obj, n):
            return getattr(obj, n)
    return None


def _form_quote(value: str, safe: str = "", encoding: str | None = None, errors: str | None = None) -> str:
    """application/x-www-form-urlencoded: "*" stays literal, "~" is escaped."""
    return quote_plus(value, safe + "*", encoding, errors).replace("~", "%7E")


def _seq(value: Any) -> list[Any]:
    if isinstance(value, list | tuple):
        return list(value)
    return []


def _truthy_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int | float) and value != 0 and value == value
