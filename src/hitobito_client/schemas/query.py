"""Query-string options for list endpoints.

Encodes JSON:API-style ``filter[...]``, ``sort``, ``page[...]`` and
``include`` parameters. Brackets are always percent-encoded
(``filter%5Bprimary_group_id%5D=5``).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, Field


class ListOptions(BaseModel):
    """Filtering, sorting, pagination and side-loading for a list request."""

    filters: dict[str, Any] = Field(default_factory=dict)
    sort: str | None = None
    page: int | None = Field(default=None, ge=1)
    per_page: int | None = Field(default=None, ge=1)
    include: list[str] = Field(default_factory=list)


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_filter_value(item) for item in value)
    return str(value)


def query_params(
    *,
    filters: Mapping[str, Any] | None = None,
    sort: str | None = None,
    page: int | None = None,
    per_page: int | None = None,
    include: Iterable[str] = (),
) -> list[tuple[str, str]]:
    """Return the ordered ``(name, value)`` pairs for a request.

    Each filter key becomes its own ``filter[key]`` parameter; ``None``
    filter values are left out.
    """
    params: list[tuple[str, str]] = []
    for field, value in (filters or {}).items():
        if value is None:
            continue
        params.append((f"filter[{field}]", _filter_value(value)))
    if sort:
        params.append(("sort", sort))
    if page is not None:
        params.append(("page[number]", str(page)))
    if per_page is not None:
        params.append(("page[size]", str(per_page)))
    include = list(include)
    if include:
        params.append(("include", ",".join(include)))
    return params


def encode_query(options: ListOptions) -> str:
    """Encode list options as a query string, without the leading ``?``.

    Returns ``""`` when no option is set.
    """
    return urlencode(
        query_params(
            filters=options.filters,
            sort=options.sort,
            page=options.page,
            per_page=options.per_page,
            include=options.include,
        )
    )
