"""Shared building blocks for the per-resource schemas.

Every resource kind is decoded in two stages:

1. ``validate_attributes`` checks the raw ``attributes`` mapping against an
   ``AttributesModel`` subclass and returns the typed intermediate.
2. A ``build_*`` function maps that intermediate (plus any resolved
   relationship data) onto a frozen ``DomainModel``.

Pydantic runs in lax mode here on purpose: ids, linkage fields and counts
arrive as either JSON numbers or numeric strings depending on the server
version, and both must normalize to ``int``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Annotated, Any, TypeVar

import pydantic
from pydantic import BaseModel, BeforeValidator, ConfigDict, NonNegativeInt

from hitobito_client.errors import ValidationError

if TYPE_CHECKING:
    from hitobito_client.schemas.jsonapi import JSONAPIResource


def _reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise pass lax int parsing as 1/0.
    if isinstance(value, bool):
        raise ValueError("Input should be a valid integer, not a boolean")
    return value


# Integer from a JSON number or a numeric string.
Count = Annotated[int, BeforeValidator(_reject_bool)]
ResourceId = Annotated[NonNegativeInt, BeforeValidator(_reject_bool)]

AttributesT = TypeVar("AttributesT", bound="AttributesModel")

_JSON_TYPE_NAMES: dict[type, str] = {
    bool: "boolean",
    int: "number",
    float: "number",
    str: "string",
    list: "array",
    dict: "object",
}


class AttributesModel(BaseModel):
    """Typed view of a resource's ``attributes`` object. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class DomainModel(BaseModel):
    """Immutable, flattened record handed back to callers."""

    model_config = ConfigDict(frozen=True)


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


def _format_location(loc: Sequence[int | str], root: str | None) -> str:
    parts: list[str] = [root] if root else []
    for part in loc:
        if isinstance(part, int) and parts:
            parts[-1] = f"{parts[-1]}[{part}]"
        else:
            parts.append(str(part))
    return ".".join(parts) or "document"


def describe_validation_error(
    exc: pydantic.ValidationError,
    root: str | None = None,
) -> str:
    """Render the first error of a pydantic ``ValidationError`` as one line.

    Args:
        exc: The pydantic error to describe.
        root: Optional location prefix, e.g. ``"attributes"``.

    Returns:
        ``"<location>: <problem>"``, with the received JSON type appended
        for anything other than a missing field.
    """
    error = exc.errors()[0]
    location = _format_location(error["loc"], root)
    problem = error["msg"]
    if error["type"] != "missing":
        problem = f"{problem} (got {_json_type(error.get('input'))})"
    return f"{location}: {problem}"


def expect_type(resource: JSONAPIResource, expected: str) -> None:
    """Raise ``ValidationError`` unless the node's type tag is exactly ``expected``."""
    if resource.type != expected:
        raise ValidationError(
            f"type: expected '{expected}', got '{resource.type}'"
        )


def validate_attributes(
    model: type[AttributesT],
    resource: JSONAPIResource,
) -> AttributesT:
    """Validate ``resource.attributes`` against ``model``.

    Raises:
        ValidationError: Describing the first missing or mistyped field.
    """
    try:
        return model.model_validate(resource.attributes)
    except pydantic.ValidationError as exc:
        raise ValidationError(describe_validation_error(exc, root="attributes")) from exc
