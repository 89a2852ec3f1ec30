"""Response normalization for single-resource and list documents.

Validates the JSON:API envelope, builds the ``included`` index once, and runs
the kind's decoder over every primary node. List decoding is fail-fast: the
first malformed entry aborts the whole call, and the error names its index.
"""

from __future__ import annotations

from typing import Any, TypeVar

import pydantic

from hitobito_client.errors import ValidationError
from hitobito_client.resources import ResourceKind
from hitobito_client.schemas.base import describe_validation_error
from hitobito_client.schemas.jsonapi import JSONAPIListResponse, JSONAPISingleResponse
from hitobito_client.services.included import IncludedIndex

T = TypeVar("T")


def decode_single(document: Any, kind: ResourceKind[T]) -> T:
    """Decode a ``{data: {...}, included?: [...]}`` document.

    Args:
        document: Parsed JSON body.
        kind: Resource kind the accessor expects.

    Returns:
        The decoded domain entity.

    Raises:
        ValidationError: If ``data`` is missing, null, a list, carries the
            wrong type tag, or does not match the kind's schema.
    """
    try:
        envelope = JSONAPISingleResponse.model_validate(document)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            f"Invalid {kind.name} response: {describe_validation_error(exc)}"
        ) from exc

    included = IncludedIndex(envelope.included)
    try:
        return kind.decode(envelope.data, included)
    except ValidationError as exc:
        raise ValidationError(f"Invalid {kind.name} response: data: {exc}") from exc


def decode_list(document: Any, kind: ResourceKind[T]) -> list[T]:
    """Decode a ``{data: [...], included?: [...]}`` document.

    Entries keep their server order. One ``included`` index is shared by
    every entry.

    Raises:
        ValidationError: On the first entry (or envelope problem) that does
            not match.
    """
    try:
        envelope = JSONAPIListResponse.model_validate(document)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            f"Invalid {kind.name} response: {describe_validation_error(exc)}"
        ) from exc

    included = IncludedIndex(envelope.included)
    entities: list[T] = []
    for position, resource in enumerate(envelope.data):
        try:
            entities.append(kind.decode(resource, included))
        except ValidationError as exc:
            raise ValidationError(
                f"Invalid {kind.name} response: data[{position}]: {exc}"
            ) from exc
    return entities
