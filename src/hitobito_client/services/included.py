"""Relationship resolution against a response's ``included`` side-table.

The index is built once per response and shared by every primary node in it,
so each reference is a dict lookup instead of a scan of ``included``.
References that point at nothing in the table are dropped; only a matched
node that fails its own schema is an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from hitobito_client.errors import ValidationError
from hitobito_client.schemas.jsonapi import JSONAPIRelationship, JSONAPIResource

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IncludedIndex:
    """Side-loaded resources keyed by ``(type, id)``.

    When ``included`` repeats a key the first occurrence wins.

    Args:
        resources: The ``included`` array of one response.
    """

    def __init__(self, resources: Iterable[JSONAPIResource] = ()) -> None:
        self._resources: dict[tuple[str, int], JSONAPIResource] = {}
        for resource in resources:
            self._resources.setdefault((resource.type, resource.id), resource)

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, key: object) -> bool:
        return key in self._resources

    def get(self, resource_type: str, resource_id: int) -> JSONAPIResource | None:
        """Return the included node for ``(resource_type, resource_id)``, if any."""
        return self._resources.get((resource_type, resource_id))

    def expand(
        self,
        relationship: JSONAPIRelationship | None,
        resource_type: str,
        decode: Callable[[JSONAPIResource, IncludedIndex], T],
    ) -> list[T]:
        """Decode every referenced node of ``resource_type`` in relationship order.

        References carrying a different explicit type, or missing from the
        index, are skipped. Duplicate references yield duplicate entries.

        Args:
            relationship: The relationship to resolve; ``None`` yields ``[]``.
            resource_type: Type tag the relationship points at.
            decode: Decoder for the referenced kind.

        Returns:
            Decoded sub-records.

        Raises:
            ValidationError: If a matched node does not fit its schema.
        """
        if relationship is None:
            return []

        expanded: list[T] = []
        for reference in relationship.references:
            reference_type = reference.type or resource_type
            if reference_type != resource_type:
                logger.debug(
                    "Skipping %s reference %s, expected %s",
                    reference_type,
                    reference.id,
                    resource_type,
                )
                continue

            node = self.get(resource_type, reference.id)
            if node is None:
                logger.debug(
                    "Dropping unresolved %s reference %s",
                    resource_type,
                    reference.id,
                )
                continue

            try:
                expanded.append(decode(node, self))
            except ValidationError as exc:
                raise ValidationError(
                    f"included {resource_type} {reference.id}: {exc}"
                ) from exc
        return expanded


def relationship_ids(relationship: JSONAPIRelationship | None) -> list[int]:
    """Return the referenced ids in order, without consulting ``included``."""
    if relationship is None:
        return []
    return [reference.id for reference in relationship.references]


def relationship_id(relationship: JSONAPIRelationship | None) -> int | None:
    """Return the id of a to-one relationship, or ``None`` when it is empty."""
    ids = relationship_ids(relationship)
    return ids[0] if ids else None
