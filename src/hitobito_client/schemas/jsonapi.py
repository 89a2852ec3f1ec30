"""JSON:API envelope models using Pydantic v2.

Describes the loosely-typed document shape the hitobito API sends back
(``data`` + optional ``included`` side-table) and the request envelope used
for PATCH/POST bodies. Resource ids are parsed to ``int`` at this layer so
every later lookup compares integers, whatever encoding the server used.

Reference: https://jsonapi.org/format/
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from hitobito_client.schemas.base import ResourceId

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


# ---------------------------------------------------------------------------
# Response documents
# ---------------------------------------------------------------------------


class JSONAPIResourceIdentifier(BaseModel):
    """A ``{id, type}`` pointer into the included table.

    Some servers omit ``type`` on relationship data; the resolver then
    assumes the type the relationship is expected to point at.
    """

    id: ResourceId
    type: str | None = None


class JSONAPIRelationship(BaseModel):
    """A relationship object: to-one, to-many, or empty."""

    data: list[JSONAPIResourceIdentifier] | JSONAPIResourceIdentifier | None = None
    links: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None

    @property
    def references(self) -> list[JSONAPIResourceIdentifier]:
        """Relationship data as a list, in server order."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        return [self.data]


class JSONAPIResource(BaseModel):
    """A single JSON:API resource object with type, id, and attributes."""

    type: str
    id: ResourceId
    attributes: dict[str, Any] = Field(default_factory=dict)
    relationships: dict[str, JSONAPIRelationship] | None = None

    def relationship(self, name: str) -> JSONAPIRelationship | None:
        """Return the named relationship, or ``None`` when it is absent."""
        if not self.relationships:
            return None
        return self.relationships.get(name)


class JSONAPISingleResponse(BaseModel):
    """JSON:API response envelope containing a single resource."""

    data: JSONAPIResource
    included: list[JSONAPIResource] = Field(default_factory=list)
    meta: dict[str, Any] | None = None
    links: dict[str, Any] | None = None


class JSONAPIListResponse(BaseModel):
    """JSON:API response envelope containing a list of resources."""

    data: list[JSONAPIResource]
    included: list[JSONAPIResource] = Field(default_factory=list)
    meta: dict[str, Any] | None = None
    links: dict[str, Any] | None = None


class JSONAPIError(BaseModel):
    """A single JSON:API error object, as returned on failed writes."""

    status: str | None = None
    code: str | None = None
    title: str | None = None
    detail: str | None = None
    source: dict[str, Any] | None = None


class JSONAPIErrorResponse(BaseModel):
    """JSON:API response envelope containing a list of errors."""

    errors: list[JSONAPIError]


# ---------------------------------------------------------------------------
# Request wrappers
# ---------------------------------------------------------------------------


class JSONAPIRequestData(BaseModel):
    """The ``data`` object inside a JSON:API request body.

    ``id`` is set for updates and left out for creates.
    """

    id: str | None = None
    type: str
    attributes: dict[str, Any]
    relationships: dict[str, Any] | None = None


class JSONAPIRequest(BaseModel):
    """JSON:API request envelope wrapping ``{ data: { id?, type, attributes } }``."""

    data: JSONAPIRequestData


def build_request_document(
    resource_type: str,
    attributes: dict[str, Any],
    *,
    resource_id: int | None = None,
    relationships: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the JSON body for a create or update request.

    Args:
        resource_type: Type tag of the resource, e.g. ``"people"``.
        attributes: Partial attribute map. ``None`` values are sent as
            ``null`` so callers can clear fields.
        resource_id: Id of the resource being updated; omit for creates.
        relationships: Optional relationship objects to send along.

    Returns:
        A plain dict ready to be serialized as the request body.
    """
    data: dict[str, Any] = {"type": resource_type, "attributes": attributes}
    if resource_id is not None:
        data["id"] = str(resource_id)
    if relationships:
        data["relationships"] = relationships
    document = JSONAPIRequest(data=JSONAPIRequestData(**data))
    return document.model_dump(exclude_unset=True)


def to_one(resource_type: str, resource_id: int) -> dict[str, Any]:
    """Relationship object pointing at a single resource."""
    return {"data": {"type": resource_type, "id": str(resource_id)}}
