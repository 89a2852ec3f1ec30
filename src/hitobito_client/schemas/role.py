"""Pydantic v2 schemas for roles.

A role links a person to a group. The link is read from the
``relationships.person`` / ``relationships.group`` references and defaults
to ``0`` when a reference is missing. ``person_id`` / ``group_id`` keys
inside ``attributes`` (an older server variant) are not read.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from hitobito_client.schemas.base import (
    AttributesModel,
    DomainModel,
    ResourceId,
    expect_type,
    validate_attributes,
)
from hitobito_client.schemas.group import GROUPS_TYPE
from hitobito_client.schemas.jsonapi import JSONAPIResource, to_one
from hitobito_client.schemas.person import PEOPLE_TYPE
from hitobito_client.services.included import IncludedIndex, relationship_id

ROLES_TYPE = "roles"


class RoleAttributes(AttributesModel):
    """Attributes of a ``roles`` resource.

    ``type`` is the role class name (e.g. ``Group::Abteilung::Leitung``).
    """

    type: str
    created_at: str
    updated_at: str
    name: str | None = None
    label: str | None = None
    start_on: str | None = None
    end_on: str | None = None
    deleted_at: str | None = None


class Role(DomainModel, RoleAttributes):
    id: ResourceId
    person_id: ResourceId = 0
    group_id: ResourceId = 0


class RoleUpdate(BaseModel):
    """Partial update for a role. Only fields the caller sets are sent."""

    model_config = ConfigDict(extra="forbid")

    label: str | None = None
    start_on: str | None = None
    end_on: str | None = None


class RoleCreate(BaseModel):
    """Body for ``create_role``: who, where, and which role class."""

    model_config = ConfigDict(extra="forbid")

    person_id: ResourceId
    group_id: ResourceId
    type: str
    label: str | None = None
    start_on: str | None = None
    end_on: str | None = None

    def attributes(self) -> dict[str, Any]:
        return self.model_dump(exclude={"person_id", "group_id"}, exclude_none=True)

    def relationships(self) -> dict[str, Any]:
        return {
            "person": to_one(PEOPLE_TYPE, self.person_id),
            "group": to_one(GROUPS_TYPE, self.group_id),
        }


def build_role(
    resource_id: int,
    attributes: RoleAttributes,
    *,
    person_id: int | None = None,
    group_id: int | None = None,
) -> Role:
    return Role(
        id=resource_id,
        person_id=person_id if person_id is not None else 0,
        group_id=group_id if group_id is not None else 0,
        **attributes.model_dump(),
    )


def decode_role(resource: JSONAPIResource, included: IncludedIndex) -> Role:
    expect_type(resource, ROLES_TYPE)
    return build_role(
        resource.id,
        validate_attributes(RoleAttributes, resource),
        person_id=relationship_id(resource.relationship("person")),
        group_id=relationship_id(resource.relationship("group")),
    )
