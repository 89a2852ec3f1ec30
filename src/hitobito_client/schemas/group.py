"""Pydantic v2 schemas for groups."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from hitobito_client.schemas.base import (
    AttributesModel,
    DomainModel,
    ResourceId,
    expect_type,
    validate_attributes,
)
from hitobito_client.schemas.jsonapi import JSONAPIResource
from hitobito_client.services.included import IncludedIndex

GROUPS_TYPE = "groups"


class GroupAttributes(AttributesModel):
    """Attributes of a ``groups`` resource.

    ``type`` is the group class name (e.g. ``Group::Abteilung``), not the
    JSON:API type tag.
    """

    name: str
    type: str
    short_name: str | None = None
    description: str | None = None
    parent_id: ResourceId | None = None
    layer_group_id: ResourceId | None = None
    email: str | None = None
    address: str | None = None
    zip_code: str | None = None
    town: str | None = None
    country: str | None = None
    archived_at: str | None = None


class Group(DomainModel, GroupAttributes):
    id: ResourceId


class GroupUpdate(BaseModel):
    """Partial update for a group. Only fields the caller sets are sent."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    short_name: str | None = None
    description: str | None = None
    email: str | None = None
    address: str | None = None
    zip_code: str | None = None
    town: str | None = None
    country: str | None = None


def build_group(resource_id: int, attributes: GroupAttributes) -> Group:
    return Group(id=resource_id, **attributes.model_dump())


def decode_group(resource: JSONAPIResource, included: IncludedIndex) -> Group:
    expect_type(resource, GROUPS_TYPE)
    return build_group(resource.id, validate_attributes(GroupAttributes, resource))
