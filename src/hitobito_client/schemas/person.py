"""Pydantic v2 schemas for people.

``PersonAttributes`` validates the raw attribute object, ``Person`` is the
flattened entity returned to callers, and ``PersonUpdate`` is the partial
body accepted by ``update_person``.
"""

from __future__ import annotations

from typing import Literal

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

PEOPLE_TYPE = "people"

Gender = Literal["m", "w"]


class PersonAttributes(AttributesModel):
    """Attributes of a ``people`` resource."""

    first_name: str
    last_name: str
    nickname: str | None = None
    company_name: str | None = None
    company: bool | None = None
    email: str | None = None
    birthday: str | None = None
    gender: Gender | None = None
    address: str | None = None
    zip_code: str | None = None
    town: str | None = None
    country: str | None = None
    language: str | None = None
    primary_group_id: ResourceId | None = None


class Person(DomainModel, PersonAttributes):
    """A person as returned by ``get_person`` / ``get_people``."""

    id: ResourceId


class PersonUpdate(BaseModel):
    """Partial update for a person. Only fields the caller sets are sent."""

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    company_name: str | None = None
    company: bool | None = None
    email: str | None = None
    birthday: str | None = None
    gender: Gender | None = None
    address: str | None = None
    zip_code: str | None = None
    town: str | None = None
    country: str | None = None
    language: str | None = None
    primary_group_id: ResourceId | None = None


def build_person(resource_id: int, attributes: PersonAttributes) -> Person:
    return Person(id=resource_id, **attributes.model_dump())


def decode_person(resource: JSONAPIResource, included: IncludedIndex) -> Person:
    expect_type(resource, PEOPLE_TYPE)
    return build_person(resource.id, validate_attributes(PersonAttributes, resource))
