"""Pydantic v2 schemas for events and their satellite resources.

Covers four resource kinds:

- ``events``: the only kind here with relationships. ``groups`` and ``kind``
  become plain id fields; ``dates`` is expanded from the ``included``
  side-table into ``EventDate`` records.
- ``event_dates``: only ever seen side-loaded under an event.
- ``event_kinds`` and ``event_kind_categories``: read-only catalog data.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from hitobito_client.schemas.base import (
    AttributesModel,
    Count,
    DomainModel,
    ResourceId,
    expect_type,
    validate_attributes,
)
from hitobito_client.schemas.jsonapi import JSONAPIResource
from hitobito_client.services.included import (
    IncludedIndex,
    relationship_id,
    relationship_ids,
)

EVENTS_TYPE = "events"
EVENT_DATES_TYPE = "event_dates"
EVENT_KINDS_TYPE = "event_kinds"
EVENT_KIND_CATEGORIES_TYPE = "event_kind_categories"


# ---------------------------------------------------------------------------
# Event dates
# ---------------------------------------------------------------------------


class EventDateAttributes(AttributesModel):
    start_at: str
    label: str | None = None
    finish_at: str | None = None
    location: str | None = None


class EventDate(DomainModel, EventDateAttributes):
    id: ResourceId


def build_event_date(resource_id: int, attributes: EventDateAttributes) -> EventDate:
    return EventDate(id=resource_id, **attributes.model_dump())


def decode_event_date(resource: JSONAPIResource, included: IncludedIndex) -> EventDate:
    expect_type(resource, EVENT_DATES_TYPE)
    return build_event_date(
        resource.id, validate_attributes(EventDateAttributes, resource)
    )


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class EventAttributes(AttributesModel):
    """Attributes of an ``events`` resource."""

    name: str
    description: str | None = None
    motto: str | None = None
    cost: str | None = None
    maximum_participants: Count | None = None
    participant_count: Count | None = None
    location: str | None = None
    application_opening_at: str | None = None
    application_closing_at: str | None = None
    application_conditions: str | None = None
    state: str | None = None


class Event(DomainModel, EventAttributes):
    """An event with its owning group ids and side-loaded dates."""

    id: ResourceId
    kind_id: ResourceId | None = None
    group_ids: tuple[ResourceId, ...] = ()
    dates: tuple[EventDate, ...] = ()


class EventUpdate(BaseModel):
    """Partial update for an event. Only fields the caller sets are sent."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None
    motto: str | None = None
    cost: str | None = None
    maximum_participants: int | None = None
    location: str | None = None
    application_opening_at: str | None = None
    application_closing_at: str | None = None
    application_conditions: str | None = None
    state: str | None = None


def build_event(
    resource_id: int,
    attributes: EventAttributes,
    *,
    group_ids: Sequence[int],
    dates: Sequence[EventDate],
    kind_id: int | None = None,
) -> Event:
    return Event(
        id=resource_id,
        kind_id=kind_id,
        group_ids=tuple(group_ids),
        dates=tuple(dates),
        **attributes.model_dump(),
    )


def decode_event(resource: JSONAPIResource, included: IncludedIndex) -> Event:
    expect_type(resource, EVENTS_TYPE)
    attributes = validate_attributes(EventAttributes, resource)
    return build_event(
        resource.id,
        attributes,
        group_ids=relationship_ids(resource.relationship("groups")),
        dates=included.expand(
            resource.relationship("dates"), EVENT_DATES_TYPE, decode_event_date
        ),
        kind_id=relationship_id(resource.relationship("kind")),
    )


# ---------------------------------------------------------------------------
# Event kinds
# ---------------------------------------------------------------------------


class EventKindAttributes(AttributesModel):
    label: str
    short_name: str | None = None
    minimum_age: Count | None = None
    general_information: str | None = None
    application_conditions: str | None = None
    deleted_at: str | None = None


class EventKind(DomainModel, EventKindAttributes):
    id: ResourceId
    kind_category_id: ResourceId | None = None


def build_event_kind(
    resource_id: int,
    attributes: EventKindAttributes,
    *,
    kind_category_id: int | None = None,
) -> EventKind:
    return EventKind(
        id=resource_id, kind_category_id=kind_category_id, **attributes.model_dump()
    )


def decode_event_kind(resource: JSONAPIResource, included: IncludedIndex) -> EventKind:
    expect_type(resource, EVENT_KINDS_TYPE)
    return build_event_kind(
        resource.id,
        validate_attributes(EventKindAttributes, resource),
        kind_category_id=relationship_id(resource.relationship("kind_category")),
    )


class EventKindCategoryAttributes(AttributesModel):
    label: str
    order: Count | None = None
    deleted_at: str | None = None


class EventKindCategory(DomainModel, EventKindCategoryAttributes):
    id: ResourceId


def build_event_kind_category(
    resource_id: int, attributes: EventKindCategoryAttributes
) -> EventKindCategory:
    return EventKindCategory(id=resource_id, **attributes.model_dump())


def decode_event_kind_category(
    resource: JSONAPIResource, included: IncludedIndex
) -> EventKindCategory:
    expect_type(resource, EVENT_KIND_CATEGORIES_TYPE)
    return build_event_kind_category(
        resource.id, validate_attributes(EventKindCategoryAttributes, resource)
    )
