"""Registry of the resource kinds the client exposes.

Each ``ResourceKind`` ties a type tag to its URL path, the decoder for its
primary nodes, and the side-loads requested by default.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from hitobito_client.schemas.event import (
    EVENT_KIND_CATEGORIES_TYPE,
    EVENT_KINDS_TYPE,
    EVENTS_TYPE,
    Event,
    EventKind,
    EventKindCategory,
    decode_event,
    decode_event_kind,
    decode_event_kind_category,
)
from hitobito_client.schemas.group import GROUPS_TYPE, Group, decode_group
from hitobito_client.schemas.invoice import INVOICES_TYPE, Invoice, decode_invoice
from hitobito_client.schemas.jsonapi import JSONAPIResource
from hitobito_client.schemas.mailing_list import (
    MAILING_LISTS_TYPE,
    MailingList,
    decode_mailing_list,
)
from hitobito_client.schemas.person import PEOPLE_TYPE, Person, decode_person
from hitobito_client.schemas.role import ROLES_TYPE, Role, decode_role
from hitobito_client.services.included import IncludedIndex

T = TypeVar("T")


@dataclass(frozen=True)
class ResourceKind(Generic[T]):
    """How one resource kind is addressed and decoded.

    Attributes:
        name: Human-readable singular, used in error messages.
        type: JSON:API type tag the primary nodes must carry.
        decode: Decoder for one primary node.
        path: URL path below ``/api``; defaults to the type tag.
        default_include: Relationships side-loaded unless the caller overrides.
    """

    name: str
    type: str
    decode: Callable[[JSONAPIResource, IncludedIndex], T]
    path: str = ""
    default_include: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.path:
            object.__setattr__(self, "path", self.type)


PEOPLE: ResourceKind[Person] = ResourceKind("person", PEOPLE_TYPE, decode_person)
GROUPS: ResourceKind[Group] = ResourceKind("group", GROUPS_TYPE, decode_group)
EVENTS: ResourceKind[Event] = ResourceKind(
    "event", EVENTS_TYPE, decode_event, default_include=("dates",)
)
ROLES: ResourceKind[Role] = ResourceKind("role", ROLES_TYPE, decode_role)
INVOICES: ResourceKind[Invoice] = ResourceKind("invoice", INVOICES_TYPE, decode_invoice)
MAILING_LISTS: ResourceKind[MailingList] = ResourceKind(
    "mailing list", MAILING_LISTS_TYPE, decode_mailing_list
)
EVENT_KINDS: ResourceKind[EventKind] = ResourceKind(
    "event kind", EVENT_KINDS_TYPE, decode_event_kind
)
EVENT_KIND_CATEGORIES: ResourceKind[EventKindCategory] = ResourceKind(
    "event kind category", EVENT_KIND_CATEGORIES_TYPE, decode_event_kind_category
)

RESOURCE_KINDS: dict[str, ResourceKind[Any]] = {
    kind.type: kind
    for kind in (
        PEOPLE,
        GROUPS,
        EVENTS,
        ROLES,
        INVOICES,
        MAILING_LISTS,
        EVENT_KINDS,
        EVENT_KIND_CATEGORIES,
    )
}
