"""Pydantic schemas for hitobito JSON:API documents and domain entities."""

from hitobito_client.schemas.event import (
    Event,
    EventDate,
    EventKind,
    EventKindCategory,
    EventUpdate,
)
from hitobito_client.schemas.group import Group, GroupUpdate
from hitobito_client.schemas.invoice import Invoice, InvoiceUpdate
from hitobito_client.schemas.jsonapi import (
    JSONAPIListResponse,
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
    JSONAPISingleResponse,
)
from hitobito_client.schemas.mailing_list import MailingList, MailingListUpdate
from hitobito_client.schemas.person import Person, PersonUpdate
from hitobito_client.schemas.query import ListOptions
from hitobito_client.schemas.role import Role, RoleCreate, RoleUpdate

__all__ = [
    "Event",
    "EventDate",
    "EventKind",
    "EventKindCategory",
    "EventUpdate",
    "Group",
    "GroupUpdate",
    "Invoice",
    "InvoiceUpdate",
    "JSONAPIListResponse",
    "JSONAPIRelationship",
    "JSONAPIResource",
    "JSONAPIResourceIdentifier",
    "JSONAPISingleResponse",
    "ListOptions",
    "MailingList",
    "MailingListUpdate",
    "Person",
    "PersonUpdate",
    "Role",
    "RoleCreate",
    "RoleUpdate",
]
