"""Pydantic v2 schemas for mailing lists."""

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

MAILING_LISTS_TYPE = "mailing_lists"


class MailingListAttributes(AttributesModel):
    name: str
    description: str | None = None
    publisher: str | None = None
    mail_name: str | None = None
    additional_sender: str | None = None
    subscribable_for: str | None = None
    subscribable_mode: str | None = None
    subscribers_may_post: bool | None = None
    anyone_may_post: bool | None = None
    delivery_report: bool | None = None
    group_id: ResourceId | None = None


class MailingList(DomainModel, MailingListAttributes):
    id: ResourceId


class MailingListUpdate(BaseModel):
    """Partial update for a mailing list. Only fields the caller sets are sent."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None
    publisher: str | None = None
    mail_name: str | None = None
    additional_sender: str | None = None
    subscribable_for: str | None = None
    subscribable_mode: str | None = None
    subscribers_may_post: bool | None = None
    anyone_may_post: bool | None = None
    delivery_report: bool | None = None


def build_mailing_list(
    resource_id: int, attributes: MailingListAttributes
) -> MailingList:
    return MailingList(id=resource_id, **attributes.model_dump())


def decode_mailing_list(
    resource: JSONAPIResource, included: IncludedIndex
) -> MailingList:
    expect_type(resource, MAILING_LISTS_TYPE)
    return build_mailing_list(
        resource.id, validate_attributes(MailingListAttributes, resource)
    )
