"""Pydantic v2 schemas for invoices."""

from __future__ import annotations

from decimal import Decimal

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

INVOICES_TYPE = "invoices"


class InvoiceAttributes(AttributesModel):
    """Attributes of an ``invoices`` resource.

    ``total`` arrives as a decimal string on current servers and as a number
    on older ones; both normalize to ``Decimal``.
    """

    title: str
    sequence_number: str | None = None
    state: str | None = None
    description: str | None = None
    recipient_email: str | None = None
    recipient_address: str | None = None
    issued_at: str | None = None
    due_at: str | None = None
    sent_at: str | None = None
    total: Decimal | None = None
    currency: str | None = None
    group_id: ResourceId | None = None
    recipient_id: ResourceId | None = None


class Invoice(DomainModel, InvoiceAttributes):
    id: ResourceId


class InvoiceUpdate(BaseModel):
    """Partial update for an invoice. Only fields the caller sets are sent."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    state: str | None = None
    recipient_email: str | None = None
    recipient_address: str | None = None
    issued_at: str | None = None
    due_at: str | None = None


def build_invoice(resource_id: int, attributes: InvoiceAttributes) -> Invoice:
    return Invoice(id=resource_id, **attributes.model_dump())


def decode_invoice(resource: JSONAPIResource, included: IncludedIndex) -> Invoice:
    expect_type(resource, INVOICES_TYPE)
    return build_invoice(resource.id, validate_attributes(InvoiceAttributes, resource))
