"""Typed async client for the hitobito JSON:API."""

__version__ = "0.1.0"

from hitobito_client.client import HitobitoClient
from hitobito_client.config import HitobitoSettings, get_settings
from hitobito_client.errors import (
    HitobitoError,
    NotFoundError,
    RateLimitError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from hitobito_client.schemas import (
    Event,
    EventDate,
    EventKind,
    EventKindCategory,
    EventUpdate,
    Group,
    GroupUpdate,
    Invoice,
    InvoiceUpdate,
    ListOptions,
    MailingList,
    MailingListUpdate,
    Person,
    PersonUpdate,
    Role,
    RoleCreate,
    RoleUpdate,
)

__all__ = [
    "__version__",
    "HitobitoClient",
    "HitobitoSettings",
    "get_settings",
    "HitobitoError",
    "NotFoundError",
    "RateLimitError",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "Event",
    "EventDate",
    "EventKind",
    "EventKindCategory",
    "EventUpdate",
    "Group",
    "GroupUpdate",
    "Invoice",
    "InvoiceUpdate",
    "ListOptions",
    "MailingList",
    "MailingListUpdate",
    "Person",
    "PersonUpdate",
    "Role",
    "RoleCreate",
    "RoleUpdate",
]
