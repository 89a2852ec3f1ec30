"""Async client for the hitobito JSON:API.

Every accessor is one request/validate/transform cycle:

    GET   /api/{kind}/{id}          (single resource)
    GET   /api/{kind}?filter[...]   (list, optionally filtered/sorted/paged)
    PATCH /api/{kind}/{id}          (partial update, echo decoded)
    POST  /api/roles                (create role)
    DELETE /api/roles/{id}          (delete role)

Status codes are classified before the body is looked at; a non-2xx
response never reaches the decoders. Nothing is cached or retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import TracebackType
from typing import Any, TypeVar

import httpx
import pydantic
from pydantic import BaseModel

from hitobito_client.config import HitobitoSettings, get_settings
from hitobito_client.errors import (
    NotFoundError,
    RateLimitError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from hitobito_client.resources import (
    EVENT_KIND_CATEGORIES,
    EVENT_KINDS,
    EVENTS,
    GROUPS,
    INVOICES,
    MAILING_LISTS,
    PEOPLE,
    ROLES,
    ResourceKind,
)
from hitobito_client.schemas.base import describe_validation_error
from hitobito_client.schemas.event import Event, EventKind, EventKindCategory, EventUpdate
from hitobito_client.schemas.group import Group, GroupUpdate
from hitobito_client.schemas.invoice import Invoice, InvoiceUpdate
from hitobito_client.schemas.jsonapi import (
    JSONAPI_MEDIA_TYPE,
    JSONAPIErrorResponse,
    build_request_document,
)
from hitobito_client.schemas.mailing_list import MailingList, MailingListUpdate
from hitobito_client.schemas.person import Person, PersonUpdate
from hitobito_client.schemas.query import ListOptions, encode_query
from hitobito_client.schemas.role import Role, RoleCreate, RoleUpdate
from hitobito_client.services.decoding import decode_list, decode_single

logger = logging.getLogger(__name__)

T = TypeVar("T")
PayloadT = TypeVar("PayloadT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("Retry-After", "").strip()
    return int(value) if value.isdigit() else None


def _error_objects(response: httpx.Response) -> list[dict[str, Any]]:
    """Extract JSON:API error objects from a failed response, if it has any."""
    try:
        payload = JSONAPIErrorResponse.model_validate(response.json())
    except (ValueError, pydantic.ValidationError):
        return []
    return [error.model_dump(exclude_none=True) for error in payload.errors]


def raise_for_status(response: httpx.Response) -> None:
    """Map a non-2xx response onto the error taxonomy.

    Raises:
        UnauthorizedError: On 401 and 403.
        NotFoundError: On 404.
        RateLimitError: On 429.
        TransportError: On any other non-2xx status.
    """
    if response.is_success:
        return

    status = response.status_code
    if status == 401:
        raise UnauthorizedError()
    if status == 403:
        raise UnauthorizedError("Forbidden: Access denied", forbidden=True)
    if status == 404:
        raise NotFoundError()
    if status == 429:
        raise RateLimitError(retry_after=_retry_after(response))
    raise TransportError(
        f"HTTP {status}: {response.reason_phrase}",
        status_code=status,
        status_text=response.reason_phrase,
        errors=_error_objects(response),
    )


def _validate_payload(
    model: type[PayloadT],
    fields: PayloadT | Mapping[str, Any],
) -> PayloadT:
    """Validate caller input for a write before anything is sent."""
    if isinstance(fields, model):
        return fields
    try:
        return model.model_validate(dict(fields))
    except pydantic.ValidationError as exc:
        raise ValidationError(
            f"Invalid {model.__name__}: {describe_validation_error(exc)}"
        ) from exc


def _payload_attributes(
    model: type[PayloadT],
    fields: PayloadT | Mapping[str, Any],
) -> dict[str, Any]:
    """Return only the attributes the caller explicitly set."""
    return _validate_payload(model, fields).model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class HitobitoClient:
    """Typed client for one hitobito instance.

    Args:
        base_url: Instance root, e.g. ``https://db.scout.ch``. One trailing
            slash is removed.
        token: Service or personal token, sent as ``X-Token``.
        timeout: Per-request timeout in seconds.
        user_agent: Optional ``User-Agent`` header value.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
        http_client: Optional pre-built ``httpx.AsyncClient``. It is not
            closed by ``aclose``. Mutually exclusive with ``transport``.

    Raises:
        ValueError: If both ``transport`` and ``http_client`` are given.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 30.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if transport is not None and http_client is not None:
            raise ValueError("Pass either transport or http_client, not both")

        self.base_url = base_url[:-1] if base_url.endswith("/") else base_url
        self.token = token
        self._headers = {
            "X-Token": token,
            "Accept": "application/json",
            "Content-Type": JSONAPI_MEDIA_TYPE,
        }
        if user_agent:
            self._headers["User-Agent"] = user_agent

        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: HitobitoSettings | None = None) -> HitobitoClient:
        """Build a client from ``HitobitoSettings`` (environment by default)."""
        settings = settings or get_settings()
        return cls(
            settings.base_url,
            settings.token,
            timeout=settings.timeout_seconds,
            user_agent=settings.user_agent,
        )

    async def __aenter__(self) -> HitobitoClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def url(self, path: str, query: str = "") -> str:
        """Return the absolute URL for an API path such as ``people/1``."""
        url = f"{self.base_url}/api/{path.lstrip('/')}"
        return f"{url}?{query}" if query else url

    async def _request(
        self,
        method: str,
        path: str,
        *,
        query: str = "",
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the parsed JSON body.

        Returns ``None`` for ``204 No Content`` and for an empty DELETE
        response. Any other empty body is not valid JSON.
        """
        url = self.url(path, query)
        logger.debug("Hitobito request: %s %s", method, url)
        try:
            response = await self._http.request(
                method,
                url,
                headers=self._headers,
                json=json_data,
            )
        except httpx.HTTPError as exc:
            logger.warning("Hitobito request failed: %s %s -> %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Hitobito request failed: %s %s -> HTTP %d",
                method,
                url,
                response.status_code,
            )
        raise_for_status(response)

        if response.status_code == 204 or (method == "DELETE" and not response.content):
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Response from {method} {url} is not valid JSON",
                status_code=response.status_code,
                status_text=response.reason_phrase,
            ) from exc

    @staticmethod
    def _options(
        kind: ResourceKind[Any],
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> ListOptions:
        try:
            return ListOptions(
                filters=dict(filters or {}),
                sort=sort,
                page=page,
                per_page=per_page,
                include=list(kind.default_include if include is None else include),
            )
        except pydantic.ValidationError as exc:
            raise ValidationError(
                f"Invalid list options: {describe_validation_error(exc)}"
            ) from exc

    async def _get_one(
        self,
        kind: ResourceKind[T],
        resource_id: int,
        include: Iterable[str] | None = None,
    ) -> T:
        options = self._options(kind, include=include)
        document = await self._request(
            "GET", f"{kind.path}/{resource_id}", query=encode_query(options)
        )
        return decode_single(document, kind)

    async def _get_many(self, kind: ResourceKind[T], **options: Any) -> list[T]:
        query = encode_query(self._options(kind, **options))
        document = await self._request("GET", kind.path, query=query)
        return decode_list(document, kind)

    async def _update(
        self,
        kind: ResourceKind[T],
        resource_id: int,
        attributes: dict[str, Any],
    ) -> T:
        document = await self._request(
            "PATCH",
            f"{kind.path}/{resource_id}",
            json_data=build_request_document(
                kind.type, attributes, resource_id=resource_id
            ),
        )
        return decode_single(document, kind)

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    async def get_person(self, person_id: int, *, include: Iterable[str] | None = None) -> Person:
        return await self._get_one(PEOPLE, person_id, include)

    async def get_people(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> list[Person]:
        return await self._get_many(
            PEOPLE, filters=filters, sort=sort, page=page, per_page=per_page, include=include
        )

    async def get_people_in_group(self, group_id: int) -> list[Person]:
        """List people whose primary group is ``group_id``."""
        return await self.get_people(filters={"primary_group_id": group_id})

    async def update_person(
        self, person_id: int, fields: PersonUpdate | Mapping[str, Any]
    ) -> Person:
        return await self._update(
            PEOPLE, person_id, _payload_attributes(PersonUpdate, fields)
        )

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    async def get_group(self, group_id: int, *, include: Iterable[str] | None = None) -> Group:
        return await self._get_one(GROUPS, group_id, include)

    async def get_groups(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> list[Group]:
        return await self._get_many(
            GROUPS, filters=filters, sort=sort, page=page, per_page=per_page, include=include
        )

    async def get_subgroups(self, group_id: int) -> list[Group]:
        """List the direct children of ``group_id``."""
        return await self.get_groups(filters={"parent_id": group_id})

    async def update_group(
        self, group_id: int, fields: GroupUpdate | Mapping[str, Any]
    ) -> Group:
        return await self._update(GROUPS, group_id, _payload_attributes(GroupUpdate, fields))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def get_event(self, event_id: int, *, include: Iterable[str] | None = None) -> Event:
        """Fetch an event. Dates are side-loaded unless ``include`` says otherwise."""
        return await self._get_one(EVENTS, event_id, include)

    async def get_events(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> list[Event]:
        return await self._get_many(
            EVENTS, filters=filters, sort=sort, page=page, per_page=per_page, include=include
        )

    async def get_events_in_group(self, group_id: int) -> list[Event]:
        """List events organized by ``group_id``."""
        return await self.get_events(filters={"group_id": group_id})

    async def update_event(
        self, event_id: int, fields: EventUpdate | Mapping[str, Any]
    ) -> Event:
        return await self._update(EVENTS, event_id, _payload_attributes(EventUpdate, fields))

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def get_role(self, role_id: int, *, include: Iterable[str] | None = None) -> Role:
        return await self._get_one(ROLES, role_id, include)

    async def get_roles(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> list[Role]:
        return await self._get_many(
            ROLES, filters=filters, sort=sort, page=page, per_page=per_page, include=include
        )

    async def get_roles_for_person(self, person_id: int) -> list[Role]:
        """List all roles held by ``person_id``."""
        return await self.get_roles(filters={"person_id": person_id})

    async def create_role(self, role: RoleCreate | Mapping[str, Any]) -> Role:
        """Create a role linking a person to a group."""
        role = _validate_payload(RoleCreate, role)
        document = await self._request(
            "POST",
            ROLES.path,
            json_data=build_request_document(
                ROLES.type, role.attributes(), relationships=role.relationships()
            ),
        )
        return decode_single(document, ROLES)

    async def update_role(
        self, role_id: int, fields: RoleUpdate | Mapping[str, Any]
    ) -> Role:
        return await self._update(ROLES, role_id, _payload_attributes(RoleUpdate, fields))

    async def delete_role(self, role_id: int) -> None:
        await self._request("DELETE", f"{ROLES.path}/{role_id}")

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    async def get_invoice(self, invoice_id: int, *, include: Iterable[str] | None = None) -> Invoice:
        return await self._get_one(INVOICES, invoice_id, include)

    async def get_invoices(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> list[Invoice]:
        return await self._get_many(
            INVOICES, filters=filters, sort=sort, page=page, per_page=per_page, include=include
        )

    async def update_invoice(
        self, invoice_id: int, fields: InvoiceUpdate | Mapping[str, Any]
    ) -> Invoice:
        return await self._update(
            INVOICES, invoice_id, _payload_attributes(InvoiceUpdate, fields)
        )

    # ------------------------------------------------------------------
    # Mailing lists
    # ------------------------------------------------------------------

    async def get_mailing_list(
        self, mailing_list_id: int, *, include: Iterable[str] | None = None
    ) -> MailingList:
        return await self._get_one(MAILING_LISTS, mailing_list_id, include)

    async def get_mailing_lists(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> list[MailingList]:
        return await self._get_many(
            MAILING_LISTS,
            filters=filters,
            sort=sort,
            page=page,
            per_page=per_page,
            include=include,
        )

    async def update_mailing_list(
        self, mailing_list_id: int, fields: MailingListUpdate | Mapping[str, Any]
    ) -> MailingList:
        return await self._update(
            MAILING_LISTS, mailing_list_id, _payload_attributes(MailingListUpdate, fields)
        )

    # ------------------------------------------------------------------
    # Event kinds (read-only)
    # ------------------------------------------------------------------

    async def get_event_kind(
        self, event_kind_id: int, *, include: Iterable[str] | None = None
    ) -> EventKind:
        return await self._get_one(EVENT_KINDS, event_kind_id, include)

    async def get_event_kinds(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> list[EventKind]:
        return await self._get_many(
            EVENT_KINDS,
            filters=filters,
            sort=sort,
            page=page,
            per_page=per_page,
            include=include,
        )

    async def get_event_kind_category(
        self, category_id: int, *, include: Iterable[str] | None = None
    ) -> EventKindCategory:
        return await self._get_one(EVENT_KIND_CATEGORIES, category_id, include)

    async def get_event_kind_categories(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        include: Iterable[str] | None = None,
    ) -> list[EventKindCategory]:
        return await self._get_many(
            EVENT_KIND_CATEGORIES,
            filters=filters,
            sort=sort,
            page=page,
            per_page=per_page,
            include=include,
        )
