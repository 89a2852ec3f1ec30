"""Error taxonomy for the hitobito client.

Every failure a caller can observe is one of these types. None of them is
retried internally; callers catch by type and choose their own policy
(for example backing off on ``RateLimitError``).
"""

from __future__ import annotations

from typing import Any


class HitobitoError(Exception):
    """Base class for all client errors."""


class UnauthorizedError(HitobitoError):
    """The token was rejected (401) or lacks permission (403)."""

    def __init__(self, message: str = "Unauthorized", *, forbidden: bool = False) -> None:
        super().__init__(message)
        self.forbidden = forbidden


class NotFoundError(HitobitoError):
    """The requested resource does not exist (404)."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class RateLimitError(HitobitoError):
    """The server throttled the request (429).

    ``retry_after`` holds the ``Retry-After`` header in seconds when the
    server sent a numeric value.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class ValidationError(HitobitoError):
    """A payload did not match the expected resource shape."""


class TransportError(HitobitoError):
    """Any other HTTP failure: unexpected status, network error, or a non-JSON body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        status_text: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.errors = errors or []
