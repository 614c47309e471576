"""
Exception hierarchy shared by the request pipeline and the transport.

Every failure surfaced by :func:`~digitalocean_api.executor.execute` derives from
:class:`DigitalOceanError` so callers can catch the whole family at once while
still branching on the concrete kind when needed.
"""

from __future__ import annotations

import json
from typing import Any, Optional


class DigitalOceanError(RuntimeError):
    """Base class for every error raised by the client."""


class ConfigError(DigitalOceanError):
    """Raised when client settings cannot be resolved."""


class RequestError(DigitalOceanError):
    """Raised when a request builder is used in a way its operation kind does not allow."""


class TransportError(DigitalOceanError):
    """Raised when the HTTP call could not be completed (DNS, TLS, connection)."""


class EnvelopeError(DigitalOceanError):
    """Raised when a response body does not match the declared envelope shape."""


class PaginationError(DigitalOceanError):
    """Raised when a list response carries a cursor the pagination loop cannot follow."""


class StatusError(DigitalOceanError):
    """
    Raised when the provider answers with a non-success HTTP status.

    Attributes
    ----------
    status_code:
        HTTP status returned by the provider.
    body:
        Raw response body decoded as text.
    error_id:
        Provider error identifier (``"not_found"``, ``"unauthorized"``) when present.
    """

    def __init__(self, status_code: int, body: str, *, method: str, url: str) -> None:
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        self.error_id, self.provider_message = _extract_provider_error(body)
        detail = self.provider_message or body or "<empty body>"
        super().__init__(f"HTTP {status_code} error for {method} {url}: {detail}")


def _extract_provider_error(body: str) -> tuple[Optional[str], Optional[str]]:
    try:
        payload: Any = json.loads(body) if body else None
    except ValueError:
        return None, None
    if not isinstance(payload, dict):
        return None, None
    error_id = payload.get("id")
    message = payload.get("message")
    return (
        error_id if isinstance(error_id, str) else None,
        message if isinstance(message, str) else None,
    )
