"""
Execution of tagged requests.

:func:`execute` dispatches purely on the request's operation kind:

======  ======  ==========================================================
Kind    Verb    Behaviour
======  ======  ==========================================================
Get     GET     one call, body ignored, singular envelope
Create  POST    one call, body sent, singular envelope
Update  PUT     one call, body sent, singular envelope
Delete  DELETE  one call, body sent only when set, returns ``None``
List    GET     :func:`paginate`
======  ======  ==========================================================

The pagination loop is strictly sequential and fail-closed: any error while
fetching or unwrapping a page aborts the whole call and no partial result is
returned. The same applies when the caller interrupts the loop.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, List, Optional, Protocol, Set

import httpx

from . import method as m
from .core.logging import get_logger, log_progress
from .envelope import EnvelopeMapping, lookup, unwrap, unwrap_page
from .errors import EnvelopeError, PaginationError, RequestError, StatusError
from .transport import TransportResponse

if TYPE_CHECKING:
    from .request import Request

LOGGER = get_logger(__name__)


class Connection(Protocol):
    """What the executor needs from a live connection."""

    max_pages: Optional[int]

    def send(self, method: str, url: httpx.URL, *, json: Any = None) -> TransportResponse:
        """Issue one HTTP call and return the raw response."""


def execute(request: "Request[Any, Any]", connection: Connection) -> Any:
    """Run ``request`` against ``connection`` and return the unwrapped value."""

    kind = request.kind
    mapping = _resolve_mapping(request)

    if isinstance(kind, m.List):
        return paginate(request, connection)

    body = None if isinstance(kind, m.Get) else request.body
    if mapping is None:
        send_checked(connection, kind.verb, request.url, body=body)
        return None
    return unwrap(mapping, fetch_json(connection, kind.verb, request.url, body=body))


def paginate(request: "Request[m.List, Any]", connection: Connection) -> List[Any]:
    """
    Follow ``links.pages.next`` cursors and concatenate every page in arrival order.

    The loop stops when the request's limit is reached (truncating the last page)
    or when a page carries no ``next`` cursor. A cursor pointing back at an already
    visited page, or exceeding ``connection.max_pages``, raises
    :class:`~digitalocean_api.errors.PaginationError`.
    """

    request.require_kind(m.List)
    mapping = lookup(request.result)  # type: ignore[arg-type]
    remaining: Optional[int] = request.kind.limit
    values: List[Any] = []
    if remaining == 0:
        return values

    url = request.url
    visited: Set[str] = set()
    pages = 0
    while True:
        visited.add(str(url))
        pages += 1
        page = unwrap_page(mapping, fetch_json(connection, "GET", url))
        chunk = page.values if remaining is None else page.values[:remaining]
        values.extend(chunk)
        log_progress(
            LOGGER,
            "Fetched list page",
            phase="paginate",
            step=mapping.list_key,
            extra={"page": pages, "items": len(chunk), "total": page.meta.total, "remaining": remaining},
        )

        if remaining is not None:
            remaining -= len(chunk)
            if remaining == 0:
                break

        next_url = page.next_url
        if next_url is None:
            break
        if str(next_url) in visited:
            raise PaginationError(f"Pagination cursor {str(next_url)!r} points back at an already fetched page.")
        if connection.max_pages is not None and pages >= connection.max_pages:
            raise PaginationError(f"Listing {mapping.list_key} needs more than max_pages={connection.max_pages} pages.")
        url = next_url

    return values


def send_checked(connection: Connection, verb: str, url: httpx.URL, *, body: Any = None) -> TransportResponse:
    """Issue one call and raise :class:`StatusError` unless the provider answers 2xx."""

    response = connection.send(verb, url, json=body)
    if not 200 <= response.status_code < 300:
        raise StatusError(response.status_code, response.text, method=verb, url=str(url))
    return response


def fetch_json(connection: Connection, verb: str, url: httpx.URL, *, body: Any = None) -> Any:
    """Like :func:`send_checked`, then decode the JSON body (``None`` when empty)."""

    response = send_checked(connection, verb, url, body=body)
    if not response.content.strip():
        return None
    try:
        return json.loads(response.content)
    except ValueError as exc:
        raise EnvelopeError(f"Response from {verb} {url} is not valid JSON: {exc}") from exc


def _resolve_mapping(request: "Request[Any, Any]") -> Optional[EnvelopeMapping]:
    kind = request.kind
    result = request.result

    if result is None:
        if isinstance(kind, (m.Create, m.Update, m.Delete)):
            return None
        raise RequestError(f"{kind.name} requests must declare a result type.")
    if isinstance(kind, m.Delete):
        raise RequestError(f"Delete requests yield no value; got result type {result.__name__}.")

    try:
        mapping = lookup(result)
    except EnvelopeError as exc:
        raise RequestError(str(exc)) from exc

    if isinstance(kind, m.List) and not mapping.pageable:
        raise RequestError(f"{result.__name__} has no list envelope and cannot be listed.")
    if not isinstance(kind, m.List) and not mapping.singular:
        raise RequestError(f"{result.__name__} has no singular envelope for {kind.name} requests.")
    return mapping
