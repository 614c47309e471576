"""
Chainable request builder tagged with an operation kind and a result type.

A :class:`Request` holds the absolute URL of an endpoint, an optional JSON body,
the operation kind (:mod:`digitalocean_api.method`) and the result type whose
envelope mapping will be used to unwrap the response. Resource modules start a
request with :meth:`Request.new`, refine it with the URL and body accessors and
hand it to :func:`~digitalocean_api.executor.execute`. Every mutating method
returns the same builder so calls chain; :meth:`Request.transmute` pivots to a
related child endpoint while keeping URL and body.

Example
-------
>>> request = Request.new("https://api.digitalocean.com/v2/domains", Get, Domain)
>>> records = request.push_segments("example.com").transmute(List, DomainRecord)
"""

from __future__ import annotations

from copy import deepcopy
from typing import TYPE_CHECKING, Any, Dict, Generic, Optional, Self, TypeVar
from urllib.parse import quote

import httpx

from . import method as m
from .errors import RequestError
from .executor import execute

if TYPE_CHECKING:
    from .client import DigitalOcean

M = TypeVar("M", bound=m.Method)
V = TypeVar("V")
R = TypeVar("R", bound="Request[Any, Any]")


def _absolute_url(url: httpx.URL | str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise RequestError(f"Invalid request URL {url!r}: {exc}") from exc
    if not parsed.is_absolute_url:
        raise RequestError(f"Request URL must be absolute, got {str(parsed)!r}.")
    return parsed


class Request(Generic[M, V]):
    """
    Builder for a single API call.

    Parameters
    ----------
    url:
        Absolute endpoint URL.
    kind:
        Operation kind class. The request holds a default-initialised instance.
    result:
        Result type the response unwraps to, or ``None`` when the call yields no
        value (deletes, tagging).
    """

    __slots__ = ("_url", "_body", "_kind", "_result", "_limited")

    def __init__(self, url: httpx.URL | str, kind: type[M], result: Optional[type] = None) -> None:
        if not (isinstance(kind, type) and issubclass(kind, m.Method)) or kind is m.Method:
            raise RequestError(f"Unknown operation kind {kind!r}.")
        self._url = _absolute_url(url)
        self._body: Any = None
        self._kind: M = kind()
        self._result = result
        self._limited = False

    @classmethod
    def new(cls, url: httpx.URL | str, kind: type[m.Method], result: Optional[type] = None) -> Self:
        """Create a request with an empty body pointing at ``url``."""

        return cls(url, kind, result)

    def __repr__(self) -> str:
        result = self._result.__name__ if self._result is not None else None
        return f"{type(self).__name__}({self._kind!r}, {str(self._url)!r}, result={result})"

    @property
    def url(self) -> httpx.URL:
        return self._url

    @property
    def body(self) -> Any:
        return self._body

    @property
    def kind(self) -> M:
        return self._kind

    @property
    def result(self) -> Optional[type]:
        return self._result

    def set_url(self, url: httpx.URL | str) -> Self:
        self._url = _absolute_url(url)
        return self

    def push_segments(self, *segments: object) -> Self:
        """Append path segments, percent-encoding each one (``/`` included)."""

        raw_path = self._url.raw_path.split(b"?", 1)[0].decode("ascii").rstrip("/")
        for segment in segments:
            raw_path += "/" + quote(str(segment), safe="")
        self._url = self._url.copy_with(path=raw_path)
        return self

    def append_query(self, name: str, value: object) -> Self:
        self._url = self._url.copy_add_param(name, str(value))
        return self

    def set_body(self, body: Any) -> Self:
        """Replace the whole JSON body."""

        self._body = body
        return self

    def body_mut(self) -> Dict[str, Any]:
        """Return the body object for field-level edits, creating it when absent."""

        if self._body is None:
            self._body = {}
        if not isinstance(self._body, dict):
            raise RequestError(f"Request body is a {type(self._body).__name__}, not a JSON object.")
        return self._body

    def set_field(self, name: str, value: Any) -> Self:
        """Set one body field and keep chaining."""

        self.body_mut()[name] = value
        return self

    def transmute(
        self,
        kind: type[m.Method],
        result: Optional[type] = None,
        *,
        builder: Optional[type[R]] = None,
    ) -> R:
        """
        Re-tag the request for a related endpoint.

        Returns a new request; this one is left untouched. URL and body are copied
        over and the kind is reset to its default, so fields that do not apply to the
        new endpoint must be overwritten by the caller. ``builder`` picks the request
        class of the new endpoint so its resource-specific methods are available; it
        defaults to :class:`Request`.
        """

        request = (builder or Request)(self._url, kind, result)
        request._body = deepcopy(self._body)
        return request

    def limit(self, limit: Optional[int]) -> Self:
        """
        Cap the number of values a List request returns. ``None`` follows every page.

        The limit can be set once per request; a second call raises :class:`RequestError`.
        """

        if not isinstance(self._kind, m.List):
            raise RequestError(f"limit() is only supported on List requests, not {self._kind.name}.")
        if self._limited:
            raise RequestError(f"List limit is already set to {self._kind.limit}.")
        if limit is not None and limit < 0:
            raise RequestError(f"List limit must be non-negative, got {limit}.")
        self._kind.limit = limit
        self._limited = True
        return self

    def require_kind(self, *kinds: type[m.Method]) -> None:
        """Raise :class:`RequestError` unless the request is tagged with one of ``kinds``."""

        if not isinstance(self._kind, kinds):
            allowed = ", ".join(kind.__name__ for kind in kinds)
            raise RequestError(f"Operation requires a {allowed} request, got {self._kind.name}.")

    def execute(self, connection: "DigitalOcean") -> V:
        """Run the request against ``connection``. See :func:`~digitalocean_api.executor.execute`."""

        return execute(self, connection)
