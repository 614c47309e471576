"""
Response envelope declarations.

DigitalOcean wraps every value it returns in a JSON object:

* singular responses look like ``{"tag": {...}}``;
* collection responses look like ``{"tags": [...], "links": {"pages": {...}}, "meta": {"total": 3}}``.

Each result type that can be executed declares exactly one
:class:`EnvelopeMapping` through :func:`register_envelope` (or the
:func:`envelope` class decorator). The executor looks the mapping up by result
type and uses :func:`unwrap` / :func:`unwrap_page` to recover typed values.
Unwrapping never defaults silently: any structural mismatch raises
:class:`~digitalocean_api.errors.EnvelopeError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

import httpx

from .errors import EnvelopeError, PaginationError

T = TypeVar("T")

Parser = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True, slots=True)
class EnvelopeMapping:
    """
    How a result type is wrapped on the wire.

    Attributes
    ----------
    result_type:
        The Python type values are parsed into.
    key:
        Field holding a single value, or ``None`` when the API never returns one.
    list_key:
        Field holding a page of values, or ``None`` when the API never lists them.
    parse:
        Converts one JSON object into a ``result_type`` value.
    """

    result_type: type
    key: Optional[str]
    list_key: Optional[str]
    parse: Parser

    @property
    def singular(self) -> bool:
        return self.key is not None

    @property
    def pageable(self) -> bool:
        return self.list_key is not None


@dataclass(frozen=True, slots=True)
class PageLinks:
    """The ``links.pages`` block of a list envelope."""

    first: Optional[httpx.URL] = None
    prev: Optional[httpx.URL] = None
    next: Optional[httpx.URL] = None
    last: Optional[httpx.URL] = None


@dataclass(frozen=True, slots=True)
class PageMeta:
    """The ``meta`` block of a list envelope. ``total`` is informational only."""

    total: int


@dataclass(frozen=True, slots=True)
class Page:
    """One unwrapped page of a collection response."""

    values: List[Any]
    links: PageLinks
    meta: PageMeta

    @property
    def next_url(self) -> Optional[httpx.URL]:
        return self.links.next


_REGISTRY: Dict[type, EnvelopeMapping] = {}


def register_envelope(
    result_type: type,
    *,
    key: Optional[str] = None,
    list_key: Optional[str] = None,
    parse: Optional[Parser] = None,
) -> EnvelopeMapping:
    """
    Declare the envelope shape for ``result_type``.

    ``parse`` defaults to ``result_type.from_payload`` when the type defines one,
    otherwise the JSON object is returned unchanged.
    """

    if key is None and list_key is None:
        raise ValueError(f"Envelope for {result_type.__name__} needs a key or a list_key.")
    if result_type in _REGISTRY:
        raise ValueError(f"Envelope for {result_type.__name__} is already registered.")
    if parse is None:
        parse = getattr(result_type, "from_payload", None) or _identity
    mapping = EnvelopeMapping(result_type=result_type, key=key, list_key=list_key, parse=parse)
    _REGISTRY[result_type] = mapping
    return mapping


def envelope(key: Optional[str] = None, list_key: Optional[str] = None) -> Callable[[type[T]], type[T]]:
    """Class decorator form of :func:`register_envelope`."""

    def decorator(cls: type[T]) -> type[T]:
        register_envelope(cls, key=key, list_key=list_key)
        return cls

    return decorator


def unregister_envelope(result_type: type) -> None:
    """Forget the mapping for ``result_type``. Mostly useful in tests."""

    _REGISTRY.pop(result_type, None)


def lookup(result_type: type) -> EnvelopeMapping:
    """Return the mapping registered for ``result_type``."""

    try:
        return _REGISTRY[result_type]
    except KeyError:
        raise EnvelopeError(f"No envelope registered for result type {result_type.__name__}.") from None


def unwrap(mapping: EnvelopeMapping, payload: Any) -> Any:
    """Strip a singular envelope and parse the value it holds."""

    if mapping.key is None:
        raise EnvelopeError(f"{mapping.result_type.__name__} has no singular envelope.")
    body = _require_object(payload, "response")
    if mapping.key not in body:
        raise EnvelopeError(f"Response is missing the '{mapping.key}' field.")
    return _parse(mapping, _require_object(body[mapping.key], mapping.key))


def unwrap_page(mapping: EnvelopeMapping, payload: Any) -> Page:
    """Strip a list envelope, returning the parsed values and the pagination metadata."""

    if mapping.list_key is None:
        raise EnvelopeError(f"{mapping.result_type.__name__} has no list envelope.")
    body = _require_object(payload, "response")
    if mapping.list_key not in body:
        raise EnvelopeError(f"Response is missing the '{mapping.list_key}' field.")
    items = body[mapping.list_key]
    if not isinstance(items, list):
        raise EnvelopeError(f"Field '{mapping.list_key}' must be a list, got {type(items).__name__}.")
    values = [_parse(mapping, _require_object(item, mapping.list_key)) for item in items]
    return Page(values=values, links=_parse_links(body.get("links")), meta=_parse_meta(body.get("meta")))


def _parse(mapping: EnvelopeMapping, item: Mapping[str, Any]) -> Any:
    try:
        return mapping.parse(item)
    except (KeyError, TypeError, ValueError) as exc:
        raise EnvelopeError(f"Failed to parse {mapping.result_type.__name__}: {exc!r}") from exc


def _parse_links(raw: Any) -> PageLinks:
    links = _require_object(raw, "links")
    pages = links.get("pages")
    if pages is None:
        return PageLinks()
    pages = _require_object(pages, "links.pages")
    return PageLinks(
        first=_parse_cursor(pages.get("first"), "first"),
        prev=_parse_cursor(pages.get("prev"), "prev"),
        next=_parse_cursor(pages.get("next"), "next"),
        last=_parse_cursor(pages.get("last"), "last"),
    )


def _parse_meta(raw: Any) -> PageMeta:
    meta = _require_object(raw, "meta")
    total = meta.get("total")
    if not isinstance(total, int) or isinstance(total, bool):
        raise EnvelopeError("Field 'meta.total' must be an integer.")
    return PageMeta(total=total)


def _parse_cursor(raw: Any, name: str) -> Optional[httpx.URL]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise PaginationError(f"Pagination cursor '{name}' must be a string, got {type(raw).__name__}.")
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise PaginationError(f"Pagination cursor '{name}' is not a valid URL: {raw!r}") from exc
    if not url.is_absolute_url:
        raise PaginationError(f"Pagination cursor '{name}' is not an absolute URL: {raw!r}")
    return url


def _require_object(value: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise EnvelopeError(f"Expected '{name}' to be a JSON object, got {type(value).__name__}.")
    return value


def _identity(item: Mapping[str, Any]) -> Any:
    return item
