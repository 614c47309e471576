"""
Helpers shared by the resource modules.

Resource modules build their requests against :data:`~digitalocean_api.config.ROOT_URL`;
the connection rebases them when a different API root is configured.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional, TypeVar

import httpx

from .. import method as m
from ..config import ROOT_URL
from ..request import Request

# Provider-side cap on ``per_page``.
MAX_PER_PAGE = 200

R = TypeVar("R", bound=Request)


def endpoint(*segments: object) -> httpx.URL:
    """Absolute URL of ``ROOT_URL`` followed by ``segments``."""

    request: Request[Any, Any] = Request(ROOT_URL, m.Get)
    return request.push_segments(*segments).url


def list_request(builder: type[R], result: type, *segments: object) -> R:
    """Start a List request for ``segments`` asking for the largest page size."""

    request = builder.new(endpoint(*segments), m.List, result)
    request.append_query("per_page", MAX_PER_PAGE)
    return request


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp such as ``2017-03-21T16:34:44Z``."""

    if not isinstance(value, str):
        raise TypeError(f"expected an ISO 8601 string, got {type(value).__name__}")
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def optional_int(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    return None if value is None else int(value)


def string_list(payload: Mapping[str, Any], key: str) -> List[str]:
    values = payload.get(key) or []
    if not isinstance(values, list):
        raise TypeError(f"field '{key}' must be a list")
    return [str(value) for value in values]
