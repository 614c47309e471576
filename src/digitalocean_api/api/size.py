"""
Sizes: hardware plans a Droplet can be created with.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#tag/Sizes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import list_request, string_list

SIZES_SEGMENT = "sizes"


class SizeRequest(Request[m.Method, Any]):
    """Requests yielding :class:`Size` values."""


# The API never returns a single size, so only the list envelope is declared.
@envelope(list_key="sizes")
@dataclass(slots=True)
class Size:
    """A plan bundling memory, vCPUs, disk and transfer at a monthly/hourly price."""

    slug: str
    available: bool
    transfer: float
    price_monthly: float
    price_hourly: float
    memory: int
    vcpus: int
    disk: int
    regions: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Size":
        return cls(
            slug=str(payload["slug"]),
            available=bool(payload["available"]),
            transfer=float(payload["transfer"]),
            price_monthly=float(payload["price_monthly"]),
            price_hourly=float(payload["price_hourly"]),
            memory=int(payload["memory"]),
            vcpus=int(payload["vcpus"]),
            disk=int(payload["disk"]),
            regions=string_list(payload, "regions"),
        )

    @staticmethod
    def list() -> SizeRequest:
        return list_request(SizeRequest, Size, SIZES_SEGMENT)
