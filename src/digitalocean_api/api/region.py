"""
Regions: datacenters where Droplets can be deployed and images transferred.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#tag/Regions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import list_request, string_list

REGIONS_SEGMENT = "regions"


class RegionRequest(Request[m.Method, Any]):
    """Requests yielding :class:`Region` values."""


@envelope(key="region", list_key="regions")
@dataclass(slots=True)
class Region:
    """
    A datacenter location.

    Attributes
    ----------
    slug:
        Unique identifier such as ``nyc3``.
    name:
        Display name shown in the control panel.
    sizes:
        Size slugs that can be created in this region.
    available:
        Whether new Droplets can be created here.
    features:
        Features available in this region (``backups``, ``ipv6`` ...).
    """

    slug: str
    name: str
    available: bool
    sizes: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Region":
        return cls(
            slug=str(payload["slug"]),
            name=str(payload["name"]),
            available=bool(payload["available"]),
            sizes=string_list(payload, "sizes"),
            features=string_list(payload, "features"),
        )

    @staticmethod
    def list() -> RegionRequest:
        return list_request(RegionRequest, Region, REGIONS_SEGMENT)
