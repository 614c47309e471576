"""
Floating IPs: static public addresses that can be moved between Droplets in a region.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#tag/Floating-IPs
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import endpoint, list_request
from .region import Region

FLOATING_IPS_SEGMENT = "floating_ips"

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


class FloatingIpRequest(Request[m.Method, Any]):
    """Requests yielding :class:`FloatingIp` values."""


@envelope(key="floating_ip", list_key="floating_ips")
@dataclass(slots=True)
class FloatingIp:
    """
    A reserved public address.

    ``droplet`` is the raw Droplet object the address is assigned to, or ``None``
    when unassigned.
    """

    ip: IPAddress
    region: Region
    droplet: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FloatingIp":
        droplet = payload.get("droplet")
        if droplet is not None and not isinstance(droplet, Mapping):
            raise TypeError("field 'droplet' must be an object or null")
        return cls(
            ip=ipaddress.ip_address(payload["ip"]),
            region=Region.from_payload(payload["region"]),
            droplet=dict(droplet) if droplet is not None else None,
        )

    @staticmethod
    def list() -> FloatingIpRequest:
        return list_request(FloatingIpRequest, FloatingIp, FLOATING_IPS_SEGMENT)

    @staticmethod
    def for_droplet(droplet_id: int) -> FloatingIpRequest:
        """Reserve a new address and assign it to ``droplet_id``."""

        request = FloatingIpRequest.new(endpoint(FLOATING_IPS_SEGMENT), m.Create, FloatingIp)
        return request.set_body({"droplet_id": droplet_id})

    @staticmethod
    def for_region(region: str) -> FloatingIpRequest:
        """Reserve a new, unassigned address in ``region``."""

        request = FloatingIpRequest.new(endpoint(FLOATING_IPS_SEGMENT), m.Create, FloatingIp)
        return request.set_body({"region": region})

    @staticmethod
    def get(ip: str | IPAddress) -> FloatingIpRequest:
        return FloatingIpRequest.new(endpoint(FLOATING_IPS_SEGMENT, ipaddress.ip_address(ip)), m.Get, FloatingIp)

    @staticmethod
    def delete(ip: str | IPAddress) -> FloatingIpRequest:
        return FloatingIpRequest.new(endpoint(FLOATING_IPS_SEGMENT, ipaddress.ip_address(ip)), m.Delete)
