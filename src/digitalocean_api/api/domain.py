"""
Domains: DNS zones managed by DigitalOcean.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#tag/Domains
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import MAX_PER_PAGE, endpoint, list_request, optional_int
from .domain_record import RECORDS_SEGMENT, DomainRecord, DomainRecordRequest

DOMAINS_SEGMENT = "domains"


class DomainRequest(Request[m.Method, Any]):
    """Requests yielding :class:`Domain` values."""

    def records(self) -> DomainRecordRequest:
        """List the DNS records of the domain this Get request points at."""

        self.require_kind(m.Get)
        request = self.transmute(m.List, DomainRecord, builder=DomainRecordRequest)
        return request.push_segments(RECORDS_SEGMENT).append_query("per_page", MAX_PER_PAGE)


@envelope(key="domain", list_key="domains")
@dataclass(slots=True)
class Domain:
    """
    A DNS zone.

    Attributes
    ----------
    ttl:
        Default time to live of the zone's records, in seconds.
    zone_file:
        Complete zone file contents; ``None`` while the zone is being provisioned.
    """

    name: str
    ttl: Optional[int] = None
    zone_file: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Domain":
        zone_file = payload.get("zone_file")
        return cls(
            name=str(payload["name"]),
            ttl=optional_int(payload, "ttl"),
            zone_file=str(zone_file) if zone_file is not None else None,
        )

    @staticmethod
    def list() -> DomainRequest:
        return list_request(DomainRequest, Domain, DOMAINS_SEGMENT)

    @staticmethod
    def create(name: str, ip_address: str) -> DomainRequest:
        """Create a zone with an A record for its apex pointing at ``ip_address``."""

        request = DomainRequest.new(endpoint(DOMAINS_SEGMENT), m.Create, Domain)
        return request.set_body({"name": name, "ip_address": ip_address})

    @staticmethod
    def get(name: str) -> DomainRequest:
        return DomainRequest.new(endpoint(DOMAINS_SEGMENT, name), m.Get, Domain)

    @staticmethod
    def delete(name: str) -> DomainRequest:
        return DomainRequest.new(endpoint(DOMAINS_SEGMENT, name), m.Delete)
