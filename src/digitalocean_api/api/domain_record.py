"""
Domain records: individual DNS records of a domain.

Requests start from :meth:`Domain.get(name).records() <digitalocean_api.api.domain.DomainRequest.records>`,
which yields a List request; :class:`DomainRecordRequest` pivots from there to
create, get, update or delete a single record.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#tag/Domain-Records
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import optional_int

RECORDS_SEGMENT = "records"


class DomainRecordRequest(Request[m.Method, Any]):
    """Requests yielding :class:`DomainRecord` values."""

    def create(self, record_type: str, name: str, data: str) -> "DomainRecordRequest":
        return self._pivot(None, m.Create, DomainRecord).set_body({"type": record_type, "name": name, "data": data})

    def get(self, record_id: int) -> "DomainRecordRequest":
        return self._pivot(record_id, m.Get, DomainRecord)

    def update(self, record_id: int) -> "DomainRecordRequest":
        """Start an update; set the fields to change with the chained setters."""

        return self._pivot(record_id, m.Update, DomainRecord)

    def delete(self, record_id: int) -> "DomainRecordRequest":
        return self._pivot(record_id, m.Delete, None)

    def _pivot(self, record_id: Optional[int], kind: type[m.Method], result: Optional[type]) -> "DomainRecordRequest":
        self.require_kind(m.List)
        request = self.transmute(kind, result, builder=DomainRecordRequest)
        # Drop the listing's page size; single-record endpoints take no query.
        request.set_url(request.url.copy_with(query=None))
        if record_id is not None:
            request.push_segments(record_id)
        return request

    # Fields accepted when creating or updating a record.

    def priority(self, priority: Optional[int]) -> "DomainRecordRequest":
        """Priority for SRV and MX records."""

        return self._field("priority", priority, m.Create, m.Update)

    def port(self, port: Optional[int]) -> "DomainRecordRequest":
        """Port for SRV records."""

        return self._field("port", port, m.Create, m.Update)

    def ttl(self, ttl: int) -> "DomainRecordRequest":
        """Seconds clients may cache the record before refreshing it."""

        return self._field("ttl", ttl, m.Create, m.Update)

    def weight(self, weight: Optional[int]) -> "DomainRecordRequest":
        """Weight for SRV records."""

        return self._field("weight", weight, m.Create, m.Update)

    # Fields only changed through an update.

    def record_type(self, record_type: str) -> "DomainRecordRequest":
        return self._field("type", record_type, m.Update)

    def name(self, name: str) -> "DomainRecordRequest":
        return self._field("name", name, m.Update)

    def data(self, data: str) -> "DomainRecordRequest":
        return self._field("data", data, m.Update)

    def _field(self, key: str, value: Any, *kinds: type[m.Method]) -> "DomainRecordRequest":
        self.require_kind(*kinds)
        return self.set_field(key, value)


@envelope(key="domain_record", list_key="domain_records")
@dataclass(slots=True)
class DomainRecord:
    """
    One DNS record.

    ``record_type`` holds the wire field ``type`` (A, CNAME, MX, TXT ...).
    """

    id: int
    record_type: str
    name: str
    data: str
    ttl: int
    priority: Optional[int] = None
    port: Optional[int] = None
    weight: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DomainRecord":
        return cls(
            id=int(payload["id"]),
            record_type=str(payload["type"]),
            name=str(payload["name"]),
            data=str(payload["data"]),
            ttl=int(payload["ttl"]),
            priority=optional_int(payload, "priority"),
            port=optional_int(payload, "port"),
            weight=optional_int(payload, "weight"),
        )
