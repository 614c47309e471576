"""
Snapshots: saved copies of a Droplet or a block storage volume.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#tag/Snapshots
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import endpoint, list_request, parse_datetime, string_list

SNAPSHOTS_SEGMENT = "snapshots"


class SnapshotRequest(Request[m.Method, Any]):
    """Requests yielding :class:`Snapshot` values."""

    def resource_type(self, resource_type: str) -> "SnapshotRequest":
        """Restrict a listing to ``droplet`` or ``volume`` snapshots."""

        self.require_kind(m.List)
        self.append_query("resource_type", resource_type)
        return self


@envelope(key="snapshot", list_key="snapshots")
@dataclass(slots=True)
class Snapshot:
    id: str
    name: str
    created_at: datetime
    resource_id: str
    resource_type: str
    min_disk_size: int
    size_gigabytes: float
    regions: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Snapshot":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            created_at=parse_datetime(payload["created_at"]),
            resource_id=str(payload["resource_id"]),
            resource_type=str(payload["resource_type"]),
            min_disk_size=int(payload["min_disk_size"]),
            size_gigabytes=float(payload["size_gigabytes"]),
            regions=string_list(payload, "regions"),
            tags=string_list(payload, "tags"),
        )

    @staticmethod
    def list() -> SnapshotRequest:
        return list_request(SnapshotRequest, Snapshot, SNAPSHOTS_SEGMENT)

    @staticmethod
    def get(snapshot_id: str) -> SnapshotRequest:
        return SnapshotRequest.new(endpoint(SNAPSHOTS_SEGMENT, snapshot_id), m.Get, Snapshot)

    @staticmethod
    def delete(snapshot_id: str) -> SnapshotRequest:
        return SnapshotRequest.new(endpoint(SNAPSHOTS_SEGMENT, snapshot_id), m.Delete)
