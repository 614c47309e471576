"""
Block storage volumes: network-attached disks that can move between Droplets
within one region.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#tag/Block-Storage
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import endpoint, list_request, parse_datetime
from .region import Region
from .snapshot import SNAPSHOTS_SEGMENT, Snapshot, SnapshotRequest

VOLUMES_SEGMENT = "volumes"


class VolumeRequest(Request[m.Method, Any]):
    """Requests yielding :class:`Volume` values."""

    def region(self, region: str) -> "VolumeRequest":
        """
        Filter a listing by region slug, or pick the region a new volume is created in.

        When creating, do not combine with :meth:`snapshot_id`.
        """

        self.require_kind(m.List, m.Create)
        if isinstance(self.kind, m.List):
            self.append_query("region", region)
        else:
            self.set_field("region", region)
        return self

    def description(self, description: str) -> "VolumeRequest":
        self.require_kind(m.Create)
        return self.set_field("description", description)

    def snapshot_id(self, snapshot_id: str) -> "VolumeRequest":
        """Create the volume from an existing volume snapshot."""

        self.require_kind(m.Create)
        return self.set_field("snapshot_id", snapshot_id)

    def snapshots(self) -> SnapshotRequest:
        """List the snapshots taken from the volume this Get request points at."""

        self.require_kind(m.Get)
        return self.transmute(m.List, Snapshot, builder=SnapshotRequest).push_segments(SNAPSHOTS_SEGMENT)

    def snapshot(self, name: str) -> SnapshotRequest:
        """Snapshot the volume this Get request points at."""

        self.require_kind(m.Get)
        request = self.transmute(m.Create, Snapshot, builder=SnapshotRequest)
        return request.push_segments(SNAPSHOTS_SEGMENT).set_body({"name": name})


@envelope(key="volume", list_key="volumes")
@dataclass(slots=True)
class Volume:
    """
    A block storage volume.

    Attributes
    ----------
    region:
        Full region object the volume lives in.
    droplet_ids:
        Droplets the volume is attached to (at most one today).
    size_gigabytes:
        Size in GiB.
    """

    id: str
    name: str
    region: Region
    size_gigabytes: float
    created_at: datetime
    description: str = ""
    droplet_ids: List[int] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Volume":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            region=Region.from_payload(payload["region"]),
            size_gigabytes=float(payload["size_gigabytes"]),
            created_at=parse_datetime(payload["created_at"]),
            description=str(payload.get("description") or ""),
            droplet_ids=[int(droplet_id) for droplet_id in payload.get("droplet_ids") or []],
        )

    @staticmethod
    def list() -> VolumeRequest:
        return list_request(VolumeRequest, Volume, VOLUMES_SEGMENT)

    @staticmethod
    def create(name: str, size_gigabytes: int) -> VolumeRequest:
        request = VolumeRequest.new(endpoint(VOLUMES_SEGMENT), m.Create, Volume)
        return request.set_body({"name": name, "size_gigabytes": size_gigabytes})

    @staticmethod
    def get(volume_id: str) -> VolumeRequest:
        return VolumeRequest.new(endpoint(VOLUMES_SEGMENT, volume_id), m.Get, Volume)

    @staticmethod
    def get_by_name(name: str, region: str) -> VolumeRequest:
        """
        Look a volume up by name and region.

        The provider answers with a list envelope, so this is a List request capped
        at one value; executing it returns a list with zero or one volume.
        """

        request = VolumeRequest.new(endpoint(VOLUMES_SEGMENT), m.List, Volume)
        return request.append_query("name", name).append_query("region", region).limit(1)

    @staticmethod
    def delete(volume_id: str) -> VolumeRequest:
        return VolumeRequest.new(endpoint(VOLUMES_SEGMENT, volume_id), m.Delete)

    @staticmethod
    def delete_by_name(name: str, region: str) -> VolumeRequest:
        request = VolumeRequest.new(endpoint(VOLUMES_SEGMENT), m.Delete)
        return request.append_query("name", name).append_query("region", region)
