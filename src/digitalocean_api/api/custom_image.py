"""
Custom images: Linux VM images imported from a user-supplied URL.

The image must be raw, qcow2, vhdx, vdi or vmdk, optionally gzip/bzip2 compressed,
and smaller than 100 GB once decompressed.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#operation/images_create_custom
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, List, Mapping

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import endpoint, parse_datetime, string_list

IMAGES_SEGMENT = "images"


class CustomImageRequest(Request[m.Method, Any]):
    """Requests yielding :class:`CustomImage` values."""


@envelope(key="image")
@dataclass(slots=True)
class CustomImage:
    id: int
    name: str
    image_type: str
    distribution: str
    created_at: datetime
    status: str
    description: str = ""
    regions: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CustomImage":
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            image_type=str(payload["type"]),
            distribution=str(payload["distribution"]),
            created_at=parse_datetime(payload["created_at"]),
            status=str(payload["status"]),
            description=str(payload.get("description") or ""),
            regions=string_list(payload, "regions"),
            tags=string_list(payload, "tags"),
        )

    @staticmethod
    def create(
        name: str,
        image_url: str,
        region: str,
        distribution: str,
        description: str = "",
        tags: Iterable[str] = (),
    ) -> CustomImageRequest:
        request = CustomImageRequest.new(endpoint(IMAGES_SEGMENT), m.Create, CustomImage)
        return request.set_body(
            {
                "name": name,
                "url": image_url,
                "region": region,
                "distribution": distribution,
                "description": description,
                "tags": list(tags),
            }
        )
