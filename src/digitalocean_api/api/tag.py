"""
Tags: labels applied to resources to organise lookups and bulk actions.

Reference: https://docs.digitalocean.com/reference/api/api-reference/#tag/Tags
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

from .. import method as m
from ..envelope import envelope
from ..request import Request
from .base import endpoint, list_request

TAGS_SEGMENT = "tags"
RESOURCES_SEGMENT = "resources"


class TagRequest(Request[m.Method, Any]):
    """Requests yielding :class:`Tag` values, plus tagging of other resources."""

    def add_resources(self, resources: Iterable[Tuple[str, str]]) -> Request[m.Create, None]:
        """
        Apply this tag to ``(resource_id, resource_type)`` pairs.

        Only valid on a :meth:`Tag.get` request.
        """

        self.require_kind(m.Get)
        request = self.transmute(m.Create)
        return request.push_segments(RESOURCES_SEGMENT).set_body({"resources": _resource_refs(resources)})

    def remove_resources(self, resources: Iterable[Tuple[str, str]]) -> Request[m.Delete, None]:
        """Remove this tag from ``(resource_id, resource_type)`` pairs."""

        self.require_kind(m.Get)
        request = self.transmute(m.Delete)
        return request.push_segments(RESOURCES_SEGMENT).set_body({"resources": _resource_refs(resources)})


def _resource_refs(resources: Iterable[Tuple[str, str]]) -> list[Dict[str, str]]:
    return [{"resource_id": str(resource_id), "resource_type": str(kind)} for resource_id, kind in resources]


@envelope(key="tag", list_key="tags")
@dataclass(slots=True)
class Tag:
    """
    A user-defined label.

    ``resources`` is the embedded summary of tagged resources keyed by resource
    type, kept as raw JSON since its shape varies per type.
    """

    name: str
    resources: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Tag":
        resources = payload.get("resources") or {}
        if not isinstance(resources, Mapping):
            raise TypeError("field 'resources' must be an object")
        return cls(name=str(payload["name"]), resources=dict(resources))

    @staticmethod
    def create(name: str) -> TagRequest:
        return TagRequest.new(endpoint(TAGS_SEGMENT), m.Create, Tag).set_body({"name": name})

    @staticmethod
    def get(name: str) -> TagRequest:
        return TagRequest.new(endpoint(TAGS_SEGMENT, name), m.Get, Tag)

    @staticmethod
    def list() -> TagRequest:
        return list_request(TagRequest, Tag, TAGS_SEGMENT)

    @staticmethod
    def delete(name: str) -> TagRequest:
        return TagRequest.new(endpoint(TAGS_SEGMENT, name), m.Delete)
