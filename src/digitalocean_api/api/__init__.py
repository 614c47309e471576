"""
DigitalOcean resources.

Each submodule defines a resource dataclass, registers its response envelope and
exposes factories returning tagged :class:`~digitalocean_api.request.Request`
builders. Importing this package registers every envelope.
"""

from .base import MAX_PER_PAGE
from .custom_image import CustomImage, CustomImageRequest
from .domain import Domain, DomainRequest
from .domain_record import DomainRecord, DomainRecordRequest
from .floating_ip import FloatingIp, FloatingIpRequest
from .region import Region, RegionRequest
from .size import Size, SizeRequest
from .snapshot import Snapshot, SnapshotRequest
from .tag import Tag, TagRequest
from .volume import Volume, VolumeRequest

__all__ = [
    "MAX_PER_PAGE",
    "CustomImage",
    "CustomImageRequest",
    "Domain",
    "DomainRecord",
    "DomainRecordRequest",
    "DomainRequest",
    "FloatingIp",
    "FloatingIpRequest",
    "Region",
    "RegionRequest",
    "Size",
    "SizeRequest",
    "Snapshot",
    "SnapshotRequest",
    "Tag",
    "TagRequest",
    "Volume",
    "VolumeRequest",
]
