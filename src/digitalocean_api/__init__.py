"""
Typed client for the DigitalOcean v2 REST API.

Requests are built from the resource classes in :mod:`digitalocean_api.api`,
tagged with an operation kind from :mod:`digitalocean_api.method`, and executed
against a :class:`DigitalOcean` connection::

    from digitalocean_api import DigitalOcean, Domain

    with DigitalOcean.from_env() as do:
        records = Domain.get("example.com").records().limit(50).execute(do)
"""

from . import method
from .api import (
    MAX_PER_PAGE,
    CustomImage,
    Domain,
    DomainRecord,
    FloatingIp,
    Region,
    Size,
    Snapshot,
    Tag,
    Volume,
)
from .client import DigitalOcean
from .config import ROOT_URL, ClientSettings, load_settings
from .envelope import EnvelopeMapping, Page, envelope, register_envelope
from .errors import (
    ConfigError,
    DigitalOceanError,
    EnvelopeError,
    PaginationError,
    RequestError,
    StatusError,
    TransportError,
)
from .executor import execute
from .request import Request
from .transport import HttpxTransport, Transport, TransportResponse

__version__ = "0.2.2"

__all__ = [
    "MAX_PER_PAGE",
    "ROOT_URL",
    "ClientSettings",
    "ConfigError",
    "CustomImage",
    "DigitalOcean",
    "DigitalOceanError",
    "Domain",
    "DomainRecord",
    "EnvelopeError",
    "EnvelopeMapping",
    "FloatingIp",
    "HttpxTransport",
    "Page",
    "PaginationError",
    "Region",
    "Request",
    "RequestError",
    "Size",
    "Snapshot",
    "StatusError",
    "Tag",
    "Transport",
    "TransportError",
    "TransportResponse",
    "Volume",
    "envelope",
    "execute",
    "load_settings",
    "method",
    "register_envelope",
]
