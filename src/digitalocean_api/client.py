"""
The live connection requests are executed against.

:class:`DigitalOcean` bundles the API token, the API root and a transport. It is
the ``connection`` argument :func:`~digitalocean_api.executor.execute` expects.

Example
-------
>>> from digitalocean_api import DigitalOcean, Tag
>>> with DigitalOcean.from_env() as do:
...     tags = Tag.list().limit(10).execute(do)
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from .config import ROOT_URL, ClientSettings, load_settings
from .core.logging import get_logger
from .executor import execute
from .transport import HttpxTransport, Transport, TransportResponse


class DigitalOcean:
    """
    Authenticated connection to the DigitalOcean API.

    Parameters
    ----------
    settings:
        Resolved client settings. See :func:`~digitalocean_api.config.load_settings`.
    transport:
        Transport used for every call. Defaults to an :class:`HttpxTransport`
        configured from ``settings``; the connection closes transports it created.
    """

    def __init__(self, settings: ClientSettings, *, transport: Optional[Transport] = None) -> None:
        self.settings = settings
        self._owns_transport = transport is None
        self.transport: Transport = transport or HttpxTransport(
            timeout=settings.timeout,
            connect_attempts=settings.connect_attempts,
        )
        self.logger = get_logger(f"{__name__}.{type(self).__name__}", extra={"api_url": settings.api_url})

    @classmethod
    def from_token(cls, token: str, *, transport: Optional[Transport] = None, **options: Any) -> "DigitalOcean":
        return cls(ClientSettings(token=token, **options), transport=transport)

    @classmethod
    def from_env(cls, *, transport: Optional[Transport] = None) -> "DigitalOcean":
        """Build a connection from :func:`~digitalocean_api.config.load_settings`."""

        return cls(load_settings(), transport=transport)

    @property
    def max_pages(self) -> Optional[int]:
        return self.settings.max_pages

    def resolve(self, url: httpx.URL | str) -> httpx.URL:
        """Rebase URLs built against the public API root onto ``settings.api_url``."""

        text = str(url)
        if self.settings.api_url != ROOT_URL and text.startswith(ROOT_URL):
            text = self.settings.api_url + text[len(ROOT_URL) :]
        return httpx.URL(text)

    def send(self, method: str, url: httpx.URL, *, json: Any = None) -> TransportResponse:
        return self.transport.send(method, self.resolve(url), json=json, token=self.settings.token)

    def execute(self, request: Any) -> Any:
        """Execute a :class:`~digitalocean_api.request.Request` on this connection."""

        self.logger.debug("Executing request", extra={"method": request.kind.verb, "url": str(request.url)})
        return execute(request, self)

    def close(self) -> None:
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "DigitalOcean":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
