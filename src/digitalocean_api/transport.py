"""
HTTP transport used by :class:`~digitalocean_api.client.DigitalOcean`.

The executor only depends on the narrow :class:`Transport` protocol: given a verb,
an absolute URL, an optional JSON body and a token, return the status code and
raw bytes, or raise :class:`~digitalocean_api.errors.TransportError`. Status
handling and JSON decoding stay with the executor.

:class:`HttpxTransport` is the default implementation. It keeps one pooled
``httpx.Client`` and retries only failures to *establish* a connection, which
never reach the provider; anything past that point is surfaced immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .core.logging import get_logger
from .errors import TransportError

DEFAULT_TIMEOUT = 30.0
DEFAULT_CONNECT_ATTEMPTS = 3
USER_AGENT = "digitalocean-api-python"


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status code and raw body of one HTTP exchange."""

    status_code: int
    content: bytes
    url: str = ""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(Protocol):
    def send(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        json: Any = None,
        token: Optional[str] = None,
    ) -> TransportResponse:
        """Perform one HTTP call."""

    def close(self) -> None:
        """Release pooled connections."""


class HttpxTransport:
    """
    Synchronous transport backed by ``httpx``.

    Parameters
    ----------
    timeout:
        Per-request timeout in seconds.
    connect_attempts:
        How many times to try establishing a connection before giving up.
    backoff:
        Multiplier for the exponential wait between connection attempts.
    client:
        Pre-built ``httpx.Client``; the transport does not close clients it did not create.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        connect_attempts: int = DEFAULT_CONNECT_ATTEMPTS,
        backoff: float = 0.5,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.timeout = timeout
        self.connect_attempts = max(1, connect_attempts)
        self.backoff = backoff
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, headers={"User-Agent": USER_AGENT})
        self.logger = get_logger(f"{__name__}.{type(self).__name__}")

    def send(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        json: Any = None,
        token: Optional[str] = None,
    ) -> TransportResponse:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.logger.debug("HTTP request", extra={"method": method, "url": str(url)})

        retrying = Retrying(
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
            wait=wait_exponential(multiplier=self.backoff, max=8),
            stop=stop_after_attempt(self.connect_attempts),
            reraise=True,
        )
        try:
            response = retrying(self._client.request, method, url, json=json, headers=headers)
        except httpx.HTTPError as exc:
            self.logger.error("HTTP transport failure", extra={"method": method, "url": str(url), "error": str(exc)})
            raise TransportError(f"HTTP error while calling {method} {url}: {exc}") from exc

        self.logger.debug(
            "HTTP response",
            extra={"method": method, "url": str(response.url), "status_code": response.status_code},
        )
        return TransportResponse(status_code=response.status_code, content=response.content, url=str(response.url))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
