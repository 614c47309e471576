"""
Client settings resolution.

The API token is looked up in this order:

1. The ``token`` argument passed to :func:`load_settings`.
2. The ``DIGITALOCEAN_TOKEN`` environment variable.
3. The ``[digitalocean]`` table of a TOML secrets file, found through
   ``DIGITALOCEAN_SECRETS_PATH`` or ``.secrets/secret.toml`` /
   ``.secrets/secrets.toml`` under the current working directory.

The secrets table may also carry ``api_url``, ``timeout``, ``max_pages`` and
``connect_attempts``. ``DIGITALOCEAN_API_URL`` overrides the API root.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .errors import ConfigError

ROOT_URL = "https://api.digitalocean.com/v2/"
ENV_TOKEN = "DIGITALOCEAN_TOKEN"
ENV_API_URL = "DIGITALOCEAN_API_URL"
ENV_SECRETS_PATH = "DIGITALOCEAN_SECRETS_PATH"
SECRETS_SECTION = "digitalocean"


@dataclass(slots=True)
class ClientSettings:
    """
    Everything a :class:`~digitalocean_api.client.DigitalOcean` connection needs.

    Attributes
    ----------
    token:
        Personal access token sent as a bearer credential.
    api_url:
        Root of the v2 API. Resource modules append path segments to it.
    timeout:
        Per-request timeout in seconds.
    max_pages:
        Upper bound on pages fetched by one List request. ``None`` means unbounded.
    connect_attempts:
        Connection establishment attempts made by the transport.
    """

    token: str
    api_url: str = ROOT_URL
    timeout: float = 30.0
    max_pages: Optional[int] = None
    connect_attempts: int = 3

    def __post_init__(self) -> None:
        if not self.api_url.endswith("/"):
            self.api_url += "/"
        if self.max_pages is not None and self.max_pages < 1:
            raise ConfigError(f"max_pages must be at least 1, got {self.max_pages}.")


def _candidate_paths() -> Iterable[Path]:
    override = os.getenv(ENV_SECRETS_PATH)
    if override:
        yield Path(override).expanduser()
    secrets_dir = Path.cwd() / ".secrets"
    for filename in ("secret.toml", "secrets.toml"):
        yield secrets_dir / filename


def _load_section() -> Dict[str, Any]:
    for path in _candidate_paths():
        if not path.is_file():
            continue
        try:
            with path.open("rb") as handle:
                raw = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Failed to read secrets file '{path}': {exc}") from exc
        section = raw.get(SECRETS_SECTION, {})
        return section if isinstance(section, dict) else {}
    return {}


def _optional_int(value: Any, name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Setting '{name}' must be an integer, got {value!r}.")
    return value


def load_settings(token: Optional[str] = None, *, strict: bool = True) -> ClientSettings:
    """
    Resolve :class:`ClientSettings` from arguments, environment and secrets file.

    Parameters
    ----------
    token:
        Explicit token; skips every other token source when given.
    strict:
        When ``True`` a missing token raises :class:`ConfigError`. Otherwise an empty
        token is used, which is only useful for unauthenticated test doubles.
    """

    section = _load_section()
    resolved_token = token or os.getenv(ENV_TOKEN) or section.get("token")
    if not resolved_token or not isinstance(resolved_token, str):
        if strict:
            raise ConfigError(f"No API token found. Set {ENV_TOKEN} or add a [{SECRETS_SECTION}] token to .secrets/secret.toml.")
        resolved_token = ""

    api_url = os.getenv(ENV_API_URL) or section.get("api_url") or ROOT_URL
    timeout = section.get("timeout", 30.0)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigError(f"Setting 'timeout' must be a number, got {timeout!r}.")

    return ClientSettings(
        token=resolved_token,
        api_url=str(api_url),
        timeout=float(timeout),
        max_pages=_optional_int(section.get("max_pages"), "max_pages"),
        connect_attempts=_optional_int(section.get("connect_attempts"), "connect_attempts") or 3,
    )
