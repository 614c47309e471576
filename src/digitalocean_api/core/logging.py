"""
Structured logging helpers for the DigitalOcean client.

Loggers are plain :mod:`logging` loggers wrapped in a :class:`LoggerAdapter` so
request metadata (method, url, status code, page number) travels as record
attributes. :class:`StructuredLogFormatter` renders those attributes as
``key=value`` pairs after the message. Library code obtains loggers through
:func:`get_logger`; applications opt into handlers with :func:`configure_logging`.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from copy import copy
from logging import Logger, LoggerAdapter
from typing import Any, Iterable, Mapping, MutableMapping, Optional, Sequence

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = "WARNING"
_ENV_LEVEL = "DIGITALOCEAN_LOG_LEVEL"
_ENV_COLOR = "DIGITALOCEAN_LOG_COLOR"
_EXTRA_FOCUS_ORDER: Sequence[str] = (
    "phase",
    "step",
    "status",
    "method",
    "url",
    "status_code",
    "page",
    "items",
    "remaining",
    "attempt",
)

_LEVEL_STYLES = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[95m",
}
_RESET = "\033[0m"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_configured = False


def _resolve_level(level: Optional[int | str]) -> int:
    if isinstance(level, int):
        return level
    candidate = (level or os.getenv(_ENV_LEVEL) or DEFAULT_LEVEL).upper()
    resolved = logging.getLevelName(candidate)
    return resolved if isinstance(resolved, int) else logging.WARNING


def _wants_color(stream: Any) -> bool:
    preference = (os.getenv(_ENV_COLOR) or "auto").strip().lower()
    if preference in {"1", "true", "yes", "on"}:
        return True
    if preference in {"0", "false", "no", "off"}:
        return False
    return hasattr(stream, "isatty") and bool(stream.isatty())


def _iter_extras(record: logging.LogRecord) -> Iterable[tuple[str, Any]]:
    payload = {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS and not key.startswith("_") and value is not None}

    for key in _EXTRA_FOCUS_ORDER:
        if key in payload:
            yield key, payload.pop(key)

    for key in sorted(payload):
        yield key, payload[key]


def _format_extra_value(value: Any) -> str:
    if isinstance(value, (list, tuple, set)):
        return "[" + ", ".join(_format_extra_value(item) for item in value) + "]"
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


class StructuredLogFormatter(logging.Formatter):
    """Formatter that appends record extras as ``key=value`` pairs."""

    def __init__(self, *, use_color: bool = False) -> None:
        super().__init__(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        working = copy(record)
        if self.use_color:
            style = _LEVEL_STYLES.get(working.levelname)
            if style:
                working.levelname = f"{style}{working.levelname}{_RESET}"
        base = super().format(working)
        extras = " ".join(f"{key}={_format_extra_value(value)}" for key, value in _iter_extras(record))
        if extras:
            return f"{base} | {extras}"
        return base


def configure_logging(level: Optional[int | str] = None, *, force: bool = False) -> None:
    """
    Install a stderr handler using :class:`StructuredLogFormatter`.

    Parameters
    ----------
    level:
        Logging level override. Falls back to ``DIGITALOCEAN_LOG_LEVEL`` or ``WARNING``.
    force:
        Reinstall the handler even when logging was already configured.
    """

    global _configured
    if _configured and not force:
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(_resolve_level(level))
    handler.setFormatter(StructuredLogFormatter(use_color=_wants_color(handler.stream)))
    logging.basicConfig(level=_resolve_level(level), handlers=[handler], force=force)
    _configured = True


class _ContextAdapter(LoggerAdapter):
    """Adapter merging call-site ``extra`` over the bound context instead of replacing it."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str, *, extra: Optional[Mapping[str, object]] = None) -> LoggerAdapter:
    """
    Return a :class:`LoggerAdapter` carrying ``extra`` on every record.

    Unlike :func:`configure_logging` this never touches handlers, so importing the
    library does not alter the host application's logging setup.
    """

    base: Logger = logging.getLogger(name)
    payload = {key: value for key, value in (extra or {}).items() if value is not None}
    return _ContextAdapter(base, payload)


def log_progress(
    logger: LoggerAdapter | Logger,
    message: str,
    *,
    phase: Optional[str] = None,
    step: Optional[str] = None,
    status: Optional[str] = None,
    level: int = logging.DEBUG,
    extra: Optional[Mapping[str, object]] = None,
) -> None:
    """Emit a progress record tagged with ``phase``/``step``/``status`` attributes."""

    payload: MutableMapping[str, object] = {}
    if isinstance(logger, LoggerAdapter) and isinstance(logger.extra, Mapping):
        payload.update(logger.extra)
    if extra:
        payload.update(extra)
    for key, value in (("phase", phase), ("step", step), ("status", status)):
        if value:
            payload[key] = value
    target = logger.logger if isinstance(logger, LoggerAdapter) else logger
    target.log(level, message, extra=dict(payload) or None)
