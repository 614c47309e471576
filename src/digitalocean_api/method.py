"""
Operation kinds a :class:`~digitalocean_api.request.Request` can be tagged with.

The set is closed: :class:`List`, :class:`Create`, :class:`Get`, :class:`Update`
and :class:`Delete`. Each kind knows the HTTP verb the executor uses for it.
Only :class:`List` carries configuration (an optional result-count limit).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from .errors import RequestError


@dataclass(slots=True)
class Method:
    """Base class for operation kinds. Not meant to be instantiated directly."""

    verb: ClassVar[str] = ""

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(slots=True)
class List(Method):
    """Fetch a paginated collection. ``limit`` caps the number of values returned."""

    verb: ClassVar[str] = "GET"

    limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 0:
            raise RequestError(f"List limit must be non-negative, got {self.limit}.")


@dataclass(slots=True)
class Create(Method):
    verb: ClassVar[str] = "POST"


@dataclass(slots=True)
class Get(Method):
    verb: ClassVar[str] = "GET"


@dataclass(slots=True)
class Update(Method):
    verb: ClassVar[str] = "PUT"


@dataclass(slots=True)
class Delete(Method):
    verb: ClassVar[str] = "DELETE"


KINDS = (List, Create, Get, Update, Delete)
