"""Collaborator interfaces consumed by the aggregation client."""

from collections.abc import Mapping
from typing import Any, Protocol


class Transport(Protocol):
    def get(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        """Return the body of ``url`` or raise ``TransportError``."""
        ...


class Sanitizer(Protocol):
    def clean(self, text: str) -> str:
        """Return a cleaned copy of ``text``. Must never raise."""
        ...


class CacheStore(Protocol):
    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...
