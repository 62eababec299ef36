"""Cache stores for aggregated channel results."""

import hashlib
import json
import logging
import time
from pathlib import Path
from typing import Any

from rssclient.models import FetchResult

logger = logging.getLogger(__name__)

CACHE_DIR = Path.home() / ".cache" / "rssclient"
DEFAULT_TTL = 600  # 10 minutes


class NullCache:
    """A store that never holds anything; every lookup is a miss."""

    def has(self, key: str) -> bool:
        return False

    def get(self, key: str) -> Any:
        return None

    def set(self, key: str, value: Any) -> None:
        pass


class MemoryCache:
    """In-process dict store with an optional TTL in seconds."""

    def __init__(self, ttl: float | None = None) -> None:
        self.ttl = ttl
        self._entries: dict[str, tuple[float, Any]] = {}

    def _fresh(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return False
        if self.ttl is not None and time.time() - entry[0] > self.ttl:
            del self._entries[key]
            return False
        return True

    def has(self, key: str) -> bool:
        return self._fresh(key)

    def get(self, key: str) -> Any:
        if not self._fresh(key):
            return None
        return self._entries[key][1]

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (time.time(), value)


class FileCache:
    """JSON file store with TTL, one file per key under ``directory``."""

    def __init__(self, directory: Path | str | None = None, ttl: int = DEFAULT_TTL) -> None:
        self.directory = Path(directory) if directory is not None else CACHE_DIR
        self.ttl = ttl

    def _cache_path(self, key: str) -> Path:
        """Generate a cache file path for a given key."""
        name = hashlib.sha256(key.encode()).hexdigest()[:16]
        return self.directory / f"{name}.json"

    def _read(self, key: str) -> dict | None:
        path = self._cache_path(key)
        if not path.exists():
            return None
        if time.time() - path.stat().st_mtime > self.ttl:
            return None
        try:
            data = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable cache file %s: %s", path, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring cache file %s: not a result object", path)
            return None
        return data

    def has(self, key: str) -> bool:
        return self._read(key) is not None

    def get(self, key: str) -> FetchResult | None:
        data = self._read(key)
        if data is None:
            return None
        try:
            return FetchResult.from_dict(data)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed cache entry %s: %s", key, exc)
            return None

    def set(self, key: str, value: FetchResult) -> None:
        """Write a result to the cache file for ``key``."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._cache_path(key)
        path.write_text(json.dumps(value.to_dict(), ensure_ascii=False))
