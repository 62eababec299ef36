"""Channel aggregation: fetch, parse, merge and sort feed items per channel."""

import hashlib
import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from rssclient.cache import NullCache
from rssclient.errors import ConfigurationError, InvalidArgumentError, TransportError
from rssclient.models import FetchResult, Item
from rssclient.parser import parse_feed
from rssclient.protocols import CacheStore, Sanitizer, Transport
from rssclient.transport import HttpTransport
from rssclient.utils import HtmlSanitizer

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "default"
DEFAULT_LIMIT = 20


class RSSClient:
    """Aggregate the RSS sources of named channels into sorted item lists.

    Per-source and per-item failures never abort a fetch; they are appended
    to the error log exposed by ``get_errors()``. Only an unknown channel or
    an invalid limit raise.
    """

    def __init__(
        self,
        feeds: Mapping[str, Iterable[str]] | Iterable[str] | None = None,
        channel: str = DEFAULT_CHANNEL,
        *,
        transport: Transport | None = None,
        sanitizer: Sanitizer | None = None,
        workers: int = 1,
    ) -> None:
        self.transport = transport or HttpTransport()
        self.sanitizer = sanitizer or HtmlSanitizer()
        self.workers = workers
        self._feeds: dict[str, list[str]] = {}
        self._counts: dict[str, int] = {}
        self._errors: list[str] = []

        if isinstance(feeds, Mapping):
            for name, urls in feeds.items():
                self.set_feeds(urls, name)
        elif feeds is not None:
            self.set_feeds(feeds, channel)

    # ── channel configuration ────────────────────────────────────────────

    def set_feeds(self, feeds: Iterable[str], channel: str = DEFAULT_CHANNEL) -> None:
        """Register ``channel`` with exactly ``feeds``, replacing earlier sources."""
        if isinstance(feeds, str):
            feeds = [feeds]
        self._feeds[channel] = []
        self.add_feeds(feeds, channel)

    def add_feeds(self, feeds: Iterable[str], channel: str = DEFAULT_CHANNEL) -> None:
        for url in feeds:
            self.add_feed(url, channel)

    def add_feed(self, url: str, channel: str = DEFAULT_CHANNEL) -> None:
        urls = self._feeds.setdefault(channel, [])
        if url not in urls:
            urls.append(url)

    def get_feeds(self, channel: str = DEFAULT_CHANNEL) -> list[str]:
        return list(self._feeds.get(channel, []))

    def get_channels(self) -> list[str]:
        return list(self._feeds.keys())

    def set_transport(self, transport: Transport) -> None:
        self.transport = transport

    def set_sanitizer(self, sanitizer: Sanitizer) -> None:
        self.sanitizer = sanitizer

    # ── errors ───────────────────────────────────────────────────────────

    def get_errors(self) -> list[str]:
        return list(self._errors)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def _add_error(self, message: str) -> None:
        logger.warning("%s", message)
        self._errors.append(str(message))

    def count_nodes(self, channel: str = DEFAULT_CHANNEL) -> int:
        """Number of items accumulated for ``channel`` by its last fetch."""
        return self._counts.get(channel, 0)

    # ── fetching ─────────────────────────────────────────────────────────

    def _check_channel(self, channel: Any) -> str:
        if not isinstance(channel, str):
            raise InvalidArgumentError(f"channel not valid ({type(channel).__name__})")
        if channel not in self._feeds:
            raise InvalidArgumentError(f"channel not valid ({channel})")
        return channel

    @staticmethod
    def _check_limit(limit: Any) -> int:
        if isinstance(limit, bool):
            raise InvalidArgumentError(f"limit not valid ({limit!r})")
        try:
            value = int(limit)
        except (TypeError, ValueError, OverflowError):
            raise InvalidArgumentError(f"limit not valid ({limit!r})") from None
        if value < 1:
            raise InvalidArgumentError(f"limit not valid ({limit!r})")
        return value

    def _fetch_source(self, url: str) -> tuple[list[Item], list[str]]:
        """Fetch and parse one source. Returns (items, error messages)."""
        try:
            body = self.transport.get(url)
        except TransportError as exc:
            return [], [f"{url}: {exc}"]

        if not body:
            return [], []

        parsed = parse_feed(body, self.sanitizer)
        logger.debug("%s: %d items", url, len(parsed.items))
        return parsed.items, [f"{url}: {error}" for error in parsed.errors]

    def fetch(self, channel: str = DEFAULT_CHANNEL, limit: int = DEFAULT_LIMIT) -> FetchResult:
        """Fetch every source of ``channel`` and return the ``limit`` most recent items.

        Raises:
            InvalidArgumentError: If the channel is not registered or the limit
                is not a positive integer.
        """
        channel = self._check_channel(channel)
        limit = self._check_limit(limit)
        urls = self._feeds[channel]

        if self.workers > 1 and len(urls) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                outcomes = list(pool.map(self._fetch_source, urls))
        else:
            outcomes = [self._fetch_source(url) for url in urls]

        nodes: list[Item] = []
        for items, errors in outcomes:
            nodes.extend(items)
            for error in errors:
                self._add_error(error)

        # Most recent first; sort is stable so equal timestamps keep feed order
        nodes.sort(key=lambda item: item.timestamp, reverse=True)
        self._counts[channel] = len(nodes)

        if not nodes:
            self._add_error(f"No nodes found in {channel}")
            return FetchResult.not_found(channel)

        logger.info("Channel '%s': %d items from %d sources", channel, len(nodes), len(urls))
        return FetchResult(channel=channel, items=tuple(nodes[:limit]))


class CachedRSSClient:
    """Memoize ``RSSClient.fetch`` results keyed by a channel's source list.

    A cache hit returns the stored result as is, whatever ``limit`` is
    passed: the entry holds the result of the first fetch for that source
    list. Results with no items are never stored.
    """

    CACHE_KEY = "rss_cache_client"

    def __init__(self, client: RSSClient | None = None, cache: CacheStore | None = None) -> None:
        self.client = client or RSSClient()
        self.cache: CacheStore | None = cache if cache is not None else NullCache()
        self._cache_keys: dict[str, str] = {}

    def __getattr__(self, name: str) -> Any:
        if name == "client":
            raise AttributeError(name)
        return getattr(self.client, name)

    def set_cache(self, cache: CacheStore | None) -> None:
        self.cache = cache

    def get_cache(self) -> CacheStore:
        if self.cache is None:
            raise ConfigurationError("Cache not set")
        return self.cache

    def set_feeds(self, feeds: Iterable[str], channel: str = DEFAULT_CHANNEL) -> None:
        self._cache_keys.pop(channel, None)
        self.client.set_feeds(feeds, channel)

    def add_feeds(self, feeds: Iterable[str], channel: str = DEFAULT_CHANNEL) -> None:
        self._cache_keys.pop(channel, None)
        self.client.add_feeds(feeds, channel)

    def add_feed(self, url: str, channel: str = DEFAULT_CHANNEL) -> None:
        self._cache_keys.pop(channel, None)
        self.client.add_feed(url, channel)

    def get_cache_key(self, channel: str = DEFAULT_CHANNEL) -> str:
        """Deterministic key for the ordered source list of ``channel``."""
        if channel not in self._cache_keys:
            joined = "|".join(self.client.get_feeds(channel))
            digest = hashlib.sha256(joined.encode()).hexdigest()
            self._cache_keys[channel] = f"{self.CACHE_KEY}_{digest}"
        return self._cache_keys[channel]

    def fetch(self, channel: str = DEFAULT_CHANNEL, limit: int = DEFAULT_LIMIT) -> FetchResult:
        cache = self.get_cache()
        if channel not in self.client.get_channels():
            # unknown channel, the client raises
            return self.client.fetch(channel, limit)

        key = self.get_cache_key(channel)
        cached = cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for channel '%s' (%s)", channel, key)
            return cached

        result = self.client.fetch(channel, limit)
        if result:
            cache.set(key, result)
        return result
