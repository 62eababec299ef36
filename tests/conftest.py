"""Shared fixtures for rssclient tests."""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest

from rssclient.errors import TransportError
from rssclient.models import FetchResult, Item

RSS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Test Feed</title>
    <link>https://example.com</link>
    <description>A test RSS feed</description>
    {items}
  </channel>
</rss>"""

RSS_ITEM = """<item>
  <title>{title}</title>
  <link>{link}</link>
  <description>{description}</description>
  <pubDate>{pubdate}</pubDate>
</item>"""


class FakeTransport:
    """Transport returning canned bodies per URL and recording every call."""

    def __init__(self, responses: dict | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[str] = []

    def get(self, url, headers=None):
        self.calls.append(url)
        response = self.responses.get(url)
        if response is None:
            raise TransportError("Error HTTP 404 on request", url=url, status_code=404)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture()
def make_rss():
    """Factory fixture: build RSS XML from (title, pubdate) tuples."""

    def _make(*articles) -> str:
        items = [
            RSS_ITEM.format(
                title=title,
                link=f"https://example.com/{i}",
                description=f"Description of {title}",
                pubdate=pubdate,
            )
            for i, (title, pubdate) in enumerate(articles)
        ]
        return RSS_TEMPLATE.format(items="\n".join(items))

    return _make


@pytest.fixture()
def hours_ago():
    """Factory fixture: RFC 822 date string for n hours before a fixed instant."""
    base = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)

    def _at(n: float) -> str:
        return format_datetime(base - timedelta(hours=n))

    return _at


@pytest.fixture()
def fake_transport():
    return FakeTransport()


@pytest.fixture()
def sample_result():
    """Factory fixture: a FetchResult with n items and staggered dates."""

    def _make(n: int = 3, channel: str = "technology") -> FetchResult:
        now = datetime.now(timezone.utc)
        items = tuple(
            Item(
                title=f"Article {i}",
                link=f"https://example.com/article/{i}",
                description=f"Description for article {i}.",
                categories=(f"Tag {i}",),
                pub_date=format_datetime(now - timedelta(hours=i)),
                source=f"Source {i}",
            )
            for i in range(n)
        )
        return FetchResult(channel=channel, items=items)

    return _make
