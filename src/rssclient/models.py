"""Data models for aggregated feed items."""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Iterator

from rssclient.utils import published_ts


@dataclass(frozen=True)
class Item:
    """A single sanitized ``<item>`` entry from a feed."""

    title: str = ""
    link: str = ""
    description: str = ""
    author: str = ""
    categories: tuple[str, ...] = ()
    comments: str = ""
    enclosure: str = ""
    guid: str = ""
    pub_date: str = ""
    source: str = ""

    @property
    def timestamp(self) -> float:
        """Sort key derived from ``pub_date``; undated items get ``MIN_TIMESTAMP``."""
        return published_ts(self.pub_date)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["categories"] = list(self.categories)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        values["categories"] = tuple(values.get("categories") or ())
        return cls(**values)


@dataclass(frozen=True)
class FetchResult:
    """Items returned by one aggregation run.

    A result with no items is the "not found" variant and is falsy, so
    callers can tell "the channel produced nothing" apart from data.
    """

    channel: str
    items: tuple[Item, ...] = field(default_factory=tuple)

    @classmethod
    def not_found(cls, channel: str) -> "FetchResult":
        return cls(channel=channel)

    @property
    def found(self) -> bool:
        return len(self.items) > 0

    def __bool__(self) -> bool:
        return self.found

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def to_dict(self) -> dict[str, Any]:
        return {"channel": self.channel, "items": [item.to_dict() for item in self.items]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FetchResult":
        return cls(
            channel=data.get("channel", ""),
            items=tuple(Item.from_dict(item) for item in data.get("items", [])),
        )
