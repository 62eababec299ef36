"""Built-in channel registry — maps channel names to ordered feed URLs."""

from collections.abc import Mapping

CHANNELS: dict[str, list[str]] = {
    "default": [
        "https://feeds.bbci.co.uk/news/rss.xml",
        "https://feeds.npr.org/1001/rss.xml",
    ],
    "world": [
        "https://feeds.bbci.co.uk/news/world/rss.xml",
        "https://feeds.npr.org/1004/rss.xml",
        "https://rss.nytimes.com/services/xml/rss/nyt/World.xml",
    ],
    "technology": [
        "https://feeds.bbci.co.uk/news/technology/rss.xml",
        "https://feeds.arstechnica.com/arstechnica/index",
        "https://techcrunch.com/feed/",
        "https://rss.nytimes.com/services/xml/rss/nyt/Technology.xml",
        "https://hnrss.org/frontpage",
    ],
    "business": [
        "https://feeds.bbci.co.uk/news/business/rss.xml",
        "https://rss.nytimes.com/services/xml/rss/nyt/Business.xml",
        "https://feeds.npr.org/1006/rss.xml",
    ],
    "science": [
        "https://feeds.bbci.co.uk/news/science_and_environment/rss.xml",
        "https://rss.nytimes.com/services/xml/rss/nyt/Science.xml",
        "https://www.nasa.gov/feed/",
    ],
    "sports": [
        "https://feeds.bbci.co.uk/sport/rss.xml",
        "https://www.espn.com/espn/rss/news",
        "https://rss.nytimes.com/services/xml/rss/nyt/Sports.xml",
    ],
    "entertainment": [
        "https://feeds.bbci.co.uk/news/entertainment_and_arts/rss.xml",
        "https://rss.nytimes.com/services/xml/rss/nyt/Arts.xml",
    ],
}

# Short aliases for CLI convenience
ALIASES: dict[str, str] = {
    "tech": "technology",
    "biz": "business",
    "sci": "science",
    "sport": "sports",
    "ent": "entertainment",
}

CHANNEL_COLORS: dict[str, str] = {
    "default": "white",
    "world": "bright_red",
    "technology": "bright_cyan",
    "business": "bright_green",
    "science": "bright_magenta",
    "sports": "bright_yellow",
    "entertainment": "bright_blue",
}


def resolve_channel(name: str, channels: Mapping[str, list[str]] | None = None) -> str | None:
    """Resolve a channel name or alias to a registered channel name."""
    channels = CHANNELS if channels is None else channels
    name = name.lower().strip()
    if name in channels:
        return name
    target = ALIASES.get(name)
    if target in channels:
        return target
    return None


def get_all_channels(channels: Mapping[str, list[str]] | None = None) -> list[str]:
    """Return all channel names."""
    channels = CHANNELS if channels is None else channels
    return list(channels.keys())
