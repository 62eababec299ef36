"""Optional user configuration from ~/.config/rssclient/config.toml."""

import logging
import tomllib
from pathlib import Path

from rssclient.feeds import CHANNELS

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "rssclient" / "config.toml"

DEFAULTS = {
    "limit": 20,
    "show_desc": True,
    "watch_interval": 300,
    "timeout": 10,
    "workers": 1,
    "cache": "memory",
    "cache_ttl": 600,
    "cache_dir": str(Path.home() / ".cache" / "rssclient"),
}


def load() -> dict:
    """Load user config, falling back to defaults for missing keys."""
    config = dict(DEFAULTS)
    if CONFIG_PATH.exists():
        try:
            user_config = tomllib.loads(CONFIG_PATH.read_text())
            config.update(user_config)
        except (tomllib.TOMLDecodeError, OSError) as exc:
            logger.warning("Ignoring config file %s: %s", CONFIG_PATH, exc)
    return config


def channels(config: dict) -> dict[str, list[str]]:
    """Built-in channels overlaid with the ``[channels]`` table of ``config``."""
    merged = {name: list(urls) for name, urls in CHANNELS.items()}
    for name, urls in (config.get("channels") or {}).items():
        if isinstance(urls, str):
            urls = [urls]
        merged[str(name).lower()] = [str(url) for url in urls]
    return merged
