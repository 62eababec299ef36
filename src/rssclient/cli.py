"""CLI entry point — Click command, flags, watch mode, open-in-browser."""

import logging
import time
import webbrowser

import click

from rssclient import config as cfg
from rssclient.cache import FileCache, MemoryCache, NullCache
from rssclient.client import CachedRSSClient, RSSClient
from rssclient.display import console, display_all, display_channel, display_channels_list, display_errors
from rssclient.feeds import get_all_channels, resolve_channel
from rssclient.models import FetchResult, Item
from rssclient.protocols import CacheStore
from rssclient.transport import HttpTransport

user_config = cfg.load()


def make_cache(config: dict, use_cache: bool = True) -> CacheStore:
    """Build the cache store selected by the ``cache`` config key."""
    backend = str(config.get("cache", "memory")).lower()
    if not use_cache or backend == "none":
        return NullCache()
    if backend == "file":
        return FileCache(config["cache_dir"], ttl=config["cache_ttl"])
    if backend == "memory":
        return MemoryCache(ttl=config["cache_ttl"])
    raise click.BadParameter(f"unknown cache backend: {backend}", param_hint="cache")


def build_client(
    config: dict,
    channels: dict[str, list[str]],
    use_cache: bool = True,
    workers: int | None = None,
) -> CachedRSSClient:
    """Wire transport, channels and cache store into a cached client."""
    client = RSSClient(
        channels,
        transport=HttpTransport(timeout=config["timeout"]),
        workers=workers or config["workers"],
    )
    return CachedRSSClient(client, cache=make_cache(config, use_cache))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    # Quiet noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)


@click.command()
@click.argument("channel", required=False, default=None)
@click.option("--limit", "-l", default=None, type=click.IntRange(min=1), help="Items per channel.")
@click.option("--no-desc", is_flag=True, help="Headlines only, hide descriptions.")
@click.option("--no-cache", is_flag=True, help="Force fresh fetch, skip cache.")
@click.option("--errors", "show_errors", is_flag=True, help="List every error collected while fetching.")
@click.option("--workers", default=None, type=click.IntRange(min=1), help="Fetch sources of a channel in parallel.")
@click.option("--watch", "-w", is_flag=True, help="Auto-refresh periodically.")
@click.option("--interval", "-i", default=None, type=int, help="Watch refresh interval in seconds.")
@click.option("--list-channels", is_flag=True, help="Show available channels.")
@click.option("--open", "open_num", default=None, type=int, help="Open Nth item in browser.")
@click.option("--verbose", "-v", is_flag=True, help="Log fetch and parse activity.")
def main(
    channel: str | None,
    limit: int | None,
    no_desc: bool,
    no_cache: bool,
    show_errors: bool,
    workers: int | None,
    watch: bool,
    interval: int | None,
    list_channels: bool,
    open_num: int | None,
    verbose: bool,
) -> None:
    """Aggregate RSS channels and read them in your terminal."""
    _setup_logging(verbose)
    channels = cfg.channels(user_config)

    if list_channels:
        display_channels_list(channels)
        return

    limit = limit or user_config["limit"]
    show_desc = (not no_desc) and user_config["show_desc"]
    watch_interval = interval or user_config["watch_interval"]

    # Determine which channels to show
    if channel:
        resolved = resolve_channel(channel, channels)
        if resolved is None:
            console.print(f"[red]Unknown channel: {channel}[/red]")
            console.print("[dim]Use --list-channels to see available options.[/dim]")
            raise SystemExit(1)
        target_channels = [resolved]
    else:
        target_channels = get_all_channels(channels)

    client = build_client(user_config, channels, use_cache=not no_cache, workers=workers)

    def run_once() -> list[Item]:
        console.clear()
        console.print("[bold]📰 rssclient[/bold] [dim]— terminal RSS aggregator[/dim]\n")
        errors_before = len(client.get_errors())

        results: dict[str, FetchResult] = {}
        for name in target_channels:
            results[name] = client.fetch(name, limit)

        if len(results) == 1:
            name, result = next(iter(results.items()))
            display_channel(name, result, show_desc)
            items = list(result)
        else:
            items = display_all({name: result for name, result in results.items() if result}, show_desc)

        display_errors(client.get_errors()[errors_before:], verbose=show_errors)
        return items

    if open_num is not None:
        items = run_once()
        if 1 <= open_num <= len(items):
            url = items[open_num - 1].link
            if url:
                console.print(f"\n[dim]Opening item #{open_num} in browser…[/dim]")
                webbrowser.open(url)
            else:
                console.print(f"[red]Item #{open_num} has no URL.[/red]")
        else:
            console.print(f"[red]Invalid item number: {open_num} (1-{len(items)})[/red]")
        return

    if watch:
        try:
            while True:
                run_once()
                console.print(
                    f"\n[dim]Refreshing in {watch_interval}s… (Ctrl+C to quit)[/dim]"
                )
                time.sleep(watch_interval)
        except KeyboardInterrupt:
            console.print("\n[dim]Goodbye![/dim]")
    else:
        run_once()
