"""Rich terminal display — color-coded channel panels and the error log."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rssclient.feeds import ALIASES, CHANNEL_COLORS
from rssclient.models import FetchResult, Item
from rssclient.utils import time_ago, truncate

console = Console()


def display_channel(
    channel: str,
    result: FetchResult,
    show_desc: bool = True,
    number_offset: int = 0,
) -> int:
    """Display a single channel as a Rich panel. Returns count of items shown."""
    if not result:
        console.print(f"[dim]No items found in {channel}.[/dim]")
        return 0

    color = CHANNEL_COLORS.get(channel, "white")

    table = Table(
        show_header=False,
        box=None,
        padding=(0, 1),
        expand=True,
    )
    table.add_column("#", style="dim", width=4, justify="right")
    table.add_column("Item", ratio=1)
    table.add_column("Source", style="dim", width=18, justify="right")
    table.add_column("Time", style="dim", width=8, justify="right")

    for i, item in enumerate(result):
        num = str(number_offset + i + 1)
        title = Text(item.title or item.link, style=f"bold {color}")

        if show_desc and item.description:
            desc = truncate(item.description, 120)
            title.append(f"\n{desc}", style="dim")

        if item.categories:
            title.append(f"\n{', '.join(item.categories)}", style=f"italic {color}")

        table.add_row(num, title, item.source or item.author, time_ago(item.pub_date))

    panel = Panel(
        table,
        title=f"[bold {color}]{channel.upper()}[/bold {color}]",
        border_style=color,
        padding=(0, 1),
    )
    console.print(panel)
    return len(result)


def display_all(
    results: dict[str, FetchResult],
    show_desc: bool = True,
) -> list[Item]:
    """Display all channels. Returns flat list of all items for --open indexing."""
    all_items: list[Item] = []
    offset = 0
    for channel, result in results.items():
        count = display_channel(channel, result, show_desc, number_offset=offset)
        all_items.extend(result)
        offset += count
    return all_items


def display_channels_list(channels: dict[str, list[str]]) -> None:
    """Show available channels with their source counts."""
    console.print("\n[bold]Available channels:[/bold]\n")
    for name, urls in channels.items():
        color = CHANNEL_COLORS.get(name, "white")
        console.print(f"  [{color}]●[/{color}] {name} [dim]({len(urls)} sources)[/dim]")
    console.print()
    console.print(f"[dim]Aliases: {', '.join(ALIASES)}[/dim]\n")


def display_errors(errors: list[str], verbose: bool = False) -> None:
    """Show the client's error log, or just a count when not verbose."""
    if not errors:
        return
    if not verbose:
        console.print(f"[yellow]{len(errors)} errors while fetching (use --errors to list).[/yellow]")
        return
    console.print("\n[bold yellow]Errors:[/bold yellow]")
    for message in errors:
        console.print(Text.assemble(("  • ", "yellow"), message))
