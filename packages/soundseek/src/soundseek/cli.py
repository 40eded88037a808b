"""soundseek command line.

Runs the pipeline against the live catalog without the HTTP service, which
makes it handy for checking how a name resolves or which stream gets picked.
"""

import asyncio
import json
import logging
import sys
from collections.abc import Coroutine, Sequence
from typing import Any, TypeVar

import click
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from soundseek import create_artist_lookup, create_client
from soundseek.config import PipelineConfig
from soundseek.exceptions import CatalogError
from soundseek.models.domain import NormalizedTrack
from soundseek.services import DiscoveryService, IdentityResolver, StreamResolver

logger = logging.getLogger("soundseek")

T = TypeVar("T")

# Diagnostics go to stderr so --json output stays parseable
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Log to stderr through Rich; DEBUG with --verbose, else WARNING only."""
    handler = RichHandler(console=err_console, show_path=False, log_time_format="[%X]")
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a pipeline coroutine, turning catalog errors into CLI errors."""
    try:
        return asyncio.run(coro)
    except CatalogError as e:
        logger.debug("%s (%s)", e.message, e.error_code)
        raise click.ClickException(e.message) from e


def dump_json(data: BaseModel | Sequence[BaseModel]) -> None:
    """Write models to stdout as camelCase JSON."""
    if isinstance(data, BaseModel):
        payload: Any = data.model_dump(mode="json", by_alias=True)
    else:
        payload = [item.model_dump(mode="json", by_alias=True) for item in data]
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def print_tracks(
    console: Console,
    tracks: Sequence[NormalizedTrack],
    title: str,
    subtitle: str = "",
) -> None:
    """Print tracks as a table captioned with the query that produced them."""
    if not tracks:
        console.print(f"[yellow]No tracks found for {title}[/yellow]")
        return

    table = Table(
        title=f"[bold]{title}[/bold]",
        caption=subtitle or None,
        header_style="bold cyan",
        padding=(0, 1),
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", no_wrap=True)
    table.add_column("Title", overflow="fold")
    table.add_column("Artist", overflow="fold")
    table.add_column("Duration", justify="right")
    table.add_column("Views", justify="right")
    table.add_column("Source", style="dim")

    for position, track in enumerate(tracks, 1):
        table.add_row(
            str(position),
            track.id,
            track.title,
            track.artist,
            track.duration_text or "",
            track.view_count_text or "",
            getattr(track, "genre", None) or track.source_strategy or "",
        )
    console.print(table)
    console.print(f"{len(tracks)} track(s)")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--delay",
    type=float,
    default=PipelineConfig.strategy_delay,
    show_default=True,
    help="Cooldown in seconds between sequential catalog searches.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, delay: float) -> None:
    """Resolve artists, aggregate music and pick streams from the catalog."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = PipelineConfig(strategy_delay=delay)
    setup_logging(verbose=verbose)


@main.command(name="resolve")
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def resolve_cmd(ctx: click.Context, name: str, as_json: bool) -> None:
    """Resolve an artist NAME to a catalog channel.

    \b
    Examples:
      soundseek resolve "Daft Punk"
      soundseek -v resolve "Daft Punk" --json
    """
    resolver = IdentityResolver(create_client(), ctx.obj["config"])
    identity = run(resolver.resolve(name))

    if as_json:
        dump_json(identity)
        return

    console = Console()
    table = Table(show_header=False, padding=(0, 1))
    table.add_column("Field", style="bold cyan", width=12)
    table.add_column("Value", overflow="fold")
    table.add_row("Channel", identity.channel_name)
    table.add_row("Channel ID", identity.channel_id)
    table.add_row("Source", identity.match_source)
    if identity.thumbnail_url:
        table.add_row("Thumbnail", identity.thumbnail_url)
    console.print(table)


@main.command(name="artist")
@click.argument("name")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def artist_cmd(ctx: click.Context, name: str, page: int, as_json: bool) -> None:
    """Look up an artist NAME and one page of their content."""
    lookup = create_artist_lookup(create_client(), ctx.obj["config"])
    result = run(lookup.lookup(name, page))

    if as_json:
        dump_json(result)
        return

    pagination = result.pagination
    print_tracks(
        Console(),
        result.videos,
        result.metadata.name,
        f"page {pagination.current_page}/{pagination.total_pages}"
        f" ({pagination.total_items} items)",
    )


@main.command(name="search")
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def search_cmd(ctx: click.Context, query: str, as_json: bool) -> None:
    """Search the catalog for music matching QUERY."""
    service = DiscoveryService(create_client(), ctx.obj["config"])
    songs = run(service.search(query))
    if as_json:
        dump_json(songs)
    else:
        print_tracks(Console(), songs, "Search", query)


@main.command(name="genre")
@click.argument("genre")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def genre_cmd(ctx: click.Context, genre: str, as_json: bool) -> None:
    """List tracks for a GENRE."""
    service = DiscoveryService(create_client(), ctx.obj["config"])
    songs = run(service.genre_songs(genre))
    if as_json:
        dump_json(songs)
    else:
        print_tracks(Console(), songs, "Genre", genre)


@main.command(name="popular")
@click.option("--country", default="US", show_default=True, help="Region hint.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def popular_cmd(ctx: click.Context, country: str, as_json: bool) -> None:
    """List popular music across genres, most viewed first."""
    service = DiscoveryService(create_client(), ctx.obj["config"])
    songs = run(service.popular(country))
    if as_json:
        dump_json(songs)
    else:
        print_tracks(Console(), songs, "Popular", country)


@main.command(name="stream")
@click.argument("video_id", metavar="VIDEO_ID")
@click.option("--audio", is_flag=True, help="Resolve the audio-only URL instead.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def stream_cmd(video_id: str, audio: bool, as_json: bool) -> None:
    """Pick a playable stream for VIDEO_ID."""
    resolver = StreamResolver(create_client())

    if audio:
        url = run(resolver.resolve_audio_url(video_id))
        if as_json:
            json.dump({"url": url}, sys.stdout, indent=2)
            sys.stdout.write("\n")
        else:
            click.echo(url)
        return

    stream = run(resolver.resolve(video_id))
    if as_json:
        dump_json(stream)
        return

    console = Console()
    table = Table(show_header=False, padding=(0, 1))
    table.add_column("Field", style="bold cyan", width=12)
    table.add_column("Value", overflow="fold")
    table.add_row("Title", stream.details.title or "")
    table.add_row("Author", stream.details.author or "")
    if stream.details.length is not None:
        table.add_row("Length", f"{stream.details.length}s")
    table.add_row(
        "Captions", ", ".join(c.language_code for c in stream.captions) or "none"
    )
    table.add_row("URL", stream.url)
    console.print(table)


if __name__ == "__main__":
    main()
