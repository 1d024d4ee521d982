"""Typer-based command line interface for wired-library."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.tree import Tree

from utils.config import AppConfig, load_config
from utils.logging import configure_logging

from .cache import CacheStore
from .cancel import CancellationToken
from .enumerator import count_files, validate_library_path
from .errors import EnumerationError, InvalidLibraryPath, ScanCancelled
from .models import Library
from .progress import ScanComplete, ScanResult, ScanStarted
from .session import ScanSession, start_scan

app = typer.Typer(add_completion=False, help="Index a music folder into a cached library.")
console = Console()

EXIT_CANCELLED = 130


class _State:
    config: AppConfig = AppConfig()


def _cache_store() -> CacheStore:
    return CacheStore(_State.config.cache_path)


def _resolve_root(path: Optional[Path]) -> Path:
    candidate = path or _State.config.music_library_path
    if candidate is None:
        raise typer.BadParameter("No library path given and none configured")
    try:
        return validate_library_path(candidate)
    except InvalidLibraryPath as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a YAML config file."),
) -> None:
    _State.config = load_config(config)
    level = "DEBUG" if verbose else _State.config.log_level
    configure_logging(level, _State.config.log_file)


def _follow(session: ScanSession) -> ScanResult:
    columns = (
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
    )
    with Progress(*columns, console=console, transient=True) as progress:
        task = progress.add_task("Counting", total=None)
        while True:
            try:
                event = session.wait_for_update()
            except KeyboardInterrupt:
                progress.update(task, description="Cancelling")
                session.cancel()
                continue
            if isinstance(event, ScanComplete):
                return event.result
            if isinstance(event, ScanStarted):
                progress.update(task, description="Scanning", total=event.total)
            else:
                progress.update(task, completed=event.current)


@app.command()
def scan(
    root: Optional[Path] = typer.Argument(None, help="Music directory (defaults to the configured one)."),
    save: bool = typer.Option(True, "--save/--no-save", help="Write the result to the library cache."),
) -> None:
    """Scan a music directory and rebuild the library cache."""

    root = _resolve_root(root)
    session = start_scan(root, CancellationToken(), workers_per_core=_State.config.workers_per_core)
    result = _follow(session)
    if isinstance(result.error, ScanCancelled):
        console.print("Library scan has been cancelled")
        raise typer.Exit(EXIT_CANCELLED)
    if result.error is not None:
        console.print(f"[red]Library scan failed:[/red] {result.error}")
        raise typer.Exit(1)
    if session.total == 0:
        console.print("Library scan couldn't find any valid music files")
        return

    library = result.library or Library()
    summary = library.summary()
    console.print(
        f"Scanned {summary.total_songs} songs from {summary.total_artists} artists "
        f"({summary.total_albums} albums)"
    )
    if save:
        _cache_store().save(library)


@app.command()
def count(root: Optional[Path] = typer.Argument(None, help="Music directory to count.")) -> None:
    """Count the audio files below a directory without reading tags."""

    root = _resolve_root(root)
    try:
        total = count_files(root)
    except EnumerationError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    typer.echo(str(total))


@app.command()
def show() -> None:
    """Print the cached library grouped by artist and album."""

    library = _cache_store().load()
    if library is None:
        console.print("No usable library cache; run a scan first")
        raise typer.Exit(1)

    tree = Tree("Library")
    for artist_name in sorted(library.artists):
        artist = library.artists[artist_name]
        artist_node = tree.add(artist_name)
        for album in artist.albums:
            album_node = artist_node.add(f"{album.album_name} ({len(album.songs)})")
            for song in album.songs:
                album_node.add(song.metadata.song_name)
    console.print(tree)


@app.command("clear-cache")
def clear_cache() -> None:
    """Delete the library cache file."""

    if _cache_store().clear():
        typer.echo("Library cache removed")
    else:
        typer.echo("No library cache to remove")


if __name__ == "__main__":
    app()
