"""Command line interface for Fedi Archiver."""

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from fedi_archiver import __version__
from fedi_archiver.client import StatusFetcher, UserLookup
from fedi_archiver.config import ArchiverConfig
from fedi_archiver.core.content_archive import ContentArchive, read_status
from fedi_archiver.core.media_archive import MediaArchive
from fedi_archiver.core.models import ArchiveError
from fedi_archiver.core.photo_archive import PhotoArchive
from fedi_archiver.core.status import media_filename, status_has_media
from fedi_archiver.core.status_archive import StatusArchive

app = typer.Typer(help="Archive statuses and media from a Fediverse server")
console = Console()


def _version_callback(value: bool):
    if value:
        console.print(__version__)
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug output"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version"
    ),
):
    """Archive statuses and media from a Fediverse server."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ArchiverConfig.from_env()

    start = time.perf_counter()

    def _report_elapsed():
        console.print(f"\n[dim]Elapsed time: {time.perf_counter() - start:.2f}s[/dim]")

    ctx.call_on_close(_report_elapsed)


def _fail(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(1)


def _archived_statuses(status_archive: StatusArchive):
    count = status_archive.load_contents()
    if count == 0:
        _fail("Status archive is empty")
    return status_archive.get_contents()


@app.command("lookup-user")
def lookup_user(
    host: str = typer.Argument(..., help="Domain name of the server"),
    user_name: str = typer.Argument(..., help="User name, with or without a leading @"),
):
    """Look up the numeric id of a user."""
    try:
        lookup = UserLookup(host, user_name)
        console.print("[bold]Looking up user...[/bold]")
        user_id = lookup.get_user_id()
    except ArchiveError as e:
        _fail(str(e))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Server host", host)
    table.add_row("User name", lookup.user_name)
    table.add_row("User id", user_id)
    console.print(table)


@app.command("update-archive")
def update_archive(ctx: typer.Context):
    """Fetch new statuses and add them to the status archive."""
    config: ArchiverConfig = ctx.obj
    console.print("[bold]Updating status archive...[/bold]")

    try:
        fetcher = StatusFetcher(config.require("host"), config.require("user_id"))
        archive = StatusArchive(config.require("status_archive_path"))
        console.print("Fetching new statuses...")
        added = archive.add_statuses(fetcher.fetch_statuses())
    except ArchiveError as e:
        _fail(str(e))

    console.print("[green]Updated status archive[/green]")
    console.print(f"Number of statuses added: {added}")


@app.command("update-media")
def update_media(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Download media that is already archived"),
    continue_on_error: bool = typer.Option(
        False, "--continue-on-error", help="Skip media that fails to download"
    ),
):
    """Download the media attachments of archived statuses."""
    config: ArchiverConfig = ctx.obj
    console.print("[bold]Updating media archive...[/bold]")

    try:
        status_archive_path = config.require("status_archive_path")
        status_archive = StatusArchive(status_archive_path)
        media_archive = MediaArchive(config.require("media_archive_path"), overwrite=force)

        added = 0
        for status_file in _archived_statuses(status_archive):
            status = read_status(status_archive_path, status_file)
            added += media_archive.add_media_from_status(status, continue_on_error=continue_on_error)
    except ArchiveError as e:
        _fail(str(e))

    console.print("[green]Updated media archive[/green]")
    console.print(f"Number of media files added: {added}")


@app.command("update-content")
def update_content(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite existing posts"),
):
    """Create Markdown posts from the status archive."""
    config: ArchiverConfig = ctx.obj
    console.print("[bold]Updating content archive...[/bold]")

    if force:
        console.print("[yellow]Warning: Overwriting existing content[/yellow]")

    try:
        status_archive_path = config.require("status_archive_path")
        status_archive = StatusArchive(status_archive_path)
        content_archive = ContentArchive(
            config.require("content_archive_path"),
            overwrite=force,
            status_filter=config.status_filter,
            tag_replacer=config.tag_replacer(),
        )

        statuses = _archived_statuses(status_archive)
        console.print(f"Number of statuses in status archive: {len(statuses)}")
        console.print(f"Number of posts in content archive: {content_archive.load_contents()}")

        added = content_archive.add_content(list(statuses), status_archive_path)
    except ArchiveError as e:
        _fail(str(e))

    console.print("[green]Updated content archive[/green]")
    console.print(f"Number of posts added: {added}")


@app.command("update-photos")
def update_photos(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Not supported; existing posts are kept"),
):
    """Create photo posts from archived statuses with media."""
    config: ArchiverConfig = ctx.obj
    console.print("[bold]Updating photo archive...[/bold]")

    if force:
        console.print("[yellow]Warning: Overwriting content is not supported[/yellow]")

    try:
        status_archive_path = config.require("status_archive_path")
        status_archive = StatusArchive(status_archive_path)
        photo_archive = PhotoArchive(
            config.require("photo_archive_path"),
            status_filter=config.status_filter,
            tag_replacer=config.tag_replacer(),
        )

        statuses = _archived_statuses(status_archive)
        console.print(f"Number of statuses in status archive: {len(statuses)}")
        console.print(f"Number of posts in photo archive: {photo_archive.load_contents()}")

        added = photo_archive.add_content(
            list(statuses), status_archive_path, config.require("media_archive_path")
        )
    except ArchiveError as e:
        _fail(str(e))

    console.print("[green]Updated photo archive[/green]")
    console.print(f"Number of posts added: {added}")


@app.command("delete-status")
def delete_status(
    ctx: typer.Context,
    status_id: str = typer.Argument(..., help="Id of the status to delete"),
):
    """Delete a status and its media from the archives."""
    config: ArchiverConfig = ctx.obj
    console.print("[bold]Deleting a status...[/bold]")

    try:
        status_archive = StatusArchive(config.require("status_archive_path"))
        media_archive = MediaArchive(config.require("media_archive_path"))

        console.print(f"Attempting to delete status with id: {status_id}")
        status = status_archive.get_content(status_id)
        if status is False:
            console.print("[yellow]Unable to find status[/yellow]")
            return

        if status_has_media(status):
            console.print("Status includes media which will also be deleted")

        completed = True
        for media in status.get("media_attachments") or []:
            media_id = Path(media_filename(media["url"])).stem
            console.print(f"Deleting media with id: {media_id}...")
            if not media_archive.delete_content(media_id):
                console.print("[red]Unable to delete media[/red]")
                completed = False

        if not status_archive.delete_content(status_id):
            completed = False
    except ArchiveError as e:
        _fail(str(e))

    if not completed:
        _fail("Unable to delete status")

    console.print("[green]Status successfully deleted[/green]")


if __name__ == "__main__":
    app()
