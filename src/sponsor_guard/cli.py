"""CLI entry point for Sponsor Guard."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from .analysis_client import AnalysisClient
from .constants import (
    ACTIVITY_KEY,
    ANALYSIS_ENDPOINT,
    DEBOUNCE_SECONDS,
    ENDPOINT_ENV_VAR,
    POLL_INTERVAL_SECONDS,
    PROCESSED_KEY_PREFIX,
    SPONSOR_DETAILS_KEY,
    STAT_KEYS,
)
from .display import (
    ConsolePresenter,
    HtmlLabeler,
    console,
    display_activities,
    display_outcomes,
    display_sponsor_detail,
    display_stats,
)
from .events import ANALYZED, SPONSOR_DETECTED, EventBus
from .export import SponsorArchive, export_details, load_details
from .logging import configure_logging
from .models import Outcome
from .page import GmailPageAdapter, load_document
from .pipeline import Pipeline
from .session import Session, load_activities, load_stats
from .store import SqliteStore
from .watcher import watch_and_rescan

_endpoint_option = click.option(
    "--endpoint",
    envvar=ENDPOINT_ENV_VAR,
    default=ANALYSIS_ENDPOINT,
    show_default=True,
    help=f"Analysis endpoint URL (also read from ${ENDPOINT_ENV_VAR}).",
)
_url_option = click.option(
    "--url",
    default=None,
    help="Source URL recorded on each email (defaults to the file's URI).",
)


def _build_pipeline(
    adapter: GmailPageAdapter,
    client: AnalysisClient,
    session: Session,
    labeler: HtmlLabeler | None = None,
) -> tuple[Pipeline, SponsorArchive]:
    bus = EventBus()
    archive = SponsorArchive(session)
    bus.subscribe(ANALYZED, ConsolePresenter())
    bus.subscribe(SPONSOR_DETECTED, archive)
    if labeler is not None:
        bus.subscribe(ANALYZED, labeler)
    return Pipeline(adapter, client, session, bus=bus), archive


async def _scan_once(
    adapter: GmailPageAdapter,
    endpoint: str,
    session: Session,
    document,
    labeler: HtmlLabeler | None = None,
) -> tuple[list[Outcome], SponsorArchive]:
    async with AnalysisClient(endpoint) as client:
        pipeline, archive = _build_pipeline(adapter, client, session, labeler)
        outcomes = await pipeline.scan(document)
    return outcomes, archive


async def _watch(
    source: Path,
    adapter: GmailPageAdapter,
    endpoint: str,
    session: Session,
    interval: float,
    debounce: float,
) -> None:
    async with AnalysisClient(endpoint) as client:
        pipeline, _ = _build_pipeline(adapter, client, session)

        async def rescan() -> None:
            outcomes = await pipeline.scan(load_document(source))
            if outcomes:
                display_outcomes(outcomes, sponsors_only=True)

        await rescan()
        console.print(f"[dim]Watching {source} (Ctrl-C to stop)...[/dim]")
        await watch_and_rescan(source, rescan, delay=debounce, interval=interval)


@click.group()
@click.version_option(version="0.1.0", prog_name="sponsor-guard")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level for diagnostic output on stderr.",
)
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines.")
def cli(log_level: str, json_logs: bool) -> None:
    """Sponsor Guard - find sponsorship offers in a saved mail page."""
    configure_logging(log_level, json_output=json_logs)


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_url_option
@_endpoint_option
@click.option(
    "--annotate",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a copy of the page with sponsor labels inserted.",
)
@click.option("--all", "show_all", is_flag=True, help="Also list analyzed non-sponsor emails.")
def scan(source: Path, url: str | None, endpoint: str, annotate: Path | None, show_all: bool) -> None:
    """Scan a saved mail page and classify sponsor emails."""
    document = load_document(source)
    adapter = GmailPageAdapter(source_url=url or source.resolve().as_uri())
    labeler = HtmlLabeler(adapter) if annotate else None

    with SqliteStore() as store:
        session = Session(store)
        outcomes, archive = asyncio.run(_scan_once(adapter, endpoint, session, document, labeler))

    display_outcomes(outcomes, sponsors_only=not show_all)
    for detail in archive.saved:
        display_sponsor_detail(detail)

    if annotate:
        annotate.write_text(str(document), encoding="utf-8")
        console.print(f"[dim]Labeled {labeler.labeled} emails in {annotate}[/dim]")


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_url_option
@_endpoint_option
@click.option("--interval", default=POLL_INTERVAL_SECONDS, show_default=True, type=float,
              help="Seconds between checks for changes.")
@click.option("--debounce", default=DEBOUNCE_SECONDS, show_default=True, type=float,
              help="Quiet period before a burst of changes triggers a re-scan.")
def watch(source: Path, url: str | None, endpoint: str, interval: float, debounce: float) -> None:
    """Re-scan a page snapshot every time it changes."""
    adapter = GmailPageAdapter(source_url=url or source.resolve().as_uri())
    with SqliteStore() as store:
        session = Session(store)
        try:
            asyncio.run(_watch(source, adapter, endpoint, session, interval, debounce))
        except KeyboardInterrupt:
            console.print("[dim]Stopped.[/dim]")


@cli.command(name="check-api")
@_endpoint_option
def check_api(endpoint: str) -> None:
    """Check whether the analysis endpoint is reachable."""

    async def probe() -> bool:
        async with AnalysisClient(endpoint) as client:
            return await client.health_check()

    if asyncio.run(probe()):
        console.print(f"[green]Analysis API online[/green] ({endpoint})")
    else:
        raise click.ClickException(f"Analysis API offline ({endpoint})")


@cli.command()
def stats() -> None:
    """Show lifetime counters."""
    with SqliteStore() as store:
        display_stats(load_stats(store))


@cli.command()
def activity() -> None:
    """Show recent pipeline activity."""
    with SqliteStore() as store:
        display_activities(load_activities(store))


@cli.command(name="export")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["csv", "json", "text"]),
    default="csv",
    help="Output format.",
)
@click.option("-o", "--output", required=True, help="Output file path.")
def export_cmd(fmt: str, output: str) -> None:
    """Export archived sponsor details."""
    with SqliteStore() as store:
        details = load_details(store)

    if not details:
        raise click.ClickException("No sponsor details archived. Run 'scan' first.")

    export_details(details, format=fmt, output_path=output)
    console.print(f"Exported {len(details)} sponsors to {output}")


@cli.command()
@click.option("--all", "everything", is_flag=True, help="Also clear stats, activity and archived sponsors.")
def reset(everything: bool) -> None:
    """Forget processed emails so the next scan analyzes everything again."""
    with SqliteStore() as store:
        sessions = store.keys(PROCESSED_KEY_PREFIX)
        for key in sessions:
            store.remove(key)
        if everything:
            for key in [*STAT_KEYS.values(), ACTIVITY_KEY, SPONSOR_DETAILS_KEY]:
                store.remove(key)
    console.print(f"[green]Reset {len(sessions)} session ledgers.[/green]")


@cli.group(name="store")
def store_group() -> None:
    """Manage the local store."""


@store_group.command(name="info")
def store_info() -> None:
    """Show store statistics."""
    with SqliteStore() as store:
        info = store.get_info()

    if info["key_count"] == 0:
        console.print("[dim]Store is empty.[/dim]")
        return

    console.print(f"[bold]Database size:[/bold] {info['db_file_size'] / 1024:.1f} KB")
    console.print(f"[bold]Last write:[/bold] {info['last_write']}")
    console.print(f"[bold]Keys:[/bold] {info['key_count']}")
    console.print(f"[bold]Session ledgers:[/bold] {info['session_count']}")


@store_group.command(name="clear")
def store_clear() -> None:
    """Delete everything in the store."""
    with SqliteStore() as store:
        store.clear()
    console.print("[green]Store cleared.[/green]")
