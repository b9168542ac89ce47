"""Rich-based display functions and presentation collaborators."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .classifier import sponsor_label
from .models import Activity, Outcome, RiskStatus, SponsorDetail, Stats
from .page import PageAdapter

console = Console()

_STATUS_COLORS = {
    RiskStatus.SAFE: "green",
    RiskStatus.WARNING: "yellow",
    RiskStatus.DANGER: "red",
}

_ACTIVITY_COLORS = {"sponsor": "green", "scanned": "blue", "error": "red"}


def _status_color(status: RiskStatus) -> str:
    return _STATUS_COLORS.get(status, "white")


def display_outcomes(outcomes: list[Outcome], sponsors_only: bool = False) -> None:
    """Display analyzed emails, sponsors first, then by ascending risk."""
    rows = [o for o in outcomes if o.verdict.is_sponsor or not sponsors_only]
    rows.sort(key=lambda o: (not o.verdict.is_sponsor, o.result.risk_score))

    table = Table(title="Scan Results")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Subject")
    table.add_column("Sender")
    table.add_column("Risk", justify="right")
    table.add_column("Status")
    table.add_column("Sponsor")
    table.add_column("Confidence")

    for idx, outcome in enumerate(rows, start=1):
        result = outcome.result
        color = _status_color(result.status)
        status = result.status.value + (" (fallback)" if result.fallback else "")
        table.add_row(
            str(idx),
            outcome.record.subject,
            outcome.record.sender,
            f"[{color}]{result.risk_score}[/{color}]",
            f"[{color}]{status}[/{color}]",
            "[bold green]yes[/bold green]" if outcome.verdict.is_sponsor else "no",
            outcome.verdict.confidence_tier.value,
        )

    console.print(table)
    sponsor_count = sum(1 for o in outcomes if o.verdict.is_sponsor)
    console.print(
        Panel(
            f"Emails analyzed: {len(outcomes)}  |  Sponsors detected: {sponsor_count}",
            title="Summary",
        )
    )


def display_sponsor_detail(detail: SponsorDetail) -> None:
    lines = [
        f"[bold]Company:[/bold] {detail.company_name}",
        f"[bold]Website:[/bold] {detail.website}",
        f"[bold]Contact:[/bold] {detail.contact_person}",
        f"[bold]Agenda:[/bold] {detail.agenda}",
        f"[bold]Money offered:[/bold] {detail.money_offered}",
        f"[bold]Risk score:[/bold] {detail.risk_score}/100",
    ]
    console.print(Panel("\n".join(lines), title=detail.email_subject))


def display_stats(stats: Stats) -> None:
    console.print(f"[bold]Emails analyzed:[/bold] {stats.scanned_emails}")
    console.print(f"[bold]Sponsors detected:[/bold] {stats.sponsor_emails}")
    console.print(f"[bold]Sponsors archived:[/bold] {stats.docs_updates}")


def display_activities(activities: list[Activity]) -> None:
    if not activities:
        console.print("[dim]Waiting for sponsor emails...[/dim]")
        return

    table = Table(title="Recent Activity")
    table.add_column("Time", style="dim")
    table.add_column("Event")
    for activity in activities:
        color = _ACTIVITY_COLORS.get(activity.kind, "white")
        table.add_row(activity.timestamp, f"[{color}]{activity.message}[/{color}]")
    console.print(table)


class ConsolePresenter:
    """Print one label line per sponsor identity."""

    def __init__(self, target: Console | None = None) -> None:
        self.console = target or console
        self.labeled: set[str] = set()

    def __call__(self, outcome: Outcome) -> None:
        identity = outcome.record.identity
        if not outcome.verdict.is_sponsor or identity in self.labeled:
            return
        self.labeled.add(identity)
        self.console.print(
            f"[bold magenta]{sponsor_label(outcome.verdict.confidence_tier)}[/bold magenta] "
            f"{outcome.record.subject} [dim]({outcome.record.sender})[/dim]"
        )


class HtmlLabeler:
    """Insert a sponsor label at the top of each sponsor node."""

    def __init__(self, adapter: PageAdapter) -> None:
        self.adapter = adapter
        self.labeled = 0

    def __call__(self, outcome: Outcome) -> None:
        node = outcome.node
        # The node may belong to a document that has since been re-parsed.
        if node is None or not outcome.verdict.is_sponsor or self.adapter.has_label(node):
            return
        self.adapter.add_label(node, sponsor_label(outcome.verdict.confidence_tier))
        self.labeled += 1
