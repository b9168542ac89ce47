"""Archive detected sponsors and export them to CSV, JSON or a text report."""

from __future__ import annotations

import csv
import json

from .constants import SPONSOR_DETAILS_KEY
from .logging import get_logger
from .models import SponsorDetail
from .session import Session
from .sponsor import format_report
from .store import StorageError

log = get_logger(__name__)

FIELDNAMES = [
    "company_name",
    "website",
    "agenda",
    "risk_score",
    "contact_person",
    "money_offered",
    "email_subject",
    "captured_at",
]


class SponsorArchive:
    """Export collaborator: appends every detected sponsor to the store."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.saved: list[SponsorDetail] = []

    def __call__(self, detail: SponsorDetail) -> None:
        store = self.session.store
        try:
            existing = store.get(SPONSOR_DETAILS_KEY, []) or []
            existing.append(detail.to_dict())
            store.set(SPONSOR_DETAILS_KEY, existing)
        except StorageError as e:
            log.warning("sponsor_archive_failed", subject=detail.email_subject, error=str(e))
            return
        self.saved.append(detail)
        self.session.bump("docs_updates")


def load_details(store) -> list[SponsorDetail]:
    return [SponsorDetail.from_dict(d) for d in store.get(SPONSOR_DETAILS_KEY, []) or []]


def export_details(details: list[SponsorDetail], format: str, output_path: str) -> None:
    """Export sponsor details to a file.

    Args:
        details: The sponsor details to export.
        format: Output format, one of 'csv', 'json' or 'text'.
        output_path: Path to write the output file.
    """
    details_sorted = sorted(details, key=lambda d: (d.risk_score, d.captured_at))

    if format == "csv":
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
            writer.writeheader()
            for detail in details_sorted:
                writer.writerow(detail.to_dict())
    elif format == "json":
        with open(output_path, "w") as f:
            json.dump([d.to_dict() for d in details_sorted], f, indent=2)
    elif format == "text":
        with open(output_path, "w") as f:
            for detail in details_sorted:
                f.write(format_report(detail))
                f.write("\n")
    else:
        raise ValueError(f"Unknown export format: {format}")
