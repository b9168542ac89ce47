"""Tests for the sponsor archive and exports."""

import csv
import json

import pytest

from sponsor_guard.export import SponsorArchive, export_details, load_details
from sponsor_guard.models import SponsorDetail
from sponsor_guard.session import Session
from sponsor_guard.store import MemoryStore, StorageError


def _detail(company: str, risk: int, captured_at: str = "2024-03-01T12:00:00+00:00") -> SponsorDetail:
    return SponsorDetail(
        company_name=company,
        website=f"https://{company.lower()}.com",
        agenda="Sponsored video",
        risk_score=risk,
        contact_person=f"team@{company.lower()}.com",
        money_offered="$500",
        email_subject=f"{company} partnership",
        captured_at=captured_at,
    )


@pytest.fixture
def details():
    return [_detail("Zeta", 40), _detail("Acme", 10), _detail("Beta", 10, "2024-02-01T08:00:00+00:00")]


def test_archive_appends_and_counts(session):
    archive = SponsorArchive(session)
    archive(_detail("Acme", 10))
    archive(_detail("Beta", 20))

    assert [d.company_name for d in load_details(session.store)] == ["Acme", "Beta"]
    assert len(archive.saved) == 2
    assert session.stats.docs_updates == 2


def test_archive_failure_is_logged_not_raised():
    class BrokenStore(MemoryStore):
        def set(self, key, value):
            raise StorageError("locked")

    session = Session(BrokenStore(), session_id=1)
    archive = SponsorArchive(session)
    archive(_detail("Acme", 10))

    assert archive.saved == []
    assert session.stats.docs_updates == 0


def test_export_csv(tmp_path, details):
    out = tmp_path / "sponsors.csv"
    export_details(details, format="csv", output_path=str(out))

    with open(out) as f:
        rows = list(csv.DictReader(f))
    assert [r["company_name"] for r in rows] == ["Beta", "Acme", "Zeta"]
    assert rows[0]["money_offered"] == "$500"


def test_export_json(tmp_path, details):
    out = tmp_path / "sponsors.json"
    export_details(details, format="json", output_path=str(out))

    data = json.loads(out.read_text())
    assert [d["company_name"] for d in data] == ["Beta", "Acme", "Zeta"]
    assert data[0]["risk_score"] == 10


def test_export_text(tmp_path, details):
    out = tmp_path / "sponsors.txt"
    export_details(details, format="text", output_path=str(out))

    text = out.read_text()
    assert text.count("NEW SPONSOR OPPORTUNITY DETECTED") == 3
    assert text.index("Company Name: Beta") < text.index("Company Name: Zeta")


def test_unknown_format(tmp_path, details):
    with pytest.raises(ValueError, match="Unknown export format"):
        export_details(details, format="xml", output_path=str(tmp_path / "x.xml"))
