"""Tests for the presentation collaborators."""

from io import StringIO

from rich.console import Console

from conftest import FakeNode

from sponsor_guard.display import ConsolePresenter, HtmlLabeler
from sponsor_guard.models import (
    AnalysisResult,
    ConfidenceTier,
    Outcome,
    RiskStatus,
    Verdict,
)


def _outcome(record, sponsor: bool, tier=ConfidenceTier.HIGH, node=None) -> Outcome:
    return Outcome(
        record=record,
        result=AnalysisResult(risk_score=20, status=RiskStatus.SAFE, is_sponsor=sponsor),
        verdict=Verdict(is_sponsor=sponsor, confidence_tier=tier),
        node=node,
    )


def _presenter():
    buffer = StringIO()
    return ConsolePresenter(Console(file=buffer, width=200)), buffer


def test_presenter_labels_sponsor_once(sponsor_record):
    presenter, buffer = _presenter()
    presenter(_outcome(sponsor_record, True))
    presenter(_outcome(sponsor_record, True))

    output = buffer.getvalue()
    assert output.count("SPONSOR DETECTED (HIGH CONFIDENCE)") == 1
    assert "Brand Partnership Opportunity" in output


def test_presenter_ignores_non_sponsors(plain_record):
    presenter, buffer = _presenter()
    presenter(_outcome(plain_record, False))
    assert buffer.getvalue() == ""


def test_html_labeler_marks_node(adapter, sponsor_record):
    node = FakeNode(text="sponsor email")
    labeler = HtmlLabeler(adapter)

    labeler(_outcome(sponsor_record, True, ConfidenceTier.MEDIUM, node=node))
    labeler(_outcome(sponsor_record, True, ConfidenceTier.MEDIUM, node=node))

    assert node.labels == ["SPONSOR DETECTED (MEDIUM CONFIDENCE)"]
    assert labeler.labeled == 1


def test_html_labeler_skips_missing_node(adapter, sponsor_record):
    labeler = HtmlLabeler(adapter)
    labeler(_outcome(sponsor_record, True))
    assert labeler.labeled == 0
