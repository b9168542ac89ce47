"""Tests for parsing endpoint responses into models."""

import pytest

from sponsor_guard.models import (
    AnalysisResult,
    ExtractedInfo,
    Flag,
    FlagKind,
    RiskStatus,
    SponsorDetail,
)


def test_full_response():
    result = AnalysisResult.from_dict(
        {
            "riskScore": 15,
            "status": "safe",
            "isSponsor": True,
            "summary": "Legitimate paid collaboration",
            "extractedInfo": {
                "companyName": "TestCompany Inc",
                "website": "https://testcompany.com",
                "contactPerson": "Jane Doe",
                "offer": "$500 per post",
            },
            "flags": [{"type": "positive", "message": "verified domain"}],
        }
    )
    assert result.risk_score == 15
    assert result.status == RiskStatus.SAFE
    assert result.is_sponsor is True
    assert result.extracted_info.company_name == "TestCompany Inc"
    assert result.extracted_info.offer == "$500 per post"
    assert result.flags == [Flag(kind=FlagKind.POSITIVE, message="verified domain")]
    assert result.summary == "Legitimate paid collaboration"
    assert result.fallback is False


def test_missing_fields_use_defaults():
    result = AnalysisResult.from_dict({})
    assert result.risk_score == 50
    assert result.status == RiskStatus.WARNING
    assert result.is_sponsor is False
    assert result.extracted_info == ExtractedInfo()
    assert result.flags == []


def test_status_derived_when_invalid():
    result = AnalysisResult.from_dict({"riskScore": 90, "status": "catastrophic"})
    assert result.status == RiskStatus.DANGER


def test_score_is_clamped():
    assert AnalysisResult.from_dict({"riskScore": 140}).risk_score == 100


def test_non_object_raises():
    with pytest.raises(ValueError):
        AnalysisResult.from_dict(["not", "an", "object"])


def test_placeholders_count_as_absent():
    info = ExtractedInfo.from_dict(
        {"companyName": "Not specified", "website": "  ", "contactPerson": "Unknown", "offer": None}
    )
    assert info == ExtractedInfo()


def test_legacy_flag_colors():
    assert Flag.from_dict({"type": "green", "message": ""}).kind is FlagKind.POSITIVE
    assert Flag.from_dict({"type": "red", "message": ""}).kind is FlagKind.NEGATIVE
    assert Flag.from_dict({"kind": "mystery"}).kind is FlagKind.CAUTION


def test_non_dict_flags_are_ignored():
    result = AnalysisResult.from_dict({"flags": ["oops", {"kind": "negative", "message": "spoofed"}]})
    assert len(result.flags) == 1
    assert result.flags[0].kind is FlagKind.NEGATIVE


def test_sponsor_detail_round_trip():
    detail = SponsorDetail(
        company_name="Acme",
        website="https://acme.io",
        agenda="Sponsored video",
        risk_score=20,
        contact_person="ops@acme.io",
        money_offered="$1,000",
        email_subject="Partnership",
        captured_at="2024-03-01T12:00:00+00:00",
    )
    assert SponsorDetail.from_dict(detail.to_dict()) == detail


def test_flags_must_be_a_list():
    assert AnalysisResult.from_dict({"flags": 5}).flags == []
    assert AnalysisResult.from_dict({"flags": {"kind": "positive"}}).flags == []
