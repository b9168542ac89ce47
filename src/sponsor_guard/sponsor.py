"""Derive SponsorDetail records from an email and its analysis."""

from __future__ import annotations

from .constants import AGENDA_MAX, DEFAULT_COMPANY, NOT_SPECIFIED
from .heuristics import (
    business_domain,
    company_from_domain,
    find_company,
    find_money,
    find_website,
    summarize_agenda,
    truncate,
)
from .models import AnalysisResult, EmailRecord, SponsorDetail


def _company(record: EmailRecord, result: AnalysisResult) -> str:
    if result.extracted_info.company_name:
        return result.extracted_info.company_name
    company = find_company(record.body)
    if company:
        return company
    domain = business_domain(record.sender)
    if domain:
        return company_from_domain(domain)
    return DEFAULT_COMPANY


def _website(record: EmailRecord, result: AnalysisResult) -> str:
    if result.extracted_info.website:
        return result.extracted_info.website
    website = find_website(record.body)
    if website:
        return website
    domain = business_domain(record.sender)
    return f"https://{domain}" if domain else NOT_SPECIFIED


def _agenda(record: EmailRecord, result: AnalysisResult) -> str:
    agenda = result.extracted_info.offer or result.summary or summarize_agenda(record.body)
    return truncate(agenda, AGENDA_MAX) if agenda else NOT_SPECIFIED


def build_sponsor_detail(record: EmailRecord, result: AnalysisResult) -> SponsorDetail:
    return SponsorDetail(
        company_name=_company(record, result),
        website=_website(record, result),
        agenda=_agenda(record, result),
        risk_score=result.risk_score,
        contact_person=result.extracted_info.contact_person or record.sender or NOT_SPECIFIED,
        money_offered=find_money(f"{record.subject}\n{record.body}") or NOT_SPECIFIED,
        email_subject=record.subject,
        captured_at=record.captured_at.isoformat(),
    )


def format_report(detail: SponsorDetail) -> str:
    """Plain-text block for the sponsor tracker document."""
    return "\n".join(
        [
            "NEW SPONSOR OPPORTUNITY DETECTED",
            "=" * 40,
            f"Detected: {detail.captured_at}",
            f"Subject: {detail.email_subject}",
            "",
            "COMPANY INFORMATION:",
            f"  Company Name: {detail.company_name}",
            f"  Website: {detail.website}",
            f"  Contact Person: {detail.contact_person}",
            "",
            "OPPORTUNITY DETAILS:",
            f"  Agenda: {detail.agenda}",
            f"  Money Offered: {detail.money_offered}",
            "",
            f"Risk Score: {detail.risk_score}/100",
            "-" * 40,
            "",
        ]
    )
