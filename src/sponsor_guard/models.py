"""Data models for Sponsor Guard."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .constants import DEFAULT_RISK_SCORE, PLACEHOLDER_VALUES


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RiskStatus(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


class FlagKind(str, Enum):
    POSITIVE = "positive"
    CAUTION = "caution"
    NEGATIVE = "negative"


class ConfidenceTier(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


# Traffic-light flag types used by older versions of the endpoint
_LEGACY_FLAG_KINDS = {
    "green": FlagKind.POSITIVE,
    "yellow": FlagKind.CAUTION,
    "red": FlagKind.NEGATIVE,
}


def _clean(value: Any) -> str | None:
    """Return a stripped string, or None for empty/placeholder values."""
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in PLACEHOLDER_VALUES:
        return None
    return text


@dataclass
class EmailRecord:
    """Normalized content of a single email node."""

    identity: str
    subject: str
    sender: str
    body: str
    source_url: str = ""
    captured_at: datetime = field(default_factory=_now)

    def to_payload(self) -> str:
        """Render the labelled text sent to the remote classifier."""
        return f"Subject: {self.subject}\nFrom: {self.sender}\nBody: {self.body}".strip()


@dataclass
class ExtractedInfo:
    company_name: str | None = None
    website: str | None = None
    contact_person: str | None = None
    offer: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ExtractedInfo:
        data = data if isinstance(data, dict) else {}
        return cls(
            company_name=_clean(data.get("companyName")),
            website=_clean(data.get("website")),
            contact_person=_clean(data.get("contactPerson")),
            offer=_clean(data.get("offer")),
        )


@dataclass
class Flag:
    kind: FlagKind
    message: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Flag:
        raw = str(data.get("kind") or data.get("type") or "").lower()
        if raw in _LEGACY_FLAG_KINDS:
            kind = _LEGACY_FLAG_KINDS[raw]
        else:
            try:
                kind = FlagKind(raw)
            except ValueError:
                kind = FlagKind.CAUTION
        return cls(kind=kind, message=str(data.get("message", "")))


@dataclass
class AnalysisResult:
    """Canonical classifier result, remote or locally synthesized."""

    risk_score: int
    status: RiskStatus
    is_sponsor: bool = False
    extracted_info: ExtractedInfo = field(default_factory=ExtractedInfo)
    flags: list[Flag] = field(default_factory=list)
    summary: str | None = None
    fallback: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisResult:
        """Create an AnalysisResult from the endpoint's JSON body.

        Missing fields fall back to neutral defaults; the status is derived
        from the score unless the endpoint supplied a valid one.
        """
        from .classifier import clamp_score, status_for_score

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        score = clamp_score(data.get("riskScore", DEFAULT_RISK_SCORE))
        try:
            status = RiskStatus(str(data.get("status", "")).lower())
        except ValueError:
            status = status_for_score(score)

        raw_flags = data.get("flags")
        if not isinstance(raw_flags, list):
            raw_flags = []
        flags = [Flag.from_dict(f) for f in raw_flags if isinstance(f, dict)]

        return cls(
            risk_score=score,
            status=status,
            is_sponsor=bool(data.get("isSponsor", False)),
            extracted_info=ExtractedInfo.from_dict(data.get("extractedInfo")),
            flags=flags,
            summary=_clean(data.get("summary")),
        )


@dataclass
class Verdict:
    is_sponsor: bool
    confidence_tier: ConfidenceTier


@dataclass
class Outcome:
    """Everything a presentation collaborator needs about one email."""

    record: EmailRecord
    result: AnalysisResult
    verdict: Verdict
    node: Any = field(default=None, repr=False, compare=False)


@dataclass
class SponsorDetail:
    """Flattened sponsor lead handed to the export collaborator."""

    company_name: str
    website: str
    agenda: str
    risk_score: int
    contact_person: str
    money_offered: str
    email_subject: str
    captured_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SponsorDetail:
        return cls(**{k: data[k] for k in cls.__dataclass_fields__})


@dataclass
class Activity:
    kind: str  # "scanned", "sponsor", "error"
    message: str
    timestamp: str = field(default_factory=lambda: _now().isoformat())

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class Stats:
    scanned_emails: int = 0
    sponsor_emails: int = 0
    docs_updates: int = 0
