"""Score thresholds and the final sponsor verdict."""

from __future__ import annotations

import math
from typing import Any

from .constants import (
    CONFIDENCE_HIGH_BELOW,
    CONFIDENCE_MEDIUM_BELOW,
    DEFAULT_RISK_SCORE,
    SPONSOR_RISK_CEILING,
    STATUS_SAFE_MAX,
    STATUS_WARNING_MAX,
)
from .models import (
    AnalysisResult,
    ConfidenceTier,
    EmailRecord,
    FlagKind,
    RiskStatus,
    Verdict,
)


def clamp_score(value: Any) -> int:
    """Coerce a remote score into an int in [0, 100]."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_RISK_SCORE
    if not math.isfinite(number):
        return DEFAULT_RISK_SCORE
    return max(0, min(100, int(round(number))))


def status_for_score(score: int) -> RiskStatus:
    if score <= STATUS_SAFE_MAX:
        return RiskStatus.SAFE
    if score <= STATUS_WARNING_MAX:
        return RiskStatus.WARNING
    return RiskStatus.DANGER


def confidence_tier(score: int) -> ConfidenceTier:
    if score < CONFIDENCE_HIGH_BELOW:
        return ConfidenceTier.HIGH
    if score < CONFIDENCE_MEDIUM_BELOW:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.LOW


def is_sponsor(result: AnalysisResult) -> bool:
    """Any strong positive signal is enough, even with a moderate score."""
    info = result.extracted_info
    return (
        result.is_sponsor
        or bool(info.company_name)
        or bool(info.offer)
        or result.risk_score < SPONSOR_RISK_CEILING
        or any(flag.kind is FlagKind.POSITIVE for flag in result.flags)
    )


def reconcile(record: EmailRecord, result: AnalysisResult) -> Verdict:
    """Merge the analysis result into a final verdict.

    The tier is presentation only and never feeds back into is_sponsor.
    """
    return Verdict(
        is_sponsor=is_sponsor(result),
        confidence_tier=confidence_tier(result.risk_score),
    )


def sponsor_label(tier: ConfidenceTier) -> str:
    return f"SPONSOR DETECTED ({tier.value} CONFIDENCE)"
