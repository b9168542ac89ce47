"""Cheap keyword gate in front of the remote classifier."""

from .constants import SPONSOR_KEYWORDS
from .models import EmailRecord


def _haystack(record: EmailRecord) -> str:
    return f"{record.subject} {record.body}".lower()


def matched_keywords(record: EmailRecord) -> list[str]:
    """Return every sponsorship keyword found in the subject or body."""
    text = _haystack(record)
    return [keyword for keyword in SPONSOR_KEYWORDS if keyword in text]


def is_candidate(record: EmailRecord) -> bool:
    """True iff at least one sponsorship keyword is present.

    Recall-biased: false positives only cost an analysis call, false
    negatives are never revisited within the session.
    """
    text = _haystack(record)
    return any(keyword in text for keyword in SPONSOR_KEYWORDS)
