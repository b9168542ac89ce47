"""Regex heuristics shared by the extractor, the fallback result and sponsor details.

Every function here is pure and returns None when nothing usable is found.
"""

from __future__ import annotations

import re

from .constants import AGENDA_MAX, FREE_MAIL_DOMAINS, SPONSOR_KEYWORDS

EMAIL_RE = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")
SUBJECT_RE = re.compile(r"Subject:\s*(.+?)(?:\n|From:|$)", re.IGNORECASE)
URL_RE = re.compile(r"https?://[^\s<>\"{}|\\^`\[\]]+")

# "from Acme Widgets Inc", "representing Tech Co LLC"
COMPANY_RE = re.compile(
    r"\b(?i:from|at|with|representing)\s+"
    r"([A-Z][\w&'-]*(?:\s+[A-Z][\w&'-]*)*?\s+(?:Inc|LLC|Corp|Company|Ltd)\b\.?)"
)

# "$500 per post", "€1,200/video", "$2.5k a month"
MONEY_RE = re.compile(
    r"[$€£]\s?\d[\d,]*(?:\.\d+)?(?:\s?[kK]\b)?"
    r"(?:\s*/\s*[A-Za-z]+|\s+(?:per|a|an)\s+[A-Za-z]+)?"
    r"|\b\d[\d,]*(?:\.\d+)?\s?(?:USD|EUR|GBP|dollars)\b",
)

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n+")
_TRAILING_PUNCTUATION = ".,;:!?)'\""


def find_email(text: str) -> str | None:
    match = EMAIL_RE.search(text)
    return match.group(1) if match else None


def find_subject_marker(text: str) -> str | None:
    """Return the value of a literal ``Subject:`` line, if any."""
    match = SUBJECT_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def first_line(text: str) -> str | None:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return None


def find_website(text: str) -> str | None:
    match = URL_RE.search(text)
    if not match:
        return None
    return match.group(0).rstrip(_TRAILING_PUNCTUATION)


def find_company(text: str) -> str | None:
    match = COMPANY_RE.search(text)
    return match.group(1).strip() if match else None


def find_money(text: str) -> str | None:
    match = MONEY_RE.search(text)
    return match.group(0).strip() if match else None


def sender_domain(sender: str) -> str | None:
    """Return the lowercased domain of the sender's address."""
    address = find_email(sender)
    if not address:
        return None
    return address.rsplit("@", 1)[1].lower()


def business_domain(sender: str) -> str | None:
    """Return the sender's domain unless it belongs to a free mail provider."""
    domain = sender_domain(sender)
    if domain is None or domain in FREE_MAIL_DOMAINS:
        return None
    return domain


def company_from_domain(domain: str) -> str:
    """testcompany.com -> Testcompany; mail.acme-labs.co.uk -> Acme Labs."""
    labels = [label for label in domain.split(".") if label]
    if len(labels) >= 3 and len(labels[-1]) == 2 and len(labels[-2]) <= 3:  # co.uk, com.au
        name = labels[-3]
    elif len(labels) >= 2:
        name = labels[-2]
    else:
        name = labels[0] if labels else domain
    return " ".join(part.capitalize() for part in re.split(r"[-_]", name) if part)


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


def summarize_agenda(body: str, limit: int = AGENDA_MAX) -> str | None:
    """Pick the first sentence that mentions a sponsorship keyword.

    Falls back to the first sentence of the body.
    """
    sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(body) if s and s.strip()]
    if not sentences:
        return None
    for sentence in sentences:
        lowered = sentence.lower()
        if any(keyword in lowered for keyword in SPONSOR_KEYWORDS):
            return truncate(sentence, limit)
    return truncate(sentences[0], limit)
