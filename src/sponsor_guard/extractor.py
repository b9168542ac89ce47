"""Turn a rendered email node into a normalized EmailRecord."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .constants import (
    BODY_MAX,
    DEFAULT_SENDER,
    DEFAULT_SUBJECT,
    MIN_TEXT_LENGTH,
    SENDER_MAX,
    SUBJECT_MAX,
)
from .heuristics import find_email, find_subject_marker, first_line
from .identity import identify
from .models import EmailRecord
from .page import PageAdapter


def _derive_subject(node: Any, adapter: PageAdapter, text: str) -> str:
    return (
        adapter.read_subject(node)
        or find_subject_marker(text)
        or first_line(text)
        or DEFAULT_SUBJECT
    )


def _derive_sender(node: Any, adapter: PageAdapter, text: str) -> str:
    return adapter.read_sender(node) or find_email(text) or DEFAULT_SENDER


def extract(
    node: Any,
    adapter: PageAdapter,
    captured_at: datetime | None = None,
) -> EmailRecord | None:
    """Extract an EmailRecord, or None when the node has no usable content."""
    text = (adapter.text(node) or "").strip()
    if len(text) < MIN_TEXT_LENGTH:
        return None

    record = EmailRecord(
        identity=identify(node, adapter),
        subject=_derive_subject(node, adapter, text)[:SUBJECT_MAX],
        sender=_derive_sender(node, adapter, text)[:SENDER_MAX],
        body=text[:BODY_MAX],
        source_url=adapter.source_url,
    )
    if captured_at is not None:
        record.captured_at = captured_at
    return record
