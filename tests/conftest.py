"""Shared fixtures for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import httpx
import pytest

from sponsor_guard.analysis_client import AnalysisClient
from sponsor_guard.models import EmailRecord
from sponsor_guard.page import PageAdapter
from sponsor_guard.session import Session
from sponsor_guard.store import MemoryStore

GMAIL_PAGE = """<html><body>
<div role="main">
  <div class="adn ads" data-message-id="m-100">
    <h2 class="hP">Brand Partnership Opportunity</h2>
    <span class="gD" email="marketing@testcompany.com" name="Test Company">Test Company</span>
    <div class="a3s">Hi! We'd love to partner with you for a sponsored post about our new product.
We can pay $500 per post. Details at https://testcompany.com/creators.</div>
  </div>
  <div class="adn ads">
    <div>Subject: Lunch on Friday?
From: alice.smith@gmail.com
Are we still on for lunch this Friday at noon? Let me know soon.</div>
  </div>
  <div class="adn ads"><span>short</span></div>
</div>
</body></html>
"""


@dataclass
class FakeNode:
    """Literal stand-in for a DOM node."""

    text: str
    attrs: dict[str, str] = field(default_factory=dict)
    position: int = 0
    subject: str | None = None
    sender: str | None = None
    labels: list[str] = field(default_factory=list)


class FakeAdapter(PageAdapter):
    source_url = "https://mail.example.com/#inbox"

    def locate(self, document: list[FakeNode]) -> list[FakeNode]:
        return [node for node in document if not node.labels]

    def text(self, node: FakeNode) -> str:
        return node.text

    def attribute(self, node: FakeNode, name: str) -> str | None:
        return node.attrs.get(name)

    def position(self, node: FakeNode) -> int:
        return node.position

    def read_subject(self, node: FakeNode) -> str | None:
        return node.subject

    def read_sender(self, node: FakeNode) -> str | None:
        return node.sender

    def has_label(self, node: FakeNode) -> bool:
        return bool(node.labels)

    def add_label(self, node: FakeNode, text: str) -> None:
        node.labels.append(text)


@pytest.fixture
def adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def gmail_html() -> str:
    return GMAIL_PAGE


@pytest.fixture
def sponsor_node() -> FakeNode:
    return FakeNode(
        text=(
            "From: marketing@testcompany.com\n"
            "Subject: Brand Partnership Opportunity\n"
            "Hi! We'd love to partner with you for a sponsored post about our new product. "
            "We can pay $500 per post."
        ),
        attrs={"data-message-id": "a1"},
    )


@pytest.fixture
def plain_node() -> FakeNode:
    return FakeNode(
        text=(
            "Subject: Lunch on Friday?\n"
            "From: alice.smith@gmail.com\n"
            "Are we still on for lunch this Friday at noon? Let me know soon."
        ),
        attrs={"data-thread-id": "b2"},
    )


@pytest.fixture
def sponsor_record() -> EmailRecord:
    return EmailRecord(
        identity="msg_a1",
        subject="Brand Partnership Opportunity",
        sender="marketing@testcompany.com",
        body="Hi! We'd love to partner with you for a sponsored post. We can pay $500 per post.",
        source_url="https://mail.example.com/#inbox",
    )


@pytest.fixture
def plain_record() -> EmailRecord:
    return EmailRecord(
        identity="thread_b2",
        subject="Lunch on Friday?",
        sender="alice.smith@gmail.com",
        body="Are we still on for lunch this Friday at noon? Let me know soon.",
    )


@pytest.fixture
def session() -> Session:
    return Session(MemoryStore(), session_id=1)


@pytest.fixture
def make_client() -> Callable[..., AnalysisClient]:
    """Build an AnalysisClient whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> AnalysisClient:
        return AnalysisClient("http://analysis.test/api/verify", transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def unavailable_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Endpoint that always answers 503 and counts the calls."""

    def handler(request: httpx.Request) -> httpx.Response:
        handler.calls += 1
        return httpx.Response(503, json={"error": "unavailable"})

    handler.calls = 0
    return handler
