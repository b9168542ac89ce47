"""Page adapters - the only code that knows how the host page is structured."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup, Tag

from .constants import (
    CANDIDATE_SELECTORS,
    DEFAULT_SENDER,
    DEFAULT_SUBJECT,
    LABEL_CLASS,
    MIN_CANDIDATE_TEXT,
    SENDER_SELECTORS,
    SUBJECT_SELECTORS,
)


class PageAdapter(ABC):
    """Read-only view of a host page plus the one write the labeler needs."""

    source_url: str = ""

    @abstractmethod
    def locate(self, document: Any) -> list[Any]:
        """Return the candidate email nodes of a document."""

    @abstractmethod
    def text(self, node: Any) -> str:
        """Return the node's visible text."""

    @abstractmethod
    def attribute(self, node: Any, name: str) -> str | None:
        ...

    @abstractmethod
    def position(self, node: Any) -> int:
        """Index of the node among its parent's element children, -1 if detached."""

    @abstractmethod
    def read_subject(self, node: Any) -> str | None:
        ...

    @abstractmethod
    def read_sender(self, node: Any) -> str | None:
        ...

    @abstractmethod
    def has_label(self, node: Any) -> bool:
        ...

    @abstractmethod
    def add_label(self, node: Any, text: str) -> None:
        ...


def load_document(path: Path | str) -> BeautifulSoup:
    """Parse a saved HTML page."""
    with open(path, encoding="utf-8", errors="replace") as f:
        return BeautifulSoup(f.read(), "html.parser")


class GmailPageAdapter(PageAdapter):
    """Adapter for the Gmail web client's rendered markup."""

    def __init__(self, source_url: str = "") -> None:
        self.source_url = source_url

    def locate(self, document: BeautifulSoup) -> list[Tag]:
        seen: set[int] = set()
        nodes: list[Tag] = []
        for selector in CANDIDATE_SELECTORS:
            for node in document.select(selector):
                if id(node) in seen:
                    continue
                seen.add(id(node))
                if len(self.text(node).strip()) <= MIN_CANDIDATE_TEXT:
                    continue
                if self.has_label(node):
                    continue
                nodes.append(node)
        return nodes

    def text(self, node: Tag) -> str:
        return node.get_text()

    def attribute(self, node: Tag, name: str) -> str | None:
        value = node.get(name)
        if isinstance(value, list):  # multi-valued attributes such as class
            value = " ".join(value)
        return value or None

    def position(self, node: Tag) -> int:
        parent = node.parent
        if parent is None:
            return -1
        siblings = [child for child in parent.children if isinstance(child, Tag)]
        for index, sibling in enumerate(siblings):
            if sibling is node:
                return index
        return -1

    def read_subject(self, node: Tag) -> str | None:
        for selector in SUBJECT_SELECTORS:
            found = node.select_one(selector)
            if found is None:
                continue
            subject = found.get_text().strip()
            if subject and subject != DEFAULT_SUBJECT:
                return subject
        return None

    def read_sender(self, node: Tag) -> str | None:
        for selector in SENDER_SELECTORS:
            found = node.select_one(selector)
            if found is None:
                continue
            sender = found.get("email") or found.get("name") or found.get_text().strip()
            if sender and sender != DEFAULT_SENDER:
                return sender
        return None

    def has_label(self, node: Tag) -> bool:
        return node.select_one(f".{LABEL_CLASS}") is not None

    def add_label(self, node: Tag, text: str) -> None:
        # Any tree will do for creating the tag; the node may be detached.
        factory = BeautifulSoup("", "html.parser")
        label = factory.new_tag("div", attrs={"class": f"{LABEL_CLASS} sponsor-guard-new"})
        label.string = text
        node.insert(0, label)
