"""Scan orchestration - locate, dedupe, prefilter, analyze, reconcile."""

from __future__ import annotations

import asyncio
from typing import Any

from .analysis_client import AnalysisClient
from .classifier import reconcile
from .events import ACTIVITY, ANALYZED, SPONSOR_DETECTED, EventBus
from .extractor import extract
from .identity import identify
from .logging import get_logger
from .models import Activity, Outcome
from .page import PageAdapter
from .prefilter import is_candidate, matched_keywords
from .session import Session
from .sponsor import build_sponsor_detail

log = get_logger(__name__)


class Pipeline:
    """One email intake pipeline bound to a page adapter and a session."""

    def __init__(
        self,
        adapter: PageAdapter,
        client: AnalysisClient,
        session: Session,
        bus: EventBus | None = None,
    ) -> None:
        self.adapter = adapter
        self.client = client
        self.session = session
        self.bus = bus or EventBus()

    def _activity(self, kind: str, message: str) -> None:
        activity = Activity(kind=kind, message=message)
        self.session.add_activity(activity)
        self.bus.publish(ACTIVITY, activity)

    async def process_node(self, node: Any) -> Outcome | None:
        """Run one node through the pipeline.

        Returns None when the node was already processed, had no usable
        content, did not pass the keyword prefilter or failed unexpectedly;
        a failure never affects other nodes of the same scan.
        """
        # Ledger check and insert must both happen before the first await.
        identity = identify(node, self.adapter)
        ledger = self.session.ledger
        if not ledger.should_process(identity):
            return None
        ledger.mark_processed(identity)

        try:
            return await self._analyze_node(node, identity)
        except Exception as e:  # noqa: BLE001
            log.warning("process_node_failed", identity=identity, error=repr(e))
            return None

    async def _analyze_node(self, node: Any, identity: str) -> Outcome | None:
        record = extract(node, self.adapter)
        if record is None:
            log.debug("extraction_miss", identity=identity)
            return None

        if not is_candidate(record):
            log.debug("email_skipped", identity=identity, subject=record.subject)
            return None

        log.info(
            "sponsor_candidate",
            identity=identity,
            subject=record.subject,
            keywords=matched_keywords(record),
        )
        self._activity("scanned", f"Analyzing: {record.subject}")

        result = await self.client.analyze(record)
        self.session.bump("scanned_emails")
        if result.fallback:
            self._activity("error", f"Analysis unavailable, used fallback: {record.subject}")

        verdict = reconcile(record, result)
        outcome = Outcome(record=record, result=result, verdict=verdict, node=node)
        self.bus.publish(ANALYZED, outcome)

        if verdict.is_sponsor:
            self.session.bump("sponsor_emails")
            self._activity("sponsor", f"Sponsor detected: {record.subject}")
            self.bus.publish(SPONSOR_DETECTED, build_sponsor_detail(record, result))

        return outcome

    def pending_nodes(self, document: Any) -> list[Any]:
        """Located nodes whose identity has not been processed yet."""
        ledger = self.session.ledger
        return [
            node
            for node in self.adapter.locate(document)
            if ledger.should_process(identify(node, self.adapter))
        ]

    async def scan(self, document: Any) -> list[Outcome]:
        """Process every new node of a document concurrently.

        Outcomes are returned in document order; completion order is not.
        """
        nodes = self.pending_nodes(document)
        log.info("scan_started", candidates=len(nodes))
        results = await asyncio.gather(*(self.process_node(node) for node in nodes))
        outcomes = [o for o in results if o is not None]
        log.info("scan_finished", analyzed=len(outcomes))
        return outcomes

    async def reset(self, document: Any) -> list[Outcome]:
        """Forget processed identities and re-scan the document."""
        self.session.reset()
        return await self.scan(document)
