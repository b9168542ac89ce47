"""Tests for the processed-set ledger."""

import pytest

from sponsor_guard.ledger import ProcessedSet
from sponsor_guard.store import MemoryStore, StorageError


class FlakyStore(MemoryStore):
    """Fails the first ``failures`` writes."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.attempts = 0

    def set(self, key, value):
        self.attempts += 1
        if self.failures > 0:
            self.failures -= 1
            raise StorageError("disk full")
        super().set(key, value)


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    """Skip the exponential backoff sleeps."""
    monkeypatch.setattr(ProcessedSet._write.retry, "sleep", lambda seconds: None)


def test_mark_and_check():
    ledger = ProcessedSet(MemoryStore(), session_id=1)
    assert ledger.should_process("msg_a1")
    ledger.mark_processed("msg_a1")
    assert not ledger.should_process("msg_a1")
    assert "msg_a1" in ledger
    assert len(ledger) == 1


def test_persisted_under_session_key():
    store = MemoryStore()
    ProcessedSet(store, session_id=1700000000000).mark_processed("thread_x")
    assert store.get("processedEmails_1700000000000") == ["thread_x"]


def test_same_session_resumes():
    store = MemoryStore()
    ProcessedSet(store, session_id=7).mark_processed("msg_a1")

    restarted = ProcessedSet(store, session_id=7)
    assert not restarted.should_process("msg_a1")


def test_new_session_starts_empty():
    store = MemoryStore()
    ProcessedSet(store, session_id=7).mark_processed("msg_a1")
    assert ProcessedSet(store, session_id=8).should_process("msg_a1")


def test_transient_failure_is_retried():
    store = FlakyStore(failures=2)
    ledger = ProcessedSet(store, session_id=1)
    ledger.mark_processed("msg_a1")

    assert store.attempts == 3
    assert not ledger.pending
    assert store.get("processedEmails_1") == ["msg_a1"]


def test_persistent_failure_keeps_memory_authoritative():
    store = FlakyStore(failures=3)
    ledger = ProcessedSet(store, session_id=1)
    ledger.mark_processed("msg_a1")

    assert ledger.pending
    assert not ledger.should_process("msg_a1")
    assert store.get("processedEmails_1") is None


def test_pending_write_flushed_by_next_insert():
    store = FlakyStore(failures=3)
    ledger = ProcessedSet(store, session_id=1)
    ledger.mark_processed("msg_a1")
    ledger.mark_processed("msg_a1")

    assert not ledger.pending
    assert store.get("processedEmails_1") == ["msg_a1"]


def test_reset():
    store = MemoryStore()
    ledger = ProcessedSet(store, session_id=1)
    ledger.mark_processed("msg_a1")
    ledger.reset()

    assert ledger.should_process("msg_a1")
    assert store.get("processedEmails_1") == []


def test_backoff_stays_short(monkeypatch):
    """Retries run on the event loop thread, so their total wait is bounded."""
    sleeps = []
    monkeypatch.setattr(ProcessedSet._write.retry, "sleep", sleeps.append)

    ledger = ProcessedSet(FlakyStore(failures=3), session_id=1)
    ledger.mark_processed("msg_a1")

    assert len(sleeps) == 2
    assert sum(sleeps) <= 0.05
