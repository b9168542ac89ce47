"""Session-scoped processed-set ledger: at most one analysis per identity."""

from __future__ import annotations

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .constants import (
    PERSIST_ATTEMPTS,
    PERSIST_BACKOFF_MAX_SECONDS,
    PERSIST_BACKOFF_SECONDS,
    PROCESSED_KEY_PREFIX,
)
from .logging import get_logger
from .store import StorageError

log = get_logger(__name__)


class ProcessedSet:
    """Identities already sent through the pipeline in one session.

    The in-memory set is authoritative; the store copy lets a restarted
    component of the same session pick up where it left off.
    """

    def __init__(self, store, session_id: int) -> None:
        self.store = store
        self.session_id = session_id
        self.key = f"{PROCESSED_KEY_PREFIX}{session_id}"
        self._ids: set[str] = set()
        self.pending = False  # in-memory set is ahead of the store
        self._load()

    def _load(self) -> None:
        try:
            stored = self.store.get(self.key, [])
        except StorageError as e:
            log.warning("ledger_load_failed", session=self.session_id, error=str(e))
            return
        self._ids = set(stored or [])
        log.debug("ledger_loaded", session=self.session_id, count=len(self._ids))

    @retry(
        retry=retry_if_exception_type(StorageError),
        wait=wait_exponential(multiplier=PERSIST_BACKOFF_SECONDS, max=PERSIST_BACKOFF_MAX_SECONDS),
        stop=stop_after_attempt(PERSIST_ATTEMPTS),
        reraise=True,
    )
    def _write(self) -> None:
        self.store.set(self.key, sorted(self._ids))

    def _persist(self) -> None:
        try:
            self._write()
        except StorageError as e:
            self.pending = True
            log.warning(
                "ledger_persist_failed",
                session=self.session_id,
                count=len(self._ids),
                error=str(e),
            )
            return
        self.pending = False

    def should_process(self, identity: str) -> bool:
        return identity not in self._ids

    def mark_processed(self, identity: str) -> None:
        """Insert then persist; a failed write is retried on the next insert."""
        if identity in self._ids and not self.pending:
            return
        self._ids.add(identity)
        self._persist()

    def reset(self) -> None:
        self._ids.clear()
        self._persist()

    def __contains__(self, identity: str) -> bool:
        return identity in self._ids

    def __len__(self) -> int:
        return len(self._ids)
