"""Session state injected into the pipeline instead of module globals."""

from __future__ import annotations

import time

from .constants import ACTIVITY_KEY, MAX_ACTIVITIES, STAT_KEYS
from .ledger import ProcessedSet
from .logging import get_logger
from .models import Activity, Stats
from .store import StorageError

log = get_logger(__name__)


def new_session_id() -> int:
    """Process-start timestamp in milliseconds."""
    return int(time.time() * 1000)


class Session:
    """Ledger, counters and recent activity for one browsing session."""

    def __init__(self, store, session_id: int | None = None, max_activities: int = MAX_ACTIVITIES) -> None:
        self.store = store
        self.session_id = session_id if session_id is not None else new_session_id()
        self.ledger = ProcessedSet(store, self.session_id)
        self.max_activities = max_activities
        self.stats = load_stats(store)
        self.activities: list[Activity] = load_activities(store)

    def bump(self, stat: str) -> int:
        """Increment one of the Stats counters and persist it."""
        value = getattr(self.stats, stat) + 1
        setattr(self.stats, stat, value)
        try:
            self.store.set(STAT_KEYS[stat], value)
        except StorageError as e:
            log.warning("stat_persist_failed", stat=stat, error=str(e))
        return value

    def add_activity(self, activity: Activity) -> None:
        self.activities.insert(0, activity)
        del self.activities[self.max_activities:]
        try:
            self.store.set(ACTIVITY_KEY, [a.to_dict() for a in self.activities])
        except StorageError as e:
            log.warning("activity_persist_failed", error=str(e))

    def reset(self) -> None:
        """Forget processed identities so the next scan starts over."""
        self.ledger.reset()
        log.info("session_reset", session=self.session_id)


def load_stats(store) -> Stats:
    try:
        return Stats(**{attr: int(store.get(key, 0) or 0) for attr, key in STAT_KEYS.items()})
    except StorageError as e:
        log.warning("stats_load_failed", error=str(e))
        return Stats()


def load_activities(store) -> list[Activity]:
    try:
        return [Activity(**a) for a in store.get(ACTIVITY_KEY, []) or []]
    except StorageError as e:
        log.warning("activity_load_failed", error=str(e))
        return []
