"""Fire-and-forget event bus between the pipeline and its collaborators.

Delivery is best effort: each subscriber sees a payload at most once, a
failing subscriber is logged and skipped, and nobody listening is fine.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

from .logging import get_logger

log = get_logger(__name__)

ANALYZED = "analyzed"
SPONSOR_DETECTED = "sponsor_detected"
ACTIVITY = "activity"

Handler = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> None:
        self._handlers[topic].append(handler)

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        if handler in self._handlers.get(topic, []):
            self._handlers[topic].remove(handler)

    def publish(self, topic: str, payload: Any) -> int:
        """Deliver payload to current subscribers; returns how many succeeded."""
        delivered = 0
        for handler in list(self._handlers.get(topic, [])):
            try:
                handler(payload)
            except Exception as e:  # noqa: BLE001
                log.warning("event_handler_failed", topic=topic, handler=repr(handler), error=str(e))
                continue
            delivered += 1
        return delivered
