"""Tests for the event bus."""

from sponsor_guard.events import ANALYZED, SPONSOR_DETECTED, EventBus


def test_publish_without_subscribers():
    assert EventBus().publish(ANALYZED, object()) == 0


def test_each_subscriber_gets_payload_once():
    bus = EventBus()
    first, second = [], []
    bus.subscribe(ANALYZED, first.append)
    bus.subscribe(ANALYZED, second.append)

    assert bus.publish(ANALYZED, "payload") == 2
    assert first == ["payload"]
    assert second == ["payload"]


def test_topics_are_separate():
    bus = EventBus()
    received = []
    bus.subscribe(SPONSOR_DETECTED, received.append)
    bus.publish(ANALYZED, "ignored")
    assert received == []


def test_failing_subscriber_does_not_block_others():
    bus = EventBus()
    received = []

    def broken(payload):
        raise RuntimeError("collaborator down")

    bus.subscribe(ANALYZED, broken)
    bus.subscribe(ANALYZED, received.append)

    assert bus.publish(ANALYZED, "payload") == 1
    assert received == ["payload"]


def test_unsubscribe():
    bus = EventBus()
    received = []
    bus.subscribe(ANALYZED, received.append)
    bus.unsubscribe(ANALYZED, received.append)
    bus.unsubscribe(SPONSOR_DETECTED, received.append)

    bus.publish(ANALYZED, "payload")
    assert received == []
