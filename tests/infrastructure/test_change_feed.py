"""Tests for the in-memory change feed."""

from unittest.mock import MagicMock

from debt_ledger.application.ports.change_feed import ChangeEvent, ChangeKind
from debt_ledger.infrastructure.change_feed import InMemoryChangeFeed


def _event(owner_id: str) -> ChangeEvent:
    return ChangeEvent(kind=ChangeKind.INSERT, owner_id=owner_id, record_id="d1")


def test_publish_reaches_subscribers_of_the_owner_only():
    """Events are delivered to handlers subscribed to their owner."""
    feed = InMemoryChangeFeed(logger=MagicMock())
    mine, theirs = [], []
    feed.subscribe("owner-1", mine.append)
    feed.subscribe("owner-2", theirs.append)

    delivered = feed.publish(_event("owner-1"))

    assert delivered == 1
    assert mine == [_event("owner-1")]
    assert theirs == []


def test_unsubscribe_stops_delivery():
    """Handles returned by subscribe detach the handler."""
    feed = InMemoryChangeFeed(logger=MagicMock())
    seen = []
    handle = feed.subscribe("owner-1", seen.append)

    feed.unsubscribe(handle)
    feed.unsubscribe(handle)

    assert feed.publish(_event("owner-1")) == 0
    assert seen == []
    assert feed.subscriber_count == 0


def test_handles_are_unique():
    """Every subscription gets its own handle."""
    feed = InMemoryChangeFeed(logger=MagicMock())

    handles = {feed.subscribe("owner-1", lambda event: None) for _ in range(3)}

    assert len(handles) == 3
    assert feed.subscriber_count == 3
