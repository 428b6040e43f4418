"""In-process change feed delivering record events to subscribers."""

from itertools import count
import threading
from typing import Hashable

from debt_ledger.application.ports.change_feed import (
    ChangeEvent,
    ChangeFeedPort,
    ChangeHandler,
)
from debt_ledger.infrastructure.logging.logger import get_app_logger


class InMemoryChangeFeed(ChangeFeedPort):
    """Change feed for a single process.

    Subscriptions are scoped by owner id; ``publish`` calls every handler of
    the event's owner synchronously, in subscription order.
    """

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()
        self._lock = threading.Lock()
        self._ids = count(1)
        self._handlers: dict[int, tuple[str, ChangeHandler]] = {}

    def subscribe(self, scope: str, on_event: ChangeHandler) -> Hashable:
        """Register ``on_event`` for the records of owner ``scope``.

        Returns:
            Hashable: Handle accepted by ``unsubscribe``.
        """
        with self._lock:
            handle = next(self._ids)
            self._handlers[handle] = (scope, on_event)
        self._logger.debug(f"Change feed subscription {handle} for {scope}")
        return handle

    def unsubscribe(self, handle: Hashable) -> None:
        with self._lock:
            self._handlers.pop(handle, None)

    def publish(self, event: ChangeEvent) -> int:
        """Deliver ``event`` to the subscribers of its owner.

        Returns:
            int: Number of handlers called.
        """
        with self._lock:
            targets = [
                handler
                for scope, handler in self._handlers.values()
                if scope == event.owner_id
            ]
        for handler in targets:
            handler(event)
        return len(targets)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)


__all__ = ["InMemoryChangeFeed"]
