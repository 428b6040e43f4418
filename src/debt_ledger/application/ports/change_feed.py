"""Application port for record change notifications."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Hashable, Protocol


class ChangeKind(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ChangeEvent:
    """A record of ``owner_id`` was inserted, updated or deleted."""

    kind: ChangeKind
    owner_id: str
    record_id: str


ChangeHandler = Callable[[ChangeEvent], None]


class ChangeFeedPort(Protocol):
    """Port delivering change events scoped to one owner."""

    def subscribe(self, scope: str, on_event: ChangeHandler) -> Hashable:
        """Register ``on_event`` for changes in ``scope``; return a handle."""

    def unsubscribe(self, handle: Hashable) -> None:
        """Stop delivering events to the handler behind ``handle``."""


__all__ = ["ChangeKind", "ChangeEvent", "ChangeHandler", "ChangeFeedPort"]
