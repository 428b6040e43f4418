"""Application port for the signed-in identity."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Owner:
    """Signed-in ledger owner.

    Attributes:
        id: Owner identifier used to scope records and change events.
        display_name: Name written on debts for the user (``You`` by default).
    """

    id: str
    display_name: str


class IdentityPort(Protocol):
    """Port exposing the signed-in owner, if any."""

    def current_owner(self) -> Owner | None:
        """Return the signed-in owner or None."""


__all__ = ["Owner", "IdentityPort"]
