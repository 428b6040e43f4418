"""Application port for persisted user preferences."""

from typing import Protocol


class PreferenceStorePort(Protocol):
    """Persisted string key/value store."""

    def get(self, key: str) -> str | None:
        """Return the stored value or None."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    def remove(self, key: str) -> None:
        """Delete ``key`` when present."""


__all__ = ["PreferenceStorePort"]
