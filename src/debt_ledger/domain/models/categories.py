"""Debt categories offered when recording a debt."""

from dataclasses import dataclass

from debt_ledger.domain.constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORIES_CREATED_AT,
)


@dataclass(frozen=True)
class Category:
    """A category label a debt can be filed under.

    Attributes:
        id: Stable identifier; built-in categories use "1" to "9".
        name: Display name stored on debts.
        emoji: Symbol shown next to the name.
        is_default: True for built-in categories, which cannot be deleted.
        created_at: ISO date or timestamp of creation.
    """

    id: str
    name: str
    emoji: str
    is_default: bool
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "emoji": self.emoji,
            "isDefault": self.is_default,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        """Build a category from its stored JSON object.

        Raises:
            KeyError: If ``id`` or ``name`` is missing.
            TypeError: If ``data`` is not a mapping.
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            emoji=str(data.get("emoji", "")),
            is_default=bool(data.get("isDefault", False)),
            created_at=str(data.get("createdAt", "")),
        )


def default_categories() -> list[Category]:
    """Return the built-in categories in display order."""
    return [
        Category(
            id=str(position),
            name=name,
            emoji=emoji,
            is_default=True,
            created_at=DEFAULT_CATEGORIES_CREATED_AT,
        )
        for position, (name, emoji) in enumerate(DEFAULT_CATEGORIES, start=1)
    ]


__all__ = ["Category", "default_categories"]
