"""Use case managing the built-in and custom debt categories."""

import json
from datetime import datetime
from typing import Callable

from debt_ledger.application.ports.preference_store import PreferenceStorePort
from debt_ledger.domain.constants import DEFAULT_CATEGORY_EMOJI
from debt_ledger.domain.errors import NotFoundError, ValidationError
from debt_ledger.domain.models import Category, default_categories
from debt_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from debt_ledger.utils.dates import utc_now

CATEGORIES_KEY = "debt_categories"


class CategoryCatalog:
    """Categories offered for debts, persisted as JSON in the preference store.

    The built-in categories are always part of the catalogue: a stored list
    missing any of them gets them appended back, and deleting one is refused.
    An unreadable or corrupt store entry falls back to the built-in list.
    """

    def __init__(
        self,
        preference_store: PreferenceStorePort,
        clock: Callable[[], datetime] = utc_now,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the catalogue.

        Args:
            preference_store: Store holding the category list.
            clock: Callable returning the current aware datetime.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for catalogue changes.
        """
        self._store = preference_store
        self._clock = clock
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def list_categories(self) -> list[Category]:
        """Return stored categories, completed with any missing built-in one."""
        try:
            raw = self._store.get(CATEGORIES_KEY)
        except Exception as exc:
            self._logger.warning(f"Could not read categories: {exc}")
            return default_categories()

        if raw is None:
            categories = default_categories()
            self._save_quietly(categories)
            return categories

        try:
            categories = [Category.from_dict(item) for item in json.loads(raw)]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            self._logger.warning(f"Ignoring corrupt stored categories: {exc}")
            return default_categories()

        known_ids = {category.id for category in categories}
        missing = [
            category
            for category in default_categories()
            if category.id not in known_ids
        ]
        if missing:
            categories.extend(missing)
            self._save_quietly(categories)
        return categories

    def names(self) -> list[str]:
        return [category.name for category in self.list_categories()]

    def add_category(self, name: str, emoji: str | None = None) -> Category:
        """Append a custom category.

        Args:
            name: Display name; surrounding whitespace is dropped.
            emoji: Symbol shown next to the name.

        Returns:
            Category: The stored category.

        Raises:
            ValidationError: If the name is blank or already taken.
        """
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Category name is required.", field="name")
        categories = self.list_categories()
        if any(c.name.casefold() == cleaned.casefold() for c in categories):
            raise ValidationError(
                f"Category {cleaned!r} already exists.",
                field="name",
            )

        now = self._clock()
        taken = {category.id for category in categories}
        new_id = int(now.timestamp() * 1000)
        while str(new_id) in taken:
            new_id += 1
        category = Category(
            id=str(new_id),
            name=cleaned,
            emoji=(emoji or "").strip() or DEFAULT_CATEGORY_EMOJI,
            is_default=False,
            created_at=now.isoformat(),
        )
        self._save([*categories, category])
        self._usage_logger.info(f"Category {category.id} added: {category.name}")
        return category

    def delete_category(self, category_id: str) -> None:
        """Remove a custom category.

        Raises:
            NotFoundError: If no category has ``category_id``.
            ValidationError: If the category is a built-in one.
        """
        categories = self.list_categories()
        target = next((c for c in categories if c.id == category_id), None)
        if target is None:
            raise NotFoundError(f"Category {category_id} not found")
        if target.is_default:
            raise ValidationError(
                "Cannot delete default categories",
                field="category",
            )
        self._save([c for c in categories if c.id != category_id])
        self._usage_logger.info(f"Category {category_id} deleted: {target.name}")

    def _save(self, categories: list[Category]) -> None:
        payload = [category.to_dict() for category in categories]
        self._store.set(CATEGORIES_KEY, json.dumps(payload, ensure_ascii=False))

    def _save_quietly(self, categories: list[Category]) -> None:
        try:
            self._save(categories)
        except Exception as exc:
            self._logger.warning(f"Could not store categories: {exc}")


__all__ = ["CategoryCatalog", "CATEGORIES_KEY"]
