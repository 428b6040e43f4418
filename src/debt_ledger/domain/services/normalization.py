"""Domain normalization helpers."""

import hashlib

from debt_ledger.domain.constants import DEFAULT_CATEGORY


def normalize_currency_code(code: str | None) -> str | None:
    """Normalize currency code values.

    Args:
        code: Raw currency code from a payload or repository.

    Returns:
        str | None: Upper-cased code, or None when blank.
    """
    if not code:
        return None
    cleaned = code.strip()
    return cleaned.upper() if cleaned else None


def normalize_person_name(name: str | None) -> str:
    """Normalize a person name for comparisons.

    Surrounding whitespace is removed, inner runs of whitespace collapse to a
    single space and the result is case-folded.

    Args:
        name: Raw display name.

    Returns:
        str: Comparison form of the name ("" when blank).
    """
    if not name:
        return ""
    return " ".join(name.split()).casefold()


def clean_display_name(name: str | None) -> str:
    """Return the display form of a name (trimmed, single spaces)."""
    if not name:
        return ""
    return " ".join(name.split())


def counterparty_key(name: str | None) -> str:
    """Return a stable identifier for a counterparty name.

    Names that differ only by case or whitespace share a key.

    Args:
        name: Raw display name.

    Returns:
        str: 16 hex characters derived from the normalized name.
    """
    normalized = normalize_person_name(name)
    return hashlib.sha1(normalized.encode("utf-8")).hexdigest()[:16]


def normalize_category(category: str | None) -> str:
    """Return the category label, defaulting blanks to ``Other``."""
    if not category:
        return DEFAULT_CATEGORY
    cleaned = category.strip()
    return cleaned or DEFAULT_CATEGORY


def same_person(left: str | None, right: str | None) -> bool:
    """Return True when both names normalize to the same non-empty value."""
    normalized = normalize_person_name(left)
    return bool(normalized) and normalized == normalize_person_name(right)


__all__ = [
    "normalize_currency_code",
    "normalize_person_name",
    "clean_display_name",
    "counterparty_key",
    "normalize_category",
    "same_person",
]
