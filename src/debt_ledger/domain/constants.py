"""Domain constants for the debt ledger."""

from decimal import Decimal

DEFAULT_USER_NAME = "You"
DEFAULT_CATEGORY = "Other"
DEFAULT_CURRENCY_CODE = "USD"

RATES_TTL_SECONDS = 3600
UPCOMING_WINDOW_DAYS = 7
TIME_SERIES_BUCKETS = 4
ALL_PERIOD_START_YEAR = 2020

# Approximate USD-based rates used when no network or cached table exists.
FALLBACK_RATES_BASE = "USD"
FALLBACK_RATES = {
    "USD": Decimal("1.0"),
    "EUR": Decimal("0.85"),
    "GBP": Decimal("0.73"),
    "CAD": Decimal("1.25"),
    "JPY": Decimal("110.0"),
    "AUD": Decimal("1.35"),
    "CHF": Decimal("0.92"),
}

# Built-in categories as (name, emoji); they can never be deleted.
DEFAULT_CATEGORIES = (
    ("Dinner", "\N{FORK AND KNIFE WITH PLATE}"),
    ("Gas", "\N{FUEL PUMP}"),
    ("Concert", "\N{MUSICAL NOTE}"),
    ("Loan", "\N{MONEY BAG}"),
    ("Coffee", "\N{HOT BEVERAGE}"),
    ("Groceries", "\N{SHOPPING TROLLEY}"),
    ("Rent", "\N{HOUSE BUILDING}"),
    ("Bills", "\N{PAGE FACING UP}"),
    ("Other", "\N{MEMO}"),
)
DEFAULT_CATEGORY_EMOJI = "\N{MEMO}"
DEFAULT_CATEGORIES_CREATED_AT = "2025-01-01"


__all__ = [
    "DEFAULT_USER_NAME",
    "DEFAULT_CATEGORY",
    "DEFAULT_CURRENCY_CODE",
    "RATES_TTL_SECONDS",
    "UPCOMING_WINDOW_DAYS",
    "TIME_SERIES_BUCKETS",
    "ALL_PERIOD_START_YEAR",
    "FALLBACK_RATES_BASE",
    "FALLBACK_RATES",
    "DEFAULT_CATEGORIES",
    "DEFAULT_CATEGORY_EMOJI",
    "DEFAULT_CATEGORIES_CREATED_AT",
]
