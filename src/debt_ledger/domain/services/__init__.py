"""Domain services package."""

from .aggregation import (
    DisplayAmounts,
    compute_balance_delta,
    compute_category_breakdown,
    compute_insights,
    compute_person_summaries,
    compute_person_summary,
    compute_time_series,
    compute_totals,
    find_self_referential,
)
from .classification import classify
from .fx import build_fallback_table, convert_amount, parse_rates, rebase_rates
from .normalization import (
    clean_display_name,
    counterparty_key,
    normalize_category,
    normalize_currency_code,
    normalize_person_name,
    same_person,
)
from .periods import (
    bucket_label,
    parse_period,
    period_window,
    previous_window,
    shift_months,
    split_window,
)
from .validation import coerce_stored_status, parse_status, validate_debt_payload

__all__ = [
    "DisplayAmounts",
    "compute_balance_delta",
    "compute_category_breakdown",
    "compute_insights",
    "compute_person_summaries",
    "compute_person_summary",
    "compute_time_series",
    "compute_totals",
    "find_self_referential",
    "classify",
    "build_fallback_table",
    "convert_amount",
    "parse_rates",
    "rebase_rates",
    "clean_display_name",
    "counterparty_key",
    "normalize_category",
    "normalize_currency_code",
    "normalize_person_name",
    "same_person",
    "bucket_label",
    "parse_period",
    "period_window",
    "previous_window",
    "shift_months",
    "split_window",
    "coerce_stored_status",
    "parse_status",
    "validate_debt_payload",
]
