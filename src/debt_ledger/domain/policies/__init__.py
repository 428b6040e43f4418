"""Domain policies package."""

from .ledger_filters import (
    DueRange,
    PersonFilter,
    PersonSort,
    RecordFilter,
    filter_persons,
    filter_records,
    sort_persons,
    unique_counterparties,
)

__all__ = [
    "DueRange",
    "PersonFilter",
    "PersonSort",
    "RecordFilter",
    "filter_persons",
    "filter_records",
    "sort_persons",
    "unique_counterparties",
]
