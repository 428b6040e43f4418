"""Domain package for ledger rules and core models."""

from .constants import DEFAULT_CATEGORY, DEFAULT_CURRENCY_CODE, DEFAULT_USER_NAME
from .errors import (
    IdentityError,
    LedgerError,
    LedgerFetchError,
    NetworkError,
    NotFoundError,
    ValidationError,
)
from .models import (
    DebtRecord,
    DebtStatus,
    LedgerSnapshot,
    Period,
    PersonSummary,
    RateTable,
)

__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_CURRENCY_CODE",
    "DEFAULT_USER_NAME",
    "IdentityError",
    "LedgerError",
    "LedgerFetchError",
    "NetworkError",
    "NotFoundError",
    "ValidationError",
    "DebtRecord",
    "DebtStatus",
    "LedgerSnapshot",
    "Period",
    "PersonSummary",
    "RateTable",
]
