"""Error kinds raised across the debt ledger."""


class LedgerError(Exception):
    """Base class for ledger errors."""


class ValidationError(LedgerError):
    """A debt payload or preference value is malformed.

    Attributes:
        field: Name of the offending field, when known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class IdentityError(LedgerError):
    """No signed-in owner is available to anchor classification."""


class NetworkError(LedgerError):
    """A rate or record fetch failed (transport error or bad response)."""


class NotFoundError(LedgerError):
    """A requested record does not exist for the owner."""


class LedgerFetchError(LedgerError):
    """The initial record fetch of a ledger scope failed."""


__all__ = [
    "LedgerError",
    "ValidationError",
    "IdentityError",
    "NetworkError",
    "NotFoundError",
    "LedgerFetchError",
]
