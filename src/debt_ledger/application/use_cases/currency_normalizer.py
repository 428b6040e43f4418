"""Currency conversion, formatting and the display currency preference."""

from dataclasses import dataclass
from decimal import Decimal
import json

from debt_ledger.application.ports.preference_store import PreferenceStorePort
from debt_ledger.application.use_cases.rate_cache import RateCache
from debt_ledger.domain.constants import DEFAULT_CURRENCY_CODE
from debt_ledger.domain.errors import ValidationError
from debt_ledger.domain.models import (
    ConversionResult,
    Converted,
    Currency,
    RateTable,
    Unconverted,
    get_currency,
)
from debt_ledger.domain.services.fx import convert_amount
from debt_ledger.domain.services.normalization import normalize_currency_code
from debt_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from debt_ledger.utils.dates import utc_now
from debt_ledger.utils.decimal_utils import coerce_decimal, round_half_up

PREFERENCE_KEY = "currency_preference"


@dataclass(frozen=True)
class NumberStyle:
    """Separators and symbol placement of a locale."""

    group: str
    decimal: str
    pattern: str


_DEFAULT_STYLE = NumberStyle(",", ".", "{symbol}{number}")
LOCALE_STYLES = {
    "en-US": _DEFAULT_STYLE,
    "en-GB": _DEFAULT_STYLE,
    "en-CA": _DEFAULT_STYLE,
    "en-AU": _DEFAULT_STYLE,
    "ja-JP": _DEFAULT_STYLE,
    "de-DE": NumberStyle(".", ",", "{number} {symbol}"),
    "de-CH": NumberStyle("’", ".", "{symbol} {number}"),
}


class CurrencyNormalizer:
    """Convert and format amounts for display.

    Rates come from a shared ``RateCache``; the selected display currency is
    persisted in the preference store and kept in memory once read.
    """

    def __init__(
        self,
        rate_cache: RateCache,
        preference_store: PreferenceStorePort,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the normalizer.

        Args:
            rate_cache: Cache providing rate tables.
            preference_store: Store holding the currency preference.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for user-facing actions.
        """
        self._rate_cache = rate_cache
        self._store = preference_store
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._preferred: str | None = None

    async def get_rates(self, base_currency: str | None = None) -> RateTable:
        """Return the rate table for ``base_currency`` (default: preferred)."""
        base = base_currency or self.get_preferred_currency()
        return await self._rate_cache.get_rates(base)

    async def refresh_rates(self, base_currency: str | None = None) -> RateTable:
        """Fetch fresh rates now, bypassing the cache TTL."""
        base = base_currency or self.get_preferred_currency()
        table = await self._rate_cache.refresh(base)
        self._usage_logger.info(
            f"Rates refreshed for {table.base} (source={table.source.value})"
        )
        return table

    async def convert(
        self,
        amount,
        from_currency: str,
        to_currency: str | None = None,
    ) -> ConversionResult:
        """Convert ``amount`` from one currency into another.

        Args:
            amount: Amount in ``from_currency``.
            from_currency: Source currency code.
            to_currency: Target currency code; defaults to the preferred one.

        Returns:
            ConversionResult: ``Converted`` on success, ``Unconverted`` with
            the original amount when no usable rate exists.
        """
        value = coerce_decimal(amount)
        source = normalize_currency_code(from_currency) or ""
        target = normalize_currency_code(to_currency) or self.get_preferred_currency()
        if source == target:
            return Converted(amount=value, from_currency=source, to_currency=target)
        if get_currency(source) is None:
            self._logger.warning(f"Cannot convert from unsupported currency {source!r}")
            return Unconverted(
                amount=value,
                from_currency=source,
                to_currency=target,
                reason=f"unsupported currency {source!r}",
            )

        table = await self._rate_cache.get_rates(source)
        result = convert_amount(value, source, target, table)
        if not result.converted:
            self._logger.warning(
                f"Returning {source} amount unconverted: {result.reason}"
            )
        return result

    def format(self, amount, currency: str | None = None) -> str:
        """Format ``amount`` the way the currency's locale writes money.

        Args:
            amount: Amount to format.
            currency: Currency code; defaults to the preferred one.

        Returns:
            str: Text such as ``$1,234.56``, ``1.234,56 €`` or ``¥1,235``.
        """
        value = coerce_decimal(amount)
        code = normalize_currency_code(currency) or self.get_preferred_currency()
        spec = get_currency(code)
        if spec is None:
            self._logger.warning(f"Formatting unsupported currency {code!r}")
            spec = Currency(code, code, f"{code} ", 2, "en-US")
        style = LOCALE_STYLES.get(spec.locale, _DEFAULT_STYLE)

        digits = spec.fraction_digits
        rounded = round_half_up(abs(value), digits)
        number = _group_digits(f"{rounded:,.{digits}f}", style)
        text = style.pattern.format(symbol=spec.symbol, number=number)
        if value < 0 and rounded != 0:
            return f"-{text}"
        return text

    def get_preferred_currency(self) -> str:
        """Return the selected display currency, USD when none is stored."""
        if self._preferred is None:
            self._preferred = self._load_preference()
        return self._preferred

    def set_preferred_currency(self, code: str) -> str:
        """Persist ``code`` as the display currency.

        Raises:
            ValidationError: If ``code`` is not a supported currency.
        """
        spec = get_currency(code)
        if spec is None:
            raise ValidationError(
                "Invalid or unsupported currency.",
                field="currency",
            )
        payload = {
            "selected_currency": spec.code,
            "last_updated": utc_now().isoformat(),
        }
        self._store.set(PREFERENCE_KEY, json.dumps(payload))
        previous = self._preferred
        self._preferred = spec.code
        self._usage_logger.info(
            f"Display currency changed from {previous or DEFAULT_CURRENCY_CODE} "
            f"to {spec.code}"
        )
        return spec.code

    def _load_preference(self) -> str:
        try:
            raw = self._store.get(PREFERENCE_KEY)
        except Exception as exc:
            self._logger.warning(
                f"Could not read currency preference ({exc}); using "
                f"{DEFAULT_CURRENCY_CODE}"
            )
            return DEFAULT_CURRENCY_CODE
        if raw is None:
            return DEFAULT_CURRENCY_CODE
        try:
            code = json.loads(raw)["selected_currency"]
        except (ValueError, KeyError, TypeError) as exc:
            self._logger.warning(
                f"Corrupt currency preference ({exc}); using "
                f"{DEFAULT_CURRENCY_CODE}"
            )
            return DEFAULT_CURRENCY_CODE
        spec = get_currency(code if isinstance(code, str) else None)
        if spec is None:
            self._logger.warning(
                f"Stored currency {code!r} is not supported; using "
                f"{DEFAULT_CURRENCY_CODE}"
            )
            return DEFAULT_CURRENCY_CODE
        return spec.code


def _group_digits(text: str, style: NumberStyle) -> str:
    # text uses "," for groups and "." for decimals
    whole, _, fraction = text.partition(".")
    whole = whole.replace(",", style.group)
    if not fraction:
        return whole
    return f"{whole}{style.decimal}{fraction}"


__all__ = [
    "CurrencyNormalizer",
    "NumberStyle",
    "LOCALE_STYLES",
    "PREFERENCE_KEY",
]
