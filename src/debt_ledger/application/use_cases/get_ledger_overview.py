"""Use case composing the ledger views published to the UI."""

from collections.abc import Iterable
from datetime import datetime

from debt_ledger.application.ports.identity import IdentityPort, Owner
from debt_ledger.application.use_cases.currency_normalizer import (
    CurrencyNormalizer,
)
from debt_ledger.domain.errors import IdentityError
from debt_ledger.domain.models import (
    BalanceDelta,
    CategoryBreakdown,
    DebtRecord,
    LedgerSnapshot,
    LedgerTotals,
    Period,
    PersonSummary,
    RateSourceKind,
    RateTable,
    TimeSeries,
    TimeWindow,
)
from debt_ledger.domain.services import aggregation
from debt_ledger.domain.services.normalization import normalize_currency_code
from debt_ledger.domain.services.periods import period_window
from debt_ledger.infrastructure.logging.logger import get_app_logger
from debt_ledger.utils.dates import utc_now


class LedgerAggregator:
    """Aggregate debt records into totals, summaries and analytics.

    The arithmetic lives in ``domain.services.aggregation``; this class
    resolves the current user, the display currency and the rate table
    before delegating to it.
    """

    def __init__(
        self,
        normalizer: CurrencyNormalizer,
        identity: IdentityPort,
        logger=None,
        clock=utc_now,
    ) -> None:
        """Initialize the aggregator.

        Args:
            normalizer: Normalizer providing rates and the display currency.
            identity: Port exposing the signed-in owner.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Callable returning the current aware datetime.
        """
        self._normalizer = normalizer
        self._identity = identity
        self._logger = logger or get_app_logger()
        self._clock = clock

    async def build_snapshot(
        self,
        records: Iterable[DebtRecord],
        period: Period = Period.MONTH,
        currency: str | None = None,
        now: datetime | None = None,
    ) -> LedgerSnapshot:
        """Compute every ledger view over ``records``.

        Args:
            records: Records of the signed-in owner.
            period: Analytics period for the breakdowns and the time series.
            currency: Display currency; defaults to the preferred one.
            now: Clock reading; defaults to the injected clock.

        Returns:
            LedgerSnapshot: Derived views. Without a signed-in owner the
            totals are zero and no counterparties are listed.
        """
        records = tuple(records)
        now = now or self._clock()
        warnings: list[str] = []

        owner = self._resolve_owner(warnings)
        user_name = owner.display_name if owner else None
        target, rates = await self._display_rates(currency, warnings)
        options = {"target_currency": target, "rates": rates, "logger": self._logger}

        window = period_window(period, now)
        totals = aggregation.compute_totals(records, user_name, **options)
        persons = aggregation.compute_person_summaries(records, user_name, **options)
        categories = aggregation.compute_category_breakdown(
            records, window, **options
        )
        time_series = aggregation.compute_time_series(
            records, period, now, **options
        )
        balance_delta = aggregation.compute_balance_delta(
            records, period, now, user_name, **options
        )
        insights = aggregation.compute_insights(records, now)

        for record in aggregation.find_self_referential(records, user_name):
            warnings.append(
                f"Debt {record.id} names {user_name} as both debtor and creditor"
            )
        if totals.unconverted_currencies:
            codes = ", ".join(totals.unconverted_currencies)
            warnings.append(f"Amounts in {codes} were summed unconverted")

        self._logger.info(
            f"Ledger snapshot built: records={len(records)}, "
            f"owing={totals.total_owing}, owed={totals.total_owed}, "
            f"currency={target}"
        )
        return LedgerSnapshot(
            owner_id=owner.id if owner else "",
            user_name=user_name,
            currency_code=target,
            period=period,
            computed_at=now,
            records=records,
            totals=totals,
            persons=tuple(persons),
            categories=tuple(categories),
            time_series=time_series,
            balance_delta=balance_delta,
            insights=insights,
            warnings=tuple(warnings),
        )

    async def totals(
        self,
        records: Iterable[DebtRecord],
        currency: str | None = None,
    ) -> LedgerTotals:
        """Return what the signed-in user owes and is owed."""
        target, rates = await self._display_rates(currency, [])
        return aggregation.compute_totals(
            records,
            self._user_name(),
            target_currency=target,
            rates=rates,
            logger=self._logger,
        )

    async def person_summary(
        self,
        records: Iterable[DebtRecord],
        counterparty_name: str,
        currency: str | None = None,
    ) -> PersonSummary:
        """Return the balance between the user and one counterparty."""
        target, rates = await self._display_rates(currency, [])
        return aggregation.compute_person_summary(
            records,
            counterparty_name,
            self._user_name(),
            target_currency=target,
            rates=rates,
            logger=self._logger,
        )

    async def category_breakdown(
        self,
        records: Iterable[DebtRecord],
        window: TimeWindow | None = None,
        currency: str | None = None,
    ) -> list[CategoryBreakdown]:
        """Return the ranked categories of records created in ``window``."""
        target, rates = await self._display_rates(currency, [])
        return aggregation.compute_category_breakdown(
            records,
            window,
            target_currency=target,
            rates=rates,
            logger=self._logger,
        )

    async def time_series(
        self,
        records: Iterable[DebtRecord],
        period: Period,
        currency: str | None = None,
    ) -> TimeSeries:
        target, rates = await self._display_rates(currency, [])
        return aggregation.compute_time_series(
            records,
            period,
            self._clock(),
            target_currency=target,
            rates=rates,
            logger=self._logger,
        )

    async def balance_delta(
        self,
        records: Iterable[DebtRecord],
        period: Period,
        currency: str | None = None,
    ) -> BalanceDelta:
        target, rates = await self._display_rates(currency, [])
        return aggregation.compute_balance_delta(
            records,
            period,
            self._clock(),
            self._user_name(),
            target_currency=target,
            rates=rates,
            logger=self._logger,
        )

    def _require_owner(self) -> Owner:
        owner = self._identity.current_owner()
        if owner is None or not owner.display_name.strip():
            raise IdentityError("No signed-in owner to classify debts against")
        return owner

    def _resolve_owner(self, warnings: list[str]) -> Owner | None:
        try:
            return self._require_owner()
        except IdentityError as exc:
            self._logger.warning(f"{exc}; reporting zero totals")
            warnings.append(str(exc))
            return None

    def _user_name(self) -> str | None:
        owner = self._resolve_owner([])
        return owner.display_name if owner else None

    async def _display_rates(
        self,
        currency: str | None,
        warnings: list[str],
    ) -> tuple[str, RateTable]:
        target = (
            normalize_currency_code(currency)
            or self._normalizer.get_preferred_currency()
        )
        rates = await self._normalizer.get_rates(target)
        if rates.source == RateSourceKind.FALLBACK:
            warnings.append("Exchange rates are approximate (offline fallback)")
        return target, rates


__all__ = ["LedgerAggregator"]
