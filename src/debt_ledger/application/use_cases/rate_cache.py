"""Time-bounded exchange rate cache with persisted and static fallbacks."""

import asyncio
import json
from datetime import datetime
from typing import Callable

from debt_ledger.application.ports.preference_store import PreferenceStorePort
from debt_ledger.application.ports.rate_source import RateSourcePort
from debt_ledger.domain.constants import DEFAULT_CURRENCY_CODE, RATES_TTL_SECONDS
from debt_ledger.domain.errors import NetworkError
from debt_ledger.domain.models import RateSourceKind, RateTable
from debt_ledger.domain.services.fx import build_fallback_table, parse_rates
from debt_ledger.domain.services.normalization import normalize_currency_code
from debt_ledger.infrastructure.logging.logger import get_app_logger
from debt_ledger.utils.dates import parse_timestamp, utc_now

RATES_KEY_PREFIX = "exchange_rates:"


def rates_key(base_currency: str) -> str:
    """Return the preference store key holding the table of ``base_currency``."""
    return f"{RATES_KEY_PREFIX}{base_currency}"


class RateCache:
    """Cache of rate tables keyed by base currency.

    A table younger than the TTL is served from memory or from the
    preference store. Older tables trigger a fetch from the rate source; a
    successful fetch is persisted and swapped in, a failed one serves the
    last known table regardless of its age, or the static fallback table
    when nothing was ever fetched.

    Fetches for one base are serialized by a lock, so callers arriving during
    a fetch wait for it and reuse its table.
    """

    def __init__(
        self,
        rate_source: RateSourcePort,
        preference_store: PreferenceStorePort,
        ttl_seconds: float = RATES_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
        logger=None,
    ) -> None:
        """Initialize the cache.

        Args:
            rate_source: Port fetching fresh rates.
            preference_store: Store persisting tables across restarts.
            ttl_seconds: Age after which a table is refreshed.
            clock: Callable returning the current aware datetime.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._rate_source = rate_source
        self._store = preference_store
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._logger = logger or get_app_logger()
        self._tables: dict[str, RateTable] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def get_rates(self, base_currency: str) -> RateTable:
        """Return a rate table for ``base_currency``.

        Args:
            base_currency: Currency the rates are relative to.

        Returns:
            RateTable: Fresh, stale or fallback table; never raises on
            network failures.
        """
        base = self._normalize(base_currency)
        table = self._tables.get(base)
        if self._is_fresh(table):
            return table

        async with self._lock_for(base):
            table = self._tables.get(base)
            if self._is_fresh(table):
                return table

            persisted = await asyncio.to_thread(self._load_persisted, base)
            if persisted is not None and self._is_fresh(persisted):
                self._tables[base] = persisted
                return persisted

            return await self._fetch(base, table or persisted)

    async def refresh(self, base_currency: str) -> RateTable:
        """Fetch ``base_currency`` rates now, ignoring the TTL."""
        base = self._normalize(base_currency)
        async with self._lock_for(base):
            known = self._tables.get(base)
            if known is None:
                known = await asyncio.to_thread(self._load_persisted, base)
            return await self._fetch(base, known)

    async def _fetch(self, base: str, stale: RateTable | None) -> RateTable:
        try:
            raw_rates = await self._rate_source.fetch_latest_rates(base)
        except NetworkError as exc:
            return self._degrade(base, stale, exc)

        rates = parse_rates(raw_rates)
        if not rates:
            return self._degrade(
                base,
                stale,
                NetworkError(f"Rate source returned no usable {base} rates"),
            )

        table = RateTable(
            base=base,
            rates=rates,
            fetched_at=self._clock(),
            source=RateSourceKind.NETWORK,
        )
        self._tables[base] = table
        try:
            await asyncio.to_thread(self._persist, table)
        except Exception as exc:
            self._logger.warning(f"Could not persist {base} rates: {exc}")
        self._logger.info(f"Fetched {len(rates)} exchange rates for {base}")
        return table

    def _degrade(
        self,
        base: str,
        stale: RateTable | None,
        error: NetworkError,
    ) -> RateTable:
        if stale is not None:
            self._logger.warning(
                f"Rate fetch for {base} failed ({error}); serving table "
                f"fetched at {stale.fetched_at.isoformat()}"
            )
            self._tables[base] = stale
            return stale
        self._logger.warning(
            f"Rate fetch for {base} failed ({error}); using static fallback rates"
        )
        return build_fallback_table(base, self._clock())

    def _is_fresh(self, table: RateTable | None) -> bool:
        if table is None or table.source == RateSourceKind.FALLBACK:
            return False
        return table.is_fresh(self._clock(), self._ttl_seconds)

    def _lock_for(self, base: str) -> asyncio.Lock:
        lock = self._locks.get(base)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[base] = lock
        return lock

    def _load_persisted(self, base: str) -> RateTable | None:
        try:
            raw = self._store.get(rates_key(base))
        except Exception as exc:
            self._logger.warning(f"Could not read cached {base} rates: {exc}")
            return None
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
            rates = parse_rates(payload["rates"])
            fetched_at = parse_timestamp(payload["fetched_at"])
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            self._logger.warning(f"Ignoring corrupt cached {base} rates: {exc}")
            return None
        if not rates:
            return None
        return RateTable(
            base=base,
            rates=rates,
            fetched_at=fetched_at,
            source=RateSourceKind.CACHE,
        )

    def _persist(self, table: RateTable) -> None:
        payload = {
            "base": table.base,
            "rates": {code: str(rate) for code, rate in table.rates.items()},
            "fetched_at": table.fetched_at.isoformat(),
        }
        self._store.set(rates_key(table.base), json.dumps(payload))

    @staticmethod
    def _normalize(base_currency: str) -> str:
        return normalize_currency_code(base_currency) or DEFAULT_CURRENCY_CODE


__all__ = ["RateCache", "RATES_KEY_PREFIX", "rates_key"]
