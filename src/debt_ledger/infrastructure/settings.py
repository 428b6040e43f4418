"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from debt_ledger.domain.constants import DEFAULT_USER_NAME, RATES_TTL_SECONDS
from debt_ledger.domain.models import Period
from debt_ledger.domain.services.periods import parse_period
from debt_ledger.infrastructure.logging.logger import get_app_logger

DEFAULT_RATES_API_URL = "https://api.exchangerate-api.com/v4/latest/{base}"


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings of the ledger services.

    Attributes:
        owner_id: Owner whose records the CLIs read and write.
        user_name: Display name written on debts for the owner.
        rates_api_url: URL template with a ``{base}`` placeholder.
        rates_ttl_seconds: Age after which cached rates are refreshed.
        rates_timeout_seconds: HTTP timeout of a single rate request.
        rates_max_attempts: Attempts before a rate fetch counts as failed.
        period: Default analytics period.
        report_currency: Display currency of the report CLI; the stored
            preference when None.
        rates_base: Base currency refreshed by the rates CLI; the stored
            preference when None.
        watch_interval_seconds: Seconds between periodic refreshes of the
            watch CLI.
        watch_rounds: Number of periodic refreshes before the watch CLI
            exits; None watches until interrupted.
    """

    owner_id: str = "local"
    user_name: str = DEFAULT_USER_NAME
    rates_api_url: str = DEFAULT_RATES_API_URL
    rates_ttl_seconds: int = RATES_TTL_SECONDS
    rates_timeout_seconds: float = 10.0
    rates_max_attempts: int = 3
    period: Period = Period.MONTH
    report_currency: str | None = None
    rates_base: str | None = None
    watch_interval_seconds: int = 30
    watch_rounds: int | None = None

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        defaults = cls()
        return cls(
            owner_id=os.getenv("LEDGER_OWNER_ID", "").strip()
            or defaults.owner_id,
            user_name=os.getenv("LEDGER_USER_NAME", "").strip()
            or defaults.user_name,
            rates_api_url=cls._url_template(
                os.getenv("RATES_API_URL"),
                logger=logger,
            ),
            rates_ttl_seconds=int(
                cls._positive_number(
                    "RATES_TTL_SECONDS",
                    defaults.rates_ttl_seconds,
                    logger=logger,
                )
            ),
            rates_timeout_seconds=cls._positive_number(
                "RATES_TIMEOUT_SECONDS",
                defaults.rates_timeout_seconds,
                logger=logger,
            ),
            rates_max_attempts=int(
                cls._positive_number(
                    "RATES_MAX_ATTEMPTS",
                    defaults.rates_max_attempts,
                    logger=logger,
                )
            ),
            period=parse_period(os.getenv("LEDGER_PERIOD"), defaults.period),
            report_currency=os.getenv("LEDGER_REPORT_CURRENCY", "").strip()
            or None,
            rates_base=os.getenv("RATES_BASE", "").strip() or None,
            watch_interval_seconds=int(
                cls._positive_number(
                    "WATCH_INTERVAL_SECONDS",
                    defaults.watch_interval_seconds,
                    logger=logger,
                )
            ),
            watch_rounds=cls._optional_count("WATCH_ROUNDS", logger=logger),
        )

    @staticmethod
    def _positive_number(name: str, default, logger):
        """Read a positive number, falling back to ``default`` when invalid.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or invalid.
            logger: Logger used for warnings.

        Returns:
            The parsed value, of the same type as ``default``.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = type(default)(raw.strip())
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default
        if value <= 0:
            logger.warning(f"Non-positive {name}={raw!r}; using {default}")
            return default
        return value

    @staticmethod
    def _optional_count(name: str, logger) -> int | None:
        """Read a non-negative integer; None when unset or invalid."""
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return None
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; ignoring it")
            return None
        if value < 0:
            logger.warning(f"Negative {name}={raw!r}; ignoring it")
            return None
        return value

    @staticmethod
    def _url_template(raw_url: str | None, logger) -> str:
        if not raw_url or not raw_url.strip():
            return DEFAULT_RATES_API_URL
        url = raw_url.strip()
        if "{base}" not in url:
            logger.warning(
                "RATES_API_URL has no {base} placeholder; appending the base code"
            )
            url = url.rstrip("/") + "/{base}"
        return url


__all__ = ["LedgerSettings", "DEFAULT_RATES_API_URL"]
