"""HTTP exchange rate source."""

import asyncio
from decimal import Decimal

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from debt_ledger.application.ports.rate_source import RateSourcePort
from debt_ledger.domain.errors import NetworkError
from debt_ledger.domain.services.fx import parse_rates
from debt_ledger.infrastructure.logging.logger import get_app_logger
from debt_ledger.infrastructure.settings import DEFAULT_RATES_API_URL


class HttpRateSource(RateSourcePort):
    """Rate source reading ``{"rates": {code: rate}}`` documents over HTTP.

    Transport errors and non-success responses are retried with exponential
    backoff; once the attempts are exhausted the failure surfaces as
    ``NetworkError``.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_RATES_API_URL,
        timeout_seconds: float = 10.0,
        max_attempts: int = 3,
        wait=None,
        logger=None,
    ) -> None:
        """Initialize the source.

        Args:
            url_template: URL with a ``{base}`` placeholder.
            timeout_seconds: Timeout of each HTTP request.
            max_attempts: Attempts before giving up.
            wait: Optional tenacity wait strategy between attempts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._url_template = url_template
        self._timeout_seconds = timeout_seconds
        self._max_attempts = max_attempts
        self._wait = wait or wait_exponential(multiplier=1, min=2, max=10)
        self._logger = logger or get_app_logger()

    async def fetch_latest_rates(self, base_currency: str) -> dict[str, Decimal]:
        """Fetch the latest rates relative to ``base_currency``.

        Raises:
            NetworkError: On transport errors, non-success responses and
                malformed documents.
        """
        return await asyncio.to_thread(self._fetch, base_currency.upper())

    def _fetch(self, base: str) -> dict[str, Decimal]:
        retrying = Retrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=retry_if_exception_type(requests.RequestException),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            payload = retrying(self._request, base)
        except requests.RequestException as exc:
            raise NetworkError(f"Rate request for {base} failed: {exc}") from exc

        raw_rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(raw_rates, dict):
            raise NetworkError(f"Rate response for {base} has no rates")
        rates = parse_rates(raw_rates)
        if not rates:
            raise NetworkError(f"Rate response for {base} has no usable rates")
        return rates

    def _request(self, base: str):
        url = self._url_template.format(base=base)
        response = requests.get(url, timeout=self._timeout_seconds)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(f"Rate response for {base} is not JSON") from exc

    def _log_retry(self, retry_state) -> None:
        error = retry_state.outcome.exception()
        self._logger.warning(
            f"Rate request attempt {retry_state.attempt_number} failed: {error}"
        )


__all__ = ["HttpRateSource"]
