"""Tests for the HTTP rate source."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests
from tenacity import wait_none

from debt_ledger.domain.errors import NetworkError
from debt_ledger.infrastructure import rate_source as rate_source_module
from debt_ledger.infrastructure.rate_source import HttpRateSource


class FakeResponse:
    def __init__(self, payload=None, status_error=None, json_error=None):
        self._payload = payload
        self._status_error = status_error
        self._json_error = json_error

    def raise_for_status(self):
        if self._status_error is not None:
            raise self._status_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


def _source(logger=None, max_attempts=3):
    return HttpRateSource(
        url_template="https://rates.example/{base}",
        timeout_seconds=4,
        max_attempts=max_attempts,
        wait=wait_none(),
        logger=logger or MagicMock(),
    )


@pytest.mark.asyncio
async def test_fetch_parses_rates(monkeypatch):
    """Rates are requested for the upper-cased base and parsed to Decimal."""
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse({"rates": {"usd": 1, "EUR": "0.92", "BAD": "n/a"}})

    monkeypatch.setattr(rate_source_module.requests, "get", fake_get)

    rates = await _source().fetch_latest_rates("usd")

    assert calls == [("https://rates.example/USD", 4)]
    assert rates == {"USD": Decimal("1"), "EUR": Decimal("0.92")}


@pytest.mark.asyncio
async def test_transient_errors_are_retried(monkeypatch):
    """A failing attempt is retried before succeeding."""
    logger = MagicMock()
    responses = [
        requests.ConnectionError("reset"),
        FakeResponse({"rates": {"EUR": "0.9"}}),
    ]

    def fake_get(url, timeout):
        result = responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(rate_source_module.requests, "get", fake_get)

    rates = await _source(logger=logger).fetch_latest_rates("USD")

    assert rates == {"EUR": Decimal("0.9")}
    logger.warning.assert_called_once()


@pytest.mark.asyncio
async def test_exhausted_retries_raise_network_error(monkeypatch):
    """HTTP errors on every attempt surface as NetworkError."""
    attempts = []

    def fake_get(url, timeout):
        attempts.append(url)
        return FakeResponse(status_error=requests.HTTPError("503"))

    monkeypatch.setattr(rate_source_module.requests, "get", fake_get)

    with pytest.raises(NetworkError):
        await _source(max_attempts=2).fetch_latest_rates("USD")

    assert len(attempts) == 2


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({"result": "error"}),
        FakeResponse({"rates": {}}),
        FakeResponse(["not", "a", "dict"]),
        FakeResponse(json_error=ValueError("bad json")),
    ],
)
@pytest.mark.asyncio
async def test_malformed_documents_raise_network_error(monkeypatch, response):
    """Documents without usable rates are failures, not empty tables."""
    monkeypatch.setattr(
        rate_source_module.requests,
        "get",
        lambda url, timeout: response,
    )

    with pytest.raises(NetworkError):
        await _source().fetch_latest_rates("USD")
