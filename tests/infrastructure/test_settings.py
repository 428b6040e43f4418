"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

import pytest

from debt_ledger.domain.models import Period
from debt_ledger.infrastructure import settings as settings_module
from debt_ledger.infrastructure.settings import DEFAULT_RATES_API_URL, LedgerSettings

ENV_VARS = (
    "LEDGER_OWNER_ID",
    "LEDGER_USER_NAME",
    "RATES_API_URL",
    "RATES_TTL_SECONDS",
    "RATES_TIMEOUT_SECONDS",
    "RATES_MAX_ATTEMPTS",
    "LEDGER_PERIOD",
    "LEDGER_REPORT_CURRENCY",
    "RATES_BASE",
    "WATCH_INTERVAL_SECONDS",
    "WATCH_ROUNDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate settings from the developer's environment and .env file."""
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", MagicMock)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults() -> None:
    """Unset variables keep the defaults."""
    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings()
    assert settings.rates_ttl_seconds == 3600
    assert settings.rates_api_url == DEFAULT_RATES_API_URL


def test_from_env_reads_values(monkeypatch) -> None:
    """Every variable is parsed into its typed field."""
    monkeypatch.setenv("LEDGER_OWNER_ID", " owner-9 ")
    monkeypatch.setenv("LEDGER_USER_NAME", "Sam")
    monkeypatch.setenv("RATES_API_URL", "https://rates.example/{base}.json")
    monkeypatch.setenv("RATES_TTL_SECONDS", "600")
    monkeypatch.setenv("RATES_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("RATES_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("LEDGER_PERIOD", "1w")
    monkeypatch.setenv("LEDGER_REPORT_CURRENCY", " EUR ")
    monkeypatch.setenv("RATES_BASE", "GBP")
    monkeypatch.setenv("WATCH_INTERVAL_SECONDS", "5")
    monkeypatch.setenv("WATCH_ROUNDS", "0")

    settings = LedgerSettings.from_env()

    assert settings.owner_id == "owner-9"
    assert settings.user_name == "Sam"
    assert settings.rates_api_url == "https://rates.example/{base}.json"
    assert settings.rates_ttl_seconds == 600
    assert settings.rates_timeout_seconds == 2.5
    assert settings.rates_max_attempts == 5
    assert settings.period == Period.WEEK
    assert settings.report_currency == "EUR"
    assert settings.rates_base == "GBP"
    assert settings.watch_interval_seconds == 5
    assert settings.watch_rounds == 0


@pytest.mark.parametrize("raw", ["soon", "0", "-10"])
def test_invalid_numbers_fall_back_to_defaults(monkeypatch, raw) -> None:
    """Unparseable or non-positive numbers keep the default."""
    monkeypatch.setenv("RATES_TTL_SECONDS", raw)

    assert LedgerSettings.from_env().rates_ttl_seconds == 3600


def test_url_without_placeholder_gets_base_appended(monkeypatch) -> None:
    """A bare endpoint is completed with the base code placeholder."""
    monkeypatch.setenv("RATES_API_URL", "https://rates.example/latest/")

    settings = LedgerSettings.from_env()

    assert settings.rates_api_url == "https://rates.example/latest/{base}"


def test_unknown_period_falls_back_to_month(monkeypatch) -> None:
    """Unknown period labels keep the monthly default."""
    monkeypatch.setenv("LEDGER_PERIOD", "fortnight")

    assert LedgerSettings.from_env().period == Period.MONTH


@pytest.mark.parametrize("raw", ["often", "-1"])
def test_invalid_watch_rounds_mean_unbounded(monkeypatch, raw) -> None:
    """Malformed or negative round counts fall back to watching forever."""
    monkeypatch.setenv("WATCH_ROUNDS", raw)
    monkeypatch.setenv("WATCH_INTERVAL_SECONDS", "soon")

    settings = LedgerSettings.from_env()

    assert settings.watch_rounds is None
    assert settings.watch_interval_seconds == 30
