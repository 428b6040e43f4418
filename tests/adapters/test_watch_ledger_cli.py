"""Tests for the watch ledger CLI."""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from debt_ledger.adapters import watch_ledger_cli


def _snapshot(net: str) -> SimpleNamespace:
    return SimpleNamespace(
        totals=SimpleNamespace(net_balance=Decimal(net)),
        currency_code="USD",
        computed_at=datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc),
        records=(),
    )


class _FakeCoordinator:
    """Coordinator publishing a new snapshot on start and each refresh."""

    def __init__(self) -> None:
        self.listeners = []
        self.refreshes = 0
        self.stopped = False

    def add_listener(self, listener):
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def _publish(self, snapshot) -> None:
        for listener in list(self.listeners):
            listener(snapshot)

    async def start(self):
        self._publish(_snapshot("0"))

    async def refresh(self):
        self.refreshes += 1
        self._publish(_snapshot(str(self.refreshes * 10)))

    def stop(self) -> None:
        self.stopped = True

    async def wait_idle(self) -> None:
        return None


def _services(coordinator, interval=0, rounds=None):
    normalizer = SimpleNamespace(format=lambda amount, code: f"{code} {amount}")
    return SimpleNamespace(
        settings=SimpleNamespace(
            watch_interval_seconds=interval,
            watch_rounds=rounds,
        ),
        build_coordinator=lambda: coordinator,
        normalizer=normalizer,
    )


def test_watch_prints_each_snapshot(capsys):
    """Every published snapshot prints one line until rounds run out."""
    coordinator = _FakeCoordinator()

    printed = asyncio.run(watch_ledger_cli.watch(_services(coordinator), 0, 2))

    assert printed == 3
    assert coordinator.stopped is True
    assert coordinator.listeners == []
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith("net balance USD 0 across 0 debts")
    assert "net balance USD 20" in lines[-1]


def test_main_runs_bounded_watch(monkeypatch, capsys):
    """Zero watch rounds print the initial snapshot and exit."""
    coordinator = _FakeCoordinator()
    monkeypatch.setattr(
        watch_ledger_cli,
        "build_ledger_services",
        lambda: _services(coordinator, rounds=0),
    )
    monkeypatch.setattr(watch_ledger_cli, "get_app_logger", MagicMock)

    watch_ledger_cli.main()

    assert len(capsys.readouterr().out.splitlines()) == 1
    assert coordinator.refreshes == 0
