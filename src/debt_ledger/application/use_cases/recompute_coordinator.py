"""Single-flight recomputation of the ledger on record changes."""

import asyncio
from enum import Enum
from typing import Callable, Hashable

from debt_ledger.application.ports.change_feed import ChangeEvent, ChangeFeedPort
from debt_ledger.application.ports.debt_repository import DebtRepositoryPort
from debt_ledger.application.ports.identity import IdentityPort, Owner
from debt_ledger.application.use_cases.get_ledger_overview import (
    LedgerAggregator,
)
from debt_ledger.domain.errors import IdentityError, LedgerFetchError
from debt_ledger.domain.models import LedgerSnapshot, Period
from debt_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)

SnapshotListener = Callable[[LedgerSnapshot], None]


class CoordinatorState(str, Enum):
    IDLE = "idle"
    SUBSCRIBED = "subscribed"
    REFRESHING = "refreshing"
    UNSUBSCRIBED = "unsubscribed"


class RecomputeCoordinator:
    """Keep the published ledger snapshot in step with the record store.

    At most one refresh runs at a time. Change events arriving during a
    refresh only raise a flag; the running refresh then loops once more, so
    the last published snapshot always reflects the latest change. After
    ``stop`` an in-flight refresh finishes but publishes nothing.
    """

    def __init__(
        self,
        repository: DebtRepositoryPort,
        change_feed: ChangeFeedPort,
        aggregator: LedgerAggregator,
        identity: IdentityPort,
        period: Period = Period.MONTH,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            repository: Store returning the owner's records.
            change_feed: Feed notifying record changes.
            aggregator: Aggregator building snapshots.
            identity: Port exposing the signed-in owner.
            period: Analytics period of the published snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for published refreshes.
        """
        self._repository = repository
        self._change_feed = change_feed
        self._aggregator = aggregator
        self._identity = identity
        self._period = period
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

        self._state = CoordinatorState.IDLE
        self._owner: Owner | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handle: Hashable | None = None
        self._snapshot: LedgerSnapshot | None = None
        self._listeners: list[SnapshotListener] = []
        self._task: asyncio.Task | None = None
        self._pending = False

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def snapshot(self) -> LedgerSnapshot | None:
        """Latest published snapshot, None before ``start``."""
        return self._snapshot

    def add_listener(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` for published snapshots.

        Returns:
            Callable[[], None]: Function removing the listener again.
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    async def start(self) -> LedgerSnapshot:
        """Fetch and publish the first snapshot, then follow the change feed.

        Returns:
            LedgerSnapshot: The first published snapshot.

        Raises:
            IdentityError: If nobody is signed in.
            LedgerFetchError: If the initial record fetch fails.
        """
        if self._state != CoordinatorState.IDLE:
            raise RuntimeError(f"Coordinator already {self._state.value}")
        owner = self._identity.current_owner()
        if owner is None:
            raise IdentityError("No signed-in owner to watch")
        self._owner = owner
        self._loop = asyncio.get_running_loop()

        try:
            snapshot = await self._compute()
        except Exception as exc:
            raise LedgerFetchError(
                f"Initial ledger fetch failed for owner {owner.id}: {exc}"
            ) from exc

        self._publish(snapshot)
        self._handle = self._change_feed.subscribe(owner.id, self.handle_event)
        self._state = CoordinatorState.SUBSCRIBED
        self._logger.info(f"Watching ledger changes for owner {owner.id}")
        return snapshot

    def handle_event(self, event: ChangeEvent) -> None:
        """Change feed callback; safe to call from any thread."""
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._on_change, event)

    async def refresh(self) -> LedgerSnapshot | None:
        """Recompute now and wait until the refresh settles.

        Returns:
            LedgerSnapshot | None: Latest published snapshot, or None when
            the coordinator was never started.
        """
        if self._state in (CoordinatorState.IDLE, CoordinatorState.UNSUBSCRIBED):
            return self._snapshot
        task = self._schedule()
        await task
        return self._snapshot

    async def wait_idle(self) -> None:
        """Wait for the running refresh, if any, to settle."""
        while self._task is not None:
            await self._task

    def stop(self) -> None:
        """Unsubscribe from the change feed; nothing is published afterwards."""
        if self._state == CoordinatorState.UNSUBSCRIBED:
            return
        if self._handle is not None:
            self._change_feed.unsubscribe(self._handle)
            self._handle = None
        self._state = CoordinatorState.UNSUBSCRIBED
        self._pending = False
        self._logger.info(
            f"Stopped watching ledger for owner "
            f"{self._owner.id if self._owner else '-'}"
        )

    def _on_change(self, event: ChangeEvent) -> None:
        if self._state in (CoordinatorState.IDLE, CoordinatorState.UNSUBSCRIBED):
            return
        if self._owner is not None and event.owner_id != self._owner.id:
            return
        self._logger.debug(
            f"Change {event.kind.value} on debt {event.record_id} "
            f"while {self._state.value}"
        )
        self._schedule()

    def _schedule(self) -> asyncio.Task:
        if self._state == CoordinatorState.REFRESHING and self._task is not None:
            self._pending = True
            return self._task
        self._state = CoordinatorState.REFRESHING
        self._task = asyncio.ensure_future(self._run())
        return self._task

    async def _run(self) -> None:
        try:
            while True:
                self._pending = False
                try:
                    snapshot = await self._compute()
                except Exception as exc:
                    self._logger.error(
                        f"Ledger refresh failed; keeping previous snapshot: {exc}"
                    )
                else:
                    if self._state == CoordinatorState.UNSUBSCRIBED:
                        return
                    self._publish(snapshot)
                if not self._pending or self._state == CoordinatorState.UNSUBSCRIBED:
                    return
        finally:
            if self._state == CoordinatorState.REFRESHING:
                self._state = CoordinatorState.SUBSCRIBED
            self._task = None

    async def _compute(self) -> LedgerSnapshot:
        records = await self._repository.list_by_owner(self._owner.id)
        return await self._aggregator.build_snapshot(records, period=self._period)

    def _publish(self, snapshot: LedgerSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:
                self._logger.error(f"Ledger listener failed: {exc}")
        self._usage_logger.info(
            f"Ledger published for owner {snapshot.owner_id}: "
            f"records={len(snapshot.records)}, net={snapshot.totals.net_balance}"
        )


__all__ = ["CoordinatorState", "RecomputeCoordinator", "SnapshotListener"]
