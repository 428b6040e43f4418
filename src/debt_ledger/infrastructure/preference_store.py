"""SQLAlchemy-backed key/value store for preferences and cached rates."""

from sqlalchemy import text

from debt_ledger.application.ports.database import DatabaseEnginePort
from debt_ledger.application.ports.preference_store import PreferenceStorePort
from debt_ledger.utils.dates import utc_now


CREATE_PREFERENCES_SQL = """
CREATE TABLE IF NOT EXISTS preferences (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

SELECT_PREFERENCE_SQL = text("SELECT value FROM preferences WHERE key = :key")

DELETE_PREFERENCE_SQL = text("DELETE FROM preferences WHERE key = :key")

INSERT_PREFERENCE_SQL = text(
    """
    INSERT INTO preferences (key, value, updated_at)
    VALUES (:key, :value, :updated_at)
    """
)


class SqlAlchemyPreferenceStore(PreferenceStorePort):
    """Preference store persisted in the ``preferences`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port
        self._prepared = False

    def prepare(self) -> None:
        """Ensure the preferences table exists."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_PREFERENCES_SQL)
        self._prepared = True

    def get(self, key: str) -> str | None:
        self._ensure_prepared()
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(SELECT_PREFERENCE_SQL, {"key": key}).first()
        return None if row is None else row.value

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        self._ensure_prepared()
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(DELETE_PREFERENCE_SQL, {"key": key})
            conn.execute(
                INSERT_PREFERENCE_SQL,
                {
                    "key": key,
                    "value": value,
                    "updated_at": utc_now().isoformat(),
                },
            )

    def remove(self, key: str) -> None:
        self._ensure_prepared()
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(DELETE_PREFERENCE_SQL, {"key": key})

    def _ensure_prepared(self) -> None:
        if not self._prepared:
            self.prepare()


__all__ = ["SqlAlchemyPreferenceStore", "CREATE_PREFERENCES_SQL"]
