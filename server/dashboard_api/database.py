"""SQLite storage for decisions and user preferences."""
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from typing import Generator, List, Optional
import logging

from decision_analytics import Category, Decision, Emotion, Weekday

from .config import get_settings

log = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS decisions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp INTEGER NOT NULL,
    text TEXT NOT NULL,
    emotions TEXT NOT NULL,
    intensity INTEGER NOT NULL,
    category TEXT NOT NULL,
    tone TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_decisions_timestamp ON decisions (timestamp);
CREATE TABLE IF NOT EXISTS preferences (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


class DatabaseManager:
    """
    SQLite connection manager.
    Opens a short-lived connection per operation and creates the schema
    on first use.
    """

    def __init__(self, db_path: Optional[str] = None, settings=None):
        self.settings = settings or get_settings()
        self.db_path = db_path or self.settings.db_path
        self._initialized = False

    @contextmanager
    def connect(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a connection that commits on success and rolls back on error."""
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row  # Enable dict-like row access
        try:
            if not self._initialized:
                conn.executescript(SCHEMA)
                self._initialized = True
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


def _row_to_decision(row) -> Decision:
    """Convert SQLite row to Decision. Tone is recomputed, not read back."""
    return Decision(
        id=int(row["id"]),
        timestamp=int(row["timestamp"]),
        text=row["text"],
        emotions=tuple(Emotion(value) for value in row["emotions"].split(",") if value),
        intensity=int(row["intensity"]),
        category=Category(row["category"]),
    )


class DecisionStore:
    """Keyed store of decision records."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def insert(self, decision: Decision) -> int:
        with self.db.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO decisions (timestamp, text, emotions, intensity, category, tone)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    decision.timestamp,
                    decision.text,
                    ",".join(e.value for e in decision.emotions),
                    decision.intensity,
                    decision.category.value,
                    decision.tone.value,
                ),
            )
            decision_id = cursor.lastrowid
        log.info(f"[STORE] Inserted decision {decision_id}")
        return decision_id

    def update(self, decision: Decision) -> None:
        if decision.id is None:
            raise ValueError("Cannot update a decision without id")
        with self.db.connect() as conn:
            conn.execute(
                """
                UPDATE decisions
                SET timestamp = ?, text = ?, emotions = ?, intensity = ?, category = ?, tone = ?
                WHERE id = ?
                """,
                (
                    decision.timestamp,
                    decision.text,
                    ",".join(e.value for e in decision.emotions),
                    decision.intensity,
                    decision.category.value,
                    decision.tone.value,
                    decision.id,
                ),
            )
        log.info(f"[STORE] Updated decision {decision.id}")

    def delete(self, decision: Decision) -> None:
        with self.db.connect() as conn:
            conn.execute("DELETE FROM decisions WHERE id = ?", (decision.id,))
        log.info(f"[STORE] Deleted decision {decision.id}")

    def get_by_id(self, decision_id: int) -> Optional[Decision]:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM decisions WHERE id = ?", (decision_id,)
            ).fetchone()
        return _row_to_decision(row) if row else None

    def get_by_date_range(self, start: int, end: int) -> List[Decision]:
        """Decisions with ``start <= timestamp < end``, oldest first."""
        with self.db.connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM decisions
                WHERE timestamp >= ? AND timestamp < ?
                ORDER BY timestamp ASC, id ASC
                """,
                (start, end),
            ).fetchall()
        return [_row_to_decision(row) for row in rows]

    def get_all(self) -> List[Decision]:
        with self.db.connect() as conn:
            rows = conn.execute(
                "SELECT * FROM decisions ORDER BY timestamp ASC, id ASC"
            ).fetchall()
        return [_row_to_decision(row) for row in rows]

    def earliest_timestamp(self) -> Optional[int]:
        with self.db.connect() as conn:
            row = conn.execute("SELECT MIN(timestamp) AS min_ts FROM decisions").fetchone()
        return int(row["min_ts"]) if row and row["min_ts"] is not None else None


class PreferencesStore:
    """User preferences kept as key/value rows."""

    WEEK_START_DAY = "week_start_day"
    FIRST_USE_DATE = "first_use_date"
    DAILY_REMINDER_ENABLED = "daily_reminder_enabled"
    WEEKLY_REMINDER_ENABLED = "weekly_reminder_enabled"
    LAST_WEEKLY_ANCHOR = "last_weekly_anchor"
    LAST_DAILY_REMINDER = "last_daily_reminder"
    USER_NAME = "user_name"

    def __init__(self, db: DatabaseManager, default_week_start: str = "MONDAY"):
        self.db = db
        self.default_week_start = Weekday.parse(default_week_start)

    def _get(self, key: str) -> Optional[str]:
        with self.db.connect() as conn:
            row = conn.execute("SELECT value FROM preferences WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def _set(self, key: str, value: Optional[str]) -> None:
        with self.db.connect() as conn:
            conn.execute(
                "INSERT INTO preferences (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def _get_bool(self, key: str, default: bool) -> bool:
        stored = self._get(key)
        return default if stored is None else stored == "1"

    @property
    def week_start_day(self) -> Weekday:
        stored = self._get(self.WEEK_START_DAY)
        if stored is None:
            return self.default_week_start
        try:
            return Weekday.parse(stored)
        except ValueError:
            log.warning(f"[STORE] Ignoring invalid stored week start day: {stored!r}")
            return self.default_week_start

    def set_week_start_day(self, day) -> None:
        self._set(self.WEEK_START_DAY, Weekday.parse(day).value)

    def get_first_use_date(self) -> Optional[int]:
        stored = self._get(self.FIRST_USE_DATE)
        return int(stored) if stored is not None else None

    def ensure_first_use_date(self, now: Optional[int] = None) -> int:
        """Stored first-use instant (epoch ms), initialized to ``now`` on first access."""
        stored = self.get_first_use_date()
        if stored is None:
            stored = now if now is not None else int(datetime.now().timestamp() * 1000)
            self._set(self.FIRST_USE_DATE, str(stored))
            log.info(f"[STORE] Initialized first use date to {stored}")
        return stored

    def update_first_use_date_if_earlier(self, candidate: int) -> None:
        current = self.get_first_use_date()
        if current is None or candidate < current:
            self._set(self.FIRST_USE_DATE, str(candidate))

    @property
    def daily_reminder_enabled(self) -> bool:
        return self._get_bool(self.DAILY_REMINDER_ENABLED, True)

    def set_daily_reminder_enabled(self, enabled: bool) -> None:
        self._set(self.DAILY_REMINDER_ENABLED, "1" if enabled else "0")

    @property
    def weekly_reminder_enabled(self) -> bool:
        return self._get_bool(self.WEEKLY_REMINDER_ENABLED, False)

    def set_weekly_reminder_enabled(self, enabled: bool) -> None:
        self._set(self.WEEKLY_REMINDER_ENABLED, "1" if enabled else "0")

    def get_last_weekly_anchor(self) -> Optional[date]:
        stored = self._get(self.LAST_WEEKLY_ANCHOR)
        if not stored:
            return None
        try:
            return date.fromisoformat(stored)
        except ValueError:
            log.warning(f"[STORE] Ignoring invalid stored anchor: {stored!r}")
            return None

    def set_last_weekly_anchor(self, anchor: date) -> None:
        self._set(self.LAST_WEEKLY_ANCHOR, anchor.isoformat())

    def get_last_daily_reminder(self) -> Optional[date]:
        stored = self._get(self.LAST_DAILY_REMINDER)
        if not stored:
            return None
        try:
            return date.fromisoformat(stored)
        except ValueError:
            log.warning(f"[STORE] Ignoring invalid stored reminder date: {stored!r}")
            return None

    def set_last_daily_reminder(self, day: date) -> None:
        self._set(self.LAST_DAILY_REMINDER, day.isoformat())

    @property
    def user_name(self) -> Optional[str]:
        return self._get(self.USER_NAME)

    def set_user_name(self, name: str) -> None:
        self._set(self.USER_NAME, name)


# Singleton instances
db_manager = DatabaseManager()
decision_store = DecisionStore(db_manager)
preferences_store = PreferencesStore(db_manager, get_settings().default_week_start)
