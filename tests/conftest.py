"""
Pytest fixtures for Decision Journal tests.
"""
import sys
from datetime import date, datetime, time, timezone
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Ensure src/ and the project root are on sys.path so tests can import
# decision_analytics, automation and server.dashboard_api.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()

from decision_analytics import Category, Decision, Emotion  # noqa: E402

UTC = timezone.utc


def ms(day: date, hour: int = 12, minute: int = 0) -> int:
    """Epoch milliseconds of ``day`` at ``hour:minute`` UTC."""
    return int(datetime.combine(day, time(hour, minute), tzinfo=UTC).timestamp() * 1000)


def make_decision(
    day: date,
    emotions,
    intensity: int = 3,
    category: Category = Category.OTHER,
    hour: int = 12,
    text: str = "A decision",
    id=None,
) -> Decision:
    """Build a validated decision on ``day`` (UTC)."""
    if isinstance(emotions, Emotion):
        emotions = [emotions]
    return Decision.create(
        timestamp=ms(day, hour),
        text=text,
        emotions=emotions,
        intensity=intensity,
        category=category,
        id=id,
    )


# ============================================================================
# Storage Fixtures
# ============================================================================


@pytest.fixture
def db_manager(tmp_path):
    """DatabaseManager backed by a temporary SQLite file."""
    from server.dashboard_api.database import DatabaseManager

    return DatabaseManager(str(tmp_path / "decisions.db"))


@pytest.fixture
def decision_store(db_manager):
    from server.dashboard_api.database import DecisionStore

    return DecisionStore(db_manager)


@pytest.fixture
def preferences_store(db_manager):
    from server.dashboard_api.database import PreferencesStore

    return PreferencesStore(db_manager, "MONDAY")
