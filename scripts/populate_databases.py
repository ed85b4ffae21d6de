#!/usr/bin/env python3
"""
Populate the decision journal SQLite database with a demo journal.

Seeds two weeks of decisions ending today so the weekly summary, the
release schedule and the insights have something to show.

Usage:
    python scripts/populate_databases.py
    python scripts/populate_databases.py --days 21 --seed 7
"""
import argparse
import os
import random
import sys
from datetime import date, datetime, time, timedelta
from pathlib import Path

from dotenv import load_dotenv

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR / "src"))
sys.path.insert(0, str(BASE_DIR))

load_dotenv(BASE_DIR / ".env")

from decision_analytics import Category, Decision, Emotion  # noqa: E402
from server.dashboard_api.config import get_settings  # noqa: E402
from server.dashboard_api.database import (  # noqa: E402
    DatabaseManager,
    DecisionStore,
    PreferencesStore,
)

# (text, emotions, intensity range, category)
DEMO_DECISIONS = [
    ("Went for a run before work", [Emotion.MOTIVATED], (2, 4), Category.HEALTH_WELLBEING),
    ("Skipped the gym to finish a report", [Emotion.UNCOMFORTABLE], (2, 4), Category.WORK_STUDY),
    ("Accepted the new project lead role", [Emotion.JOYFUL, Emotion.FEAR], (3, 5), Category.WORK_STUDY),
    ("Postponed the deadline conversation", [Emotion.FEAR], (3, 5), Category.WORK_STUDY),
    ("Called my sister after a long time", [Emotion.JOYFUL], (1, 3), Category.RELATIONSHIPS_SOCIAL),
    ("Declined a dinner invitation", [Emotion.SAD], (2, 3), Category.RELATIONSHIPS_SOCIAL),
    ("Bought headphones on impulse", [Emotion.SURPRISED, Emotion.UNCOMFORTABLE], (3, 5), Category.FINANCES_SHOPPING),
    ("Set up an automatic savings transfer", [Emotion.SECURE], (1, 3), Category.FINANCES_SHOPPING),
    ("Read for thirty minutes instead of scrolling", [Emotion.MOTIVATED], (1, 3), Category.HABITS_GROWTH),
    ("Signed up for an online course", [Emotion.MOTIVATED, Emotion.JOYFUL], (2, 4), Category.HABITS_GROWTH),
    ("Watched a movie with friends", [Emotion.JOYFUL], (1, 2), Category.LEISURE),
    ("Cleaned and reorganized the kitchen", [Emotion.NORMAL], (1, 3), Category.HOME_ORGANIZATION),
    ("Argued with a neighbour about parking", [Emotion.ANGRY], (4, 5), Category.HOME_ORGANIZATION),
    ("Chose the usual route home", [Emotion.NORMAL], (1, 2), Category.OTHER),
]


def build_demo_journal(days: int, rng: random.Random, tz=None) -> list[Decision]:
    """Generate between one and four decisions per day for the last ``days`` days."""
    today = datetime.now(tz).date()
    decisions = []

    for offset in range(days - 1, -1, -1):
        day: date = today - timedelta(days=offset)
        hours = sorted(rng.sample(range(8, 23), rng.randint(1, 4)))

        for hour in hours:
            text, emotions, (low, high), category = rng.choice(DEMO_DECISIONS)
            moment = datetime.combine(day, time(hour, rng.randint(0, 59)), tzinfo=tz)
            if tz is None:
                moment = moment.astimezone()
            decisions.append(Decision.create(
                timestamp=int(moment.timestamp() * 1000),
                text=text,
                emotions=emotions,
                intensity=rng.randint(low, high),
                category=category,
            ))

    return decisions


def main():
    """Seed the decision journal database."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--days", type=int, default=14, help="Days of history to generate")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--keep", action="store_true", help="Keep the existing database file")
    args = parser.parse_args()

    settings = get_settings()
    db_path = Path(settings.db_path)

    print("=" * 60)
    print("Decision Journal Database Population Script")
    print("=" * 60)
    print(f"\nDatabase: {db_path}\n")

    if db_path.exists() and not args.keep:
        os.remove(db_path)
        print(f"  Removed existing: {db_path.name}")

    db = DatabaseManager(str(db_path), settings=settings)
    store = DecisionStore(db)
    preferences = PreferencesStore(db, settings.default_week_start)

    decisions = build_demo_journal(args.days, random.Random(args.seed), settings.tz)
    for decision in decisions:
        store.insert(decision)
        preferences.update_first_use_date_if_earlier(decision.timestamp)

    print(f"  Decisions inserted: {len(decisions)}")
    print(f"  Week starts on: {preferences.week_start_day.label}")

    print("=" * 60)
    print(f"Complete! {len(store.get_all())} decisions in the journal")
    print("=" * 60)

    if db_path.exists():
        size_kb = db_path.stat().st_size / 1024
        print(f"\n  {db_path} ({size_kb:.1f} KB)")


if __name__ == "__main__":
    main()
