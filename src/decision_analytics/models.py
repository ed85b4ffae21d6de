"""
Value types for the decision journal.

Emotion polarity and category flags are kept in lookup tables next to the
enums so every classification reads from one place.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, tzinfo
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class Polarity(str, Enum):
    """Emotional polarity of an emotion tag."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Emotion(str, Enum):
    """Emotion tags a decision can carry."""

    JOYFUL = "joyful"
    SECURE = "secure"
    FEAR = "fear"
    SURPRISED = "surprised"
    SAD = "sad"
    UNCOMFORTABLE = "uncomfortable"
    ANGRY = "angry"
    MOTIVATED = "motivated"
    NORMAL = "normal"

    @property
    def polarity(self) -> Polarity:
        return EMOTION_POLARITY[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def is_positive(self) -> bool:
        return self.polarity == Polarity.POSITIVE

    @property
    def is_negative(self) -> bool:
        return self.polarity == Polarity.NEGATIVE

    @property
    def valence(self) -> int:
        return POLARITY_VALENCE[self.polarity]


EMOTION_POLARITY: Dict[Emotion, Polarity] = {
    Emotion.JOYFUL: Polarity.POSITIVE,
    Emotion.SECURE: Polarity.POSITIVE,
    Emotion.SURPRISED: Polarity.POSITIVE,
    Emotion.MOTIVATED: Polarity.POSITIVE,
    Emotion.FEAR: Polarity.NEGATIVE,
    Emotion.SAD: Polarity.NEGATIVE,
    Emotion.UNCOMFORTABLE: Polarity.NEGATIVE,
    Emotion.ANGRY: Polarity.NEGATIVE,
    Emotion.NORMAL: Polarity.NEUTRAL,
}

POLARITY_VALENCE: Dict[Polarity, int] = {
    Polarity.POSITIVE: 1,
    Polarity.NEGATIVE: -1,
    Polarity.NEUTRAL: 0,
}


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata and flags for a life-domain category."""

    label: str
    description: str
    personal_growth: bool = False


class Category(str, Enum):
    """Life-domain tag for a decision."""

    WORK_STUDY = "work_study"
    HEALTH_WELLBEING = "health_wellbeing"
    RELATIONSHIPS_SOCIAL = "relationships_social"
    FINANCES_SHOPPING = "finances_shopping"
    HABITS_GROWTH = "habits_growth"
    LEISURE = "leisure"
    HOME_ORGANIZATION = "home_organization"
    OTHER = "other"

    @property
    def info(self) -> CategoryInfo:
        return CATEGORY_INFO[self]

    @property
    def label(self) -> str:
        return self.info.label

    @property
    def is_personal_growth(self) -> bool:
        return self.info.personal_growth


CATEGORY_INFO: Dict[Category, CategoryInfo] = {
    Category.WORK_STUDY: CategoryInfo(
        "Work/Study", "Professional or academic challenges and achievements"
    ),
    Category.HEALTH_WELLBEING: CategoryInfo(
        "Health/Wellbeing", "Routines and actions that care for body and mind", True
    ),
    Category.RELATIONSHIPS_SOCIAL: CategoryInfo(
        "Relationships/Social", "Quality of personal interactions and bonds", True
    ),
    Category.FINANCES_SHOPPING: CategoryInfo(
        "Finances/Shopping", "Income, spending and purchases"
    ),
    Category.HABITS_GROWTH: CategoryInfo(
        "Habits/Growth", "Goals, routines and personal growth", True
    ),
    Category.LEISURE: CategoryInfo(
        "Leisure", "Free time activities that recharge energy", True
    ),
    Category.HOME_ORGANIZATION: CategoryInfo(
        "Home/Organization", "Household tasks and keeping things in order"
    ),
    Category.OTHER: CategoryInfo(
        "Other", "Situations that fit no other category"
    ),
}


class Tone(str, Enum):
    """Emotional register of a single decision."""

    CALM = "calm"
    IMPULSIVE = "impulsive"
    NEUTRAL = "neutral"


class DailyMood(str, Enum):
    """Aggregate mood of all decisions recorded on one calendar date."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    UNDEFINED = "undefined"  # no decisions that day


class Weekday(str, Enum):
    """Day of the week, in ISO order (Monday first)."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def index(self) -> int:
        """0 for Monday through 6 for Sunday, matching date.weekday()."""
        return list(Weekday).index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        return list(cls)[index]

    @classmethod
    def parse(cls, value) -> "Weekday":
        """Accept a Weekday, its name in any case, or a date.weekday() index."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            if not 0 <= value < len(cls):
                raise ValueError(f"Weekday index out of range: {value}")
            return cls.from_index(value)
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown weekday: {value!r}") from None


def local_date(timestamp_ms: int, tz: Optional[tzinfo] = None):
    """Calendar date of an epoch-millisecond instant in the given zone (system local if None)."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz).date()


def weekday_label(day) -> str:
    """English weekday name for a date, e.g. 'Monday'."""
    return Weekday.from_index(day.weekday()).label


@dataclass(frozen=True)
class Decision:
    """
    One journaled decision.

    ``tone`` is not supplied by callers: it is derived from emotions and
    intensity every time a Decision is built, so ``dataclasses.replace``
    keeps it consistent with the new values.
    """

    timestamp: int  # milliseconds since epoch
    text: str
    emotions: Tuple[Emotion, ...]
    intensity: int
    category: Category
    id: Optional[int] = None
    tone: Tone = field(init=False)

    def __post_init__(self):
        # Local import: tone.py depends on the enums defined above.
        from .tone import classify_tone

        object.__setattr__(self, "emotions", tuple(self.emotions))
        object.__setattr__(self, "tone", classify_tone(self.emotions, self.intensity))

    @classmethod
    def create(
        cls,
        timestamp: int,
        text: str,
        emotions: Iterable,
        intensity: int,
        category,
        id: Optional[int] = None,
    ) -> "Decision":
        """Validate raw input and build a Decision from it."""
        from .validation import validate_decision

        text, emotions, intensity, category = validate_decision(
            text, emotions, intensity, category
        )
        return cls(
            timestamp=timestamp,
            text=text,
            emotions=emotions,
            intensity=intensity,
            category=category,
            id=id,
        )

    def with_id(self, id: int) -> "Decision":
        return replace(self, id=id)

    @property
    def is_emotionally_negative(self) -> bool:
        """True when any of the decision's emotions is negative."""
        return any(emotion.is_negative for emotion in self.emotions)

    @property
    def is_high_intensity(self) -> bool:
        return self.intensity >= 4

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "text": self.text,
            "emotions": [emotion.value for emotion in self.emotions],
            "intensity": self.intensity,
            "category": self.category.value,
            "tone": self.tone.value,
        }
