"""Weekly summary aggregate models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from decision_analytics import WeeklyHighlight, WeeklySummary

from .insight import Insight
from .schedule import ScheduleResponse


class SummaryStats(BaseModel):
    """Quantitative summary of a window of decisions."""

    model_config = ConfigDict(populate_by_name=True)

    start: int
    end: int
    total_count: int = Field(serialization_alias="totalCount")
    calm_percentage: float = Field(serialization_alias="calmPercentage")
    impulsive_percentage: float = Field(serialization_alias="impulsivePercentage")
    neutral_percentage: float = Field(serialization_alias="neutralPercentage")
    daily_moods: dict[str, str] = Field(serialization_alias="dailyMoods")
    category_distribution: dict[str, int] = Field(serialization_alias="categoryDistribution")
    emotion_distribution: dict[str, int] = Field(serialization_alias="emotionDistribution")
    category_emotion_matrix: dict[str, dict[str, int]] = Field(serialization_alias="categoryEmotionMatrix")
    tone_emotion_distribution: dict[str, dict[str, int]] = Field(serialization_alias="toneEmotionDistribution")

    @classmethod
    def from_summary(cls, summary: WeeklySummary) -> "SummaryStats":
        data = summary.to_dict()
        return cls(
            start=data["start"],
            end=data["end"],
            total_count=data["total_count"],
            calm_percentage=data["calm_percentage"],
            impulsive_percentage=data["impulsive_percentage"],
            neutral_percentage=data["neutral_percentage"],
            daily_moods=data["daily_moods"],
            category_distribution=data["category_distribution"],
            emotion_distribution=data["emotion_distribution"],
            category_emotion_matrix=data["category_emotion_matrix"],
            tone_emotion_distribution=data["tone_emotion_distribution"],
        )


class Highlights(BaseModel):
    """Qualitative highlights of a window."""

    model_config = ConfigDict(populate_by_name=True)

    strongest_positive_day: Optional[str] = Field(default=None, serialization_alias="strongestPositiveDay")
    strongest_negative_day: Optional[str] = Field(default=None, serialization_alias="strongestNegativeDay")
    most_frequent_category: Optional[str] = Field(default=None, serialization_alias="mostFrequentCategory")
    emotional_trend: str = Field(serialization_alias="emotionalTrend")
    most_challenging_day_emotion: Optional[str] = Field(
        default=None, serialization_alias="mostChallengingDayEmotion"
    )

    @classmethod
    def from_highlight(cls, highlight: WeeklyHighlight) -> "Highlights":
        return cls(**highlight.to_dict())


class WeeklyReport(BaseModel):
    """Summary, highlights and insights for one window."""

    model_config = ConfigDict(populate_by_name=True)

    window_start: str = Field(serialization_alias="windowStart")
    window_end: str = Field(serialization_alias="windowEnd")
    summary: SummaryStats
    highlights: Highlights
    insights: list[Insight]


class CurrentSummaryResponse(BaseModel):
    """Schedule-gated view of the current weekly summary."""

    model_config = ConfigDict(populate_by_name=True)

    schedule: ScheduleResponse
    report: Optional[WeeklyReport] = None
