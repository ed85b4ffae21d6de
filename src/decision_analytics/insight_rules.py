"""
Insight Rule Engine.

Evaluates a fixed battery of heuristic rules over a list of decisions and
returns ranked, deduplicated narrative insights. Every rule reads from a
shared precomputed context and only appends its own candidates, so rules
can be evaluated in any order before the final sort.

Ranking: lower priority number first, then higher weight; titles are
deduplicated keeping the first occurrence.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Dict, Iterable, List, Optional

from .daily_mood import calculate_daily_mood, decision_valence
from .models import (
    Category,
    DailyMood,
    Decision,
    Emotion,
    Tone,
    Weekday,
    local_date,
)

logger = logging.getLogger(__name__)

RECENT_WINDOW_MS = 48 * 60 * 60 * 1000


@dataclass(frozen=True)
class InsightRuleResult:
    """A rendered insight."""

    title: str
    description: str
    tag: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"title": self.title, "description": self.description, "tag": self.tag}


@dataclass(frozen=True)
class InsightCandidate:
    """An insight produced by a rule, before ranking."""

    priority: int
    weight: float
    result: InsightRuleResult


@dataclass
class CategoryStats:
    """Per-category aggregates used by the category rules."""

    category: Category
    count: int
    emotion_ratios: Dict[Emotion, float]
    hot_zone_ratio: float  # share of decisions both high-intensity and negative


@dataclass
class InsightContext:
    """Aggregates shared by all rules, computed once per evaluation."""

    total: int
    emotion_counts: Dict[Emotion, int]
    emotion_ratios: Dict[Emotion, float]
    tone_counts: Dict[Tone, int]
    tone_ratios: Dict[Tone, float]
    average_intensity: float
    distinct_emotions: int
    category_counts: Dict[Category, int]
    category_stats: List[CategoryStats]
    recent_count: int
    recent_ratio: float
    weekday_moods: Dict[Weekday, DailyMood]
    weekday_negative_counts: Dict[Weekday, int] = field(default_factory=dict)
    growth_ratio: float = 0.0


def format_percentage(ratio: float) -> str:
    """Render a 0..1 ratio as an integer percentage, halves rounding up: 0.625 -> '63%'."""
    return f"{int(ratio * 100 + 0.5)}%"


def _ratio(count: int, total: int) -> float:
    return count / total if total else 0.0


class InsightRuleEngine:
    """
    Generates prioritized insights from decision records.

    The engine holds configuration only (time zone); it keeps no state
    between calls.

    Thresholds:
        category rules apply to categories with at least CATEGORY_MIN_DECISIONS
        decisions; the remaining constants are the firing thresholds of
        each rule.
    """

    CATEGORY_MIN_DECISIONS = 3
    CATEGORY_NEGATIVE_EMOTION_RATIO = 0.70
    CATEGORY_POSITIVE_EMOTION_RATIO = 0.60
    CATEGORY_HOT_ZONE_RATIO = 0.50
    EMOTION_DOMINANCE_RATIO = 0.70
    IMPULSIVE_RATIO = 0.55
    HIGH_AVERAGE_INTENSITY = 4.2
    CALM_RATIO = 0.60
    GENTLE_MIN_DECISIONS = 3
    GENTLE_AVERAGE_INTENSITY = 2.0
    CATEGORY_FOCUS_RATIO = 0.50
    NARROW_EMOTIONS_MAX = 2
    RECENT_RATIO = 0.50
    GROWTH_RATIO = 0.50

    def __init__(self, tz: Optional[tzinfo] = None):
        """
        Initialize the engine.

        Args:
            tz: Zone used to resolve weekdays (system local if None)
        """
        self.tz = tz
        self.rules = [
            self._category_emotion_rules,
            self._category_hot_zone_rules,
            self._emotion_dominance_rules,
            self._tone_rules,
            self._intensity_rules,
            self._weekday_rules,
            self._category_focus_rules,
            self._emotion_diversity_rules,
            self._recency_rules,
            self._growth_rules,
        ]

    def generate(self, decisions: Iterable[Decision]) -> List[InsightRuleResult]:
        """
        Run every rule and return the ranked, deduplicated insights.

        Returns:
            Empty list for empty input; callers supply any fallback message
        """
        candidates = self.evaluate(decisions)

        results: List[InsightRuleResult] = []
        seen_titles = set()
        for candidate in candidates:
            if candidate.result.title in seen_titles:
                continue
            seen_titles.add(candidate.result.title)
            results.append(candidate.result)

        logger.debug(
            f"[INSIGHTS] {len(candidates)} candidates -> {len(results)} insights"
        )
        return results

    def evaluate(self, decisions: Iterable[Decision]) -> List[InsightCandidate]:
        """Every rule's candidates, ranked but not deduplicated."""
        decisions = list(decisions)
        if not decisions:
            return []

        ctx = self.build_context(decisions)
        candidates: List[InsightCandidate] = []
        for rule in self.rules:
            candidates.extend(rule(ctx))

        return sorted(candidates, key=lambda c: (c.priority, -c.weight))

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def build_context(self, decisions: List[Decision]) -> InsightContext:
        total = len(decisions)

        emotion_counts = {
            emotion: sum(1 for d in decisions if emotion in d.emotions) for emotion in Emotion
        }
        tone_counter = Counter(d.tone for d in decisions)
        tone_counts = {tone: tone_counter[tone] for tone in Tone}

        by_category: Dict[Category, List[Decision]] = {}
        for decision in decisions:
            by_category.setdefault(decision.category, []).append(decision)

        category_stats = []
        for category in Category:
            items = by_category.get(category)
            if not items:
                continue
            size = len(items)
            category_stats.append(CategoryStats(
                category=category,
                count=size,
                emotion_ratios={
                    emotion: _ratio(sum(1 for d in items if emotion in d.emotions), size)
                    for emotion in Emotion
                },
                hot_zone_ratio=_ratio(
                    sum(1 for d in items if d.is_high_intensity and d.is_emotionally_negative),
                    size,
                ),
            ))

        latest = max(d.timestamp for d in decisions)
        recent_count = sum(1 for d in decisions if d.timestamp >= latest - RECENT_WINDOW_MS)

        by_weekday: Dict[Weekday, List[Decision]] = {}
        for decision in decisions:
            weekday = Weekday.from_index(local_date(decision.timestamp, self.tz).weekday())
            by_weekday.setdefault(weekday, []).append(decision)

        return InsightContext(
            total=total,
            emotion_counts=emotion_counts,
            emotion_ratios={e: _ratio(c, total) for e, c in emotion_counts.items()},
            tone_counts=tone_counts,
            tone_ratios={t: _ratio(c, total) for t, c in tone_counts.items()},
            average_intensity=sum(d.intensity for d in decisions) / total,
            distinct_emotions=sum(1 for c in emotion_counts.values() if c > 0),
            category_counts={s.category: s.count for s in category_stats},
            category_stats=category_stats,
            recent_count=recent_count,
            recent_ratio=_ratio(recent_count, total),
            weekday_moods={
                weekday: calculate_daily_mood(by_weekday[weekday])
                for weekday in Weekday if weekday in by_weekday
            },
            weekday_negative_counts={
                weekday: sum(1 for d in by_weekday[weekday] if decision_valence(d) < 0)
                for weekday in Weekday if weekday in by_weekday
            },
            growth_ratio=_ratio(
                sum(1 for d in decisions if d.category.is_personal_growth), total
            ),
        )

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _category_emotion_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        """Emotions that dominate the decisions of one category."""
        out = []
        for stats in ctx.category_stats:
            if stats.count < self.CATEGORY_MIN_DECISIONS:
                continue
            area = stats.category.label
            for emotion, ratio in stats.emotion_ratios.items():
                if emotion.is_negative and ratio >= self.CATEGORY_NEGATIVE_EMOTION_RATIO:
                    out.append(InsightCandidate(1, ratio, InsightRuleResult(
                        title=f"{emotion.label} weighs on {area}",
                        description=(
                            f"{emotion.label} is present in {format_percentage(ratio)} of your "
                            f"decisions about {area.lower()}. This area is closely tied to "
                            f"that feeling when you decide."
                        ),
                        tag="Emotion by area",
                    )))
                elif emotion.is_positive and ratio >= self.CATEGORY_POSITIVE_EMOTION_RATIO:
                    out.append(InsightCandidate(2, ratio, InsightRuleResult(
                        title=f"{emotion.label} in {area}",
                        description=(
                            f"Around {format_percentage(ratio)} of your decisions about "
                            f"{area.lower()} come with feeling {emotion.value}."
                        ),
                        tag="Emotion by area",
                    )))
        return out

    def _category_hot_zone_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        """Categories where intense negative decisions concentrate."""
        out = []
        for stats in ctx.category_stats:
            if stats.count < self.CATEGORY_MIN_DECISIONS:
                continue
            if stats.hot_zone_ratio >= self.CATEGORY_HOT_ZONE_RATIO:
                area = stats.category.label
                out.append(InsightCandidate(1, stats.hot_zone_ratio, InsightRuleResult(
                    title=f"Hot zone: {area}",
                    description=(
                        f"{format_percentage(stats.hot_zone_ratio)} of your decisions about "
                        f"{area.lower()} were intense (4 or more) and carried a negative emotion."
                    ),
                    tag="Intensity by area",
                )))
        return out

    def _emotion_dominance_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        out = []
        for emotion, ratio in ctx.emotion_ratios.items():
            if ratio >= self.EMOTION_DOMINANCE_RATIO:
                out.append(InsightCandidate(3, ratio, InsightRuleResult(
                    title=f"{emotion.label} dominance",
                    description=(
                        f"{emotion.label} is present in {format_percentage(ratio)} of your "
                        f"decisions. It is the feeling that most accompanies your choices."
                    ),
                    tag="Dominant emotion",
                )))
        return out

    def _tone_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        out = []
        impulsive = ctx.tone_ratios[Tone.IMPULSIVE]
        calm = ctx.tone_ratios[Tone.CALM]

        if impulsive >= self.IMPULSIVE_RATIO:
            out.append(InsightCandidate(4, impulsive, InsightRuleResult(
                title="Quick reactions",
                description=(
                    f"{format_percentage(impulsive)} of your decisions were impulsive: "
                    f"intense and driven by a negative emotion."
                ),
                tag="Tone",
            )))
        if calm >= self.CALM_RATIO:
            out.append(InsightCandidate(5, calm, InsightRuleResult(
                title="Anchor of calm",
                description=f"You stayed calm in {format_percentage(calm)} of your decisions.",
                tag="Tone",
            )))
        return out

    def _intensity_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        out = []
        avg = ctx.average_intensity
        if avg >= self.HIGH_AVERAGE_INTENSITY:
            out.append(InsightCandidate(4, 0.0, InsightRuleResult(
                title="High-intensity period",
                description=(
                    f"Your decisions averaged an intensity of {avg:.1f} out of 5. "
                    f"Most choices were lived with a strong charge."
                ),
                tag="Intensity",
            )))
        elif ctx.total >= self.GENTLE_MIN_DECISIONS and avg <= self.GENTLE_AVERAGE_INTENSITY:
            out.append(InsightCandidate(5, 0.0, InsightRuleResult(
                title="Gentle decisions",
                description=(
                    f"Your decisions averaged an intensity of {avg:.1f} out of 5. "
                    f"Most choices felt light."
                ),
                tag="Intensity",
            )))
        return out

    def _weekday_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        """Weekday whose aggregated mood is negative, the most negative one if several."""
        negative_days = [
            weekday for weekday, mood in ctx.weekday_moods.items() if mood == DailyMood.NEGATIVE
        ]
        if not negative_days:
            return []
        worst = max(negative_days, key=lambda w: ctx.weekday_negative_counts.get(w, 0))
        return [InsightCandidate(5, 0.0, InsightRuleResult(
            title="Heaviest day of the week",
            description=(
                f"{worst.label} is the day of the week where negative emotions "
                f"outweigh positive ones in your decisions."
            ),
            tag="Weekly rhythm",
        ))]

    def _category_focus_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        out = []
        for category, count in ctx.category_counts.items():
            ratio = _ratio(count, ctx.total)
            if ratio >= self.CATEGORY_FOCUS_RATIO:
                out.append(InsightCandidate(6, ratio, InsightRuleResult(
                    title=f"Main area: {category.label}",
                    description=(
                        f"About {format_percentage(ratio)} of your decisions were about "
                        f"{category.label.lower()}."
                    ),
                    tag="Areas",
                )))
        return out

    def _emotion_diversity_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        if ctx.distinct_emotions > self.NARROW_EMOTIONS_MAX:
            return []
        noun = "emotion" if ctx.distinct_emotions == 1 else "emotions"
        return [InsightCandidate(6, 0.0, InsightRuleResult(
            title="Narrow emotional range",
            description=(
                f"You only used {ctx.distinct_emotions} {noun} out of {len(Emotion)} possible."
            ),
            tag="Emotional pattern",
        ))]

    def _recency_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        if ctx.recent_ratio < self.RECENT_RATIO:
            return []
        return [InsightCandidate(6, ctx.recent_ratio, InsightRuleResult(
            title="Many decisions in little time",
            description=(
                f"{format_percentage(ctx.recent_ratio)} of your decisions were recorded "
                f"in the last 48 hours of the period."
            ),
            tag="Rhythm",
        ))]

    def _growth_rules(self, ctx: InsightContext) -> List[InsightCandidate]:
        if ctx.growth_ratio < self.GROWTH_RATIO:
            return []
        return [InsightCandidate(6, ctx.growth_ratio, InsightRuleResult(
            title="Growth momentum",
            description=(
                f"{format_percentage(ctx.growth_ratio)} of your decisions cared for your "
                f"health, relationships, habits or free time."
            ),
            tag="Growth",
        ))]


def generate_insights(
    decisions: Iterable[Decision],
    tz: Optional[tzinfo] = None,
) -> List[InsightRuleResult]:
    """Convenience function running a fresh engine over ``decisions``."""
    return InsightRuleEngine(tz=tz).generate(decisions)
