"""Tone classification for a single decision."""

from typing import Iterable

from .models import Emotion, Tone

CALM_MAX_INTENSITY = 3
IMPULSIVE_MIN_INTENSITY = 4


def classify_tone(emotions: Iterable[Emotion], intensity: int) -> Tone:
    """
    Classify a decision's tone from its emotions and intensity.

    Rules, first match wins:
    - CALM: every emotion is positive and intensity <= 3
    - IMPULSIVE: at least one negative emotion and intensity >= 4
    - NEUTRAL: everything else (NORMAL only, mixed, or no match)
    """
    emotions = tuple(emotions)

    all_positive = bool(emotions) and all(e.is_positive for e in emotions)
    has_negative = any(e.is_negative for e in emotions)

    if all_positive and intensity <= CALM_MAX_INTENSITY:
        return Tone.CALM
    if has_negative and intensity >= IMPULSIVE_MIN_INTENSITY:
        return Tone.IMPULSIVE
    return Tone.NEUTRAL
