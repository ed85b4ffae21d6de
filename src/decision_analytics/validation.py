"""Upstream validation for decision records.

Every analytics function assumes its input already passed these checks.
"""

import logging
from typing import Iterable, Tuple

from .models import Category, Emotion

logger = logging.getLogger(__name__)

MIN_INTENSITY = 1
MAX_INTENSITY = 5
MAX_EMOTIONS = 2


class DecisionValidationError(ValueError):
    """Raised when a decision record breaks one of the journal invariants."""


def _parse_emotion(value) -> Emotion:
    if isinstance(value, Emotion):
        return value
    try:
        return Emotion(str(value).strip().lower())
    except ValueError:
        raise DecisionValidationError(f"Unknown emotion: {value!r}") from None


def _parse_category(value) -> Category:
    if value is None:
        raise DecisionValidationError("A valid category is required.")
    if isinstance(value, Category):
        return value
    try:
        return Category(str(value).strip().lower())
    except ValueError:
        raise DecisionValidationError(f"Unknown category: {value!r}") from None


def validate_decision(
    text: str,
    emotions: Iterable,
    intensity: int,
    category,
) -> Tuple[str, Tuple[Emotion, ...], int, Category]:
    """
    Check a raw decision and return its normalized fields.

    Args:
        text: Free text describing the decision
        emotions: One or two emotion tags (Emotion members or their values)
        intensity: Perceived intensity, 1..5
        category: Category member or value

    Returns:
        Tuple of (stripped text, emotions without duplicates, intensity, category)

    Raises:
        DecisionValidationError: if any invariant is violated
    """
    if text is None or not str(text).strip():
        raise DecisionValidationError("Text must not be empty.")

    parsed = []
    for value in emotions or ():
        emotion = _parse_emotion(value)
        if emotion not in parsed:
            parsed.append(emotion)

    if not parsed:
        raise DecisionValidationError("Select at least one emotion.")
    if Emotion.NORMAL in parsed and len(parsed) > 1:
        raise DecisionValidationError("NORMAL cannot be combined with other emotions.")
    if len(parsed) > MAX_EMOTIONS:
        raise DecisionValidationError(
            f"A decision carries at most {MAX_EMOTIONS} emotions."
        )

    if isinstance(intensity, bool) or not isinstance(intensity, int):
        raise DecisionValidationError(f"Intensity must be an integer, got {intensity!r}.")
    if not MIN_INTENSITY <= intensity <= MAX_INTENSITY:
        raise DecisionValidationError(
            f"Intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}."
        )

    parsed_category = _parse_category(category)

    logger.debug(
        f"[VALIDATION] Accepted decision: emotions={[e.value for e in parsed]}, "
        f"intensity={intensity}, category={parsed_category.value}"
    )
    return str(text).strip(), tuple(parsed), intensity, parsed_category
