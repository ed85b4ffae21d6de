"""Decision journal API models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from decision_analytics import Category, Decision, Emotion, Tone


class DecisionCreate(BaseModel):
    """Payload for recording or editing a decision."""

    text: str
    emotions: list[Emotion] = Field(min_length=1, max_length=2)
    intensity: int = Field(ge=1, le=5)
    category: Category
    timestamp: Optional[int] = Field(
        default=None, description="Epoch milliseconds; defaults to now"
    )


class DecisionRecord(BaseModel):
    """Stored decision with its derived tone."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: int
    text: str
    emotions: list[Emotion]
    intensity: int
    category: Category
    tone: Tone

    @classmethod
    def from_decision(cls, decision: Decision) -> "DecisionRecord":
        return cls(
            id=decision.id,
            timestamp=decision.timestamp,
            text=decision.text,
            emotions=list(decision.emotions),
            intensity=decision.intensity,
            category=decision.category,
            tone=decision.tone,
        )
