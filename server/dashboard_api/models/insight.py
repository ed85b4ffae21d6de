"""Insight API models."""
from pydantic import BaseModel


class Insight(BaseModel):
    """Templated observation derived from the journal."""

    title: str
    description: str
    tag: str
