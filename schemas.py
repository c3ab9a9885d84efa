# FILE: schemas.py
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Feedback(BaseModel):
    """
    Structured feedback for one scored answer.
    Stored as-is in the answer's JSON column.
    """

    model_config = ConfigDict(extra="forbid")

    overall: str = Field(..., description="Overall assessment of the answer")
    strengths: List[str] = Field(..., description="What the answer did well")
    improvements: List[str] = Field(..., description="What the answer should improve")


class ScoringResult(BaseModel):
    """Score and feedback returned by the scoring provider for one answer."""

    model_config = ConfigDict(extra="forbid")

    score: int = Field(..., ge=0, le=100, description="Score 0-100")
    feedback: Feedback
