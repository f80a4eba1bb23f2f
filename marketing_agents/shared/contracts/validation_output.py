"""
Validation output contracts.

Defines per-critic results and the aggregated multi-critic validation
result used to gate generated analyses.
"""

from typing import List
from pydantic import BaseModel, Field


class CriticResult(BaseModel):
    """Score and critiques issued by a single critic."""

    critic: str
    score: int = Field(ge=0, le=100)
    critiques: List[str] = Field(default_factory=list)


class ValidationScores(BaseModel):
    """Per-dimension critic scores."""

    framework_accuracy: int = Field(ge=0, le=100)
    specificity: int = Field(ge=0, le=100)
    actionability: int = Field(ge=0, le=100)


class ValidationResult(BaseModel):
    """Aggregated verdict of the multi-critic validator."""

    is_valid: bool
    scores: ValidationScores
    overall_score: int = Field(ge=0, le=100)
    critiques: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(
        default_factory=list,
        description="First critiques across all critics, unranked",
    )
