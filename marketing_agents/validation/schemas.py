"""
Schemas for the critique-and-improve loop.

Defines the LangGraph state that flows through the generate/validate
cycle and the outcome handed back to callers.
"""

from typing import TypedDict, List, Optional, Annotated
import operator

from pydantic import BaseModel, Field

from marketing_agents.shared.contracts import ValidationResult


class CritiqueState(TypedDict):
    """
    State schema for the critique graph.

    ``iteration`` counts generation calls made so far and is the only
    thing the router consults, together with the latest validation, to
    decide between another attempt and stopping.
    """

    # Inputs
    prompt: str
    business_context: str
    max_iterations: int

    # Prompt used for the next generation (original + feedback on retries)
    current_prompt: str

    # Latest attempt
    output: Optional[str]
    validation: Optional[ValidationResult]
    iteration: int

    # One entry per completed attempt
    history: Annotated[List[dict], operator.add]

    # Debug/tracking
    session_id: Optional[str]


class AttemptRecord(BaseModel):
    """Summary of a single generate/validate attempt."""

    iteration: int
    overall_score: int
    is_valid: bool


class CritiqueOutcome(BaseModel):
    """Result of running the critique loop."""

    output: str
    validation: ValidationResult
    iterations: int
    history: List[AttemptRecord] = Field(default_factory=list)
