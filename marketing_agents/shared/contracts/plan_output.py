"""
Routing and execution plan contracts.

Defines the request context handed to the router, the intent
classification, the immutable execution plan and the execution result
the plan executor fills in as providers complete.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketing_agents.shared.contracts.provider_output import ProviderResponse


TaskType = Literal["primary", "supporting", "synthesis"]
TaskPriority = Literal["high", "medium", "low"]
ExecutionStrategy = Literal["sequential", "parallel", "hybrid"]
Complexity = Literal["simple", "moderate", "complex"]


class UserPreferences(BaseModel):
    """Caller hints that influence strategy selection."""

    speed: Optional[Literal["fast", "balanced", "thorough"]] = None
    depth: Optional[Literal["quick", "standard", "comprehensive"]] = None


class RoutingContext(BaseModel):
    """A loosely specified request to be planned and executed."""

    task_identifier: str = Field(description="Tool/task identifier, e.g. 'business_audit'")
    input: Dict[str, Any] = Field(default_factory=dict, description="Arbitrary input payload")
    intelligence: Optional[Any] = Field(
        default=None, description="Pre-gathered business intelligence"
    )
    preferences: UserPreferences = Field(default_factory=UserPreferences)


class IntentAnalysis(BaseModel):
    """Classification of a request produced by the intent analyzer."""

    intent: str
    complexity: Complexity = "moderate"
    required_capabilities: List[str] = Field(default_factory=list)
    confidence: float = 0.5

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> float:
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"confidence must be numeric, got {value!r}")
        return min(1.0, max(0.0, value))


class Task(BaseModel):
    """One unit of work inside a plan."""

    model_config = ConfigDict(frozen=True)

    task_id: str = Field(description="Opaque identifier used for dependency references")
    type: TaskType
    description: str = Field(description="Human-readable summary of the work")
    priority: TaskPriority
    estimated_duration_seconds: float = Field(ge=0)
    dependencies: List[str] = Field(
        default_factory=list, description="task_ids that must complete first"
    )
    capability: Optional[str] = Field(
        default=None, description="Capability bound at decomposition time, if any"
    )


class Plan(BaseModel):
    """A decomposed, strategy-assigned set of tasks ready for execution."""

    model_config = ConfigDict(frozen=True)

    plan_id: str
    intent: str = ""
    primary_capability: str
    supporting_capabilities: List[str] = Field(default_factory=list)
    tasks: List[Task]
    strategy: ExecutionStrategy
    estimated_total_duration_seconds: float = Field(ge=0)
    confidence: float = Field(ge=0.0, le=1.0)


class ExecutionError(BaseModel):
    """A per-provider failure recorded during plan execution."""

    capability: str
    message: str


class ExecutionResult(BaseModel):
    """
    Outcome of running a plan.

    ``results`` and ``errors`` are filled in incrementally by the executor.
    """

    plan: Plan
    results: Dict[str, ProviderResponse] = Field(default_factory=dict)
    execution_time_ms: float = 0.0
    errors: List[ExecutionError] = Field(default_factory=list)

    def record_success(self, key: str, response: ProviderResponse) -> None:
        self.results[key] = response

    def record_error(self, capability: str, error: BaseException) -> None:
        self.errors.append(
            ExecutionError(capability=capability, message=str(error) or type(error).__name__)
        )
