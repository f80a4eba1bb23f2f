"""Contracts shared between routing, validation and workflows."""

from marketing_agents.shared.contracts.provider_output import (
    ProviderMetadata,
    ProviderResponse,
)
from marketing_agents.shared.contracts.plan_output import (
    UserPreferences,
    RoutingContext,
    IntentAnalysis,
    Task,
    Plan,
    ExecutionError,
    ExecutionResult,
)
from marketing_agents.shared.contracts.validation_output import (
    CriticResult,
    ValidationScores,
    ValidationResult,
)
from marketing_agents.shared.contracts.workflow_output import (
    WorkflowContext,
    RetrievalResult,
    WorkflowMetadata,
    WorkflowResult,
)

__all__ = [
    "ProviderMetadata",
    "ProviderResponse",
    "UserPreferences",
    "RoutingContext",
    "IntentAnalysis",
    "Task",
    "Plan",
    "ExecutionError",
    "ExecutionResult",
    "CriticResult",
    "ValidationScores",
    "ValidationResult",
    "WorkflowContext",
    "RetrievalResult",
    "WorkflowMetadata",
    "WorkflowResult",
]
