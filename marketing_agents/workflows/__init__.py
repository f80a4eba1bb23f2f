"""
Workflow orchestration: fixed multi-stage pipelines behind a cached,
single-flight entry point.
"""

from marketing_agents.workflows.schemas import WorkflowType, StageOutcome
from marketing_agents.workflows.config import OrchestratorConfig
from marketing_agents.workflows.retrieval import RetrievalClient, NullRetrievalClient
from marketing_agents.workflows.pipelines import WorkflowPipelines
from marketing_agents.workflows.orchestrator import WorkflowOrchestrator, UnknownWorkflowError

__all__ = [
    "WorkflowType",
    "StageOutcome",
    "OrchestratorConfig",
    "RetrievalClient",
    "NullRetrievalClient",
    "WorkflowPipelines",
    "WorkflowOrchestrator",
    "UnknownWorkflowError",
]
