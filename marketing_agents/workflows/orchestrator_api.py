"""
FastAPI endpoints for the workflow orchestrator.

Provides the API to run a named workflow against a business context and
to inspect or reset the orchestrator's cache.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from marketing_agents.providers.catalog import build_default_registry
from marketing_agents.shared.contracts import WorkflowContext, WorkflowResult
from marketing_agents.workflows.orchestrator import WorkflowOrchestrator
from marketing_agents.workflows.pipelines import WorkflowPipelines


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orchestrator", tags=["orchestrator"])

# Orchestrator instance (shared across requests so the cache is too)
_orchestrator: Optional[WorkflowOrchestrator] = None


def get_orchestrator() -> WorkflowOrchestrator:
    """Get or create the shared orchestrator instance."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = WorkflowOrchestrator(WorkflowPipelines(build_default_registry()))
    return _orchestrator


# ============================================================================
# Request Models
# ============================================================================


class WorkflowRunRequest(BaseModel):
    """Request to run a workflow."""

    workflow_type: str = Field(
        description="strategic-analysis | content-generation | competitor-intelligence "
        "| quick-analysis | custom-pipeline | agent-routing"
    )
    context: WorkflowContext = Field(default_factory=WorkflowContext)


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/run", response_model=WorkflowResult)
async def run_workflow(
    request: WorkflowRunRequest,
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Run a workflow.

    Always answers 200 with a WorkflowResult; failures are reported through
    ``success`` and ``errors``.
    """
    logger.info(
        f"[api=run] Workflow requested | type={request.workflow_type}, "
        f"business={request.context.business_name or request.context.website}"
    )
    return await orchestrator.execute(request.workflow_type, request.context)


@router.get("/health")
async def orchestrator_health(
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Orchestrator health and cache statistics."""
    return orchestrator.health()


@router.delete("/cache")
async def clear_cache(
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Drop every cached workflow result."""
    orchestrator.clear_cache()
    return {"status": "cleared"}
