"""
Workflow contracts.

Defines the caller-facing context and the terminal WorkflowResult
returned by the workflow orchestrator, plus the retrieval collaborator's
result shape.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class WorkflowContext(BaseModel):
    """
    Caller-supplied context for a workflow run.

    ``website`` (or ``business_name`` when no website is known) is the
    stable identifying field used for cache keying.
    """

    website: Optional[str] = None
    business_name: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    target_audience: Optional[str] = None
    custom_data: Dict[str, Any] = Field(default_factory=dict)
    scope_id: Optional[str] = Field(
        default=None, description="Scope for retrieval lookups (e.g. a demo id)"
    )


class RetrievalResult(BaseModel):
    """Answer and supporting snippets from the retrieval collaborator."""

    answer: str = ""
    snippets: List[str] = Field(default_factory=list)


class WorkflowMetadata(BaseModel):
    """Bookkeeping for a finished workflow run."""

    workflow_type: str
    capabilities_executed: List[str] = Field(default_factory=list)
    execution_time_ms: float = 0.0
    cache_hit: bool = False


class WorkflowResult(BaseModel):
    """Terminal artifact returned to the caller of a workflow."""

    success: bool
    data: Any = None
    metadata: WorkflowMetadata
    errors: Optional[List[str]] = None

    @classmethod
    def ok(
        cls,
        workflow_type: str,
        data: Any,
        capabilities_executed: List[str],
        execution_time_ms: float,
        cache_hit: bool = False,
    ) -> "WorkflowResult":
        return cls(
            success=True,
            data=data,
            metadata=WorkflowMetadata(
                workflow_type=workflow_type,
                capabilities_executed=list(capabilities_executed),
                execution_time_ms=execution_time_ms,
                cache_hit=cache_hit,
            ),
        )

    @classmethod
    def failed(
        cls,
        workflow_type: str,
        errors: List[str],
        execution_time_ms: float,
    ) -> "WorkflowResult":
        return cls(
            success=False,
            data=None,
            metadata=WorkflowMetadata(
                workflow_type=workflow_type,
                execution_time_ms=execution_time_ms,
            ),
            errors=list(errors),
        )
