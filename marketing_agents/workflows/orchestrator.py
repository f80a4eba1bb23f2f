"""
Workflow orchestrator.

Public entry point for running a named workflow:

    execute(workflow_type, context)
        -> cache lookup (hit: return cached data, cache_hit=True)
        -> single-flight join of an identical in-flight run
        -> pipeline
        -> cache write on success

``execute`` never raises. Anything escaping a pipeline is logged once here
and returned as ``WorkflowResult(success=False, errors=[message])``.

Cached data is copied on the way in and on the way out, so callers never
share a mutable result.
"""

import copy
import logging
import time
from typing import Any, Dict, Optional, Union

from marketing_agents.shared.cache import (
    SingleFlight,
    TTLWorkflowCache,
    WorkflowCache,
    build_cache_key,
)
from marketing_agents.shared.contracts import WorkflowContext, WorkflowResult
from marketing_agents.shared.logging.config import log_workflow_event
from marketing_agents.workflows.config import OrchestratorConfig, DEFAULT_CONFIG
from marketing_agents.workflows.pipelines import WorkflowPipelines
from marketing_agents.workflows.schemas import StageOutcome, WorkflowType


logger = logging.getLogger(__name__)


class UnknownWorkflowError(ValueError):
    """Raised when a workflow type name is not recognised."""

    def __init__(self, workflow_type: str):
        super().__init__(f"Unknown workflow type: {workflow_type}")
        self.workflow_type = workflow_type


def resolve_workflow_type(workflow_type: Union[str, WorkflowType]) -> WorkflowType:
    try:
        return WorkflowType(workflow_type)
    except ValueError:
        raise UnknownWorkflowError(str(workflow_type)) from None


class WorkflowOrchestrator:
    """Runs workflows with caching and in-flight de-duplication."""

    def __init__(
        self,
        pipelines: WorkflowPipelines,
        cache: Optional[WorkflowCache] = None,
        config: Optional[OrchestratorConfig] = None,
    ):
        self.pipelines = pipelines
        self.config = config or DEFAULT_CONFIG
        self.cache = cache if cache is not None else TTLWorkflowCache(self.config.cache_ttl_seconds)
        self.single_flight = SingleFlight()

    async def execute(
        self,
        workflow_type: Union[str, WorkflowType],
        context: WorkflowContext,
    ) -> WorkflowResult:
        """
        Run a workflow and return a fully formed result.

        Args:
            workflow_type: Workflow name or WorkflowType
            context: Caller context; ``website`` or ``business_name`` keys the cache

        Returns:
            WorkflowResult; failures are reported with success=False
        """
        start_time = time.perf_counter()
        type_name = getattr(workflow_type, "value", workflow_type)
        _log = f"[workflow={type_name}] "

        def elapsed_ms() -> float:
            return (time.perf_counter() - start_time) * 1000

        try:
            resolved = resolve_workflow_type(workflow_type)
            key = build_cache_key(
                resolved.value, context, self.pipelines.cache_variant(resolved, context)
            )

            if self.config.enable_caching:
                lookup = self.cache.get(key)
                if lookup.hit:
                    logger.info(f"{_log}Cache hit | key={key}")
                    return WorkflowResult.ok(
                        resolved.value,
                        copy.deepcopy(lookup.value),
                        [],
                        elapsed_ms(),
                        cache_hit=True,
                    )

            logger.info(f"{_log}Starting | key={key}")
            if self.config.enable_single_flight:
                outcome = await self.single_flight.run(key, lambda: self._run(resolved, context, key))
            else:
                outcome = await self._run(resolved, context, key)

        except Exception as e:
            logger.exception(f"{_log}Workflow failed: {e}")
            log_workflow_event(
                "workflow_failed",
                {"workflow_type": type_name, "error": str(e)},
                logger=logger,
            )
            return WorkflowResult.failed(str(type_name), [str(e) or type(e).__name__], elapsed_ms())

        duration_ms = elapsed_ms()
        logger.info(
            f"{_log}Complete | capabilities={outcome.capabilities_executed}, "
            f"duration={duration_ms:.0f}ms"
        )
        log_workflow_event(
            "workflow_completed",
            {
                "workflow_type": resolved.value,
                "capabilities_executed": outcome.capabilities_executed,
                "execution_time_ms": round(duration_ms),
            },
            logger=logger,
        )
        # Joined callers share one outcome; each gets its own copy
        return WorkflowResult.ok(
            resolved.value,
            copy.deepcopy(outcome.result),
            outcome.capabilities_executed,
            duration_ms,
        )

    async def _run(self, workflow_type: WorkflowType, context: WorkflowContext, key: str) -> StageOutcome:
        outcome = await self.pipelines.get(workflow_type)(context)
        if self.config.enable_caching:
            self.cache.set(key, copy.deepcopy(outcome.result))
        return outcome

    def health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "capabilities_registered": len(self.pipelines.registry),
            "cache_size": len(self.cache),
            "in_flight": len(self.single_flight),
        }

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("[workflow] Cache cleared")
