"""
Workflow pipelines.

Each workflow is a fixed sequence of stages. A stage is one optional
retrieval lookup plus one capability call whose response goes through the
tolerant parser. Stages are isolated: a stage that fails or returns
unparsable output contributes None and later stages still run. Only
errors outside a stage (an unknown quick-analysis capability, a malformed
custom pipeline or routed task) escape to the orchestrator.
"""

import json
import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional

from marketing_agents.providers.registry import CapabilityRegistry
from marketing_agents.routing.config import RouterConfig
from marketing_agents.routing.decomposition import make_task_id
from marketing_agents.routing.executor import PlanExecutor
from marketing_agents.routing.router import AgentRouter
from marketing_agents.routing.strategy import estimate_duration
from marketing_agents.shared.contracts import (
    ExecutionResult,
    Plan,
    RetrievalResult,
    RoutingContext,
    Task,
    WorkflowContext,
)
from marketing_agents.shared.parsing import parse_json_tolerant
from marketing_agents.workflows import prompts
from marketing_agents.workflows.config import OrchestratorConfig, DEFAULT_CONFIG
from marketing_agents.workflows.retrieval import NullRetrievalClient, RetrievalClient
from marketing_agents.workflows.schemas import StageOutcome, WorkflowType


logger = logging.getLogger(__name__)

# Fixed weights per non-null strategic-analysis input. This measures
# coverage, not answer quality.
CONFIDENCE_WEIGHTS: Dict[str, int] = {
    "swot": 30,
    "porter": 30,
    "economic": 20,
    "rag_context": 20,
}

PORTER_QUICK_WINS_LIMIT = 3

Pipeline = Callable[[WorkflowContext], Awaitable[StageOutcome]]


def calculate_confidence_score(synthesis: Dict[str, Any]) -> int:
    return sum(
        weight
        for key, weight in CONFIDENCE_WEIGHTS.items()
        if synthesis.get(key) is not None
    )


def extract_recommendations(synthesis: Dict[str, Any]) -> List[str]:
    """
    Collect recommendations from the strategic-analysis stages.

    High-priority SWOT insight recommendations come first, followed by the
    actions of the first three Porter quick wins. Malformed entries are
    skipped.
    """
    recommendations: List[str] = []

    swot = synthesis.get("swot")
    insights = swot.get("insights") if isinstance(swot, dict) else None
    if isinstance(insights, list):
        for insight in insights:
            if (
                isinstance(insight, dict)
                and insight.get("priority") == "high"
                and insight.get("recommendation")
            ):
                recommendations.append(str(insight["recommendation"]))

    porter = synthesis.get("porter")
    quick_wins = porter.get("quick_wins") if isinstance(porter, dict) else None
    if isinstance(quick_wins, list):
        for quick_win in quick_wins[:PORTER_QUICK_WINS_LIMIT]:
            if isinstance(quick_win, dict) and quick_win.get("action"):
                recommendations.append(str(quick_win["action"]))

    return recommendations


def build_routing_context(task_identifier: str, context: WorkflowContext) -> RoutingContext:
    return RoutingContext(
        task_identifier=task_identifier,
        input={
            key: value
            for key, value in context.model_dump(exclude_none=True).items()
            if key != "custom_data"
        },
        intelligence=context.custom_data.get("intelligence"),
        preferences=context.custom_data.get("preferences") or {},
    )


def summarize_execution(execution: ExecutionResult) -> Dict[str, Any]:
    return {
        "plan_id": execution.plan.plan_id,
        "results": {key: response.content for key, response in execution.results.items()},
        "errors": [error.model_dump() for error in execution.errors],
        "execution_time_ms": execution.execution_time_ms,
    }


class WorkflowPipelines:
    """The fixed multi-stage pipelines, bound to a registry and retrieval client."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        retrieval: Optional[RetrievalClient] = None,
        config: Optional[OrchestratorConfig] = None,
        router_config: Optional[RouterConfig] = None,
    ):
        self.registry = registry
        self.retrieval = retrieval or NullRetrievalClient()
        self.config = config or DEFAULT_CONFIG
        self.router_config = router_config
        self.executor = PlanExecutor(registry, router_config)

    def get(self, workflow_type: WorkflowType) -> Pipeline:
        return {
            WorkflowType.STRATEGIC_ANALYSIS: self.strategic_analysis,
            WorkflowType.CONTENT_GENERATION: self.content_generation,
            WorkflowType.COMPETITOR_INTELLIGENCE: self.competitor_intelligence,
            WorkflowType.QUICK_ANALYSIS: self.quick_analysis,
            WorkflowType.CUSTOM_PIPELINE: self.custom_pipeline,
            WorkflowType.AGENT_ROUTING: self.agent_routing,
        }[workflow_type]

    def cache_variant(self, workflow_type: WorkflowType, context: WorkflowContext) -> Optional[str]:
        """Extra cache key component for workflows whose work depends on custom_data."""
        if workflow_type == WorkflowType.AGENT_ROUTING:
            task_identifier = context.custom_data.get("task_identifier")
            return str(task_identifier) if task_identifier else None
        return None

    # ------------------------------------------------------------------
    # Stage helpers
    # ------------------------------------------------------------------

    async def _retrieve(
        self, query: str, context: WorkflowContext, _log: str
    ) -> Optional[RetrievalResult]:
        if not context.scope_id:
            return None
        try:
            return await self.retrieval.query(query, context.scope_id)
        except Exception as e:
            logger.warning(f"{_log}Retrieval failed, continuing without prior context: {e}")
            return None

    async def _run_stage(
        self,
        stage: str,
        capability: str,
        prompt: str,
        executed: List[str],
        _log: str,
        attempts: int = 1,
    ) -> Optional[Any]:
        """
        Run one isolated stage and return its parsed JSON, or None.

        With ``attempts > 1`` an unparsable response is retried with an
        escalating strictness instruction. A provider error ends the stage.
        """
        _log = f"{_log}[stage={stage}] "
        provider = self.registry.find(capability)
        if provider is None:
            logger.warning(f"{_log}Capability '{capability}' not registered, skipping")
            return None

        for attempt in range(attempts):
            start_time = time.perf_counter()
            try:
                response = await provider.execute(prompts.with_strictness(prompt, attempt), {})
            except Exception as e:
                logger.error(f"{_log}Stage failed: {e}")
                return None
            duration_ms = (time.perf_counter() - start_time) * 1000

            parsed = parse_json_tolerant(response.content)
            if parsed is not None:
                logger.info(
                    f"{_log}Stage complete | capability={capability}, "
                    f"attempt={attempt + 1}, duration={duration_ms:.0f}ms"
                )
                executed.append(capability)
                return parsed

            logger.warning(
                f"{_log}Unparsable response | attempt={attempt + 1}/{attempts}, "
                f"chars={len(response.content)}"
            )

        return None

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    async def strategic_analysis(self, context: WorkflowContext) -> StageOutcome:
        """
        SWOT, Porter's 5 Forces and economic intelligence over optional prior context.

        Porter needs a website and the economic stage needs an industry;
        either is skipped when its input is missing.
        """
        _log = "[workflow=strategic-analysis] "
        executed: List[str] = []

        retrieval = await self._retrieve(prompts.build_strategic_query(context), context, _log)

        swot = await self._run_stage(
            "swot", "swot-analysis", prompts.build_swot_prompt(context, retrieval), executed, _log
        )

        porter = None
        if context.website:
            porter = await self._run_stage(
                "porter",
                "strategic-analysis",
                prompts.build_porter_prompt(context, retrieval),
                executed,
                _log,
            )

        economic = None
        if context.industry:
            economic = await self._run_stage(
                "economic",
                "economic-intelligence",
                prompts.build_economic_prompt(context),
                executed,
                _log,
            )

        synthesis = {
            "swot": swot,
            "porter": porter,
            "economic": economic,
            "rag_context": retrieval.model_dump() if retrieval else None,
        }

        return StageOutcome(
            result={
                "business_name": context.business_name,
                "website": context.website,
                "industry": context.industry,
                "swot_analysis": swot,
                "porter_analysis": porter,
                "economic_intelligence": economic,
                "synthesis": synthesis,
                "confidence_score": calculate_confidence_score(synthesis),
                "recommendations": extract_recommendations(synthesis),
            },
            capabilities_executed=executed,
        )

    async def content_generation(self, context: WorkflowContext) -> StageOutcome:
        """Brand-aware content: personalization strategy, then structured content."""
        _log = "[workflow=content-generation] "
        executed: List[str] = []

        retrieval = await self._retrieve(prompts.build_brand_query(context), context, _log)

        strategy = await self._run_stage(
            "strategy",
            "personalization",
            prompts.build_content_strategy_prompt(context, retrieval),
            executed,
            _log,
        )

        content = await self._run_stage(
            "content",
            "marketing-content",
            prompts.build_content_prompt(context, retrieval, strategy),
            executed,
            _log,
            attempts=self.config.structured_attempts,
        )

        return StageOutcome(
            result={
                "content": content,
                "strategy": strategy,
                "business_context": retrieval.model_dump() if retrieval else None,
                "metadata": {
                    "business_name": context.business_name,
                    "industry": context.industry,
                    "target_audience": context.target_audience,
                },
            },
            capabilities_executed=executed,
        )

    async def competitor_intelligence(self, context: WorkflowContext) -> StageOutcome:
        executed: List[str] = []
        analysis = await self._run_stage(
            "competitors",
            "competitive-intelligence",
            prompts.build_competitor_prompt(context),
            executed,
            "[workflow=competitor-intelligence] ",
        )
        return StageOutcome(result=analysis, capabilities_executed=executed)

    async def quick_analysis(self, context: WorkflowContext) -> StageOutcome:
        """
        Single capability call with no parsing.

        Raises:
            CapabilityNotFoundError: If ``custom_data.agent_id`` is not registered
        """
        capability = context.custom_data.get("agent_id") or "strategic-analysis"
        provider = self.registry.get(capability)

        prompt = context.custom_data.get("prompt") or json.dumps(
            context.model_dump(exclude_none=True), default=str
        )
        logger.info(f"[workflow=quick-analysis] Running | capability={capability}")
        response = await provider.execute(prompt, {})

        return StageOutcome(result=response.model_dump(), capabilities_executed=[capability])

    async def custom_pipeline(self, context: WorkflowContext) -> StageOutcome:
        """
        Run a caller-chosen list of capabilities as a sequential plan.

        Each capability sees the accumulated output of those before it.
        Per-capability failures are reported in the result, not raised.

        Raises:
            ValueError: If ``custom_data.capabilities`` is not a non-empty list of names
        """
        capabilities = context.custom_data.get("capabilities")
        if (
            not isinstance(capabilities, list)
            or not capabilities
            or not all(isinstance(name, str) and name for name in capabilities)
        ):
            raise ValueError("custom-pipeline requires custom_data.capabilities: a list of names")

        tasks = [
            Task(
                task_id=make_task_id(index, "primary" if index == 0 else "supporting"),
                type="primary" if index == 0 else "supporting",
                description=f"Execute {name}",
                priority="high" if index == 0 else "medium",
                estimated_duration_seconds=self.executor.config.primary_task_duration
                if index == 0
                else self.executor.config.supporting_task_duration,
                capability=name,
            )
            for index, name in enumerate(capabilities)
        ]
        plan = Plan(
            plan_id=uuid.uuid4().hex[:12],
            intent="custom pipeline",
            primary_capability=capabilities[0],
            supporting_capabilities=capabilities[1:],
            tasks=tasks,
            strategy="sequential",
            estimated_total_duration_seconds=estimate_duration(tasks, "sequential"),
            confidence=1.0,
        )

        execution = await self.executor.execute(
            plan, build_routing_context(WorkflowType.CUSTOM_PIPELINE.value, context)
        )

        return StageOutcome(
            result=summarize_execution(execution),
            capabilities_executed=list(execution.results),
        )

    async def agent_routing(self, context: WorkflowContext) -> StageOutcome:
        """
        Plan a task with the agent router and execute the plan.

        ``custom_data.task_identifier`` names the task (e.g. "business_audit");
        ``custom_data.preferences`` and ``custom_data.intelligence`` are
        passed through to planning and execution. Provider failures are
        reported in the result, not raised.

        Raises:
            ValueError: If ``custom_data.task_identifier`` is missing
            CapabilityNotFoundError: If the planning capability is not registered
        """
        task_identifier = context.custom_data.get("task_identifier")
        if not isinstance(task_identifier, str) or not task_identifier:
            raise ValueError("agent-routing requires custom_data.task_identifier")

        router = AgentRouter(
            self.registry,
            self.registry.get(self.config.planning_capability),
            self.router_config,
        )
        logger.info(f"[workflow=agent-routing] Routing | task={task_identifier}")
        execution = await router.route_and_execute(build_routing_context(task_identifier, context))

        result = summarize_execution(execution)
        result["task_identifier"] = task_identifier
        result["plan"] = execution.plan.model_dump()

        return StageOutcome(
            result=result,
            capabilities_executed=list(
                dict.fromkeys(
                    response.metadata.provider for response in execution.results.values()
                )
            ),
        )
