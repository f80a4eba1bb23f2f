"""
Intelligent agent router.

Turns a loosely specified request into a concrete plan:
1. Classify intent and complexity
2. Select primary and supporting capabilities
3. Decompose into dependency-aware tasks
4. Pick an execution strategy and estimate duration

and runs the plan through the PlanExecutor.
"""

import logging
import uuid
from typing import Optional

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.providers.registry import CapabilityRegistry
from marketing_agents.routing.config import RouterConfig, DEFAULT_CONFIG
from marketing_agents.routing.decomposition import decompose_tasks, make_task_id
from marketing_agents.routing.executor import PlanExecutor
from marketing_agents.routing.intent import IntentAnalyzer
from marketing_agents.routing.selection import select_capabilities
from marketing_agents.routing.strategy import determine_strategy, estimate_duration
from marketing_agents.shared.contracts import (
    ExecutionError,
    ExecutionResult,
    Plan,
    RoutingContext,
    Task,
)
from marketing_agents.shared.logging.config import log_workflow_event


logger = logging.getLogger(__name__)


class AgentRouter:
    """Plans and executes capability calls for a request."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        planning_provider: CapabilityProvider,
        config: Optional[RouterConfig] = None,
    ):
        self.registry = registry
        self.config = config or DEFAULT_CONFIG
        self.intent_analyzer = IntentAnalyzer(planning_provider)
        self.executor = PlanExecutor(registry, self.config)

    async def create_plan(self, context: RoutingContext) -> Plan:
        """
        Analyze a request and create its execution plan.

        Falls back to a single-task plan if anything in planning fails.
        """
        plan_id = uuid.uuid4().hex[:12]
        _log = f"[router] [plan={plan_id}] "
        logger.info(f"{_log}Creating plan | task={context.task_identifier}")

        try:
            analysis = await self.intent_analyzer.analyze(
                context.task_identifier, context.input
            )
            selection = select_capabilities(context.task_identifier, analysis.complexity)
            tasks = decompose_tasks(context.task_identifier, selection, self.config)
            strategy = determine_strategy(tasks, context.preferences)

            plan = Plan(
                plan_id=plan_id,
                intent=analysis.intent,
                primary_capability=selection.primary,
                supporting_capabilities=selection.supporting,
                tasks=tasks,
                strategy=strategy,
                estimated_total_duration_seconds=estimate_duration(tasks, strategy),
                confidence=analysis.confidence,
            )
        except Exception as e:
            logger.exception(f"{_log}Planning failed, using fallback plan: {e}")
            return self.create_fallback_plan(context, plan_id)

        logger.info(
            f"{_log}Plan created | tasks={len(plan.tasks)}, strategy={plan.strategy}, "
            f"estimate=~{plan.estimated_total_duration_seconds:g}s"
        )
        log_workflow_event(
            "plan_created",
            {
                "plan_id": plan.plan_id,
                "primary": plan.primary_capability,
                "supporting": plan.supporting_capabilities,
                "strategy": plan.strategy,
                "tasks": len(plan.tasks),
            },
            logger=logger,
        )
        return plan

    def create_fallback_plan(self, context: RoutingContext, plan_id: Optional[str] = None) -> Plan:
        return Plan(
            plan_id=plan_id or uuid.uuid4().hex[:12],
            intent=f"Execute {context.task_identifier}",
            primary_capability=self.config.fallback_capability,
            supporting_capabilities=[],
            tasks=[
                Task(
                    task_id=make_task_id(0, "primary"),
                    type="primary",
                    description=f"Execute {context.task_identifier}",
                    priority="high",
                    estimated_duration_seconds=self.config.fallback_task_duration,
                )
            ],
            strategy="sequential",
            estimated_total_duration_seconds=self.config.fallback_task_duration,
            confidence=self.config.fallback_confidence,
        )

    async def execute_plan(self, plan: Plan, context: RoutingContext) -> ExecutionResult:
        """
        Execute a plan. Control-logic failures are recorded, not raised.
        """
        try:
            return await self.executor.execute(plan, context)
        except Exception as e:
            logger.exception(f"[router] [plan={plan.plan_id}] Error executing plan: {e}")
            return ExecutionResult(
                plan=plan,
                errors=[ExecutionError(capability="router", message=str(e))],
            )

    async def route_and_execute(self, context: RoutingContext) -> ExecutionResult:
        """Plan and execute in one call."""
        plan = await self.create_plan(context)
        return await self.execute_plan(plan, context)
