"""
Plan execution.

Runs a plan's capability calls under its strategy. Per-provider failures
are recorded on the ExecutionResult and never raised; only failures in
the executor's own control logic propagate.

Concurrency is cooperative: "parallel" means several outstanding provider
calls joined with asyncio.gather. No call carries a timeout, and once a
level starts every call runs to completion.
"""

import asyncio
import json
import logging
import time
from typing import Any, Dict, List, Optional

from marketing_agents.providers.registry import CapabilityRegistry
from marketing_agents.routing.config import RouterConfig, DEFAULT_CONFIG
from marketing_agents.routing.leveling import group_tasks_by_level
from marketing_agents.routing.prompts import build_prompt_for_capability, build_prompt_for_task
from marketing_agents.shared.contracts import (
    ExecutionResult,
    Plan,
    RoutingContext,
    Task,
)


logger = logging.getLogger(__name__)


def resolve_task_capability(task: Task, plan: Plan, use_bound: bool = False) -> str:
    """
    Capability that runs a task under hybrid execution.

    Binding is by task type: primary tasks use the plan's primary capability
    and every other task the first supporting capability, falling back to
    the primary. With ``use_bound`` a capability recorded on the task at
    decomposition time takes precedence.
    """
    if use_bound and task.capability:
        return task.capability
    if task.type == "primary":
        return plan.primary_capability
    if plan.supporting_capabilities:
        return plan.supporting_capabilities[0]
    return plan.primary_capability


def build_base_context(context: RoutingContext) -> Dict[str, Any]:
    base: Dict[str, Any] = {}
    if context.intelligence is not None:
        base["intelligence"] = json.dumps(context.intelligence, default=str)
    return base


class PlanExecutor:
    """Executes plans against a capability registry."""

    def __init__(self, registry: CapabilityRegistry, config: Optional[RouterConfig] = None):
        self.registry = registry
        self.config = config or DEFAULT_CONFIG

    async def execute(self, plan: Plan, context: RoutingContext) -> ExecutionResult:
        """
        Run every call the plan schedules and collect the outcomes.

        Args:
            plan: Immutable plan to execute
            context: Request context

        Returns:
            ExecutionResult with successes keyed by capability (hybrid:
            ``<capability>_<task type>``) and per-provider errors
        """
        _log = f"[router] [plan={plan.plan_id}] "
        start_time = time.perf_counter()
        result = ExecutionResult(plan=plan)

        logger.info(
            f"{_log}Executing plan | strategy={plan.strategy}, tasks={len(plan.tasks)}"
        )

        if plan.strategy == "sequential":
            await self._execute_sequential(plan, context, result)
        elif plan.strategy == "parallel":
            await self._execute_parallel(plan, context, result)
        else:
            await self._execute_hybrid(plan, context, result)

        result.execution_time_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{_log}Execution complete | results={len(result.results)}, "
            f"errors={len(result.errors)}, duration={result.execution_time_ms:.0f}ms"
        )
        return result

    async def _call(
        self,
        capability: str,
        prompt: str,
        call_context: Dict[str, Any],
        key: str,
        result: ExecutionResult,
    ) -> bool:
        try:
            provider = self.registry.get(capability)
            response = await provider.execute(prompt, call_context)
        except Exception as e:
            logger.error(f"[router] [capability={capability}] Provider failed: {e}")
            result.record_error(capability, e)
            return False
        result.record_success(key, response)
        return True

    async def _execute_sequential(
        self,
        plan: Plan,
        context: RoutingContext,
        result: ExecutionResult,
    ) -> None:
        base_context = build_base_context(context)
        previous_outputs: List[str] = []

        for capability in [plan.primary_capability, *plan.supporting_capabilities]:
            call_context = {
                **base_context,
                "previousAnalysis": "\n\n".join(previous_outputs),
            }
            prompt = build_prompt_for_capability(capability, context)
            succeeded = await self._call(capability, prompt, call_context, capability, result)
            if succeeded:
                previous_outputs.append(result.results[capability].content)

    async def _execute_parallel(
        self,
        plan: Plan,
        context: RoutingContext,
        result: ExecutionResult,
    ) -> None:
        base_context = build_base_context(context)
        capabilities = [plan.primary_capability, *plan.supporting_capabilities]

        await asyncio.gather(
            *(
                self._call(
                    capability,
                    build_prompt_for_capability(capability, context),
                    dict(base_context),
                    capability,
                    result,
                )
                for capability in capabilities
            )
        )

    async def _execute_hybrid(
        self,
        plan: Plan,
        context: RoutingContext,
        result: ExecutionResult,
    ) -> None:
        base_context = build_base_context(context)
        levels = group_tasks_by_level(plan.tasks, strict=self.config.strict_leveling)

        for index, level in enumerate(levels):
            logger.info(
                f"[router] [plan={plan.plan_id}] Running level {index} | "
                f"tasks={[task.task_id for task in level]}"
            )
            calls = []
            for task in level:
                capability = resolve_task_capability(
                    task, plan, use_bound=self.config.bind_task_capabilities
                )
                calls.append(
                    self._call(
                        capability,
                        build_prompt_for_task(task, context),
                        dict(base_context),
                        f"{capability}_{task.type}",
                        result,
                    )
                )
            await asyncio.gather(*calls)
