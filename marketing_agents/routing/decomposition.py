"""
Task decomposition.

Turns a capability selection into tasks with dependency edges. Every
task gets an opaque id at creation; dependencies reference ids, never
descriptions.
"""

from typing import List, Optional

from marketing_agents.routing.config import RouterConfig, DEFAULT_CONFIG
from marketing_agents.routing.selection import CapabilitySelection
from marketing_agents.shared.contracts import Task


def make_task_id(index: int, task_type: str) -> str:
    return f"task-{index}-{task_type}"


def decompose_tasks(
    task_identifier: str,
    selection: CapabilitySelection,
    config: Optional[RouterConfig] = None,
) -> List[Task]:
    """
    Build the task list for a plan.

    Emits one primary task, one independent supporting task per supporting
    capability and, only when supporting tasks exist, a synthesis task that
    depends on every task emitted before it.

    Args:
        task_identifier: Tool/task identifier
        selection: Selected capabilities
        config: Router configuration (duration estimates)

    Returns:
        Ordered list of tasks
    """
    config = config or DEFAULT_CONFIG
    tasks: List[Task] = [
        Task(
            task_id=make_task_id(0, "primary"),
            type="primary",
            description=f"Execute {task_identifier} with {selection.primary}",
            priority="high",
            estimated_duration_seconds=config.primary_task_duration,
            capability=selection.primary,
        )
    ]

    for capability in selection.supporting:
        tasks.append(
            Task(
                task_id=make_task_id(len(tasks), "supporting"),
                type="supporting",
                description=f"Execute {capability} analysis",
                priority="medium",
                estimated_duration_seconds=config.supporting_task_duration,
                dependencies=[],
                capability=capability,
            )
        )

    if selection.supporting:
        tasks.append(
            Task(
                task_id=make_task_id(len(tasks), "synthesis"),
                type="synthesis",
                description="Synthesize results from all agents",
                priority="high",
                estimated_duration_seconds=config.synthesis_task_duration,
                dependencies=[task.task_id for task in tasks],
            )
        )

    return tasks
