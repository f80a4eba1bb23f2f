"""
Dependency leveling for hybrid execution.

Groups tasks into levels: a task joins the next level once every task id
it depends on belongs to an earlier level. Levels run strictly in order;
tasks within a level run concurrently.
"""

import logging
from typing import List, Set

from marketing_agents.shared.contracts import Task


logger = logging.getLogger(__name__)


class CyclicPlanError(ValueError):
    """Raised in strict mode when dependencies cannot be satisfied."""

    def __init__(self, unresolved: List[str]):
        super().__init__(
            f"Plan has cyclic or dangling dependencies: {', '.join(unresolved)}"
        )
        self.unresolved = unresolved


def group_tasks_by_level(tasks: List[Task], strict: bool = False) -> List[List[Task]]:
    """
    Compute execution levels by repeated scans over the remaining tasks.

    If a scan finds no eligible task (a cycle or a reference to an unknown
    task id), all remaining tasks are placed into one final level so the
    plan still terminates. With ``strict=True`` a CyclicPlanError is raised
    instead.

    Args:
        tasks: Tasks in plan order
        strict: Raise instead of dumping unresolved tasks

    Returns:
        List of levels, each a list of tasks in plan order
    """
    levels: List[List[Task]] = []
    completed: Set[str] = set()
    remaining = list(tasks)

    while remaining:
        current_level = [
            task
            for task in remaining
            if all(dep in completed for dep in task.dependencies)
        ]

        if not current_level:
            unresolved = [task.task_id for task in remaining]
            if strict:
                raise CyclicPlanError(unresolved)
            logger.warning(
                f"[router] [leveling] Unresolvable dependencies, running "
                f"{len(remaining)} remaining task(s) in a final level | "
                f"tasks={unresolved}"
            )
            levels.append(remaining)
            break

        levels.append(current_level)
        completed.update(task.task_id for task in current_level)
        remaining = [task for task in remaining if task.task_id not in completed]

    return levels
