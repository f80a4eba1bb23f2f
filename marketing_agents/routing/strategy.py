"""
Execution strategy selection and duration estimation.
"""

import logging
from typing import Dict, List, Optional

from marketing_agents.shared.contracts import Task, UserPreferences
from marketing_agents.shared.contracts.plan_output import ExecutionStrategy


logger = logging.getLogger(__name__)


def determine_strategy(
    tasks: List[Task],
    preferences: Optional[UserPreferences] = None,
) -> ExecutionStrategy:
    """
    Choose how a plan's tasks should run.

    Decision order (first match wins):
    1. speed == "fast" -> parallel when more than one task, else sequential
    2. any task has dependencies -> hybrid
    3. more than two tasks -> parallel
    4. otherwise -> sequential
    """
    speed = (preferences.speed if preferences else None) or "balanced"

    if speed == "fast":
        return "parallel" if len(tasks) > 1 else "sequential"

    if any(task.dependencies for task in tasks):
        return "hybrid"

    if len(tasks) > 2:
        return "parallel"

    return "sequential"


def heuristic_hybrid_duration(tasks: List[Task]) -> float:
    """Midpoint between the sequential and the parallel estimate."""
    if not tasks:
        return 0.0
    durations = [task.estimated_duration_seconds for task in tasks]
    return (sum(durations) + max(durations)) / 2


def critical_path_duration(tasks: List[Task]) -> Optional[float]:
    """
    Length of the longest dependency chain, weighted by task duration.

    Returns None when the graph has a cycle or references an unknown task,
    since no finite critical path exists then.
    """
    by_id: Dict[str, Task] = {task.task_id: task for task in tasks}
    finish: Dict[str, float] = {}
    visiting = set()

    def earliest_finish(task_id: str) -> Optional[float]:
        if task_id in finish:
            return finish[task_id]
        task = by_id.get(task_id)
        if task is None or task_id in visiting:
            return None
        visiting.add(task_id)
        start = 0.0
        for dep in task.dependencies:
            dep_finish = earliest_finish(dep)
            if dep_finish is None:
                return None
            start = max(start, dep_finish)
        visiting.discard(task_id)
        finish[task_id] = start + task.estimated_duration_seconds
        return finish[task_id]

    longest = 0.0
    for task in tasks:
        value = earliest_finish(task.task_id)
        if value is None:
            return None
        longest = max(longest, value)
    return longest


def estimate_duration(tasks: List[Task], strategy: ExecutionStrategy) -> float:
    """
    Estimate wall time for a plan in seconds.

    sequential: sum of durations; parallel: the longest task; hybrid: the
    critical path through the dependency graph, or the midpoint heuristic
    when the graph is not a DAG.
    """
    if not tasks:
        return 0.0

    durations = [task.estimated_duration_seconds for task in tasks]
    if strategy == "sequential":
        return float(sum(durations))
    if strategy == "parallel":
        return float(max(durations))

    critical_path = critical_path_duration(tasks)
    if critical_path is None:
        logger.warning("[router] Dependency graph is not a DAG, using heuristic estimate")
        return heuristic_hybrid_duration(tasks)
    return critical_path
