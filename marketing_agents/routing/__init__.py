"""
Agent routing: intent analysis, capability selection, task decomposition,
strategy selection and plan execution.
"""

from marketing_agents.routing.router import AgentRouter
from marketing_agents.routing.executor import PlanExecutor
from marketing_agents.routing.intent import IntentAnalyzer
from marketing_agents.routing.leveling import group_tasks_by_level, CyclicPlanError
from marketing_agents.routing.config import RouterConfig

__all__ = [
    "AgentRouter",
    "PlanExecutor",
    "IntentAnalyzer",
    "group_tasks_by_level",
    "CyclicPlanError",
    "RouterConfig",
]
