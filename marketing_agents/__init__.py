"""
Marketing agents orchestration engine.

This package contains:
- shared/: Common infrastructure (LLM client, logging, contracts, parser, cache)
- providers/: Capability providers and the registry that resolves them
- routing/: Agent router (intent, selection, decomposition, strategy, execution)
- validation/: Multi-critic validation and the critique-and-improve loop
- workflows/: Fixed multi-stage workflows behind the cached orchestrator
"""

from marketing_agents.routing.router import AgentRouter
from marketing_agents.validation.loop import CritiqueLoop
from marketing_agents.workflows.orchestrator import WorkflowOrchestrator

__all__ = ["AgentRouter", "CritiqueLoop", "WorkflowOrchestrator"]
