"""
Schemas for the workflow orchestrator.

Defines the supported workflow types and the outcome each pipeline hands
back to the orchestrator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List


class WorkflowType(str, Enum):
    """Named multi-stage pipelines the orchestrator can run."""

    STRATEGIC_ANALYSIS = "strategic-analysis"
    CONTENT_GENERATION = "content-generation"
    COMPETITOR_INTELLIGENCE = "competitor-intelligence"
    QUICK_ANALYSIS = "quick-analysis"
    CUSTOM_PIPELINE = "custom-pipeline"
    AGENT_ROUTING = "agent-routing"


@dataclass
class StageOutcome:
    """Result of a pipeline and the capabilities that contributed to it."""

    result: Any
    capabilities_executed: List[str] = field(default_factory=list)
