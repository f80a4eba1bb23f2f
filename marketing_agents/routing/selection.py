"""
Capability selection.

Deterministic lookup from task identifier to a primary capability and,
for complex requests, a fixed fan-out of supporting capabilities.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


DEFAULT_PRIMARY_CAPABILITY = "strategic-analysis"

TASK_CAPABILITY_MAP: Dict[str, str] = {
    "business_audit": "strategic-analysis",
    "pricing_strategy": "pricing-intelligence",
    "service_packages": "strategic-analysis",
    "social_content": "marketing-content",
    "blog_seo_writer": "marketing-content",
    "email_hub": "marketing-content",
}

SUPPORTING_CAPABILITY_MAP: Dict[str, Tuple[str, ...]] = {
    "business_audit": ("competitive-intelligence", "marketing-content"),
    "pricing_strategy": ("competitive-intelligence", "revenue-intelligence"),
    "service_packages": ("revenue-intelligence",),
}


@dataclass
class CapabilitySelection:
    """Primary capability plus ordered supporting capabilities."""

    primary: str
    supporting: List[str] = field(default_factory=list)


def select_capabilities(task_identifier: str, complexity: str) -> CapabilitySelection:
    """
    Select capabilities for a task.

    Args:
        task_identifier: Tool/task identifier
        complexity: Classified complexity; supporting capabilities are only
            added for "complex"

    Returns:
        CapabilitySelection with fresh lists
    """
    primary = TASK_CAPABILITY_MAP.get(task_identifier, DEFAULT_PRIMARY_CAPABILITY)

    supporting: List[str] = []
    if complexity == "complex":
        supporting.extend(SUPPORTING_CAPABILITY_MAP.get(task_identifier, ()))

    return CapabilitySelection(primary=primary, supporting=supporting)
