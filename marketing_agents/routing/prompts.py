"""
Prompt builders for the agent router.

These functions construct the prompts sent to the intent classifier and
to each capability during plan execution.
"""

import json
from typing import Any, Dict

from marketing_agents.shared.contracts import RoutingContext, Task


INTENT_PROMPT_TEMPLATE = """Analyze this AI tool request and identify the intent and requirements.

Tool ID: {task_identifier}
Input: {payload}

Determine:
1. Primary intent (what is the user trying to accomplish?)
2. Complexity level (simple/moderate/complex)
3. Required capabilities (list of agent capabilities needed)
4. Your confidence in this analysis (0-1)

Return JSON:
{{
  "intent": "brief description",
  "complexity": "simple|moderate|complex",
  "required_capabilities": ["capability1", "capability2"],
  "confidence": 0.95
}}"""


CAPABILITY_PROMPTS: Dict[str, str] = {
    "strategic-analysis": (
        "Analyze the business strategy for {business}.\n\nInput: {payload}\n\n"
        "Provide strategic assessment, competitive positioning, and actionable recommendations."
    ),
    "competitive-intelligence": (
        "Analyze the competitive landscape for {business}.\n\nInput: {payload}\n\n"
        "Identify competitors, market gaps, and differentiation opportunities."
    ),
    "pricing-intelligence": (
        "Analyze pricing strategy for {business}.\n\nInput: {payload}\n\n"
        "Provide pricing recommendations, competitive positioning, and justification strategies."
    ),
    "revenue-intelligence": (
        "Analyze revenue opportunities for {business}.\n\nInput: {payload}\n\n"
        "Identify revenue streams, monetization opportunities, and growth levers."
    ),
    "marketing-content": (
        "Generate marketing content for {business}.\n\nInput: {payload}\n\n"
        "Create engaging, business-specific content optimized for the target platform."
    ),
}


def _dump(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, default=str)


def build_intent_prompt(task_identifier: str, payload: Dict[str, Any]) -> str:
    return INTENT_PROMPT_TEMPLATE.format(
        task_identifier=task_identifier,
        payload=_dump(payload),
    )


def build_prompt_for_capability(capability: str, context: RoutingContext) -> str:
    """
    Build the prompt a capability receives under sequential/parallel execution.

    Unknown capabilities get a generic task prompt.
    """
    template = CAPABILITY_PROMPTS.get(capability)
    payload = _dump(context.input)
    if template is None:
        return f"Execute task for {context.task_identifier}: {payload}"
    business = context.input.get("business_name") or "this business"
    return template.format(business=business, payload=payload)


def build_prompt_for_task(task: Task, context: RoutingContext) -> str:
    """Build the prompt for a single task under hybrid execution."""
    return (
        f"{task.description}\n\n"
        f"Context: {_dump(context.input)}\n\n"
        f"Priority: {task.priority}\n\n"
        f"Provide {task.type} analysis."
    )
