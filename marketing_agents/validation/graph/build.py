"""
Graph construction for the critique-and-improve loop.

Builds and compiles the LangGraph state machine:

    Entry -> generate -> validate -> route_after_validation()
                                        ├→ "generate" (retry with feedback)
                                        └→ "done" -> END
"""

from typing import Optional

from langgraph.graph import StateGraph, END

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.validation.config import CritiqueConfig, DEFAULT_CONFIG
from marketing_agents.validation.nodes import (
    done_node,
    make_generate_node,
    make_validate_node,
    route_after_validation,
)
from marketing_agents.validation.schemas import CritiqueState
from marketing_agents.validation.validator import MultiCriticValidator


def create_critique_graph(
    generator: CapabilityProvider,
    validator: MultiCriticValidator,
    config: Optional[CritiqueConfig] = None,
):
    """
    Create and compile the critique graph.

    Args:
        generator: Provider producing each attempt
        validator: Multi-critic validator judging each attempt
        config: Optional configuration. Uses DEFAULT_CONFIG if not provided.

    Returns:
        Compiled LangGraph application ready for execution.
    """
    if config is None:
        config = DEFAULT_CONFIG

    graph = StateGraph(CritiqueState)

    graph.add_node("generate", make_generate_node(generator))
    graph.add_node("validate", make_validate_node(validator))
    graph.add_node("done", done_node)

    graph.set_entry_point("generate")
    graph.add_edge("generate", "validate")

    graph.add_conditional_edges(
        "validate",
        route_after_validation,
        {
            "generate": "generate",
            "done": "done",
        },
    )

    graph.add_edge("done", END)

    return graph.compile()
