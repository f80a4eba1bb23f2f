"""Graph construction for the critique-and-improve loop."""

from marketing_agents.validation.graph.build import create_critique_graph

__all__ = ["create_critique_graph"]
