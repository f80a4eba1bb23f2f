from marketing_agents.validation.nodes.generate import make_generate_node
from marketing_agents.validation.nodes.validate import make_validate_node
from marketing_agents.validation.nodes.routing import route_after_validation, done_node

__all__ = [
    "make_generate_node",
    "make_validate_node",
    "route_after_validation",
    "done_node",
]
