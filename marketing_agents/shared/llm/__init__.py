from marketing_agents.shared.llm.client import (
    get_cached_client,
    call_llm,
    call_llm_with_usage,
)
from marketing_agents.shared.llm.config import LLMConfig

__all__ = ["get_cached_client", "call_llm", "call_llm_with_usage", "LLMConfig"]
