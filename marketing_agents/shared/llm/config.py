"""
LLM transport configuration.

Centralizes model and retry settings used by the OpenAI client wrapper.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class LLMConfig:
    """
    Configuration for LLM calls.

    Attributes:
        model: Default model identifier
        temperature: Default sampling temperature
        max_tokens: Default completion token limit
        api_key_env: Environment variable holding the API key
        max_retries: Attempts made by tenacity before giving up
        retry_min_wait: Minimum backoff between attempts (seconds)
        retry_max_wait: Maximum backoff between attempts (seconds)
    """

    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 2000
    api_key_env: str = "OPENAI_API_KEY"

    # Retry configuration (used by tenacity in llm/client.py)
    max_retries: int = 3
    retry_min_wait: int = 2  # seconds
    retry_max_wait: int = 10  # seconds


# Default configuration instance
DEFAULT_CONFIG = LLMConfig()


def get_config(
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> LLMConfig:
    """
    Create a configuration with optional overrides.

    Args:
        model: Override for the model identifier
        temperature: Override for sampling temperature
        max_tokens: Override for completion token limit

    Returns:
        LLMConfig with specified overrides applied
    """
    return LLMConfig(
        model=model or DEFAULT_CONFIG.model,
        temperature=temperature
        if temperature is not None
        else DEFAULT_CONFIG.temperature,
        max_tokens=max_tokens or DEFAULT_CONFIG.max_tokens,
    )
