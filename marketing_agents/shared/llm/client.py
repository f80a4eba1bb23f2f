"""
Async OpenAI client with retry logic.

Provides a cached client instance and wrappers for chat completion calls
with automatic retries using tenacity. Retries here cover the transport
only; callers in the orchestration layer treat a raised error as final.
"""

import os
from typing import List, Dict, Optional, Tuple

from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from dotenv import load_dotenv

from marketing_agents.shared.llm.config import LLMConfig, DEFAULT_CONFIG

load_dotenv()

# Module-level cache for the OpenAI client
_client: Optional[AsyncOpenAI] = None


def get_cached_client(config: Optional[LLMConfig] = None) -> AsyncOpenAI:
    """
    Returns a cached instance of the async OpenAI client.

    The API key is read from the environment variable named by
    ``config.api_key_env``. The client is created once and reused.
    """
    global _client
    if _client is None:
        config = config or DEFAULT_CONFIG
        api_key = os.environ.get(config.api_key_env)
        if not api_key:
            raise ValueError(
                f"{config.api_key_env} environment variable is not set. "
                "Please set it to your OpenAI API key."
            )
        _client = AsyncOpenAI(api_key=api_key)
    return _client


def _retrying(config: LLMConfig) -> AsyncRetrying:
    return AsyncRetrying(
        stop=stop_after_attempt(config.max_retries),
        wait=wait_exponential(
            multiplier=1, min=config.retry_min_wait, max=config.retry_max_wait
        ),
        retry=retry_if_exception_type((Exception,)),
        reraise=True,
    )


async def call_llm_with_usage(
    messages: List[Dict[str, str]],
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    json_mode: bool = False,
    client: Optional[AsyncOpenAI] = None,
    config: Optional[LLMConfig] = None,
) -> Tuple[str, Dict[str, int]]:
    """
    Call the Chat Completion API and return content with token usage.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        model: Model identifier (defaults to config.model)
        temperature: Sampling temperature (defaults to config.temperature)
        max_tokens: Completion token limit (defaults to config.max_tokens)
        json_mode: Request a JSON object response format
        client: Optional client instance. If not provided, uses cached client.
        config: Transport configuration (retry policy and defaults)

    Returns:
        Tuple of (response content, usage dict with input/output/total tokens)

    Raises:
        Exception: If all retry attempts fail.
    """
    config = config or DEFAULT_CONFIG
    if client is None:
        client = get_cached_client(config)

    request = {
        "model": model or config.model,
        "messages": messages,
        "temperature": temperature if temperature is not None else config.temperature,
        "max_tokens": max_tokens or config.max_tokens,
    }
    if json_mode:
        request["response_format"] = {"type": "json_object"}

    async for attempt in _retrying(config):
        with attempt:
            response = await client.chat.completions.create(**request)

    content = (response.choices[0].message.content or "").strip()
    usage = {"input_tokens": 0, "output_tokens": 0, "total_tokens": 0}
    if response.usage is not None:
        usage = {
            "input_tokens": response.usage.prompt_tokens,
            "output_tokens": response.usage.completion_tokens,
            "total_tokens": response.usage.total_tokens,
        }

    return content, usage


async def call_llm(
    messages: List[Dict[str, str]],
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    json_mode: bool = False,
    client: Optional[AsyncOpenAI] = None,
    config: Optional[LLMConfig] = None,
) -> str:
    """
    Call the Chat Completion API with automatic retries.

    Returns:
        The assistant's response content as a string.
    """
    content, _ = await call_llm_with_usage(
        messages,
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        json_mode=json_mode,
        client=client,
        config=config,
    )
    return content
