"""
LLM-backed capability provider.

Renders the capability's system prompt and the caller's context into a
chat request and sends it through the shared OpenAI client.
"""

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from marketing_agents.providers.base import CapabilityProvider, ProviderError
from marketing_agents.shared.contracts import ProviderMetadata, ProviderResponse
from marketing_agents.shared.llm.client import call_llm_with_usage
from marketing_agents.shared.llm.config import LLMConfig, DEFAULT_CONFIG


logger = logging.getLogger(__name__)

JSON_ONLY_INSTRUCTION = (
    "\n\nIMPORTANT: You must respond with valid JSON only. "
    "Do not include any text outside the JSON structure."
)


@dataclass
class CapabilityConfig:
    """
    Static description of a capability.

    Attributes:
        name: Registry name (e.g. "strategic-analysis")
        description: One-line summary for listings
        system_prompt: System prompt; ``{{key}}`` placeholders are filled from context
        temperature: Sampling temperature
        max_tokens: Completion token limit
        json_mode: Ask the model for a JSON object response
        model: Optional per-capability model override
    """

    name: str
    description: str
    system_prompt: str
    temperature: float = 0.7
    max_tokens: int = 2000
    json_mode: bool = False
    model: Optional[str] = None


def render_context_block(context: Dict[str, Any]) -> str:
    """
    Render context entries as a labelled block appended to the user message.

    Empty values are skipped. String values holding JSON are pretty-printed.
    """
    lines: List[str] = []
    for key, value in context.items():
        if not value:
            continue
        if isinstance(value, str):
            try:
                rendered = json.dumps(json.loads(value), indent=2)
            except ValueError:
                rendered = value
        else:
            rendered = json.dumps(value, indent=2, default=str)
        lines.append(f"\n{key.upper()}:\n{rendered}\n")

    if not lines:
        return ""
    return "\n\n=== BUSINESS CONTEXT DATA ===\n" + "".join(lines) + "\n=== END CONTEXT DATA ===\n"


class LLMCapabilityProvider(CapabilityProvider):
    """Capability provider backed by a chat completion model."""

    def __init__(
        self,
        config: CapabilityConfig,
        llm_config: Optional[LLMConfig] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.config = config
        self.name = config.name
        self.llm_config = llm_config or DEFAULT_CONFIG
        self.client = client

    def build_system_prompt(self, context: Optional[Dict[str, Any]] = None) -> str:
        prompt = self.config.system_prompt
        for key, value in (context or {}).items():
            prompt = re.sub(r"\{\{" + re.escape(key) + r"\}\}", lambda _: str(value), prompt)
        if self.config.json_mode:
            prompt += JSON_ONLY_INSTRUCTION
        return prompt

    def build_messages(
        self,
        prompt: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.build_system_prompt(context)},
            {"role": "user", "content": prompt + render_context_block(context or {})},
        ]

    async def execute(
        self,
        prompt: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> ProviderResponse:
        _log = f"[capability={self.name}] "
        messages = self.build_messages(prompt, context)

        start_time = time.perf_counter()
        try:
            content, usage = await call_llm_with_usage(
                messages,
                model=self.config.model,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                json_mode=self.config.json_mode,
                client=self.client,
                config=self.llm_config,
            )
        except Exception as e:
            logger.error(f"{_log}LLM call failed: {e}")
            raise ProviderError(self.name, str(e), cause=e) from e
        duration_ms = (time.perf_counter() - start_time) * 1000

        if not content:
            raise ProviderError(self.name, "Empty response from model")

        logger.info(
            f"{_log}LLM responded | duration={duration_ms:.0f}ms, "
            f"tokens_in={usage['input_tokens']}, tokens_out={usage['output_tokens']}"
        )

        return ProviderResponse(
            content=content,
            metadata=ProviderMetadata(
                provider=self.name,
                execution_time_ms=duration_ms,
                tokens_used=usage["total_tokens"],
            ),
        )
