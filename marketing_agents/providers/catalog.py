"""
Default capability catalog.

Short system prompts for the capabilities the router and workflows refer
to by name. Domain-heavy prompt engineering lives with the capability
owners; these are the baseline definitions registered at startup.
"""

from typing import List, Optional

from openai import AsyncOpenAI

from marketing_agents.providers.llm_provider import CapabilityConfig, LLMCapabilityProvider
from marketing_agents.providers.registry import CapabilityRegistry
from marketing_agents.shared.llm.config import LLMConfig


DEFAULT_CAPABILITIES: List[CapabilityConfig] = [
    CapabilityConfig(
        name="strategic-analysis",
        description="Business strategy and competitive positioning analysis",
        system_prompt=(
            "You are a senior strategy consultant trained in Porter's frameworks. "
            "Assess competitive forces, positioning and trade-offs for the business "
            "described, grounding every claim in the facts provided."
        ),
        temperature=0.4,
    ),
    CapabilityConfig(
        name="competitive-intelligence",
        description="Competitor landscape and differentiation gaps",
        system_prompt=(
            "You are a competitive intelligence analyst. Identify direct and indirect "
            "competitors, their positioning, and concrete differentiation opportunities."
        ),
        temperature=0.4,
    ),
    CapabilityConfig(
        name="pricing-intelligence",
        description="Pricing strategy and justification",
        system_prompt=(
            "You are a pricing strategist for small and mid-sized businesses. Recommend "
            "price points, packaging and the reasoning a customer would accept."
        ),
        temperature=0.4,
    ),
    CapabilityConfig(
        name="revenue-intelligence",
        description="Revenue streams and growth levers",
        system_prompt=(
            "You are a revenue operations analyst. Find revenue streams, monetization "
            "opportunities and the levers most likely to grow them in the next quarter."
        ),
        temperature=0.4,
    ),
    CapabilityConfig(
        name="marketing-content",
        description="Business-specific marketing copy",
        system_prompt=(
            "You are a marketing copywriter. Write engaging, platform-appropriate content "
            "that references the business's real services, location and differentiators."
        ),
        temperature=0.8,
    ),
    CapabilityConfig(
        name="economic-intelligence",
        description="Industry economics and macro trends",
        system_prompt=(
            "You are an industry economist. Describe growth trends, headwinds, "
            "regulation and disruption risks relevant to the business's industry and region."
        ),
        temperature=0.3,
        json_mode=True,
    ),
    CapabilityConfig(
        name="personalization",
        description="Brand voice and content strategy",
        system_prompt=(
            "You are a brand strategist. Derive messaging pillars, tone of voice and "
            "content themes that fit the business and its target audience."
        ),
        temperature=0.6,
        json_mode=True,
    ),
    CapabilityConfig(
        name="swot-analysis",
        description="Evidence-based SWOT analysis",
        system_prompt=(
            "You are a Harvard Business School case writer. Produce a SWOT analysis with "
            "prioritized insights; each insight carries a priority and a recommendation."
        ),
        temperature=0.4,
        json_mode=True,
    ),
    CapabilityConfig(
        name="analysis-critic",
        description="Critiques generated analyses",
        system_prompt=(
            "You are a demanding reviewer of business analyses. Score and critique the "
            "analysis you are given exactly in the JSON format requested."
        ),
        temperature=0.3,
        max_tokens=500,
        json_mode=True,
    ),
    CapabilityConfig(
        name="task-planner",
        description="Classifies incoming requests for routing",
        system_prompt=(
            "You are an AI task planning expert. Classify the request's intent, "
            "complexity and required capabilities in the JSON format requested."
        ),
        temperature=0.2,
        max_tokens=300,
        json_mode=True,
    ),
]


def build_default_registry(
    llm_config: Optional[LLMConfig] = None,
    client: Optional[AsyncOpenAI] = None,
) -> CapabilityRegistry:
    """
    Create a registry populated with the default LLM-backed capabilities.

    Args:
        llm_config: Transport configuration shared by every provider
        client: Optional client; defaults to the cached OpenAI client

    Returns:
        A new CapabilityRegistry
    """
    return CapabilityRegistry(
        LLMCapabilityProvider(config, llm_config=llm_config, client=client)
        for config in DEFAULT_CAPABILITIES
    )
