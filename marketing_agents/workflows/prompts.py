"""
Prompt templates and builders for workflow stages.
"""

import json
from typing import List, Optional

from marketing_agents.shared.contracts import RetrievalResult, WorkflowContext


NO_PRIOR_CONTEXT = "No prior context"

SWOT_PROMPT_TEMPLATE = """Produce a SWOT analysis for {business}.

Industry: {industry}
Website: {website}
Business Summary: {summary}

Return JSON:
{{
  "strengths": ["..."],
  "weaknesses": ["..."],
  "opportunities": ["..."],
  "threats": ["..."],
  "insights": [
    {{"priority": "high|medium|low", "insight": "...", "recommendation": "..."}}
  ]
}}

Return valid JSON only."""

PORTER_PROMPT_TEMPLATE = """Analyze {business} using Porter's 5 Forces framework.

Website: {website}
Industry: {industry}
Location: {location}
{previous}
Provide detailed Porter's 5 Forces analysis:
1. Competitive Rivalry
2. Threat of New Entrants
3. Bargaining Power of Suppliers
4. Bargaining Power of Buyers
5. Threat of Substitutes

For each force, provide:
- Current state assessment
- Key factors and trends
- Strategic implications
- Actionable recommendations

Include a "quick_wins" list of {{"action": "..."}} objects.

Return valid JSON only."""

ECONOMIC_PROMPT_TEMPLATE = """Analyze economic factors affecting {business} in the {industry} industry.

Location: {location}
Target Market: {audience}

Provide:
1. Industry growth trends and forecasts
2. Economic headwinds and tailwinds
3. Regulatory environment
4. Technology disruption risks
5. Market size and opportunity

Return valid JSON only."""

CONTENT_STRATEGY_PROMPT_TEMPLATE = """Create a content strategy for {business}.

Business Context: {business_context}
Industry: {industry}
Target Audience: {audience}
Custom Requirements: {requirements}

Provide:
1. Key messaging pillars
2. Content themes and topics
3. Tone and voice guidelines
4. Content distribution strategy

Return valid JSON only."""

CONTENT_PROMPT_TEMPLATE = """Generate marketing content for {business}.

Content Strategy: {strategy}
Business Context: {business_context}
Specific Request: {requirements}

Create content that:
- Aligns with the brand voice and messaging pillars
- Targets the specified audience
- Includes specific differentiators and value props
- Is platform-optimized and actionable

Return valid JSON with the content and metadata."""

COMPETITOR_PROMPT_TEMPLATE = """Analyze the competitive landscape for {business}.

Website: {website}
Industry: {industry}
Location: {location}

Provide:
1. Key competitors (top 5-10)
2. Competitive positioning matrix
3. Market share estimates
4. Differentiation opportunities
5. Competitive threats and advantages

Return valid JSON only."""

# Appended to a structured prompt on attempt N (index 0 = first attempt).
STRICTNESS_SUFFIXES: List[str] = [
    "",
    (
        "\n\nIMPORTANT: Respond with a single JSON object only. "
        "No markdown fences, no commentary before or after it."
    ),
    (
        "\n\nSTRICT FORMAT REQUIRED: Your previous response could not be parsed. "
        "Output must begin with '{' and end with '}'. Escape every newline inside "
        "string values as \\n and do not use trailing commas."
    ),
]


def _or_unknown(value: Optional[str]) -> str:
    return value or "Unknown"


def _business(context: WorkflowContext) -> str:
    return context.business_name or context.website or "Unknown"


def _answer(retrieval: Optional[RetrievalResult], default: str = NO_PRIOR_CONTEXT) -> str:
    if retrieval is None or not retrieval.answer:
        return default
    return retrieval.answer


def _requirements(context: WorkflowContext) -> str:
    return json.dumps(context.custom_data, default=str)


def build_strategic_query(context: WorkflowContext) -> str:
    return f"strategic analysis for {_business(context)}"


def build_brand_query(context: WorkflowContext) -> str:
    return f"business profile and brand voice for {_business(context)}"


def build_swot_prompt(context: WorkflowContext, retrieval: Optional[RetrievalResult]) -> str:
    return SWOT_PROMPT_TEMPLATE.format(
        business=_business(context),
        industry=_or_unknown(context.industry),
        website=_or_unknown(context.website),
        summary=_answer(retrieval, "Analyzing new business"),
    )


def build_porter_prompt(context: WorkflowContext, retrieval: Optional[RetrievalResult]) -> str:
    previous = ""
    if retrieval is not None and retrieval.answer:
        previous = f"\nPrevious Analysis:\n{retrieval.answer}\n"
    return PORTER_PROMPT_TEMPLATE.format(
        business=_business(context),
        website=context.website,
        industry=_or_unknown(context.industry),
        location=_or_unknown(context.location),
        previous=previous,
    )


def build_economic_prompt(context: WorkflowContext) -> str:
    return ECONOMIC_PROMPT_TEMPLATE.format(
        business=_business(context),
        industry=context.industry,
        location=_or_unknown(context.location),
        audience=_or_unknown(context.target_audience),
    )


def build_content_strategy_prompt(
    context: WorkflowContext, retrieval: Optional[RetrievalResult]
) -> str:
    return CONTENT_STRATEGY_PROMPT_TEMPLATE.format(
        business=_business(context),
        business_context=_answer(retrieval),
        industry=_or_unknown(context.industry),
        audience=_or_unknown(context.target_audience),
        requirements=_requirements(context),
    )


def build_content_prompt(
    context: WorkflowContext,
    retrieval: Optional[RetrievalResult],
    strategy: Optional[dict],
) -> str:
    return CONTENT_PROMPT_TEMPLATE.format(
        business=_business(context),
        strategy=json.dumps(strategy or {}, default=str),
        business_context=_answer(retrieval),
        requirements=_requirements(context),
    )


def build_competitor_prompt(context: WorkflowContext) -> str:
    return COMPETITOR_PROMPT_TEMPLATE.format(
        business=_business(context),
        website=_or_unknown(context.website),
        industry=_or_unknown(context.industry),
        location=_or_unknown(context.location),
    )


def with_strictness(prompt: str, attempt: int) -> str:
    """Append the strictness instruction for a zero-based attempt number."""
    suffix = STRICTNESS_SUFFIXES[min(attempt, len(STRICTNESS_SUFFIXES) - 1)]
    return prompt + suffix
