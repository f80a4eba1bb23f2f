"""
Prompt templates for the critics and the regeneration step.
"""

from typing import List

from marketing_agents.validation.framework_check import FrameworkCheckResult


FRAMEWORK_CRITIC_TEMPLATE = """You are a Harvard Business School professor expert in Michael Porter's frameworks.

ANALYSIS TO CRITIQUE:
{analysis}

BUSINESS CONTEXT:
{business_context}

PORTER VALIDATION RESULTS:
- Score: {score}/100
- Issues: {issues}

Provide 3-5 specific critiques focusing on:
1. Correct application of Porter frameworks
2. Strategic depth and rigor
3. Trade-off identification
4. Competitive positioning clarity

Return JSON: {{ "critiques": string[] }}"""


SPECIFICITY_CRITIC_TEMPLATE = """You are a business consultant who detects generic advice.

ANALYSIS:
{analysis}

BUSINESS CONTEXT:
{business_context}

Rate specificity (0-100) and identify any:
1. Generic business advice that could apply to any company
2. Missing references to their actual products/services
3. Vague recommendations without concrete actions
4. Industry cliches or buzzwords

Return JSON: {{ "score": number, "critiques": string[] }}"""


ACTIONABILITY_CRITIC_TEMPLATE = """You are a small business owner evaluating strategic advice.

ANALYSIS:
{analysis}

Rate actionability (0-100) and identify:
1. Recommendations that are too vague to implement
2. Missing timelines or priorities
3. Unrealistic suggestions for a small business
4. Lack of specific next steps

Return JSON: {{ "score": number, "critiques": string[] }}"""


def build_framework_critic_prompt(
    analysis: str,
    business_context: str,
    check: FrameworkCheckResult,
) -> str:
    return FRAMEWORK_CRITIC_TEMPLATE.format(
        analysis=analysis,
        business_context=business_context,
        score=check.score,
        issues=", ".join(check.issues) or "none",
    )


def build_specificity_critic_prompt(analysis: str, business_context: str) -> str:
    return SPECIFICITY_CRITIC_TEMPLATE.format(
        analysis=analysis, business_context=business_context
    )


def build_actionability_critic_prompt(analysis: str) -> str:
    return ACTIONABILITY_CRITIC_TEMPLATE.format(analysis=analysis)


def build_retry_prompt(prompt: str, critiques: List[str], improvements: List[str]) -> str:
    """
    Append the previous attempt's critiques to the original prompt.

    Always built from the original prompt, so feedback does not pile up
    across iterations.
    """
    issues = "\n".join(critiques)
    fixes = "\n".join(improvements)
    return (
        f"{prompt}\n\n"
        f"PREVIOUS ATTEMPT HAD THESE ISSUES:\n{issues}\n\n"
        f"IMPROVE THE ANALYSIS BY:\n{fixes}\n\n"
        f"Generate an improved analysis that addresses these critiques."
    )
