"""
Deterministic framework alignment check.

Scores an analysis against Porter's strategy frameworks using keyword
and structure checks. This replaces an LLM-issued framework score with
code-based calculation; the LLM critic only contributes critique text.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class FrameworkCheckConfig:
    """
    Keyword lists and penalties for the framework check.

    The score starts at 100 and each failed check subtracts its penalty.
    """

    FRAMEWORK_TERMS: Tuple[str, ...] = (
        "five forces",
        "value chain",
        "competitive advantage",
        "differentiation",
        "cost leadership",
    )
    FRAMEWORK_PENALTY: int = 30

    TRADEOFF_TERMS: Tuple[str, ...] = (
        "trade-off",
        "tradeoff",
        "sacrifice",
        "choose between",
        "cannot do both",
    )
    TRADEOFF_PENALTY: int = 25

    GENERIC_PHRASES: Tuple[str, ...] = (
        "improve customer service",
        "increase marketing",
        "enhance quality",
        "boost sales",
        "grow revenue",
    )
    GENERIC_PENALTY: int = 20

    POSITIONING_TERMS: Tuple[str, ...] = (
        "position",
        "differentiat",
        "unique",
        "competitive advantage",
        "moat",
    )
    POSITIONING_PENALTY: int = 15


DEFAULT_FRAMEWORK_CONFIG = FrameworkCheckConfig()


@dataclass
class FrameworkCheckResult:
    """Score plus the issues found and suggested fixes."""

    score: int
    issues: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)


def _mentions_any(text: str, terms: Tuple[str, ...]) -> bool:
    return any(term in text for term in terms)


def check_framework_alignment(
    analysis: str,
    config: Optional[FrameworkCheckConfig] = None,
) -> FrameworkCheckResult:
    """
    Score how well an analysis applies Porter's frameworks.

    Args:
        analysis: Generated analysis text
        config: Keyword configuration

    Returns:
        FrameworkCheckResult with score floored at 0
    """
    config = config or DEFAULT_FRAMEWORK_CONFIG
    text = analysis.lower()
    result = FrameworkCheckResult(score=100)

    if not _mentions_any(text, config.FRAMEWORK_TERMS):
        result.issues.append("No explicit Porter framework references")
        result.suggestions.append(
            "Reference specific Porter concepts (Five Forces, Value Chain, Generic Strategies)"
        )
        result.score -= config.FRAMEWORK_PENALTY

    if not _mentions_any(text, config.TRADEOFF_TERMS):
        result.issues.append("Missing trade-off analysis (core Porter principle)")
        result.suggestions.append(
            "Identify what the business must sacrifice to pursue their chosen strategy"
        )
        result.score -= config.TRADEOFF_PENALTY

    if _mentions_any(text, config.GENERIC_PHRASES):
        result.issues.append("Contains generic business advice")
        result.suggestions.append(
            "Replace generic advice with specific strategic positioning recommendations"
        )
        result.score -= config.GENERIC_PENALTY

    if not _mentions_any(text, config.POSITIONING_TERMS):
        result.issues.append("Weak competitive positioning analysis")
        result.suggestions.append(
            "Explain how this business creates sustainable competitive advantage"
        )
        result.score -= config.POSITIONING_PENALTY

    result.score = max(0, result.score)
    return result
