"""
Tests for the critique-and-improve loop.

Tests the iteration bound, early stopping, feedback in retry prompts and
the routing function of the critique graph.
"""

import asyncio

import pytest

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.shared.contracts import (
    ProviderMetadata,
    ProviderResponse,
    ValidationResult,
    ValidationScores,
)
from marketing_agents.validation.config import CritiqueConfig
from marketing_agents.validation.loop import CritiqueLoop, create_initial_state
from marketing_agents.validation.nodes.routing import route_after_validation


# ============================================================================
# Test Fixtures
# ============================================================================

PROMPT = "Analyze Acme Plumbing's competitive strategy."


def _response(name, content):
    return ProviderResponse(
        content=content,
        metadata=ProviderMetadata(provider=name, execution_time_ms=1.0),
    )


class _Generator(CapabilityProvider):
    """Generator numbering each attempt and recording its prompts."""

    def __init__(self, error=None):
        self.name = "strategic-analysis"
        self.prompts = []
        self.error = error

    async def execute(self, prompt, context=None):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return _response(
            self.name,
            f"Attempt {len(self.prompts)}: Five Forces review with a clear trade-off "
            f"and a unique position.",
        )


class _Critic(CapabilityProvider):
    """
    Critic scoring attempts below ``passing_attempt`` low and the rest high.

    ``passing_attempt=None`` never passes.
    """

    def __init__(self, passing_attempt=None):
        self.name = "analysis-critic"
        self.passing_attempt = passing_attempt

    def _passes(self, prompt):
        if self.passing_attempt is None:
            return False
        for attempt in range(self.passing_attempt, 10):
            if f"Attempt {attempt}:" in prompt:
                return True
        return False

    async def execute(self, prompt, context=None):
        if "Michael Porter's frameworks" in prompt:
            return _response(self.name, '{"critiques": ["Quantify rivalry"]}')
        if self._passes(prompt):
            return _response(self.name, '{"score": 95, "critiques": []}')
        return _response(self.name, '{"score": 20, "critiques": ["Too generic"]}')


def _make_validation(is_valid, score=60):
    return ValidationResult(
        is_valid=is_valid,
        scores=ValidationScores(framework_accuracy=score, specificity=score, actionability=score),
        overall_score=score,
        critiques=[],
        improvements=[],
    )


def _run_loop(generator, critic, max_iterations=3):
    loop = CritiqueLoop(generator, critic, CritiqueConfig(max_iterations=max_iterations))
    return asyncio.run(loop.run(PROMPT, "Acme Plumbing, Austin TX", session_id="test"))


# ============================================================================
# Loop behavior
# ============================================================================


class TestCritiqueLoop:
    """Tests for CritiqueLoop.run."""

    def test_never_valid_stops_at_budget(self):
        """Generation is called at most max_iterations times."""
        generator = _Generator()
        outcome = _run_loop(generator, _Critic(passing_attempt=None), max_iterations=3)

        assert len(generator.prompts) == 3
        assert outcome.iterations == 3
        assert outcome.validation.is_valid is False

    def test_last_output_accepted_when_budget_spent(self):
        """The final attempt is returned even though it failed validation."""
        outcome = _run_loop(_Generator(), _Critic(passing_attempt=None), max_iterations=2)

        assert outcome.output.startswith("Attempt 2:")
        assert [record.iteration for record in outcome.history] == [1, 2]
        assert all(record.is_valid is False for record in outcome.history)

    def test_valid_first_attempt_stops_immediately(self):
        """A passing first attempt ends the loop after one generation."""
        generator = _Generator()
        outcome = _run_loop(generator, _Critic(passing_attempt=1))

        assert len(generator.prompts) == 1
        assert outcome.iterations == 1
        assert outcome.validation.is_valid is True
        assert outcome.validation.overall_score == 97

    def test_stops_when_retry_passes(self):
        """The loop stops at the first valid attempt."""
        generator = _Generator()
        outcome = _run_loop(generator, _Critic(passing_attempt=2), max_iterations=5)

        assert len(generator.prompts) == 2
        assert outcome.output.startswith("Attempt 2:")
        assert outcome.validation.is_valid is True

    def test_retry_prompt_carries_feedback(self):
        """Retries append the critiques to the original prompt."""
        generator = _Generator()
        _run_loop(generator, _Critic(passing_attempt=None), max_iterations=3)

        assert generator.prompts[0] == PROMPT
        for retry in generator.prompts[1:]:
            assert retry.startswith(PROMPT)
            assert "PREVIOUS ATTEMPT HAD THESE ISSUES:" in retry
            assert "Quantify rivalry" in retry
            assert "Too generic" in retry
            assert retry.count("PREVIOUS ATTEMPT HAD THESE ISSUES:") == 1

    def test_single_iteration_budget(self):
        """max_iterations=1 means exactly one attempt."""
        generator = _Generator()
        outcome = _run_loop(generator, _Critic(passing_attempt=None), max_iterations=1)

        assert len(generator.prompts) == 1
        assert outcome.iterations == 1

    def test_generation_error_propagates(self):
        """A generator that cannot produce output fails the loop."""
        with pytest.raises(RuntimeError, match="model offline"):
            _run_loop(_Generator(error=RuntimeError("model offline")), _Critic())

    def test_zero_iterations_rejected(self):
        """A budget below one is a configuration error."""
        with pytest.raises(ValueError):
            CritiqueLoop(_Generator(), _Critic(), CritiqueConfig(max_iterations=0))


# ============================================================================
# Routing
# ============================================================================


class TestRouteAfterValidation:
    """Tests for route_after_validation."""

    def _state(self, iteration, validation, max_iterations=3):
        state = create_initial_state(PROMPT, "ctx", max_iterations, "test")
        state["iteration"] = iteration
        state["validation"] = validation
        return state

    def test_valid_goes_to_done(self):
        assert route_after_validation(self._state(1, _make_validation(True, 80))) == "done"

    def test_invalid_with_budget_retries(self):
        assert route_after_validation(self._state(1, _make_validation(False))) == "generate"
        assert route_after_validation(self._state(2, _make_validation(False))) == "generate"

    def test_invalid_at_budget_goes_to_done(self):
        assert route_after_validation(self._state(3, _make_validation(False))) == "done"
