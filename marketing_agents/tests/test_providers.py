"""
Tests for capability providers, the registry and structured logging.

The OpenAI client is replaced by an in-memory stub; no network access.
"""

import asyncio
import json
import logging
from types import SimpleNamespace

import pytest

from marketing_agents.providers.base import ProviderError
from marketing_agents.providers.catalog import DEFAULT_CAPABILITIES, build_default_registry
from marketing_agents.providers.llm_provider import (
    CapabilityConfig,
    LLMCapabilityProvider,
    render_context_block,
)
from marketing_agents.providers.registry import CapabilityNotFoundError, CapabilityRegistry
from marketing_agents.shared.llm.config import LLMConfig
from marketing_agents.shared.logging.config import StructuredFormatter, log_workflow_event


# ============================================================================
# Test Fixtures
# ============================================================================


class _StubCompletions:
    """Stands in for ``client.chat.completions``."""

    def __init__(self, content="", error=None):
        self.content = content
        self.error = error
        self.requests = []

    async def create(self, **request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))],
            usage=SimpleNamespace(prompt_tokens=11, completion_tokens=7, total_tokens=18),
        )


def _make_client(content="", error=None):
    completions = _StubCompletions(content, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def _make_config(**overrides):
    values = {
        "name": "pricing-intelligence",
        "description": "Pricing",
        "system_prompt": "You price services for {{business_name}} in {{location}}.",
        "temperature": 0.3,
        "max_tokens": 400,
    }
    values.update(overrides)
    return CapabilityConfig(**values)


# ============================================================================
# LLM provider
# ============================================================================


class TestRenderContextBlock:
    """Tests for render_context_block."""

    def test_empty_context_renders_nothing(self):
        assert render_context_block({}) == ""
        assert render_context_block({"notes": "", "tags": []}) == ""

    def test_json_strings_are_pretty_printed(self):
        """JSON held in a string is re-indented."""
        block = render_context_block({"intelligence": '{"reviews": 42}'})

        assert block.startswith("\n\n=== BUSINESS CONTEXT DATA ===\n")
        assert '\nINTELLIGENCE:\n{\n  "reviews": 42\n}\n' in block
        assert block.endswith("=== END CONTEXT DATA ===\n")

    def test_plain_strings_are_kept(self):
        block = render_context_block({"previousAnalysis": "Rivalry is high."})
        assert "\nPREVIOUSANALYSIS:\nRivalry is high.\n" in block


class TestLLMCapabilityProvider:
    """Tests for LLMCapabilityProvider."""

    def test_system_prompt_placeholders_and_json_suffix(self):
        """Placeholders are filled from context and JSON mode adds an instruction."""
        provider = LLMCapabilityProvider(_make_config(json_mode=True))
        prompt = provider.build_system_prompt({"business_name": "Acme", "location": "Austin"})

        assert prompt.startswith("You price services for Acme in Austin.")
        assert "respond with valid JSON only" in prompt

    def test_unfilled_placeholders_remain(self):
        provider = LLMCapabilityProvider(_make_config())
        assert "{{location}}" in provider.build_system_prompt({"business_name": "Acme"})

    def test_execute_returns_response_with_metadata(self):
        """A successful call carries content, provider name and token usage."""
        client, completions = _make_client("  Charge $149.  ")
        provider = LLMCapabilityProvider(_make_config(json_mode=True), client=client)

        response = asyncio.run(provider.execute("Price a drain clean", {"location": "Austin"}))

        assert response.content == "Charge $149."
        assert response.metadata.provider == "pricing-intelligence"
        assert response.metadata.tokens_used == 18
        assert response.metadata.execution_time_ms >= 0

        request = completions.requests[0]
        assert request["temperature"] == 0.3
        assert request["max_tokens"] == 400
        assert request["response_format"] == {"type": "json_object"}
        assert request["messages"][1]["content"].startswith("Price a drain clean")
        assert "LOCATION:\nAustin" in request["messages"][1]["content"]

    def test_empty_response_raises(self):
        client, _ = _make_client("")
        provider = LLMCapabilityProvider(_make_config(), client=client)

        with pytest.raises(ProviderError, match="Empty response"):
            asyncio.run(provider.execute("Price it"))

    def test_transport_error_is_wrapped(self):
        """Transport failures surface as ProviderError with the cause attached."""
        client, completions = _make_client(error=ConnectionError("reset by peer"))
        provider = LLMCapabilityProvider(
            _make_config(), llm_config=LLMConfig(max_retries=1), client=client
        )

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(provider.execute("Price it"))

        assert isinstance(exc_info.value.cause, ConnectionError)
        assert exc_info.value.provider == "pricing-intelligence"
        assert len(completions.requests) == 1


# ============================================================================
# Registry
# ============================================================================


class TestCapabilityRegistry:
    """Tests for CapabilityRegistry."""

    def test_get_unknown_raises(self):
        registry = CapabilityRegistry()
        with pytest.raises(CapabilityNotFoundError) as exc_info:
            registry.get("ghost")
        assert isinstance(exc_info.value, KeyError)
        assert str(exc_info.value) == "Capability ghost not found"

    def test_find_and_contains(self):
        provider = LLMCapabilityProvider(_make_config())
        registry = CapabilityRegistry([provider])

        assert registry.find("pricing-intelligence") is provider
        assert registry.find("ghost") is None
        assert "pricing-intelligence" in registry
        assert len(registry) == 1

    def test_register_replaces(self):
        registry = CapabilityRegistry([LLMCapabilityProvider(_make_config())])
        replacement = LLMCapabilityProvider(_make_config(description="v2"))
        registry.register(replacement)

        assert len(registry) == 1
        assert registry.get("pricing-intelligence") is replacement

    def test_verify_flags_thin_prompts(self):
        registry = CapabilityRegistry([
            LLMCapabilityProvider(_make_config(name="thin", system_prompt="Be brief.")),
            LLMCapabilityProvider(_make_config(system_prompt="x" * 60)),
        ])
        assert registry.verify() == ["thin"]

    def test_registries_are_independent(self):
        """Registries share no state."""
        first = CapabilityRegistry([LLMCapabilityProvider(_make_config())])
        second = CapabilityRegistry()
        assert len(first) == 1
        assert len(second) == 0

    def test_default_registry(self):
        """The default catalog registers every capability with a usable prompt."""
        client, _ = _make_client("ok")
        registry = build_default_registry(client=client)

        assert registry.names() == [config.name for config in DEFAULT_CAPABILITIES]
        assert "task-planner" in registry
        assert "analysis-critic" in registry
        assert registry.verify() == []


# ============================================================================
# Structured logging
# ============================================================================


class TestStructuredLogging:
    """Tests for the structured log formatter and workflow events."""

    def test_workflow_event_is_json_formatted(self, caplog):
        logger = logging.getLogger("marketing_agents.tests.events")
        with caplog.at_level(logging.INFO, logger="marketing_agents.tests.events"):
            log_workflow_event("plan_created", {"tasks": 4}, {"plan_id": "p1"}, logger=logger)

        record = caplog.records[-1]
        payload = json.loads(StructuredFormatter().format(record))

        assert payload["message"] == "Workflow event: plan_created"
        assert payload["level"] == "INFO"
        assert payload["extra"] == {
            "event": "plan_created",
            "summary": {"tasks": 4},
            "extra": {"plan_id": "p1"},
        }
