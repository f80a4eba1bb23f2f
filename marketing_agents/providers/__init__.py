"""Capability providers and the registry that resolves them by name."""

from marketing_agents.providers.base import CapabilityProvider, ProviderError
from marketing_agents.providers.registry import CapabilityRegistry, CapabilityNotFoundError
from marketing_agents.providers.llm_provider import CapabilityConfig, LLMCapabilityProvider
from marketing_agents.providers.catalog import DEFAULT_CAPABILITIES, build_default_registry

__all__ = [
    "CapabilityProvider",
    "ProviderError",
    "CapabilityRegistry",
    "CapabilityNotFoundError",
    "CapabilityConfig",
    "LLMCapabilityProvider",
    "DEFAULT_CAPABILITIES",
    "build_default_registry",
]
