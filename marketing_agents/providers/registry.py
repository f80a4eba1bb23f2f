"""
Capability registry.

An explicit registry object constructed at startup and passed to the
router, executor and workflow pipelines. Nothing in the package keeps a
process-wide registry.
"""

import logging
from typing import Dict, Iterable, List, Optional

from marketing_agents.providers.base import CapabilityProvider


logger = logging.getLogger(__name__)

MIN_SYSTEM_PROMPT_LENGTH = 50


class CapabilityNotFoundError(KeyError):
    """Raised when a capability name is not registered."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Capability {self.name} not found"


class CapabilityRegistry:
    """Maps capability names to providers."""

    def __init__(self, providers: Optional[Iterable[CapabilityProvider]] = None):
        self._providers: Dict[str, CapabilityProvider] = {}
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: CapabilityProvider) -> None:
        if provider.name in self._providers:
            logger.warning(f"[registry] Replacing capability '{provider.name}'")
        self._providers[provider.name] = provider

    def get(self, name: str) -> CapabilityProvider:
        provider = self._providers.get(name)
        if provider is None:
            raise CapabilityNotFoundError(name)
        return provider

    def find(self, name: str) -> Optional[CapabilityProvider]:
        return self._providers.get(name)

    def names(self) -> List[str]:
        return list(self._providers)

    def verify(self) -> List[str]:
        """
        Return names of capabilities whose configuration looks incomplete.

        Only providers exposing a ``config.system_prompt`` are checked.
        """
        invalid = []
        for name, provider in self._providers.items():
            config = getattr(provider, "config", None)
            system_prompt = getattr(config, "system_prompt", None)
            if system_prompt is not None and len(system_prompt) < MIN_SYSTEM_PROMPT_LENGTH:
                invalid.append(name)
        return invalid

    def __contains__(self, name: str) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)
