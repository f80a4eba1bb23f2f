"""
Capability provider interface.

A capability provider is a stateless unit that turns a prompt plus a
context mapping into generated text. Providers may fail; callers in the
orchestration layer catch and record those failures.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from marketing_agents.shared.contracts import ProviderResponse


class ProviderError(Exception):
    """Raised when a capability provider cannot produce a response."""

    def __init__(self, provider: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.cause = cause


class CapabilityProvider(ABC):
    """Abstract base class for capability providers."""

    name: str

    @abstractmethod
    async def execute(
        self,
        prompt: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> ProviderResponse:
        """Generate a response for a prompt.

        Args:
            prompt: The task prompt.
            context: Extra data rendered alongside the prompt.

        Returns:
            Generated content with call metadata.
        """
        pass
