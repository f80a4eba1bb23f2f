"""
Retrieval collaborator interface.

Pipelines ask the retrieval collaborator for prior business context
scoped to a caller-supplied id. The vector store behind it is outside
this package.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from marketing_agents.shared.contracts import RetrievalResult


logger = logging.getLogger(__name__)


class RetrievalClient(ABC):
    """Answers a free-text query from previously stored business context."""

    @abstractmethod
    async def query(self, text: str, scope_id: str) -> Optional[RetrievalResult]:
        """
        Look up context for a query.

        Returns None when nothing relevant is stored; may raise on
        transport failure.
        """


class NullRetrievalClient(RetrievalClient):
    """Retrieval client used when no store is configured."""

    async def query(self, text: str, scope_id: str) -> Optional[RetrievalResult]:
        logger.debug(f"[retrieval] No store configured | scope={scope_id}")
        return None
