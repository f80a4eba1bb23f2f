"""
Capability provider output contract.

Defines the response every capability provider returns from a single
generation call.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ProviderMetadata(BaseModel):
    """Bookkeeping attached to a provider response."""

    provider: str = Field(description="Name of the capability that produced the response")
    execution_time_ms: float = Field(ge=0, description="Wall time of the call in ms")
    tokens_used: Optional[int] = Field(
        default=None, description="Total tokens consumed, when reported"
    )


class ProviderResponse(BaseModel):
    """Generated text plus call metadata."""

    content: str = Field(description="Raw generated text")
    metadata: ProviderMetadata
