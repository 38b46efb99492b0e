"""
Value Objects for Domain Layer.

Value objects are immutable objects that describe the outcome of a
filter pass but have no conceptual identity.
"""

from __future__ import annotations

from typing import FrozenSet

from pydantic import BaseModel, Field


# =============================================================================
# Type Aliases for improved readability
# =============================================================================

# Customer identifiers selected for the test subset
SampleKeySet = FrozenSet[str]

# Invoice identifiers attached to sample customers
InvoiceKeySet = FrozenSet[str]


class FilterResult(BaseModel):
    """Result of streaming one dataset through a filter."""

    header_written: bool = Field(
        default=False, description="False only when the input was empty"
    )
    rows_read: int = Field(default=0, ge=0, description="Data rows consumed")
    rows_written: int = Field(default=0, ge=0, description="Data rows emitted")
    stopped_early: bool = Field(
        default=False, description="Scan ended by the termination rule"
    )
    collected_keys: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Keys gathered for the next stage",
    )

    model_config = {"frozen": True}
