"""
Core Domain Entities.

This module defines the fundamental entities of the Sample Extractor
domain: the datasets a run touches, the stages it executes, and the
audit trail and failure record it hands back to the caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field


class Dataset(str, Enum):
    """Extraction files taking part in a run."""

    SAMPLE_CUSTOMERS = "sample_customers"
    CUSTOMERS = "customers"
    INVOICES = "invoices"
    INVOICE_ITEMS = "invoice_items"


class StageName(str, Enum):
    """Stages of an extraction run, in execution order."""

    SAMPLE_KEYS = "sample_keys"
    CUSTOMERS = "customer_filter"
    INVOICES = "invoice_filter"
    INVOICE_ITEMS = "invoice_item_filter"


class StageResult(BaseModel):
    """Result of a single completed stage for the audit trail."""

    stage_name: StageName
    dataset: Dataset
    input_rows: int = Field(default=0, ge=0)
    output_rows: int = Field(default=0, ge=0)
    key_count: int = Field(
        default=0, ge=0, description="Size of the key set the stage produced"
    )
    stopped_early: bool = False
    duration_seconds: float = Field(default=0.0, ge=0)

    @property
    def reduction_ratio(self) -> float:
        """Calculate reduction ratio (0.0 = nothing dropped, 1.0 = all dropped)."""
        if self.input_rows == 0:
            return 0.0
        return 1.0 - (self.output_rows / self.input_rows)


class StageFailure(BaseModel):
    """Terminal failure of a stage."""

    stage_name: StageName
    dataset: Dataset
    error_type: str = Field(..., description="Exception class name")
    message: str
    line_number: Optional[int] = Field(
        default=None, description="1-based input line, when known"
    )

    model_config = {"frozen": True}

    def describe(self) -> str:
        where = f" at line {self.line_number}" if self.line_number else ""
        return (
            f"{self.stage_name.value} failed on {self.dataset.value}{where}: "
            f"{self.error_type}: {self.message}"
        )


class ExtractionError(Exception):
    """Raised by ExtractionResult.raise_for_failure for a failed run."""

    def __init__(self, failure: StageFailure) -> None:
        super().__init__(failure.describe())
        self.failure = failure


class ExtractionResult(BaseModel):
    """Complete result of an extraction run."""

    correlation_id: str
    sample_customers: FrozenSet[str] = Field(default_factory=frozenset)
    sample_invoices: FrozenSet[str] = Field(default_factory=frozenset)
    audit_trail: List[StageResult] = Field(default_factory=list)
    failure: Optional[StageFailure] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    def stage(self, name: StageName) -> Optional[StageResult]:
        """Look up the audit entry of a completed stage."""
        for entry in self.audit_trail:
            if entry.stage_name == name:
                return entry
        return None

    def raise_for_failure(self) -> None:
        """
        Raise if the run did not complete.

        Raises:
            ExtractionError: Wrapping the recorded StageFailure
        """
        if self.failure is not None:
            raise ExtractionError(self.failure)
