"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class RecordFormatConfig(BaseModel):
    """How extraction files are laid out on disk."""

    delimiter: str = Field(default=",", min_length=1, max_length=1)
    encoding: str = Field(default="utf-8")
    line_terminator: str = Field(default="\n")
    skip_blank_lines: bool = True

    @field_validator("line_terminator")
    @classmethod
    def _check_terminator(cls, value: str) -> str:
        if value not in ("\n", "\r\n"):
            raise ValueError("line_terminator must be '\\n' or '\\r\\n'")
        return value


class SampleConfig(BaseModel):
    """Parsing of the sample customer list."""

    # None takes the whole trimmed line as the key
    key_column: Optional[int] = Field(default=None, ge=0)


class CustomerFilterConfig(BaseModel):
    """Configuration for the customer filter."""

    key_column: int = Field(default=0, ge=0)
    early_termination: bool = True


class InvoiceFilterConfig(BaseModel):
    """Configuration for the invoice filter."""

    customer_key_column: int = Field(default=0, ge=0)
    invoice_key_column: int = Field(default=1, ge=0)


class InvoiceItemFilterConfig(BaseModel):
    """Configuration for the invoice item filter."""

    key_column: int = Field(default=0, ge=0)


class InputPaths(BaseModel):
    """Full extraction files to read."""

    sample_customers: Optional[Path] = None
    customers: Optional[Path] = None
    invoices: Optional[Path] = None
    invoice_items: Optional[Path] = None


class OutputPaths(BaseModel):
    """Where the extracted test files are written."""

    directory: Path = Field(default=Path("."))
    customers: str = "customer_test.csv"
    invoices: str = "invoice_test.csv"
    invoice_items: str = "invoice_item_test.csv"

    def path_for(self, name: str) -> Path:
        return self.directory / getattr(self, name)


class ExtractionConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    format: RecordFormatConfig = Field(default_factory=RecordFormatConfig)
    sample: SampleConfig = Field(default_factory=SampleConfig)
    customer_filter: CustomerFilterConfig = Field(
        default_factory=CustomerFilterConfig,
    )
    invoice_filter: InvoiceFilterConfig = Field(
        default_factory=InvoiceFilterConfig,
    )
    invoice_item_filter: InvoiceItemFilterConfig = Field(
        default_factory=InvoiceItemFilterConfig,
    )
    inputs: InputPaths = Field(default_factory=InputPaths)
    outputs: OutputPaths = Field(default_factory=OutputPaths)
