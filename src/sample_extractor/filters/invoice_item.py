"""
Invoice Item Filter Implementation.

Keeps invoice line items whose invoice identifier was collected by the
invoice stage.
"""

from __future__ import annotations

from typing import Optional, TextIO

from sample_extractor.config.models import InvoiceItemFilterConfig, RecordFormatConfig
from sample_extractor.domain.entities import Dataset
from sample_extractor.domain.records import join_key
from sample_extractor.domain.value_objects import FilterResult, InvoiceKeySet
from sample_extractor.filters.base import RecordFilter


class InvoiceItemFilter(RecordFilter):
    """Filter invoice items by invoice identifier."""

    dataset = Dataset.INVOICE_ITEMS

    def __init__(
        self,
        config: Optional[InvoiceItemFilterConfig] = None,
        record_format: Optional[RecordFormatConfig] = None,
    ) -> None:
        super().__init__(record_format)
        self.config = config or InvoiceItemFilterConfig()

    @property
    def name(self) -> str:
        """Unique name of this filter stage."""
        return "invoice_item_filter"

    def apply(
        self,
        source: TextIO,
        sink: TextIO,
        invoice_keys: InvoiceKeySet,
    ) -> FilterResult:
        """
        Copy the header and every item of a collected invoice.

        Args:
            source: Full invoice item extraction, header first
            sink: Output for the invoice item test file
            invoice_keys: Invoice identifiers produced by InvoiceFilter

        Returns:
            FilterResult with row counters

        Raises:
            MalformedRecordError: If a row lacks the invoice column
        """
        header = self._copy_header(source, sink)
        if header is None:
            return FilterResult()

        rows_read = 0
        rows_written = 0
        for line_number, line, fields in self._iter_rows(source):
            rows_read += 1
            if join_key(fields, self.config.key_column, line_number) in invoice_keys:
                self._emit(sink, line)
                rows_written += 1

        return FilterResult(
            header_written=True,
            rows_read=rows_read,
            rows_written=rows_written,
        )
