"""
Invoice Filter Implementation.

Keeps invoices belonging to sample customers and collects their invoice
identifiers, which become the key set of the invoice item stage. A
customer may own any number of invoices, so the whole file is read.
"""

from __future__ import annotations

from typing import Optional, Set, TextIO

from sample_extractor.config.models import InvoiceFilterConfig, RecordFormatConfig
from sample_extractor.domain.entities import Dataset
from sample_extractor.domain.records import join_key
from sample_extractor.domain.value_objects import FilterResult, SampleKeySet
from sample_extractor.filters.base import RecordFilter


class InvoiceFilter(RecordFilter):
    """Filter invoices by customer and gather the InvoiceKeySet."""

    dataset = Dataset.INVOICES

    def __init__(
        self,
        config: Optional[InvoiceFilterConfig] = None,
        record_format: Optional[RecordFormatConfig] = None,
    ) -> None:
        super().__init__(record_format)
        self.config = config or InvoiceFilterConfig()

    @property
    def name(self) -> str:
        """Unique name of this filter stage."""
        return "invoice_filter"

    def apply(
        self,
        source: TextIO,
        sink: TextIO,
        sample_keys: SampleKeySet,
    ) -> FilterResult:
        """
        Copy the header and every invoice of a sample customer.

        Args:
            source: Full invoice extraction, header first
            sink: Output for the invoice test file
            sample_keys: Customer identifiers to keep

        Returns:
            FilterResult whose collected_keys is the InvoiceKeySet

        Raises:
            MalformedRecordError: If a row lacks the customer column, or a
                kept row lacks the invoice column
        """
        header = self._copy_header(source, sink)
        if header is None:
            return FilterResult()

        invoice_keys: Set[str] = set()
        rows_read = 0
        rows_written = 0
        customer_column = self.config.customer_key_column
        invoice_column = self.config.invoice_key_column

        for line_number, line, fields in self._iter_rows(source):
            rows_read += 1
            if join_key(fields, customer_column, line_number) not in sample_keys:
                continue
            # rows without an invoice key are never written
            invoice_keys.add(join_key(fields, invoice_column, line_number))
            self._emit(sink, line)
            rows_written += 1

        return FilterResult(
            header_written=True,
            rows_read=rows_read,
            rows_written=rows_written,
            collected_keys=frozenset(invoice_keys),
        )
