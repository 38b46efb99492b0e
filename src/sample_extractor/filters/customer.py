"""
Customer Filter Implementation.

Keeps customer rows whose identifier (field 0 by default) belongs to the
sample set. With early termination enabled the scan stops once every
sample customer has been found, leaving the rest of the file unread.
"""

from __future__ import annotations

import logging
from typing import Optional, Set, TextIO

from sample_extractor.config.models import CustomerFilterConfig, RecordFormatConfig
from sample_extractor.domain.entities import Dataset
from sample_extractor.domain.records import join_key
from sample_extractor.domain.value_objects import FilterResult, SampleKeySet
from sample_extractor.filters.base import RecordFilter

logger = logging.getLogger(__name__)


class CustomerFilter(RecordFilter):
    """Filter customers down to the sample set."""

    dataset = Dataset.CUSTOMERS

    def __init__(
        self,
        config: Optional[CustomerFilterConfig] = None,
        record_format: Optional[RecordFormatConfig] = None,
    ) -> None:
        """
        Initialize with configuration.

        Args:
            config: Customer filter configuration
            record_format: Delimiter and line ending settings
        """
        super().__init__(record_format)
        self.config = config or CustomerFilterConfig()

    @property
    def name(self) -> str:
        """Unique name of this filter stage."""
        return "customer_filter"

    def apply(
        self,
        source: TextIO,
        sink: TextIO,
        sample_keys: SampleKeySet,
    ) -> FilterResult:
        """
        Copy the header and every sample customer row from source to sink.

        Termination counts distinct sample keys found, so a customer that
        appears twice is written twice but cannot end the scan before the
        other sample customers have been seen.

        Args:
            source: Full customer extraction, header first
            sink: Output for the customer test file
            sample_keys: Customer identifiers to keep

        Returns:
            FilterResult with row counters; collected_keys holds the
            sample customers actually found

        Raises:
            MalformedRecordError: If a row lacks the key column
        """
        header = self._copy_header(source, sink)
        if header is None:
            return FilterResult()

        early_termination = self.config.early_termination
        if early_termination and not sample_keys:
            return FilterResult(header_written=True, stopped_early=True)

        found: Set[str] = set()
        rows_read = 0
        rows_written = 0
        stopped_early = False

        for line_number, line, fields in self._iter_rows(source):
            rows_read += 1
            key = join_key(fields, self.config.key_column, line_number)
            if key not in sample_keys:
                continue

            self._emit(sink, line)
            rows_written += 1
            found.add(key)

            if early_termination and len(found) == len(sample_keys):
                stopped_early = True
                logger.debug(
                    f"All {len(sample_keys)} sample customers found by line "
                    f"{line_number}, skipping remaining input"
                )
                break

        if len(found) < len(sample_keys):
            logger.info(
                f"{len(sample_keys) - len(found)} sample customers "
                f"not present in customer data"
            )

        return FilterResult(
            header_written=True,
            rows_read=rows_read,
            rows_written=rows_written,
            stopped_early=stopped_early,
            collected_keys=frozenset(found),
        )
