"""
Sample Key Parsing.

Builds the SampleKeySet from the sample customer list: a header line
followed by one customer identifier per line.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Set, TextIO

from sample_extractor.config.models import RecordFormatConfig, SampleConfig
from sample_extractor.domain.entities import Dataset
from sample_extractor.domain.records import join_key, split_record, strip_line_ending
from sample_extractor.domain.value_objects import FilterResult, SampleKeySet

logger = logging.getLogger(__name__)


def parse_sample_keys(
    lines: Iterable[str],
    key_column: Optional[int] = None,
    delimiter: str = ",",
) -> SampleKeySet:
    """
    Parse sample customer identifiers.

    The first line is always treated as the header and skipped, even when
    the file has no real header. Blank lines are ignored.

    Args:
        lines: Lines of the sample file, with or without line endings
        key_column: Field holding the key; None takes the whole line
        delimiter: Field delimiter used when key_column is set

    Returns:
        Immutable set of unique keys (empty for empty or header-only input)

    Raises:
        MalformedRecordError: If key_column is missing on a line
    """
    keys: Set[str] = set()
    for line_number, raw in enumerate(lines, start=1):
        if line_number == 1:
            continue
        line = strip_line_ending(raw)
        if not line.strip():
            continue
        if key_column is None:
            keys.add(line.strip())
        else:
            fields = split_record(line, delimiter)
            keys.add(join_key(fields, key_column, line_number).strip())
    return frozenset(keys)


class SampleKeyParser:
    """Pipeline stage wrapping parse_sample_keys."""

    dataset = Dataset.SAMPLE_CUSTOMERS

    def __init__(
        self,
        config: Optional[SampleConfig] = None,
        record_format: Optional[RecordFormatConfig] = None,
    ) -> None:
        self.config = config or SampleConfig()
        self.record_format = record_format or RecordFormatConfig()

    @property
    def name(self) -> str:
        return "sample_keys"

    def parse(self, source: TextIO) -> FilterResult:
        """Read the sample list and return its keys as collected_keys."""
        rows_read = 0

        def counted(lines: Iterable[str]) -> Iterable[str]:
            nonlocal rows_read
            for index, line in enumerate(lines):
                if index > 0 and line.strip():
                    rows_read += 1
                yield line

        keys = parse_sample_keys(
            counted(source),
            key_column=self.config.key_column,
            delimiter=self.record_format.delimiter,
        )
        if rows_read > len(keys):
            logger.debug(f"Sample list had {rows_read - len(keys)} duplicate keys")

        return FilterResult(
            header_written=False,
            rows_read=rows_read,
            rows_written=len(keys),
            collected_keys=keys,
        )
