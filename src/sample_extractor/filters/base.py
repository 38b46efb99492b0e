"""
Record Filter Base.

Shared streaming mechanics for the dataset filters: copying the header,
walking data rows with their line numbers, and writing kept rows.
Concrete filters only decide which rows to keep and which keys to hand
to the next stage.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, TextIO, Tuple

from sample_extractor.config.models import RecordFormatConfig
from sample_extractor.domain.entities import Dataset
from sample_extractor.domain.records import split_record, strip_line_ending

# (line_number, line without terminator, fields)
Row = Tuple[int, str, List[str]]


class RecordFilter:
    """Base class for filters streaming one dataset into one output."""

    dataset: Dataset

    def __init__(self, record_format: Optional[RecordFormatConfig] = None) -> None:
        """
        Initialize with the record layout.

        Args:
            record_format: Delimiter and line ending settings
        """
        self.record_format = record_format or RecordFormatConfig()

    def _copy_header(self, source: TextIO, sink: TextIO) -> Optional[str]:
        """
        Copy the first line of source to sink.

        Returns:
            The header without its line ending, or None for empty input
        """
        raw = source.readline()
        if raw == "":
            return None
        header = strip_line_ending(raw)
        self._emit(sink, header)
        return header

    def _iter_rows(self, source: TextIO) -> Iterator[Row]:
        """Yield the remaining data rows; line numbers count the header as 1."""
        delimiter = self.record_format.delimiter
        for line_number, raw in enumerate(source, start=2):
            line = strip_line_ending(raw)
            if self.record_format.skip_blank_lines and not line.strip():
                continue
            yield line_number, line, split_record(line, delimiter)

    def _emit(self, sink: TextIO, line: str) -> None:
        sink.write(line + self.record_format.line_terminator)
