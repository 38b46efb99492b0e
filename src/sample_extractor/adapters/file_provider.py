"""
File Stream Provider.

Opens the configured extraction files for reading and the test files
for writing. Every stream is handed out through a context manager, so
it is closed when its stage ends, whether it succeeded or not.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO

from sample_extractor.config.models import InputPaths, OutputPaths, RecordFormatConfig
from sample_extractor.domain.entities import Dataset

logger = logging.getLogger(__name__)


class FileStreamProvider:
    """Stream provider backed by files on disk."""

    def __init__(
        self,
        inputs: InputPaths,
        outputs: Optional[OutputPaths] = None,
        record_format: Optional[RecordFormatConfig] = None,
    ) -> None:
        """
        Initialize file provider.

        Args:
            inputs: Paths of the four input files
            outputs: Output directory and file names
            record_format: Encoding used for reading and writing
        """
        self.inputs = inputs
        self.outputs = outputs or OutputPaths()
        self.record_format = record_format or RecordFormatConfig()

    def source_path(self, dataset: Dataset) -> Path:
        path = getattr(self.inputs, dataset.value)
        if path is None:
            raise FileNotFoundError(f"No input file configured for {dataset.value}")
        return Path(path)

    def sink_path(self, dataset: Dataset) -> Path:
        if dataset == Dataset.SAMPLE_CUSTOMERS:
            raise ValueError("The sample customer list has no output file")
        return self.outputs.path_for(dataset.value)

    @contextmanager
    def open_source(self, dataset: Dataset) -> Iterator[TextIO]:
        """Open an input file for line-by-line reading."""
        path = self.source_path(dataset)
        logger.debug(f"Reading {dataset.value} from {path}")
        with open(path, encoding=self.record_format.encoding) as f:
            yield f

    @contextmanager
    def open_sink(self, dataset: Dataset) -> Iterator[TextIO]:
        """Open an output file, truncating it; line endings are written as-is."""
        path = self.sink_path(dataset)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Writing {dataset.value} to {path}")
        with open(path, "w", encoding=self.record_format.encoding, newline="") as f:
            yield f
