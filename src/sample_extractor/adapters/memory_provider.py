"""
In-Memory Stream Provider.

Serves inputs from strings and captures outputs as strings. Used by the
test suite and by callers that already hold the extraction data in
memory.
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, TextIO

from sample_extractor.domain.entities import Dataset


class InMemoryStreamProvider:
    """Stream provider backed by io.StringIO buffers."""

    def __init__(
        self,
        sample_customers: Optional[str] = None,
        customers: Optional[str] = None,
        invoices: Optional[str] = None,
        invoice_items: Optional[str] = None,
    ) -> None:
        """
        Initialize with input contents; a None input behaves like a missing file.
        """
        self._sources: Dict[Dataset, Optional[str]] = {
            Dataset.SAMPLE_CUSTOMERS: sample_customers,
            Dataset.CUSTOMERS: customers,
            Dataset.INVOICES: invoices,
            Dataset.INVOICE_ITEMS: invoice_items,
        }
        self.outputs: Dict[Dataset, str] = {}
        self.closed: List[Dataset] = []

    def output(self, dataset: Dataset) -> Optional[str]:
        """Contents written for a dataset, or None if its sink was never opened."""
        return self.outputs.get(dataset)

    @contextmanager
    def open_source(self, dataset: Dataset) -> Iterator[TextIO]:
        text = self._sources.get(dataset)
        if text is None:
            raise FileNotFoundError(f"No input provided for {dataset.value}")
        stream = io.StringIO(text)
        try:
            yield stream
        finally:
            stream.close()

    @contextmanager
    def open_sink(self, dataset: Dataset) -> Iterator[TextIO]:
        if dataset == Dataset.SAMPLE_CUSTOMERS:
            raise ValueError("The sample customer list has no output")
        # newline="" keeps written line endings untranslated
        stream = io.StringIO(newline="")
        try:
            yield stream
        finally:
            self.outputs[dataset] = stream.getvalue()
            self.closed.append(dataset)
            stream.close()
