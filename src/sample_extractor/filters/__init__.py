"""
Filters Package - Sample Key Parsing and Cascading Record Filters.

Each stage consumes the key set produced by the one before it:

    sample list  -> SampleKeySet
    customers    -- filtered by SampleKeySet
    invoices     -- filtered by SampleKeySet, produces InvoiceKeySet
    invoice items -- filtered by InvoiceKeySet

Filters:
    - SampleKeyParser / parse_sample_keys: Builds the SampleKeySet
    - CustomerFilter: Sample customers, with early termination
    - InvoiceFilter: Invoices of sample customers, collects invoice keys
    - InvoiceItemFilter: Items of collected invoices

Design Principles:
    - Each filter is independently testable on plain text streams
    - Configuration injected via constructor
    - Key sets are passed in and returned, never stored on the filter
"""

from sample_extractor.filters.customer import CustomerFilter
from sample_extractor.filters.invoice import InvoiceFilter
from sample_extractor.filters.invoice_item import InvoiceItemFilter
from sample_extractor.filters.sample_keys import SampleKeyParser, parse_sample_keys

__all__ = [
    "CustomerFilter",
    "InvoiceFilter",
    "InvoiceItemFilter",
    "SampleKeyParser",
    "parse_sample_keys",
]
