"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests. The extraction
data mirrors a small confectionery wholesaler export: quoted fields, one
header line per file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest

from sample_extractor.adapters.memory_provider import InMemoryStreamProvider


SAMPLE_HEADER = '"CUSTOMER_CODE"\n'
CUSTOMER_HEADER = '"CUSTOMER_CODE","FIRSTNAME","LASTNAME"\n'
INVOICE_HEADER = '"CUSTOMER_CODE","INVOICE_CODE","AMOUNT","DATE"\n'
ITEM_HEADER = '"INVOICE_CODE","ITEM_CODE","AMOUNT","QUANTITY"\n'

CUSTOMERS = (
    CUSTOMER_HEADER
    + '"CUST0000010231","Maria","Alba"\n'
    + '"CUST0000010233","Jamie","Hayes"\n'
    + '"CUST0000010236","Stephanie","James"\n'
    + '"CUST0000010235","George","Lucas"\n'
)

INVOICES = (
    INVOICE_HEADER
    + '"CUST0000010231","IN0000001","105.50","01-Jan-2016"\n'
    + '"CUST0000010236","IN0000011","0.0","01-Jan-2000"\n'
    + '"CUST0000010235","IN0000002","186.53","01-Jan-2016"\n'
    + '"CUST0000010231","IN0000003","114.14","01-Feb-2016"\n'
    + '"CUST0000010238","IN0000010","0.0","01-Jan-2000"\n'
    + '"CUST0000010239","IN0000013","0.0","01-Jan-2000"\n'
)

INVOICE_ITEMS = (
    ITEM_HEADER
    + '"IN0000001","MEIJI","75.60","100"\n'
    + '"IN0000005","AAA","0.0","0"\n'
    + '"IN0000001","POCKY","10.40","250"\n'
    + '"IN0000009","AAA","0.0","0"\n'
    + '"IN0000001","PUCCHO","19.50","40"\n'
    + '"IN0000002","MEIJI","113.40","150"\n'
    + '"IN0000002","PUCCHO","73.13","150"\n'
    + '"IN0000008","AAA","0.0","0"\n'
    + '"IN0000007","AAA","0.0","0"\n'
    + '"IN0000003","POCKY","16.64","400"\n'
    + '"IN0000003","PUCCHO","97.50","200"\n'
)


@pytest.fixture
def extraction_data() -> Dict[str, str]:
    """Full extraction contents keyed by dataset name."""
    return {
        "sample_customers": SAMPLE_HEADER
        + '"CUST0000010231"\n'
        + '"CUST0000010235"\n',
        "customers": CUSTOMERS,
        "invoices": INVOICES,
        "invoice_items": INVOICE_ITEMS,
    }


@pytest.fixture
def memory_provider(extraction_data: Dict[str, str]) -> InMemoryStreamProvider:
    """In-memory provider serving the shared extraction data."""
    return InMemoryStreamProvider(**extraction_data)


@pytest.fixture
def extraction_files(tmp_path: Path, extraction_data: Dict[str, str]) -> Dict[str, Path]:
    """Write the shared extraction data to disk; returns paths by dataset name."""
    input_dir = tmp_path / "full"
    input_dir.mkdir()
    paths = {}
    for name, content in extraction_data.items():
        path = input_dir / f"{name}.csv"
        path.write_text(content, encoding="utf-8")
        paths[name] = path
    return paths
