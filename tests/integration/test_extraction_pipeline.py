"""
Integration Tests for ExtractionPipeline.

Tests cover:
    - Full end-to-end extraction over in-memory and on-disk datasets
    - Key sets handed from stage to stage
    - Failure propagation and abort of remaining stages
    - Audit trail generation
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pytest

from sample_extractor.adapters.console_logger import ConsoleAuditLogger
from sample_extractor.adapters.memory_provider import InMemoryStreamProvider
from sample_extractor.config.models import ExtractionConfig
from sample_extractor.domain.entities import Dataset, ExtractionError, StageName
from sample_extractor.domain.records import split_record
from sample_extractor.pipeline.extraction_pipeline import (
    ExtractionPipeline,
    create_pipeline,
)
from sample_extractor.validation.request_validator import ValidationError

SAMPLE_HEADER = '"CUSTOMER_CODE"\n'
CUSTOMER_HEADER = '"CUSTOMER_CODE","FIRSTNAME","LASTNAME"\n'
INVOICE_HEADER = '"CUSTOMER_CODE","INVOICE_CODE","AMOUNT","DATE"\n'
ITEM_HEADER = '"INVOICE_CODE","ITEM_CODE","AMOUNT","QUANTITY"\n'


def run_in_memory(
    provider: InMemoryStreamProvider,
    config: Optional[ExtractionConfig] = None,
):
    pipeline = ExtractionPipeline(
        provider=provider,
        config=config,
        audit_logger=ConsoleAuditLogger(verbose=False),
    )
    return pipeline.run()


class TestExtractionPipeline:
    """Integration tests for ExtractionPipeline."""

    def test_happy_path_with_one_customer(self) -> None:
        """
        SCENARIO: One sample customer with one invoice of two items
        EXPECTED: Each output keeps only the related rows
        """
        # Arrange
        provider = InMemoryStreamProvider(
            sample_customers=SAMPLE_HEADER + '"CUST0000010231"\n',
            customers=CUSTOMER_HEADER
            + '"CUST0000010231","Maria","Alba"\n'
            + '"CUST0000010233","Jamie","Hayes"\n',
            invoices=INVOICE_HEADER
            + '"CUST0000010231","IN0000001","105.50","01-Jan-2016"\n'
            + '"CUST0000010233","IN0000013","0.0","01-Jan-2000"\n',
            invoice_items=ITEM_HEADER
            + '"IN0000001","MEIJI","75.60","100"\n'
            + '"IN0000005","AAA","0.0","0"\n'
            + '"IN0000001","POCKY","10.40","250"\n',
        )

        # Act
        result = run_in_memory(provider)

        # Assert
        assert result.succeeded
        assert provider.output(Dataset.CUSTOMERS) == (
            CUSTOMER_HEADER + '"CUST0000010231","Maria","Alba"\n'
        )
        assert provider.output(Dataset.INVOICES) == (
            INVOICE_HEADER + '"CUST0000010231","IN0000001","105.50","01-Jan-2016"\n'
        )
        assert provider.output(Dataset.INVOICE_ITEMS) == (
            ITEM_HEADER
            + '"IN0000001","MEIJI","75.60","100"\n'
            + '"IN0000001","POCKY","10.40","250"\n'
        )
        assert result.sample_invoices == frozenset({'"IN0000001"'})

    def test_happy_path_with_multiple_customers(
        self, memory_provider: InMemoryStreamProvider
    ) -> None:
        """
        SCENARIO: Two sample customers owning three invoices
        EXPECTED: Every related row kept, original order preserved
        """
        # Act
        result = run_in_memory(memory_provider)

        # Assert
        assert result.succeeded
        assert memory_provider.output(Dataset.CUSTOMERS) == (
            CUSTOMER_HEADER
            + '"CUST0000010231","Maria","Alba"\n'
            + '"CUST0000010235","George","Lucas"\n'
        )
        assert memory_provider.output(Dataset.INVOICES) == (
            INVOICE_HEADER
            + '"CUST0000010231","IN0000001","105.50","01-Jan-2016"\n'
            + '"CUST0000010235","IN0000002","186.53","01-Jan-2016"\n'
            + '"CUST0000010231","IN0000003","114.14","01-Feb-2016"\n'
        )
        assert memory_provider.output(Dataset.INVOICE_ITEMS) == (
            ITEM_HEADER
            + '"IN0000001","MEIJI","75.60","100"\n'
            + '"IN0000001","POCKY","10.40","250"\n'
            + '"IN0000001","PUCCHO","19.50","40"\n'
            + '"IN0000002","MEIJI","113.40","150"\n'
            + '"IN0000002","PUCCHO","73.13","150"\n'
            + '"IN0000003","POCKY","16.64","400"\n'
            + '"IN0000003","PUCCHO","97.50","200"\n'
        )

    def test_customer_with_no_invoice(
        self, extraction_data: Dict[str, str]
    ) -> None:
        """
        SCENARIO: Sample customer exists but owns no invoices
        EXPECTED: Customer row kept; invoice and item outputs header-only
        """
        extraction_data["sample_customers"] = SAMPLE_HEADER + '"CUST0000010233"\n'
        provider = InMemoryStreamProvider(**extraction_data)

        result = run_in_memory(provider)

        assert provider.output(Dataset.CUSTOMERS) == (
            CUSTOMER_HEADER + '"CUST0000010233","Jamie","Hayes"\n'
        )
        assert provider.output(Dataset.INVOICES) == INVOICE_HEADER
        assert provider.output(Dataset.INVOICE_ITEMS) == ITEM_HEADER
        assert result.sample_invoices == frozenset()

    def test_customer_with_no_matching_data(
        self, extraction_data: Dict[str, str]
    ) -> None:
        """
        SCENARIO: Sample customer appears in no dataset
        EXPECTED: All three outputs header-only
        """
        extraction_data["sample_customers"] = SAMPLE_HEADER + '"CUST0000010240"\n'
        provider = InMemoryStreamProvider(**extraction_data)

        run_in_memory(provider)

        assert provider.output(Dataset.CUSTOMERS) == CUSTOMER_HEADER
        assert provider.output(Dataset.INVOICES) == INVOICE_HEADER
        assert provider.output(Dataset.INVOICE_ITEMS) == ITEM_HEADER

    def test_empty_inputs_give_empty_outputs(self) -> None:
        """
        SCENARIO: Header-only sample, completely empty full extractions
        EXPECTED: Run succeeds; outputs are empty, no headers fabricated
        """
        provider = InMemoryStreamProvider(
            sample_customers=SAMPLE_HEADER,
            customers="",
            invoices="",
            invoice_items="",
        )

        result = run_in_memory(provider)

        assert result.succeeded
        assert result.sample_customers == frozenset()
        for dataset in (Dataset.CUSTOMERS, Dataset.INVOICES, Dataset.INVOICE_ITEMS):
            assert provider.output(dataset) == ""

    def test_cascading_consistency(
        self, memory_provider: InMemoryStreamProvider
    ) -> None:
        """
        SCENARIO: Multi-customer extraction
        EXPECTED: Every invoice belongs to a sample customer; every item
                  references an emitted invoice
        """
        result = run_in_memory(memory_provider)

        invoice_rows = memory_provider.output(Dataset.INVOICES).splitlines()[1:]
        item_rows = memory_provider.output(Dataset.INVOICE_ITEMS).splitlines()[1:]
        emitted_invoices = {split_record(row)[1] for row in invoice_rows}

        assert all(split_record(row)[0] in result.sample_customers for row in invoice_rows)
        assert all(split_record(row)[0] in emitted_invoices for row in item_rows)
        assert emitted_invoices == result.sample_invoices

    def test_generates_audit_trail(
        self, memory_provider: InMemoryStreamProvider
    ) -> None:
        """
        SCENARIO: Complete extraction run
        EXPECTED: One audit entry per stage, in execution order
        """
        result = run_in_memory(memory_provider)

        assert [entry.stage_name for entry in result.audit_trail] == list(StageName)
        customers = result.stage(StageName.CUSTOMERS)
        assert customers.stopped_early is True
        assert customers.input_rows == 4
        assert result.stage(StageName.INVOICES).key_count == 3
        assert result.stage(StageName.INVOICE_ITEMS).output_rows == 7
        assert result.metadata["correlation_id"] == result.correlation_id

    def test_scan_all_profile(self, memory_provider: InMemoryStreamProvider) -> None:
        config = ExtractionConfig.model_validate(
            {"customer_filter": {"early_termination": False}}
        )

        result = run_in_memory(memory_provider, config)

        assert result.stage(StageName.CUSTOMERS).stopped_early is False


class TestFailurePropagation:
    """Failures end the run and are reported, not swallowed."""

    def test_malformed_invoice_aborts_item_stage(
        self, extraction_data: Dict[str, str]
    ) -> None:
        """
        SCENARIO: A sample customer's invoice row lacks the invoice column
        EXPECTED: Failure names stage and line; item stage never runs;
                  partial invoice output left in place
        """
        # Arrange
        extraction_data["invoices"] = (
            INVOICE_HEADER
            + '"CUST0000010231","IN0000001","105.50","01-Jan-2016"\n'
            + '"CUST0000010235"\n'
        )
        provider = InMemoryStreamProvider(**extraction_data)

        # Act
        result = run_in_memory(provider)

        # Assert
        assert not result.succeeded
        assert result.failure.stage_name == StageName.INVOICES
        assert result.failure.dataset == Dataset.INVOICES
        assert result.failure.line_number == 3
        assert provider.output(Dataset.INVOICES) == (
            INVOICE_HEADER + '"CUST0000010231","IN0000001","105.50","01-Jan-2016"\n'
        )
        assert provider.output(Dataset.INVOICE_ITEMS) is None
        assert [e.stage_name for e in result.audit_trail] == [
            StageName.SAMPLE_KEYS,
            StageName.CUSTOMERS,
        ]
        with pytest.raises(ExtractionError):
            result.raise_for_failure()

    def test_missing_sample_input(self, extraction_data: Dict[str, str]) -> None:
        extraction_data["sample_customers"] = None
        provider = InMemoryStreamProvider(**extraction_data)

        result = run_in_memory(provider)

        assert result.failure.stage_name == StageName.SAMPLE_KEYS
        assert result.failure.error_type == "FileNotFoundError"
        assert provider.outputs == {}

    def test_missing_item_input_keeps_earlier_outputs(
        self, extraction_data: Dict[str, str]
    ) -> None:
        extraction_data["invoice_items"] = None
        provider = InMemoryStreamProvider(**extraction_data)

        result = run_in_memory(provider)

        assert result.failure.stage_name == StageName.INVOICE_ITEMS
        assert result.sample_invoices == frozenset(
            {'"IN0000001"', '"IN0000002"', '"IN0000003"'}
        )
        assert provider.output(Dataset.CUSTOMERS).startswith(CUSTOMER_HEADER)


class TestFileBasedRun:
    """End-to-end runs through FileStreamProvider."""

    def test_writes_three_test_files(
        self, extraction_files: Dict[str, Path], tmp_path: Path
    ) -> None:
        """
        SCENARIO: create_pipeline with on-disk inputs
        EXPECTED: Test files written under the output directory
        """
        # Arrange
        out_dir = tmp_path / "out"
        config = ExtractionConfig.model_validate(
            {
                "inputs": {k: str(v) for k, v in extraction_files.items()},
                "outputs": {"directory": str(out_dir)},
            }
        )

        # Act
        result = create_pipeline(config).run()

        # Assert
        assert result.succeeded
        assert (out_dir / "customer_test.csv").read_text().splitlines() == [
            CUSTOMER_HEADER.rstrip("\n"),
            '"CUST0000010231","Maria","Alba"',
            '"CUST0000010235","George","Lucas"',
        ]
        assert (out_dir / "invoice_test.csv").exists()
        assert len((out_dir / "invoice_item_test.csv").read_text().splitlines()) == 8

    def test_crlf_terminator(
        self, extraction_files: Dict[str, Path], tmp_path: Path
    ) -> None:
        out_dir = tmp_path / "out"
        config = ExtractionConfig.model_validate(
            {
                "inputs": {k: str(v) for k, v in extraction_files.items()},
                "outputs": {"directory": str(out_dir)},
                "format": {"line_terminator": "\r\n"},
            }
        )

        create_pipeline(config).run().raise_for_failure()

        data = (out_dir / "customer_test.csv").read_bytes()
        assert data.startswith(CUSTOMER_HEADER.rstrip("\n").encode() + b"\r\n")
        assert data.count(b"\r\n") == 3

    def test_validation_runs_before_any_stage(self, tmp_path: Path) -> None:
        """
        SCENARIO: File-based pipeline without input paths
        EXPECTED: ValidationError, no output files created
        """
        config = ExtractionConfig.model_validate(
            {"outputs": {"directory": str(tmp_path / "out")}}
        )

        with pytest.raises(ValidationError):
            create_pipeline(config).run()

        assert not (tmp_path / "out").exists()
