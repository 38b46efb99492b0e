"""
Extraction Pipeline - Main Orchestrator.

The ExtractionPipeline runs the stages in their fixed order and threads
each key set from the stage that produces it to the stage that needs it.
A terminal failure stops the run; the result carries the failure and
the audit trail of the stages that completed.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime
from typing import (
    Any,
    Callable,
    ContextManager,
    FrozenSet,
    List,
    Optional,
    Protocol,
    TextIO,
)

from sample_extractor import __version__
from sample_extractor.adapters.file_provider import FileStreamProvider
from sample_extractor.config.models import ExtractionConfig
from sample_extractor.domain.entities import (
    Dataset,
    ExtractionResult,
    StageFailure,
    StageName,
    StageResult,
)
from sample_extractor.domain.value_objects import FilterResult
from sample_extractor.filters.customer import CustomerFilter
from sample_extractor.filters.invoice import InvoiceFilter
from sample_extractor.filters.invoice_item import InvoiceItemFilter
from sample_extractor.filters.sample_keys import SampleKeyParser
from sample_extractor.resilience.error_handler import ErrorHandler, StageOutcome
from sample_extractor.validation.request_validator import RequestValidator

logger = logging.getLogger(__name__)


class StreamProviderProtocol(Protocol):
    """Protocol for stream providers."""

    def open_source(self, dataset: Dataset) -> ContextManager[TextIO]:
        ...

    def open_sink(self, dataset: Dataset) -> ContextManager[TextIO]:
        ...


class RecordFilterProtocol(Protocol):
    """Protocol for dataset filters."""

    dataset: Dataset

    @property
    def name(self) -> str:
        ...

    def apply(
        self, source: TextIO, sink: TextIO, keys: FrozenSet[str]
    ) -> FilterResult:
        ...


class AuditLoggerProtocol(Protocol):
    """Protocol for audit loggers."""

    def set_correlation_id(self, correlation_id: str) -> None:
        ...

    def log_stage_start(self, stage_name: StageName, dataset: Dataset) -> None:
        ...

    def log_stage_end(self, result: StageResult) -> None:
        ...

    def log_failure(self, failure: StageFailure) -> None:
        ...


class RequestValidatorProtocol(Protocol):
    """Protocol for request validators."""

    def validate(self, config: ExtractionConfig) -> None:
        ...


class ExtractionPipeline:
    """Main orchestrator for the extraction workflow."""

    def __init__(
        self,
        provider: StreamProviderProtocol,
        config: Optional[ExtractionConfig] = None,
        audit_logger: Optional[AuditLoggerProtocol] = None,
        error_handler: Optional[ErrorHandler] = None,
        request_validator: Optional[RequestValidatorProtocol] = None,
    ) -> None:
        """
        Initialize pipeline with all dependencies.

        Args:
            provider: Opens input and output streams per dataset
            config: Extraction configuration (defaults if omitted)
            audit_logger: For audit trail (optional)
            error_handler: Converts terminal errors into failures
            request_validator: For fail-fast path checks (optional)
        """
        self.provider = provider
        self.config = config or ExtractionConfig()
        self.audit_logger = audit_logger
        self.error_handler = error_handler or ErrorHandler()
        self.request_validator = request_validator

        record_format = self.config.format
        self.sample_parser = SampleKeyParser(self.config.sample, record_format)
        self.customer_filter = CustomerFilter(self.config.customer_filter, record_format)
        self.invoice_filter = InvoiceFilter(self.config.invoice_filter, record_format)
        self.invoice_item_filter = InvoiceItemFilter(
            self.config.invoice_item_filter, record_format
        )

    def run(self) -> ExtractionResult:
        """
        Execute the extraction workflow.

        Returns:
            ExtractionResult with both key sets, the audit trail and,
            if a stage failed, the StageFailure

        Raises:
            ValidationError: If request validation fails
        """
        start_time = time.perf_counter()
        correlation_id = str(uuid.uuid4())
        if self.audit_logger:
            self.audit_logger.set_correlation_id(correlation_id)

        if self.request_validator:
            self.request_validator.validate(self.config)
            logger.debug(f"Request validated: {correlation_id}")

        audit_trail: List[StageResult] = []

        def finish(
            failure: Optional[StageFailure] = None,
            sample_customers: FrozenSet[str] = frozenset(),
            sample_invoices: FrozenSet[str] = frozenset(),
        ) -> ExtractionResult:
            duration = time.perf_counter() - start_time
            return ExtractionResult(
                correlation_id=correlation_id,
                sample_customers=sample_customers,
                sample_invoices=sample_invoices,
                audit_trail=audit_trail,
                failure=failure,
                metadata=self._build_metadata(correlation_id, duration),
            )

        # 1. Sample customers
        sample = self._execute_stage(
            StageName.SAMPLE_KEYS,
            Dataset.SAMPLE_CUSTOMERS,
            self._parse_sample,
            audit_trail,
        )
        if not sample.ok:
            return finish(sample.failure)
        sample_keys = sample.value.collected_keys

        # 2. Customers
        customers = self._execute_stage(
            StageName.CUSTOMERS,
            Dataset.CUSTOMERS,
            lambda: self._apply_filter(self.customer_filter, sample_keys),
            audit_trail,
        )
        if not customers.ok:
            return finish(customers.failure, sample_keys)

        # 3. Invoices, producing the invoice key set
        invoices = self._execute_stage(
            StageName.INVOICES,
            Dataset.INVOICES,
            lambda: self._apply_filter(self.invoice_filter, sample_keys),
            audit_trail,
        )
        if not invoices.ok:
            return finish(invoices.failure, sample_keys)
        invoice_keys = invoices.value.collected_keys

        # 4. Invoice items
        items = self._execute_stage(
            StageName.INVOICE_ITEMS,
            Dataset.INVOICE_ITEMS,
            lambda: self._apply_filter(self.invoice_item_filter, invoice_keys),
            audit_trail,
        )
        return finish(items.failure, sample_keys, invoice_keys)

    def _parse_sample(self) -> FilterResult:
        with self.provider.open_source(Dataset.SAMPLE_CUSTOMERS) as source:
            return self.sample_parser.parse(source)

    def _apply_filter(
        self, stage: RecordFilterProtocol, keys: FrozenSet[str]
    ) -> FilterResult:
        """Run one filter with its streams open for exactly its duration."""
        with self.provider.open_source(stage.dataset) as source:
            with self.provider.open_sink(stage.dataset) as sink:
                return stage.apply(source, sink, keys)

    def _execute_stage(
        self,
        stage_name: StageName,
        dataset: Dataset,
        func: Callable[[], FilterResult],
        audit_trail: List[StageResult],
    ) -> StageOutcome[FilterResult]:
        """Execute a single stage and record its audit entry or failure."""
        stage_start = time.perf_counter()
        if self.audit_logger:
            self.audit_logger.log_stage_start(stage_name, dataset)

        outcome = self.error_handler.run_stage(func, stage_name, dataset)
        stage_duration = time.perf_counter() - stage_start

        if not outcome.ok:
            if self.audit_logger:
                self.audit_logger.log_failure(outcome.failure)
            return outcome

        filter_result = outcome.value
        stage_result = StageResult(
            stage_name=stage_name,
            dataset=dataset,
            input_rows=filter_result.rows_read,
            output_rows=filter_result.rows_written,
            key_count=len(filter_result.collected_keys),
            stopped_early=filter_result.stopped_early,
            duration_seconds=stage_duration,
        )
        audit_trail.append(stage_result)

        if self.audit_logger:
            self.audit_logger.log_stage_end(stage_result)
        logger.debug(
            f"{stage_name.value}: {filter_result.rows_written}/"
            f"{filter_result.rows_read} rows kept"
        )
        return outcome

    def _build_metadata(self, correlation_id: str, duration: float) -> dict:
        """Build result metadata."""
        return {
            "correlation_id": correlation_id,
            "timestamp": datetime.now().isoformat(),
            "duration_seconds": duration,
            "version": __version__,
        }


def create_pipeline(
    config: ExtractionConfig,
    provider: Optional[StreamProviderProtocol] = None,
    audit_logger: Optional[AuditLoggerProtocol] = None,
    **kwargs: Any,
) -> ExtractionPipeline:
    """
    Build a pipeline for a configuration.

    Without an explicit provider the run reads and writes the files named
    in the config, and the paths are validated before the first stage.

    Args:
        config: Extraction configuration
        provider: Optional stream provider (e.g. InMemoryStreamProvider)
        audit_logger: Optional audit logger
        **kwargs: Passed through to ExtractionPipeline

    Returns:
        Configured ExtractionPipeline
    """
    if provider is None:
        provider = FileStreamProvider(config.inputs, config.outputs, config.format)
        kwargs.setdefault("request_validator", RequestValidator())

    return ExtractionPipeline(
        provider=provider,
        config=config,
        audit_logger=audit_logger,
        **kwargs,
    )
