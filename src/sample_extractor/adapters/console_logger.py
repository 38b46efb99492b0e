"""
Console Audit Logger.

A simple audit logger that outputs to the console.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sample_extractor.domain.entities import (
    Dataset,
    StageFailure,
    StageName,
    StageResult,
)


class ConsoleAuditLogger:
    """Simple console-based audit logger."""

    def __init__(self, verbose: bool = True) -> None:
        """
        Initialize console logger.

        Args:
            verbose: If True, log all events. If False, only summaries.
        """
        self._verbose = verbose
        self._correlation_id: Optional[str] = None

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for subsequent log entries."""
        self._correlation_id = correlation_id

    def log_stage_start(self, stage_name: StageName, dataset: Dataset) -> None:
        """Log the start of a stage."""
        if self._verbose:
            self._log("INFO", f"Starting {stage_name.value} on {dataset.value}")

    def log_stage_end(self, result: StageResult) -> None:
        """Log the end of a stage."""
        suffix = ", stopped early" if result.stopped_early else ""
        self._log(
            "INFO",
            f"Completed {result.stage_name.value}: kept {result.output_rows} "
            f"of {result.input_rows} rows ({result.duration_seconds:.3f}s{suffix})",
        )

    def log_failure(self, failure: StageFailure) -> None:
        """Log a terminal stage failure."""
        self._log("ERROR", failure.describe())

    def _log(self, level: str, message: str) -> None:
        """Internal logging method."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        corr_id = self._correlation_id[:8] if self._correlation_id else "--------"
        print(f"[{timestamp}] [{corr_id}] [{level:5}] {message}")
