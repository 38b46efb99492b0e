"""
Error Handler - Structured Stage Failures.

Provides:
    - Conversion of terminal stage errors into StageFailure records
    - StageOutcome wrapper carrying either a value or a failure

Design Notes:
    - I/O errors and malformed records end the run; there is no retry
    - Failures carry the stage, dataset and line number when known
    - Anything outside the terminal error types is a bug and propagates
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Tuple, Type, TypeVar

from sample_extractor.domain.entities import Dataset, StageFailure, StageName
from sample_extractor.domain.records import MalformedRecordError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TERMINAL_ERRORS: Tuple[Type[BaseException], ...] = (
    MalformedRecordError,
    OSError,
    UnicodeError,
)


@dataclass
class StageOutcome(Generic[T]):
    """Result of a guarded stage: exactly one of value or failure is set."""

    value: Optional[T] = None
    failure: Optional[StageFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class ErrorHandler:
    """Runs stages and turns terminal errors into StageFailure records."""

    def __init__(
        self,
        terminal_errors: Tuple[Type[BaseException], ...] = TERMINAL_ERRORS,
    ) -> None:
        """
        Initialize error handler.

        Args:
            terminal_errors: Exception types reported as stage failures
        """
        self.terminal_errors = terminal_errors

    def run_stage(
        self,
        func: Callable[[], T],
        stage_name: StageName,
        dataset: Dataset,
    ) -> StageOutcome[T]:
        """
        Execute a stage, capturing terminal errors.

        Args:
            func: Stage body; opens, processes and closes its streams
            stage_name: Stage being executed
            dataset: Dataset the stage reads

        Returns:
            StageOutcome with the stage's return value, or its failure
        """
        try:
            return StageOutcome(value=func())
        except self.terminal_errors as e:
            failure = self.to_failure(e, stage_name, dataset)
            logger.error(failure.describe())
            return StageOutcome(failure=failure)

    def to_failure(
        self,
        error: BaseException,
        stage_name: StageName,
        dataset: Dataset,
    ) -> StageFailure:
        """Build a StageFailure from a captured exception."""
        line_number = getattr(error, "line_number", None)
        if isinstance(error, MalformedRecordError):
            message = error.message
        else:
            message = str(error)
        return StageFailure(
            stage_name=stage_name,
            dataset=dataset,
            error_type=type(error).__name__,
            message=message,
            line_number=line_number,
        )
