"""
Resilience Package - Terminal Error Handling.

Stages either complete or fail the whole run. The ErrorHandler captures
I/O errors and malformed records as StageFailure values so the pipeline
can stop cleanly and report which stage and line failed.
"""

from sample_extractor.resilience.error_handler import (
    TERMINAL_ERRORS,
    ErrorHandler,
    StageOutcome,
)

__all__ = ["TERMINAL_ERRORS", "ErrorHandler", "StageOutcome"]
