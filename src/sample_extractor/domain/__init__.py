"""
Domain Layer - Records, Key Sets and Run Results.

This package contains the core domain model for the Sample Extractor.
Records are never typed: a line is split into opaque string fields and
only the positional join keys are ever inspected.

Entities:
    - Dataset: The four extraction files a run touches
    - StageName: The stages of an extraction run
    - StageResult: Audit entry for one completed stage
    - StageFailure: Structured description of a terminal failure
    - ExtractionResult: Complete result of an extraction run

Value Objects:
    - FilterResult: Counters and collected keys of one filter pass
    - SampleKeySet / InvoiceKeySet: Immutable key sets handed between stages

Records:
    - split_record / join_key: Positional field access
    - MalformedRecordError: Raised when a join key is missing

Design Principles:
    - Immutable where possible (frozen models, frozensets)
    - Key sets are values passed between stages, never shared state
"""

from sample_extractor.domain.entities import (
    Dataset,
    ExtractionError,
    ExtractionResult,
    StageFailure,
    StageName,
    StageResult,
)
from sample_extractor.domain.records import (
    MalformedRecordError,
    join_key,
    split_record,
    strip_line_ending,
)
from sample_extractor.domain.value_objects import (
    FilterResult,
    InvoiceKeySet,
    SampleKeySet,
)

__all__ = [
    "Dataset",
    "ExtractionError",
    "ExtractionResult",
    "FilterResult",
    "InvoiceKeySet",
    "MalformedRecordError",
    "SampleKeySet",
    "StageFailure",
    "StageName",
    "StageResult",
    "join_key",
    "split_record",
    "strip_line_ending",
]
