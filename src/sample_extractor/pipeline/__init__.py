"""
Pipeline Package - Orchestration.

The pipeline is responsible for:
    - Validating file locations before a file-based run
    - Executing the stages in their fixed order
    - Passing SampleKeySet and InvoiceKeySet between stages as values
    - Stopping at the first terminal failure
    - Generating the final ExtractionResult
"""

from sample_extractor.pipeline.extraction_pipeline import (
    ExtractionPipeline,
    create_pipeline,
)

__all__ = ["ExtractionPipeline", "create_pipeline"]
