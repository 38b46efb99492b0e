"""
Sample Extractor - Relationship-Consistent Test Data Extraction.

Cuts a test-sized subset out of three related extraction files
(customers, invoices, invoice items) by following foreign keys from a
pre-selected list of sample customers. The output files keep their
original headers and row order, so test suites can ingest them exactly
like the full production exports.

Architecture:
    - Three cascading filter stages, each returning the key set
      consumed by the next one
    - Stream providers (Ports & Adapters) decouple filtering from files
    - Structured stage failures instead of printed stack traces
    - Configuration-driven behavior via YAML

Main Components:
    - domain: Records, key sets, stage results and failures
    - filters: Sample key parsing and the three record filters
    - pipeline: Orchestration of the fixed stage order
    - adapters: File and in-memory stream providers, audit logger
    - config: Configuration models and loaders

Example:
    >>> from sample_extractor.pipeline import create_pipeline
    >>> pipeline = create_pipeline(config)
    >>> result = pipeline.run()
    >>> result.raise_for_failure()
    >>> print(f"Kept {len(result.sample_invoices)} invoices")

"""

import logging

__version__ = "0.2.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Sample Extractor.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import sample_extractor
        >>> sample_extractor.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("sample_extractor").setLevel(level)
