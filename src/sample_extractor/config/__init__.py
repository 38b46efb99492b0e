"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of the Sample Extractor:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Support for configuration profiles

Configuration Structure:
    - ExtractionConfig: Root configuration object
    - RecordFormatConfig: Delimiter, encoding, line endings
    - SampleConfig: Sample customer list parsing
    - CustomerFilterConfig / InvoiceFilterConfig / InvoiceItemFilterConfig:
      Join key positions and early termination
    - InputPaths / OutputPaths: File locations for the file provider
"""

from sample_extractor.config.loader import ConfigLoader, load_config
from sample_extractor.config.models import (
    CustomerFilterConfig,
    ExtractionConfig,
    InputPaths,
    InvoiceFilterConfig,
    InvoiceItemFilterConfig,
    OutputPaths,
    RecordFormatConfig,
    SampleConfig,
)

__all__ = [
    "ConfigLoader",
    "CustomerFilterConfig",
    "ExtractionConfig",
    "InputPaths",
    "InvoiceFilterConfig",
    "InvoiceItemFilterConfig",
    "OutputPaths",
    "RecordFormatConfig",
    "SampleConfig",
    "load_config",
]
