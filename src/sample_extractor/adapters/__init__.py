"""
Adapters Package - Infrastructure Implementations.

Concrete implementations of the stream provider and audit logger
protocols the pipeline depends on, following the Ports & Adapters
pattern.

Providers:
    - FileStreamProvider: Extraction files on disk
    - InMemoryStreamProvider: String buffers for tests and embedding

Loggers:
    - ConsoleAuditLogger: Simple console output
"""

from sample_extractor.adapters.console_logger import ConsoleAuditLogger
from sample_extractor.adapters.file_provider import FileStreamProvider
from sample_extractor.adapters.memory_provider import InMemoryStreamProvider

__all__ = [
    "ConsoleAuditLogger",
    "FileStreamProvider",
    "InMemoryStreamProvider",
]
