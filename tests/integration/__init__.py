"""
Integration Tests - Full Extraction Runs.

Integration tests use the InMemoryStreamProvider for most scenarios and
tmp_path files for the FileStreamProvider and CLI.

Test Files:
    - test_extraction_pipeline.py: Full extraction workflow
    - test_cli.py: Command line entry point
"""
