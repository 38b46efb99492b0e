"""
Test Suite for Sample Extractor.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: End-to-end pipeline and CLI tests
    - performance/: Generated large extractions

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest -m "not performance"             # Skip the slow ones
    pytest --cov=src/sample_extractor       # With coverage
"""
