"""
Validation Package - Fail-Fast Checks Before a Run.

Components:
    - RequestValidator: Input existence and output collision checks
    - ValidationError: Raised with every problem found
"""

from sample_extractor.validation.request_validator import (
    RequestValidator,
    ValidationError,
)

__all__ = ["RequestValidator", "ValidationError"]
