"""
Request Validator - Validate Extraction Requests.

Validates a file-based run before any stream is opened:
    - Every input file is configured and exists
    - No output file would overwrite an input file
    - The three output files are distinct

Design Notes:
    - Fail-fast principle
    - All problems reported at once
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from sample_extractor.config.models import ExtractionConfig
from sample_extractor.domain.entities import Dataset

logger = logging.getLogger(__name__)

OUTPUT_DATASETS = (Dataset.CUSTOMERS, Dataset.INVOICES, Dataset.INVOICE_ITEMS)


class ValidationError(Exception):
    """Raised when request validation fails."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class RequestValidator:
    """Validates file locations of an extraction run."""

    def validate(self, config: ExtractionConfig) -> None:
        """
        Validate the input and output paths of a run.

        Args:
            config: The extraction configuration

        Raises:
            ValidationError: If validation fails
        """
        errors: List[str] = []

        inputs = self._collect_inputs(config, errors)
        errors.extend(self._validate_outputs(config, inputs))

        if errors:
            error_message = "; ".join(errors)
            logger.error(f"Request validation failed: {error_message}")
            raise ValidationError(error_message)

        logger.debug(f"Request validated: {len(inputs)} inputs")

    def _collect_inputs(
        self,
        config: ExtractionConfig,
        errors: List[str],
    ) -> Dict[Path, Dataset]:
        """Check that each input exists; return resolved paths."""
        resolved: Dict[Path, Dataset] = {}
        for dataset in Dataset:
            path = getattr(config.inputs, dataset.value)
            if path is None:
                errors.append(f"Input file for {dataset.value} is not set")
                continue
            if not Path(path).is_file():
                errors.append(f"Input file for {dataset.value} not found: {path}")
                continue
            resolved[Path(path).resolve()] = dataset
        return resolved

    def _validate_outputs(
        self,
        config: ExtractionConfig,
        inputs: Dict[Path, Dataset],
    ) -> List[str]:
        """Check outputs collide neither with inputs nor with each other."""
        errors: List[str] = []
        seen: Dict[Path, Dataset] = {}

        for dataset in OUTPUT_DATASETS:
            path = config.outputs.path_for(dataset.value).resolve()
            if path in inputs:
                errors.append(
                    f"Output for {dataset.value} would overwrite input "
                    f"{inputs[path].value}: {path}"
                )
            if path in seen:
                errors.append(
                    f"Outputs for {seen[path].value} and {dataset.value} "
                    f"share a file: {path}"
                )
            seen[path] = dataset

        return errors
