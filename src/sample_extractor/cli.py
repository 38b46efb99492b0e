"""
Command Line Interface.

Usage:
    sample-extractor extract SAMPLE CUSTOMERS INVOICES INVOICE_ITEMS [OPTIONS]

Exit codes:
    0 - All test files written
    1 - A stage failed; files of earlier stages stay on disk
    2 - The config or the input and output paths are unusable
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml
from pydantic import ValidationError as ConfigValidationError

import sample_extractor
from sample_extractor.adapters.console_logger import ConsoleAuditLogger
from sample_extractor.config.loader import ConfigLoader
from sample_extractor.config.models import ExtractionConfig
from sample_extractor.pipeline.extraction_pipeline import create_pipeline
from sample_extractor.validation.request_validator import ValidationError

app = typer.Typer(help="Extract relationship-consistent test files from full extractions.")


@app.callback()
def main() -> None:
    """Sample extractor command line."""


def _load_settings(
    config: Optional[Path],
    profile: Optional[str],
    overrides: Dict[str, Any],
) -> ExtractionConfig:
    loader = ConfigLoader()
    try:
        if config is not None:
            return loader.load(config, profile=profile, overrides=overrides)
        return loader.load_from_dict({}, profile=profile, overrides=overrides)
    except (FileNotFoundError, yaml.YAMLError, ConfigValidationError) as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)


@app.command()
def extract(
    sample_customers: Path = typer.Argument(..., help="Sample customer list, header first"),
    customers: Path = typer.Argument(..., help="Full customer extraction"),
    invoices: Path = typer.Argument(..., help="Full invoice extraction"),
    invoice_items: Path = typer.Argument(..., help="Full invoice item extraction"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Named config profile"),
    scan_all: bool = typer.Option(False, "--scan-all", help="Read the whole customer file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Write customer, invoice and invoice item test files for the sample customers.

    Each output keeps its input's header and only the rows that belong to
    a sample customer, directly or through one of their invoices.
    """
    if verbose:
        sample_extractor.configure_logging(logging.DEBUG)

    overrides: Dict[str, Any] = {
        "inputs": {
            "sample_customers": str(sample_customers),
            "customers": str(customers),
            "invoices": str(invoices),
            "invoice_items": str(invoice_items),
        }
    }
    if output_dir is not None:
        overrides["outputs"] = {"directory": str(output_dir)}
    if scan_all:
        overrides["customer_filter"] = {"early_termination": False}

    settings = _load_settings(config, profile, overrides)

    pipeline = create_pipeline(settings, audit_logger=ConsoleAuditLogger(verbose=verbose))
    try:
        result = pipeline.run()
    except ValidationError as e:
        typer.echo(f"Invalid request: {e.message}", err=True)
        raise typer.Exit(code=2)

    if not result.succeeded:
        typer.echo(f"Extraction failed: {result.failure.describe()}", err=True)
        raise typer.Exit(code=1)

    for stage in result.audit_trail:
        typer.echo(
            f"{stage.stage_name.value}: kept {stage.output_rows} of {stage.input_rows} rows "
            f"({stage.reduction_ratio:.0%} dropped)"
        )
    typer.echo(f"Wrote test files to {settings.outputs.directory}")


if __name__ == "__main__":
    app()
