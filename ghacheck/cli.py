"""
CLI entry point: ties together catalog → parser → rules → reporter.

Usage:
  # Check a workflow with checks.yaml from the current directory
  # (or the bundled default catalog):
  ghacheck .github/workflows/release.yml

  # Use a specific rule catalog:
  ghacheck .github/workflows/ci.yml --checks path/to/checks.yaml

  # Output as JSON or SARIF:
  ghacheck .github/workflows/ci.yml --format json
  ghacheck .github/workflows/ci.yml --format sarif > results.sarif

Exit codes:
  0: check completed (with or without findings)
  1: error (missing or invalid workflow or checks file)
"""

import logging
import shutil
import sys

import click

from ghacheck.config import load_catalog
from ghacheck.errors import CatalogError, WorkflowError
from ghacheck.parser import parse_workflow
from ghacheck.reporter import report_console, report_json, report_sarif
from ghacheck.rules import run_all_rules

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def _setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.command()
@click.argument("file")
@click.option("--checks", "checks_path", default=None, help="Path to checks.yaml (default: ./checks.yaml, then the bundled catalog).")
@click.option("--format", "output_format", type=click.Choice(["table", "json", "sarif"]), default="table", help="Output format.")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
def cli(file: str, checks_path: str, output_format: str, verbose: bool):
    """Check a GitHub Actions workflow FILE for missing safeguards.

    Exits with code 0 when the check completes, 1 on error.
    """
    _setup_logging(verbose)

    try:
        catalog = load_catalog(checks_path)
    except CatalogError as e:
        click.echo(f"Error loading checks config: {e}", err=True)
        sys.exit(EXIT_ERROR)

    try:
        workflow = parse_workflow(file)
    except WorkflowError as e:
        click.echo(f"Error parsing workflow: {e}", err=True)
        sys.exit(EXIT_ERROR)

    findings = run_all_rules(workflow, catalog)

    if output_format == "json":
        click.echo(report_json(findings))
    elif output_format == "sarif":
        click.echo(report_sarif(findings))
    else:
        width = shutil.get_terminal_size((120, 24)).columns
        click.echo(report_console(findings, width=width, color=sys.stdout.isatty()))

    sys.exit(EXIT_OK)


if __name__ == "__main__":
    cli()
