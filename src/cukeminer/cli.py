"""Command line interface."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import config
from .compare import compare_reports, format_compare_result
from .formatters import FORMATTERS, get_formatter
from .models import RUN_FIELDS
from .parser import find_related_files, parse_document, parse_related_reports


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Parsed when no file is given
EXAMPLE_HTML = """
<div id="summary">
    <p id="totals">8 scenarios (2 failed, 6 passed)<br>104 steps (2 failed, 4 skipped, 98 passed)</p>
    <p id="duration">Finished in <strong>9m15.076s seconds</strong></p>
</div>
"""


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr, DEBUG when debug is set."""
    level = logging.DEBUG if debug else getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def resolve_search_dir(environment: str, custom_dir: Optional[str]) -> Optional[Path]:
    """Directory to look for report files in, None for the current one."""
    if custom_dir:
        search_dir = Path(custom_dir)
        click.echo(f"Using custom directory: {search_dir}", err=True)
    else:
        search_dir = config.get_archive_path(environment)
        click.echo(f"Using {environment.upper()} environment", err=True)
        click.echo(f"Archive directory: {search_dir}", err=True)

    if not search_dir.is_dir():
        click.echo(f"Warning: Directory does not exist: {search_dir}", err=True)
        click.echo("Searching in current directory instead.", err=True)
        return None

    return search_dir


def _announce(label: str, path: Path) -> None:
    click.echo(f"Parsing {label} file: {path.as_posix()}", err=True)


def emit(text: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Results written to {output}", err=True)
    else:
        click.echo(text)


@click.command()
@click.argument("file", required=False)
@click.option(
    "--env", "environment",
    type=click.Choice(config.ENVIRONMENTS, case_sensitive=False),
    default=config.DEFAULT_ENV,
    help="Environment, selects the archive directory (default: dev)",
)
@click.option(
    "--dir", "custom_dir",
    type=click.Path(),
    default=None,
    help="Custom directory to search for files (overrides --env)",
)
@click.option(
    "-f", "--format",
    "output_format",
    type=click.Choice(list(FORMATTERS), case_sensitive=False),
    default=config.DEFAULT_FORMAT,
    help="Output format (default: text)",
)
@click.option(
    "--field",
    "fields",
    multiple=True,
    type=click.Choice(RUN_FIELDS),
    help="Run field to extract, can be given multiple times",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output during parsing",
)
@click.option(
    "--diff",
    is_flag=True,
    default=False,
    help="Compare the base run with its retest",
)
@click.option(
    "-v", "--view",
    is_flag=True,
    default=False,
    help="Open interactive TUI viewer",
)
@click.option(
    "-o", "--output",
    type=click.Path(),
    default=None,
    help="Export results to file",
)
def main(
    file: Optional[str],
    environment: str,
    custom_dir: Optional[str],
    output_format: str,
    fields: tuple[str, ...],
    debug: bool,
    diff: bool,
    view: bool,
    output: Optional[str],
):
    """Parse Cucumber HTML test reports and extract run metrics.

    FILE: Report file or basename (e.g. prod-20252008-1012). The base
    report and its (retest) companion are both picked up.
    """
    configure_logging(debug)

    try:
        if not file:
            click.echo("No file provided. Running with example data...", err=True)
            reports = {"example": parse_document(EXAMPLE_HTML)}
        else:
            search_dir = resolve_search_dir(environment, custom_dir)
            base_file, retest_file = find_related_files(file, search_dir)

            if base_file is None and retest_file is None:
                click.echo(f"Error: No files found for '{file}'", err=True)
                if search_dir:
                    click.echo(f"  Searched in: {search_dir}", err=True)
                click.echo(f"  Looking for: {file}.htm or {file}(retest).htm", err=True)
                sys.exit(1)

            reports = parse_related_reports(
                base_file, retest_file, debug=debug, progress_callback=_announce
            )
            for label, report in reports.items():
                if not report.valid_run:
                    click.echo(f"  Warning: Exception occurred while parsing {label} file", err=True)

        if diff:
            if "base" not in reports or "retest" not in reports:
                click.echo("Error: --diff requires both a base and a retest report", err=True)
                sys.exit(1)
            emit(format_compare_result(compare_reports(reports["base"], reports["retest"])), output)
            return

        if view:
            from .tui import ReportViewerApp
            # Base report when there is one, otherwise the retest
            ReportViewerApp(next(iter(reports.values()))).run()
            return

        formatter = get_formatter(output_format)
        emit(formatter.format(reports, fields=fields), output)

    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
