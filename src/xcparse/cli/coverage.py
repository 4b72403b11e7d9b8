"""xcparse coverage command - coverage buckets."""

from pathlib import Path

import click

from xcparse.cli.utils import load_result, write_output
from xcparse.export.json_report import encode_coverage
from xcparse.export.text_report import NO_COVERAGE, format_coverage

_TITLES = {"all": "Overall Coverage", "unit": "Unit Test Coverage", "ui": "UI Test Coverage"}


@click.command()
@click.argument("bundle", type=click.Path(path_type=Path))
@click.option(
    "-t",
    "--test-type",
    type=click.Choice(["all", "unit", "ui"]),
    default="all",
    help="Coverage bucket to show",
)
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_context
def coverage_command(
    ctx: click.Context, bundle: Path, test_type: str, fmt: str, output: Path | None
) -> None:
    """Show coverage extracted from BUNDLE."""
    result = load_result(ctx, bundle)
    coverage = {
        "all": result.overall_coverage,
        "unit": result.unit_coverage,
        "ui": result.ui_coverage,
    }[test_type]

    if fmt == "json":
        text = encode_coverage(coverage).decode("utf-8")
    elif coverage is None:
        text = NO_COVERAGE
    else:
        text = format_coverage(coverage, title=_TITLES[test_type])
    write_output(text, output, "Coverage report")
