"""xcparse parse command - bundle summary."""

from pathlib import Path

import click

from xcparse.cli.utils import get_config, load_result, write_output
from xcparse.export.json_report import encode_result
from xcparse.export.text_report import format_summary


@click.command()
@click.argument("bundle", type=click.Path(path_type=Path))
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option(
    "--slowest",
    type=click.IntRange(min=0),
    default=None,
    help="Number of slowest tests to list (text format; default from config)",
)
@click.pass_context
def parse_command(
    ctx: click.Context, bundle: Path, fmt: str, output: Path | None, slowest: int | None
) -> None:
    """Parse BUNDLE and display summary information."""
    result = load_result(ctx, bundle)
    if fmt == "json":
        text = encode_result(result).decode("utf-8")
    else:
        count = slowest if slowest is not None else get_config(ctx).report.slowest_count
        text = format_summary(result, slowest=count)
    write_output(text, output, "Output")
