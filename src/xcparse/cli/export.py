"""xcparse export command - write every report format to a directory."""

from pathlib import Path

import click

from xcparse.cli.utils import get_config, load_result
from xcparse.core.formatting import pluralize
from xcparse.core.progress import status
from xcparse.export.attachments import export_attachments
from xcparse.export.exporter import (
    COVERAGE_FILENAMES,
    TEST_RESULTS_FILENAMES,
    ExportFormat,
    export_coverage,
    export_test_results,
)
from xcparse.export.text_report import format_summary

SUMMARY_FILENAME = "summary.txt"
ATTACHMENTS_DIRNAME = "attachments"


@click.command()
@click.argument("bundle", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("xcresult_export"),
    show_default=True,
    help="Output directory",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "csv", "html", "all"]),
    default="all",
    show_default=True,
)
@click.option("--include-attachments", is_flag=True, help="Also export test attachments")
@click.pass_context
def export_command(
    ctx: click.Context, bundle: Path, output: Path, fmt: str, include_attachments: bool
) -> None:
    """Export coverage, test results and a summary for BUNDLE."""
    result = load_result(ctx, bundle)
    formats = list(ExportFormat) if fmt == "all" else [ExportFormat.parse(fmt)]

    output.mkdir(parents=True, exist_ok=True)
    for export_format in formats:
        coverage_path = output / COVERAGE_FILENAMES[export_format]
        coverage_path.write_bytes(export_coverage(result, export_format))
        status(f"Coverage exported to: {coverage_path}", style="success")

        results_path = output / TEST_RESULTS_FILENAMES[export_format]
        results_path.write_bytes(export_test_results(result, export_format))
        status(f"Test results exported to: {results_path}", style="success")

    if include_attachments and result.attachments:
        attachments_dir = output / ATTACHMENTS_DIRNAME
        written = export_attachments(result.attachments, attachments_dir, include_metadata=True)
        status(
            f"{pluralize(len(written), 'attachment')} exported to: {attachments_dir}",
            style="success",
        )

    summary_path = output / SUMMARY_FILENAME
    summary = format_summary(result, slowest=get_config(ctx).report.slowest_count)
    summary_path.write_text(summary, encoding="utf-8")
    status(f"Summary report: {summary_path}", style="success")

    click.echo(f"Export completed: {output}")
