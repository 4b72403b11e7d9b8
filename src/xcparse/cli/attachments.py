"""xcparse attachments command - write attachment payloads to disk."""

from pathlib import Path

import click

from xcparse.cli.utils import load_result
from xcparse.core.formatting import pluralize
from xcparse.core.progress import status
from xcparse.export.attachments import export_attachments


@click.command()
@click.argument("bundle", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for attachments",
)
@click.option("--include-metadata", is_flag=True, help="Write a .metadata.json sidecar per file")
@click.pass_context
def attachments_command(
    ctx: click.Context, bundle: Path, output: Path, include_metadata: bool
) -> None:
    """Extract test attachments from BUNDLE into a directory."""
    result = load_result(ctx, bundle)
    written = export_attachments(result.attachments, output, include_metadata=include_metadata)
    status(f"Extracted {pluralize(len(written), 'attachment')} to: {output}", style="success")
