"""xcparse tags command - list tags and their tests."""

from pathlib import Path

import click

from xcparse.cli.utils import get_config, load_result
from xcparse.export.json_report import encode_tags
from xcparse.export.text_report import format_tags


@click.command()
@click.argument("bundle", type=click.Path(path_type=Path))
@click.option("--filter", "name_filter", default=None, help="Only tags whose name contains this")
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--merge", is_flag=True, help="Combine records that share a tag name")
@click.pass_context
def tags_command(
    ctx: click.Context, bundle: Path, name_filter: str | None, fmt: str, merge: bool
) -> None:
    """List the tags found in BUNDLE's test names and activities."""
    result = load_result(ctx, bundle)
    tags = result.merged_tags() if merge else list(result.tags)
    if name_filter is not None:
        tags = [tag for tag in tags if name_filter in tag.name]

    if fmt == "json":
        click.echo(encode_tags(tags).decode("utf-8"))
    else:
        click.echo(format_tags(tags, preview=get_config(ctx).report.tag_preview))
