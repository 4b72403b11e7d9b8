"""CLI utilities."""

from pathlib import Path

import click

from xcparse.bundle.base import BundleOpener
from xcparse.config.models import XcparseConfig
from xcparse.core.errors import XcparseError
from xcparse.core.progress import spinner
from xcparse.report.models import ParsedResult
from xcparse.report.parser import XcresultParser


def get_config(ctx: click.Context) -> XcparseConfig:
    obj = ctx.find_root().obj or {}
    config = obj.get("config")
    return config if config is not None else XcparseConfig()


def load_result(ctx: click.Context, bundle_path: Path) -> ParsedResult:
    """Parse a bundle for a command, with a spinner on stderr.

    ``ctx.obj["opener"]``, when set, replaces the xcresulttool reader.

    Raises:
        click.ClickException: If the bundle cannot be parsed.
    """
    obj = ctx.find_root().obj or {}
    opener: BundleOpener | None = obj.get("opener")
    parser = XcresultParser(opener=opener, config=get_config(ctx))
    try:
        with spinner(f"Parsing {bundle_path.name}"):
            return parser.parse(bundle_path)
    except XcparseError as e:
        raise click.ClickException(e.message) from e


def write_output(text: str, output: Path | None, label: str) -> None:
    """Write text to output, or echo it when no output file is given."""
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"{label} written to: {output}")
