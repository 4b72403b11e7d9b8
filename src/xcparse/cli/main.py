"""xcparse CLI - xcparse command."""

from pathlib import Path

import click

from xcparse.cli.attachments import attachments_command
from xcparse.cli.coverage import coverage_command
from xcparse.cli.export import export_command
from xcparse.cli.parse import parse_command
from xcparse.cli.tags import tags_command
from xcparse.config import load_config
from xcparse.core.errors import ConfigError
from xcparse.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="xcparse")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (overrides ./.xcparse.yaml and the global config)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """xcparse - Parse Xcode result bundles (.xcresult).

    Extracts coverage, test results, attachments and tags, and exports them
    as text, JSON, CSV or HTML.
    """
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(parse_command, name="parse")
cli.add_command(coverage_command, name="coverage")
cli.add_command(attachments_command, name="attachments")
cli.add_command(tags_command, name="tags")
cli.add_command(export_command, name="export")


if __name__ == "__main__":
    cli()
