"""formforge CLI entry point."""

from pathlib import Path

import click

from formforge.config import FormforgeConfig


@click.group()
@click.option(
    "--forms-path",
    default=None,
    type=click.Path(file_okay=False),
    help="Directory holding form YAML files (default: $FORMFORGE_FORMS_PATH or ./forms).",
)
@click.option("--log-level", default=None, help="Logging level, e.g. DEBUG.")
@click.pass_context
def cli(ctx, forms_path, log_level):
    """formforge — declarative form definitions CLI."""
    config = FormforgeConfig.from_env()
    if forms_path:
        config.forms_path = Path(forms_path)
    if log_level:
        config.log_level = log_level.upper()
    config.configure_logging()
    ctx.obj = config


# Register subcommand groups
from formforge.cli.forms_cmd import forms  # noqa: E402

cli.add_command(forms)
