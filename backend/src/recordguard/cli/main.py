"""recordguard CLI entry point."""

import logging

import click

from recordguard.config import ValidationConfig


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: RECORDGUARD_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """recordguard: declarative record validation CLI."""
    config = ValidationConfig.from_env()
    if log_level:
        config.log_level = log_level.upper()

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


# Register subcommand groups
from recordguard.cli.records_cmd import records  # noqa: E402
from recordguard.cli.schema_cmd import schema  # noqa: E402
from recordguard.cli.validators_cmd import validators  # noqa: E402

cli.add_command(records)
cli.add_command(schema)
cli.add_command(validators)
