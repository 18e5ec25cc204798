"""List the registered validator types."""

import click

from recordguard.bootstrap import create_registry
from recordguard.config import ValidationConfig
from recordguard.validation.registry import VENDOR_PREFIX


@click.command()
@click.pass_obj
def validators(config: ValidationConfig | None):
    """List validator rule types available to record schemas."""
    registry = create_registry(config)

    names = registry.validator_types()
    click.echo(f"{len(names)} validator(s) registered:")
    for name in names:
        vendored = registry.is_registered(f"{VENDOR_PREFIX}validator:{name}")
        suffix = click.style(" (built-in)", dim=True) if vendored else ""
        click.echo(f"  {name}{suffix}")
