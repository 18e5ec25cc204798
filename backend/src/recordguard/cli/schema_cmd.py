"""Schema CLI commands."""

from pathlib import Path

import click

from recordguard.exceptions import SchemaError
from recordguard.metadata.loader import SchemaLoader
from recordguard.metadata.validator import validate_schema_dir, validate_yaml_file


@click.group()
def schema():
    """Record schema commands."""
    pass


@schema.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
def check(path: Path, strict: bool):
    """Check record schema YAML files against the JSON Schema."""
    if path.is_dir():
        issues = validate_schema_dir(path, strict=strict)
    else:
        issues = validate_yaml_file(path)
        if strict:
            for issue in issues:
                issue.severity = "error"

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    # Semantic (loader) check
    try:
        loader = SchemaLoader(path)
        loader.load_all()
    except SchemaError as e:
        click.echo(click.style(f"\nSchema loading failed: {e}", fg="red"), err=True)
        raise SystemExit(1)

    names = loader.list_record_types()
    click.echo(f"\nLoaded {len(names)} record type(s):")
    for name in names:
        record_type = loader.get_record_type(name)
        click.echo(
            f"  ✓ {name} ({len(record_type.attributes)} attributes, "
            f"{len(record_type.relationships)} relationships)"
        )

    click.echo(click.style("\nAll schemas are valid.", fg="green", bold=True))
