"""Record CLI commands."""

import json
from pathlib import Path
from typing import Any

import click
import yaml

from recordguard.bootstrap import create_validation_service
from recordguard.config import ValidationConfig
from recordguard.exceptions import RecordGuardError
from recordguard.metadata.loader import SchemaLoader
from recordguard.records.model import Record
from recordguard.records.states import RecordStatus


@click.group()
def records():
    """Record validation commands."""
    pass


def _load_entries(data_file: Path) -> list[dict[str, Any]]:
    try:
        with open(data_file) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.BadParameter(f"cannot parse {data_file}: {e}", param_hint="DATA_FILE") from e

    if isinstance(data, dict):
        data = data.get("records")
    if not isinstance(data, list):
        raise click.BadParameter(
            "expected a list of records or a 'records' key", param_hint="DATA_FILE"
        )
    return data


def _build_record(loader: SchemaLoader, entry: Any, index: int) -> Record:
    if not isinstance(entry, dict) or "type" not in entry:
        raise click.BadParameter(f"record #{index} has no 'type'", param_hint="DATA_FILE")

    record_type = loader.get_record_type(entry["type"])
    if record_type is None:
        raise click.BadParameter(
            f"record #{index} has unknown type '{entry['type']}'", param_hint="DATA_FILE"
        )

    values = entry.get("values") or {}
    try:
        status = RecordStatus(entry.get("status", RecordStatus.DIRTY.value))
    except ValueError as e:
        choices = ", ".join(s.value for s in RecordStatus)
        raise click.BadParameter(
            f"record #{index} has unknown status '{entry['status']}' (expected one of: {choices})",
            param_hint="DATA_FILE",
        ) from e
    return record_type.create(values, status=status)


@records.command()
@click.argument("data_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Record schema file or directory.",
)
@click.option(
    "--messages",
    "messages_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="YAML message catalog overriding the built-in messages.",
)
@click.option(
    "--strict-results",
    is_flag=True,
    default=False,
    help="Fail on validators that return unsupported results.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON output.")
@click.pass_obj
def validate(
    config: ValidationConfig | None,
    data_file: Path,
    schema_path: Path,
    messages_path: Path | None,
    strict_results: bool,
    as_json: bool,
):
    """Validate the records in DATA_FILE against their record types."""
    config = config or ValidationConfig()
    if messages_path is not None:
        config.messages_path = messages_path
    if strict_results:
        config.strict_results = True

    try:
        loader = SchemaLoader(schema_path)
        loader.load_all()
        service = create_validation_service(config)

        results = []
        for index, entry in enumerate(_load_entries(data_file)):
            record = _build_record(loader, entry, index)
            is_valid = service.validate(record, will_commit=False)
            results.append((index, record, is_valid))
    except RecordGuardError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    invalid = [r for r in results if not r[2]]

    if as_json:
        payload = [
            {
                "index": index,
                "type": record.model_name,
                "valid": is_valid,
                "status": record.status.value,
                "errors": record.errors.to_dict(),
            }
            for index, record, is_valid in results
        ]
        click.echo(json.dumps(payload, indent=2, default=str))
    else:
        for index, record, is_valid in results:
            label = f"{record.model_name}[{index}]"
            if is_valid:
                click.echo(click.style(f"  ✓ {label}", fg="green"))
                continue
            click.echo(click.style(f"  ✗ {label}", fg="red"))
            for name, message in record.errors:
                click.echo(f"      {name}: {message}")

        summary = f"\n{len(results)} record(s) checked, {len(invalid)} invalid."
        click.echo(click.style(summary, fg="red" if invalid else "green", bold=True))

    if invalid:
        raise SystemExit(1)
