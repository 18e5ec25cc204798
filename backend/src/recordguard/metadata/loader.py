"""Load record types from YAML schema files.

One file declares one record type:

    record: user
    attributes:
      - name: name
        type: string
        description: Full name
        validation:
          presence: true
      - name: age
        type: number
        validation:
          - numeric: true
          - range: {min: 0}
    relationships:
      - name: roles
        type: role
        kind: hasMany
        validation: {presence: true}
"""

from pathlib import Path
from typing import Any

import yaml

from recordguard.exceptions import SchemaError
from recordguard.records.model import RecordType
from recordguard.validation.types import ATTRIBUTE, RELATIONSHIP, FieldDescriptor

# Keys that describe the field itself rather than its options
_FIELD_KEYS = ("name", "type")


class SchemaLoader:
    """Loads record type definitions from YAML files."""

    def __init__(self, schema_path: Path):
        self.schema_path = schema_path
        self.record_types: dict[str, RecordType] = {}

    def load_all(self) -> None:
        """Load every ``*.yaml`` file in the schema directory, or the single file given."""
        if self.schema_path.is_file():
            files = [self.schema_path]
        elif self.schema_path.is_dir():
            files = sorted(self.schema_path.glob("*.yaml"))
        else:
            raise SchemaError(f"Schema path does not exist: {self.schema_path}")

        for yaml_file in files:
            self.load_file(yaml_file)

    def load_file(self, yaml_file: Path) -> RecordType:
        try:
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SchemaError(f"Cannot parse {yaml_file}: {e}") from e

        if not isinstance(data, dict) or "record" not in data:
            raise SchemaError(f"{yaml_file} does not declare a record type")

        record_type = self.resolve_record_type(data)
        if record_type.name in self.record_types:
            raise SchemaError(
                f"Duplicate record type '{record_type.name}' in {yaml_file}"
            )
        self.record_types[record_type.name] = record_type
        return record_type

    def resolve_record_type(self, data: dict[str, Any]) -> RecordType:
        """Convert a parsed record declaration to a RecordType."""
        name = data["record"]
        attributes = [
            self._resolve_field(f, ATTRIBUTE, name) for f in data.get("attributes") or []
        ]
        relationships = [
            self._resolve_field(f, RELATIONSHIP, name) for f in data.get("relationships") or []
        ]
        return RecordType(name=name, attributes=attributes, relationships=relationships)

    def _resolve_field(self, data: Any, kind: str, record_name: str) -> FieldDescriptor:
        if not isinstance(data, dict) or not data.get("name"):
            raise SchemaError(f"Record type '{record_name}' has a {kind} without a name")

        options = {k: v for k, v in data.items() if k not in _FIELD_KEYS}
        return FieldDescriptor(
            name=data["name"],
            kind=kind,
            type=data.get("type"),
            options=options,
        )

    def get_record_type(self, name: str) -> RecordType | None:
        return self.record_types.get(name)

    def list_record_types(self) -> list[str]:
        return sorted(self.record_types)
