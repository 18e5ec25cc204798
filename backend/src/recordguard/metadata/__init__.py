"""Record schema loading and checking."""

from recordguard.metadata.loader import SchemaLoader
from recordguard.metadata.validator import SchemaIssue, validate_schema_dir, validate_yaml_file

__all__ = [
    "SchemaIssue",
    "SchemaLoader",
    "validate_schema_dir",
    "validate_yaml_file",
]
