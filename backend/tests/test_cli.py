"""Tests for recordguard CLI commands."""

import json

import pytest
from click.testing import CliRunner

from recordguard.cli.main import cli

USER_SCHEMA = """\
record: user
attributes:
  - name: name
    validation:
      presence: true
  - name: age
    validation:
      - numeric: true
      - range: {min: 0}
"""

RECORDS = """\
records:
  - type: user
    values: {name: Ada, age: 36}
  - type: user
    values: {name: "", age: -5}
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "RECORDGUARD_CONFIG",
        "RECORDGUARD_STRICT_RESULTS",
        "RECORDGUARD_MESSAGES_PATH",
        "RECORDGUARD_ERROR_MESSAGE",
        "RECORDGUARD_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def schema_dir(tmp_path):
    directory = tmp_path / "schemas"
    directory.mkdir()
    (directory / "user.yaml").write_text(USER_SCHEMA)
    return directory


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "records.yaml"
    path.write_text(RECORDS)
    return path


# =============================================================================
# schema check
# =============================================================================


class TestSchemaCheck:
    def test_valid_directory(self, runner, schema_dir):
        result = runner.invoke(cli, ["schema", "check", str(schema_dir)])

        assert result.exit_code == 0
        assert "user (2 attributes, 0 relationships)" in result.output
        assert "All schemas are valid" in result.output

    def test_single_file(self, runner, schema_dir):
        result = runner.invoke(cli, ["schema", "check", str(schema_dir / "user.yaml")])

        assert result.exit_code == 0
        assert "Loaded 1 record type(s)" in result.output

    def test_invalid_schema(self, runner, schema_dir):
        (schema_dir / "broken.yaml").write_text("record: broken\nfields: []\n")

        result = runner.invoke(cli, ["schema", "check", str(schema_dir)])

        assert result.exit_code == 1
        assert "broken.yaml" in result.output
        assert "schema error(s) found" in result.output

    def test_warning_passes_unless_strict(self, runner, schema_dir):
        (schema_dir / "empty.yaml").write_text("record: empty\n")

        relaxed = runner.invoke(cli, ["schema", "check", str(schema_dir)])
        strict = runner.invoke(cli, ["schema", "check", "--strict", str(schema_dir)])

        assert relaxed.exit_code == 0
        assert "1 warning(s) found" in relaxed.output
        assert strict.exit_code == 1

    def test_duplicate_record_type(self, runner, schema_dir):
        (schema_dir / "user_copy.yaml").write_text(USER_SCHEMA)

        result = runner.invoke(cli, ["schema", "check", str(schema_dir)])

        assert result.exit_code == 1
        assert "Schema loading failed" in result.output


# =============================================================================
# records validate
# =============================================================================


class TestRecordsValidate:
    def test_reports_invalid_records(self, runner, schema_dir, data_file):
        result = runner.invoke(
            cli, ["records", "validate", "--schema", str(schema_dir), str(data_file)]
        )

        assert result.exit_code == 1
        assert "✓ user[0]" in result.output
        assert "✗ user[1]" in result.output
        assert "name: Name can't be blank" in result.output
        assert "age: Age must contain only digits" in result.output
        assert "age: Age must be greater than or equal to 0" in result.output
        assert "2 record(s) checked, 1 invalid." in result.output

    def test_all_valid(self, runner, schema_dir, tmp_path):
        data = tmp_path / "valid.yaml"
        data.write_text("- type: user\n  values: {name: Ada, age: 36}\n")

        result = runner.invoke(cli, ["records", "validate", "--schema", str(schema_dir), str(data)])

        assert result.exit_code == 0
        assert "1 record(s) checked, 0 invalid." in result.output

    def test_json_output(self, runner, schema_dir, data_file):
        result = runner.invoke(
            cli, ["records", "validate", "--json", "--schema", str(schema_dir), str(data_file)]
        )

        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert [entry["valid"] for entry in payload] == [True, False]
        assert payload[1]["status"] == "invalid"
        assert payload[1]["errors"] == {
            "name": ["Name can't be blank"],
            "age": [
                "Age must contain only digits",
                "Age must be greater than or equal to 0",
            ],
        }

    def test_custom_messages(self, runner, schema_dir, data_file, tmp_path):
        messages = tmp_path / "messages.yaml"
        messages.write_text("user:\n  name:\n    presence: Tell us your name\n")

        result = runner.invoke(
            cli,
            [
                "records",
                "validate",
                "--schema",
                str(schema_dir),
                "--messages",
                str(messages),
                str(data_file),
            ],
        )

        assert "name: Tell us your name" in result.output

    def test_deleted_records_are_skipped(self, runner, schema_dir, tmp_path):
        data = tmp_path / "deleted.yaml"
        data.write_text("- type: user\n  status: deleted\n  values: {name: ''}\n")

        result = runner.invoke(cli, ["records", "validate", "--schema", str(schema_dir), str(data)])

        assert result.exit_code == 0

    def test_unknown_rule_type(self, runner, schema_dir, data_file):
        (schema_dir / "user.yaml").write_text(
            "record: user\nattributes:\n  - name: name\n    validation: {bogus: true}\n"
        )

        result = runner.invoke(
            cli, ["records", "validate", "--schema", str(schema_dir), str(data_file)]
        )

        assert result.exit_code == 1
        assert "Could not find Validator `bogus`." in result.output

    def test_unknown_record_type(self, runner, schema_dir, tmp_path):
        data = tmp_path / "records.yaml"
        data.write_text("- type: invoice\n  values: {}\n")

        result = runner.invoke(cli, ["records", "validate", "--schema", str(schema_dir), str(data)])

        assert result.exit_code == 2
        assert "unknown type 'invoice'" in result.output

    def test_unknown_status(self, runner, schema_dir, tmp_path):
        data = tmp_path / "records.yaml"
        data.write_text("- type: user\n  status: archived\n  values: {name: Ada}\n")

        result = runner.invoke(cli, ["records", "validate", "--schema", str(schema_dir), str(data)])

        assert result.exit_code == 2
        assert "unknown status 'archived'" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_unparseable_data_file(self, runner, schema_dir, tmp_path):
        data = tmp_path / "records.yaml"
        data.write_text("records: [unclosed\n")

        result = runner.invoke(cli, ["records", "validate", "--schema", str(schema_dir), str(data)])

        assert result.exit_code == 2
        assert "cannot parse" in result.output


# =============================================================================
# validators
# =============================================================================


class TestValidatorsCommand:
    def test_lists_builtins(self, runner):
        result = runner.invoke(cli, ["validators"])

        assert result.exit_code == 0
        assert "13 validator(s) registered" in result.output
        for name in ("presence", "numeric", "range", "inclusion"):
            assert f"  {name}" in result.output

    def test_log_level_option(self, runner):
        result = runner.invoke(cli, ["--log-level", "debug", "validators"])
        assert result.exit_code == 0
