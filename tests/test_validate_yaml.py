#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

import shutil
from pathlib import Path

from fleet import save_truck
from validate_yaml import load_schema, main, validate_truck_file

SAMPLE = Path(__file__).parent.parent / "trucks" / "volvo-fh540.yaml"

MINIMAL = """
id: truck-02
plate: ABC-1234
model: Scania R450
axles:
  - id: axle-1
    type: FRONT
    tires:
      - id: A1
      - id: A2
"""


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        schema = load_schema()
        assert set(schema["required"]) == {"id", "plate", "model", "axles"}
        assert "tire" in schema["definitions"]


class TestValidateTruckFile:
    """Tests for validate_truck_file function."""

    def test_sample_truck_is_valid(self):
        assert validate_truck_file(SAMPLE, load_schema()) == []

    def test_valid_minimal_returns_no_errors(self, tmp_path):
        path = tmp_path / "valid.yaml"
        path.write_text(MINIMAL)
        assert validate_truck_file(path, load_schema()) == []

    def test_saved_truck_is_valid(self, tmp_path, truck):
        """Files written by save_truck pass the schema."""
        path = tmp_path / "saved.yaml"
        save_truck(path, truck)
        assert validate_truck_file(path, load_schema()) == []

    def test_missing_plate_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text(MINIMAL.replace("plate: ABC-1234\n", ""))
        errors = validate_truck_file(path, load_schema())
        assert any("Schema validation error" in e for e in errors)
        assert any("plate" in e for e in errors)

    def test_unknown_axle_type_reports_path(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text(MINIMAL.replace("type: FRONT", "type: STEERING"))
        errors = validate_truck_file(path, load_schema())
        assert "  at path: axles.0.type" in errors

    def test_duplicate_tire_id_is_model_error(self, tmp_path):
        """The schema cannot see a tire mounted twice; the model can."""
        path = tmp_path / "invalid.yaml"
        path.write_text(MINIMAL.replace("id: A2", "id: A1"))
        errors = validate_truck_file(path, load_schema())
        assert len(errors) == 1
        assert errors[0].startswith("Model validation error:")
        assert "A1" in errors[0]

    def test_axle_needs_two_slots(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text(MINIMAL.replace("      - id: A2\n", ""))
        assert validate_truck_file(path, load_schema()) != []

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("id: truck-02\naxles: [unclosed\n")
        errors = validate_truck_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_truck_file(tmp_path / "does_not_exist.yaml", load_schema())
        assert errors and errors[0].startswith("Error:")


class TestMain:
    """Tests for the validate_yaml entry point."""

    def test_all_valid(self, tmp_path, capsys):
        shutil.copy(SAMPLE, tmp_path / "volvo.yaml")
        assert main(tmp_path) == 0
        out = capsys.readouterr().out
        assert "OK: volvo.yaml" in out
        assert "1/1 truck file(s) valid" in out

    def test_reports_failures(self, tmp_path, capsys):
        (tmp_path / "bad.yml").write_text(MINIMAL.replace("plate: ABC-1234\n", ""))
        assert main(tmp_path) == 1
        assert "FAIL: bad.yml" in capsys.readouterr().out

    def test_missing_directory(self, tmp_path):
        assert main(tmp_path / "nope") == 1
