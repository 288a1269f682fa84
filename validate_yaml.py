#!/usr/bin/env python3
"""
Validate truck YAML files.

Each file is checked twice: against schema.yaml for shape and types, then
by building the Truck model, which enforces what the schema cannot express
(a tire id mounted twice, current km below initial km, odd slot counts).
"""
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from jsonschema import Draft7Validator

from fleet import FleetError, truck_from_dict

TRUCKS_DIR = Path(__file__).parent / "trucks"


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def _schema_errors(data, schema: dict) -> List[str]:
    errors = []
    validator = Draft7Validator(schema)
    found = validator.iter_errors(data)
    for error in sorted(found, key=lambda e: [str(p) for p in e.path]):
        errors.append(f"Schema validation error: {error.message}")
        if error.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in error.path)}")
    return errors


def validate_truck_file(filepath: Path, schema: dict) -> List[str]:
    """Validate a single truck YAML file. Returns list of errors."""
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]

    errors = _schema_errors(data, schema)
    if errors:
        return errors

    # Only well-formed files get here, so the model sees every key it needs
    try:
        truck_from_dict(data)
    except FleetError as e:
        errors.append(f"Model validation error: {e}")
    return errors


def main(trucks_dir: Optional[Path] = None) -> int:
    """Validate all truck YAML files in the trucks/ directory."""
    schema = load_schema()
    trucks_dir = trucks_dir or TRUCKS_DIR

    if not trucks_dir.exists():
        print(f"Error: trucks directory not found: {trucks_dir}")
        return 1

    yaml_files = sorted(trucks_dir.glob("*.yaml")) + sorted(trucks_dir.glob("*.yml"))
    if not yaml_files:
        print(f"Warning: No YAML files found in {trucks_dir}")
        return 0

    failed = 0
    for filepath in yaml_files:
        errors = validate_truck_file(filepath, schema)
        if errors:
            failed += 1
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
        else:
            print(f"OK: {filepath.name}")

    print(f"\n{len(yaml_files) - failed}/{len(yaml_files)} truck file(s) valid")
    return 0 if not failed else 1


if __name__ == "__main__":
    sys.exit(main())
