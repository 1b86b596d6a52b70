#!/usr/bin/env python3
"""Validate vaccine YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from vaccines.storage import default_data_path


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_vaccine_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single vaccine YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data or [], schema=schema)
        # ids key reminders and edits, so they must be unique
        ids = [v["id"] for v in data or []]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            errors.append(f"Duplicate ids: {', '.join(duplicates)}")
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except Exception as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given vaccine files (default: the configured data file)."""
    args = sys.argv[1:] if argv is None else argv
    files = [Path(a) for a in args] or [default_data_path()]
    schema = load_schema()

    all_valid = True
    for filepath in files:
        errors = validate_vaccine_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
