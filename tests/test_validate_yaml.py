#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

from validate_yaml import load_schema, main, validate_vaccine_file


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        schema = load_schema()
        assert schema["type"] == "array"
        assert "name" in schema["items"]["properties"]
        assert "renewalDate" in schema["items"]["properties"]


class TestValidateVaccineFile:
    """Tests for validate_vaccine_file function."""

    def test_valid_file_returns_no_errors(self, tmp_path):
        path = tmp_path / "valid.yaml"
        path.write_text("""
- id: 3f2a
  name: TBE
  date: '2025-05-02'
  renewalDate: '2028-05-02'
- id: 9c1d
  name: Polio
  date: '2010-01-01'
""")
        assert validate_vaccine_file(path, load_schema()) == []

    def test_empty_file_is_valid(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert validate_vaccine_file(path, load_schema()) == []

    def test_missing_required_field_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
- id: 3f2a
  date: '2025-05-02'
""")
        errors = validate_vaccine_file(path, load_schema())
        assert len(errors) >= 1
        assert any("Schema validation" in e for e in errors)

    def test_blank_name_returns_errors(self, tmp_path):
        path = tmp_path / "blank.yaml"
        path.write_text("- id: a\n  name: '  '\n  date: '2025-05-02'\n")
        assert validate_vaccine_file(path, load_schema()) != []

    def test_duplicate_ids_return_errors(self, tmp_path):
        path = tmp_path / "dupes.yaml"
        path.write_text("""
- id: same
  name: TBE
  date: '2025-05-02'
- id: same
  name: Polio
  date: '2010-01-01'
""")
        errors = validate_vaccine_file(path, load_schema())
        assert errors == ["Duplicate ids: same"]

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- id: [unclosed\n")
        errors = validate_vaccine_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_vaccine_file(tmp_path / "does_not_exist.yaml", load_schema())
        assert len(errors) >= 1


class TestMain:
    """Tests for the validate_yaml entry point."""

    def test_exit_codes(self, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text("- id: a\n  name: TBE\n  date: '2025-05-02'\n")
        bad = tmp_path / "bad.yaml"
        bad.write_text("- name: TBE\n")
        assert main([str(good)]) == 0
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert "OK:" in out
        assert "FAIL:" in out
