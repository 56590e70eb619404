"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from school_timetable.cli import app

runner = CliRunner()


@pytest.fixture
def input_file(tmp_path, generation_input):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(generation_input), encoding="utf-8")
    return path


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_json_output(self, input_file, tmp_path):
        output = tmp_path / "result.json"
        result = runner.invoke(app, ["generate", str(input_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["seed"] == 42
        assert set(data["timetables"]) == {"6A", "7B"}

    def test_save_to_history(self, input_file, tmp_path):
        history_dir = tmp_path / "history"
        result = runner.invoke(
            app,
            [
                "generate",
                str(input_file),
                "-o",
                str(tmp_path / "result.json"),
                "--save-as",
                "Term 1",
                "--history-dir",
                str(history_dir),
            ],
        )
        assert result.exit_code == 0, result.output
        assert len(list(history_dir.glob("*.json"))) == 1

        listing = runner.invoke(app, ["history", "--history-dir", str(history_dir)])
        assert "Term 1" in listing.output

    def test_missing_input(self, tmp_path):
        result = runner.invoke(app, ["generate", str(tmp_path / "absent.json")])
        assert result.exit_code == 1

    def test_invalid_input(self, tmp_path):
        path = tmp_path / "input.json"
        path.write_text(json.dumps({"teachers": []}), encoding="utf-8")
        result = runner.invoke(app, ["generate", str(path)])
        assert result.exit_code == 1


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid(self, input_file):
        result = runner.invoke(app, ["validate", str(input_file)])
        assert result.exit_code == 0
        assert "Input is valid" in result.output

    def test_duplicate_class(self, tmp_path, generation_input):
        generation_input["classConfigs"].append(generation_input["classConfigs"][0])
        path = tmp_path / "input.json"
        path.write_text(json.dumps(generation_input), encoding="utf-8")

        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1


class TestImportTeachersCommand:
    """Tests for the import-teachers command."""

    def test_template_then_import(self, tmp_path):
        csv_path = tmp_path / "teachers.csv"
        assert runner.invoke(app, ["import-teachers", str(csv_path), "--template"]).exit_code == 0

        result = runner.invoke(app, ["import-teachers", str(csv_path)])
        assert result.exit_code == 0, result.output
        teachers = json.loads(csv_path.with_suffix(".json").read_text(encoding="utf-8"))
        assert len(teachers) == 2


class TestExcelCommand:
    """Tests for the excel command."""

    def test_invalid_mode(self, input_file):
        result = runner.invoke(app, ["excel", str(input_file), "--mode", "room"])
        assert result.exit_code == 1
