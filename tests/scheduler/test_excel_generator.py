"""Tests for styled timetable workbooks."""

import json

import pytest
from openpyxl import load_workbook

from school_timetable.exporters import JSONExporter
from school_timetable.scheduler.algorithm import generate
from school_timetable.scheduler.excel_generator import (
    FIRST_DATA_ROW,
    GeneratorConfig,
    TimetableExcelGenerator,
    generate_timetable_excel,
    unique_sheet_name,
)


@pytest.fixture
def result_json(tmp_path, teachers, class_6a, class_7b):
    path = tmp_path / "result.json"
    JSONExporter().export(generate(teachers, [class_6a, class_7b], seed=42), path)
    return path


class TestSanitizeSheetName:
    """Tests for sheet name cleanup."""

    def test_removes_forbidden_characters(self):
        assert TimetableExcelGenerator.sanitize_sheet_name("6/A:[x]") == "6Ax"

    def test_truncates(self):
        assert len(TimetableExcelGenerator.sanitize_sheet_name("x" * 40)) == 31

    def test_empty_name(self):
        assert TimetableExcelGenerator.sanitize_sheet_name("??") == "Sheet"


class TestUniqueSheetName:
    """Tests for de-duplicated sheet names."""

    def test_first_use_is_unchanged(self):
        used = set()
        assert unique_sheet_name("6A", used) == "6A"
        assert used == {"6a"}

    def test_clash_is_case_insensitive(self):
        used = {"teachers"}
        assert unique_sheet_name("TEACHERS", used) == "TEACHERS_2"
        assert unique_sheet_name("teachers", used) == "teachers_3"

    def test_suffix_fits_length_limit(self):
        used = set()
        unique_sheet_name("x" * 40, used)
        second = unique_sheet_name("x" * 40, used)
        assert second == "x" * 28 + "_2"
        assert len(second) <= 31


class TestTimetableExcelGenerator:
    """Tests for workbook creation."""

    def test_class_workbook(self, result_json):
        generator = TimetableExcelGenerator(GeneratorConfig(mode="class", school_name="Hill School"))
        wb = generator.create_workbook(generator.load_json(result_json))

        assert wb.sheetnames == ["6A", "7B"]
        ws = wb["6A"]
        assert ws["A1"].value == "Hill School - Class 6A"
        assert ws.cell(row=FIRST_DATA_ROW, column=1).value == "Monday"
        assert ws.cell(row=FIRST_DATA_ROW - 1, column=8).value == "Period 7"

    def test_teacher_workbook_uses_names(self, result_json):
        generator = TimetableExcelGenerator(GeneratorConfig(mode="teacher"))
        wb = generator.create_workbook(generator.load_json(result_json))

        assert "Asha Patel" in wb.sheetnames
        assert len(wb.sheetnames) == 5

    def test_cell_content(self):
        class_gen = TimetableExcelGenerator(GeneratorConfig(mode="class"))
        teacher_gen = TimetableExcelGenerator(GeneratorConfig(mode="teacher"))

        assert class_gen.format_cell_content({"subject": "Maths", "teacher": "Asha"}) == "Maths\nAsha"
        assert teacher_gen.format_cell_content({"class": "6A", "subject": "Maths"}) == "6A\nMaths"
        assert class_gen.format_cell_content(None) == ""

    def test_empty_result(self):
        generator = TimetableExcelGenerator(GeneratorConfig(mode="class"))
        wb = generator.create_workbook({"days": [], "timetables": {}})
        assert wb.sheetnames == ["Empty"]

    def test_duplicate_teacher_names(self):
        data = {
            "days": ["Monday"],
            "timetables": {
                "6A": {
                    "Monday": [
                        {"subject": "Maths", "teacher": "Sam", "teacherId": "a"},
                        {"subject": "PE", "teacher": "Sam", "teacherId": "b"},
                    ]
                }
            },
            "teacherSchedules": {
                "a": {"Monday": [{"class": "6A", "subject": "Maths"}, None]},
                "b": {"Monday": [None, {"class": "6A", "subject": "PE"}]},
            },
        }
        wb = TimetableExcelGenerator(GeneratorConfig(mode="teacher")).create_workbook(data)
        assert sorted(wb.sheetnames) == ["Sam", "Sam_2"]


class TestGenerateTimetableExcel:
    """Tests for the file-level entry point."""

    def test_both_modes(self, result_json, tmp_path):
        files = generate_timetable_excel(result_json, tmp_path / "excel")

        assert [f.name for f in files] == ["class_timetables.xlsx", "teacher_timetables.xlsx"]
        wb = load_workbook(files[0])
        assert wb.sheetnames == ["6A", "7B"]
        first_slot = wb["6A"].cell(row=FIRST_DATA_ROW, column=2).value
        data = json.loads(result_json.read_text())
        expected = data["timetables"]["6A"]["Monday"][0]
        assert first_slot == f"{expected['subject']}\n{expected['teacher']}"

    def test_single_mode(self, result_json, tmp_path):
        files = generate_timetable_excel(result_json, tmp_path, mode="teacher")
        assert [f.name for f in files] == ["teacher_timetables.xlsx"]
