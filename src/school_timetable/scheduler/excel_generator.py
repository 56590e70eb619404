"""Styled Excel workbooks for class and teacher timetables."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

# Fonts
FONT_TITLE = Font(name="Calibri", size=16, bold=True)
FONT_HEADER = Font(name="Calibri", size=11, bold=True)
FONT_DAY = Font(name="Calibri", size=11, bold=True)
FONT_CELL = Font(name="Calibri", size=10, bold=False)

# Alignments
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)

# Borders
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

FILL_HEADER = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
FILL_FREE = PatternFill(start_color="F2F2F2", end_color="F2F2F2", fill_type="solid")
FILL_ANCHOR = PatternFill(start_color="E2EFDA", end_color="E2EFDA", fill_type="solid")

DAY_COLUMN_WIDTH = 14.0
PERIOD_COLUMN_WIDTH = 18.0

HEADER_ROW = 3
FIRST_DATA_ROW = 4

INVALID_SHEET_CHARS = r"/\*?:[]"


@dataclass
class GeneratorConfig:
    """Configuration for timetable workbook generation."""

    mode: Literal["class", "teacher"]
    school_name: str = ""


class TimetableExcelGenerator:
    """Generates one workbook with a sheet per class or per teacher.

    Input is the exported result JSON: "days", "timetables" and
    "teacherSchedules" keys.
    """

    def __init__(self, config: GeneratorConfig):
        self.config = config

    def load_json(self, path: Path) -> dict:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    def sanitize_sheet_name(name: str) -> str:
        """Strip characters Excel forbids in sheet names (max 31 chars)."""
        cleaned = str(name)
        for char in INVALID_SHEET_CHARS:
            cleaned = cleaned.replace(char, "")
        return cleaned[:31] or "Sheet"

    @staticmethod
    def teacher_names(data: dict) -> dict[str, str]:
        """Map teacher ids to display names using the class timetables."""
        names: dict[str, str] = {}
        for grid in data.get("timetables", {}).values():
            for slots in grid.values():
                for slot in slots:
                    if slot:
                        names.setdefault(slot["teacherId"], slot["teacher"])
        return names

    def format_cell_content(self, slot: dict | None) -> str:
        if not slot:
            return ""
        if self.config.mode == "class":
            return f"{slot['subject']}\n{slot['teacher']}"
        return f"{slot['class']}\n{slot['subject']}"

    def create_workbook(self, data: dict) -> Workbook:
        """Create a workbook with one sheet per class or teacher."""
        wb = Workbook()
        wb.remove(wb.active)
        days = data.get("days", [])

        if self.config.mode == "class":
            grids = data.get("timetables", {})
            titles = {name: f"Class {name}" for name in grids}
        else:
            grids = data.get("teacherSchedules", {})
            names = self.teacher_names(data)
            titles = {tid: names.get(tid, tid) for tid in grids}

        used: set[str] = set()
        for key in sorted(grids, key=lambda k: titles[k]):
            label = titles[key] if self.config.mode == "teacher" else key
            sheet_name = unique_sheet_name(label, used)

            ws = wb.create_sheet(title=sheet_name)
            grid = grids[key]
            periods = max((len(grid.get(day, [])) for day in days), default=0)
            self.setup_sheet(ws, titles[key], days, periods)
            self.fill_schedule(ws, grid, days)

        if not wb.worksheets:
            wb.create_sheet(title="Empty")
        return wb

    def setup_sheet(self, ws, title: str, days: list[str], periods: int) -> None:
        """Write title, header row and empty bordered grid."""
        last_col = get_column_letter(max(periods + 1, 2))
        ws.merge_cells(f"A1:{last_col}1")
        ws["A1"] = f"{self.config.school_name} - {title}" if self.config.school_name else title
        ws["A1"].font = FONT_TITLE
        ws["A1"].alignment = ALIGN_CENTER
        ws.row_dimensions[1].height = 28.0

        ws.column_dimensions["A"].width = DAY_COLUMN_WIDTH
        header = ws.cell(row=HEADER_ROW, column=1, value="Day")
        header.font = FONT_HEADER
        header.alignment = ALIGN_CENTER
        header.border = THIN_BORDER
        header.fill = FILL_HEADER

        for period in range(periods):
            col = period + 2
            ws.column_dimensions[get_column_letter(col)].width = PERIOD_COLUMN_WIDTH
            cell = ws.cell(row=HEADER_ROW, column=col, value=f"Period {period + 1}")
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER
            cell.fill = FILL_HEADER

        for i, day in enumerate(days):
            row = FIRST_DATA_ROW + i
            ws.row_dimensions[row].height = 36.0
            cell = ws.cell(row=row, column=1, value=day)
            cell.font = FONT_DAY
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER
            for period in range(periods):
                slot_cell = ws.cell(row=row, column=period + 2)
                slot_cell.border = THIN_BORDER
                slot_cell.alignment = ALIGN_CENTER
                slot_cell.font = FONT_CELL

    def fill_schedule(self, ws, grid: dict[str, list], days: list[str]) -> None:
        for i, day in enumerate(days):
            row = FIRST_DATA_ROW + i
            for period, slot in enumerate(grid.get(day, [])):
                cell = ws.cell(row=row, column=period + 2)
                if slot is None:
                    cell.fill = FILL_FREE
                    continue
                cell.value = self.format_cell_content(slot)
                if self.config.mode == "class" and period == 0:
                    cell.fill = FILL_ANCHOR

    def save(self, wb: Workbook, output_path: Path) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)


def unique_sheet_name(name: str, used: set[str]) -> str:
    """Sanitized sheet name not yet taken, suffixed with _2, _3... on a clash.

    Excel compares sheet names case-insensitively, so `used` holds lowercased
    names. The returned name is added to it.
    """
    sheet_name = TimetableExcelGenerator.sanitize_sheet_name(name)
    base, suffix = sheet_name, 2
    while sheet_name.lower() in used:
        sheet_name = f"{base[:28]}_{suffix}"
        suffix += 1
    used.add(sheet_name.lower())
    return sheet_name


def generate_timetable_excel(
    input_path: Path,
    output_dir: Path,
    mode: str | None = None,
    school_name: str = "",
) -> list[Path]:
    """Generate styled workbooks from an exported result JSON.

    Args:
        input_path: Path to result JSON file.
        output_dir: Output directory for Excel files.
        mode: "class" or "teacher", or None for both.
        school_name: Optional title prefix.

    Returns:
        List of generated file paths.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    generated_files: list[Path] = []

    modes = [mode] if mode else ["class", "teacher"]
    for current in modes:
        generator = TimetableExcelGenerator(GeneratorConfig(mode=current, school_name=school_name))  # type: ignore
        data = generator.load_json(input_path)
        wb = generator.create_workbook(data)
        output_file = output_dir / f"{current}_timetables.xlsx"
        generator.save(wb, output_file)
        generated_files.append(output_file)

    return generated_files
