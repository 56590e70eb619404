"""Export functionality for generated timetables."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .scheduler.excel_generator import unique_sheet_name
from .scheduler.models import GenerationResult

# Fixed sheets written after the class sheets
TEACHERS_SHEET = "Teachers"
DIAGNOSTICS_SHEET = "Diagnostics"


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: GenerationResult, output_path: str | Path) -> None:
        """Export generation result to file.

        Args:
            result: GenerationResult to export
            output_path: Path to output file or directory
        """
        pass


def class_slot_rows(result: GenerationResult) -> list[dict]:
    """One row per class slot, empty slots included."""
    rows = []
    for class_name, grid in result.timetables.items():
        for day in result.days:
            for period, slot in enumerate(grid.get(day, [])):
                rows.append(
                    {
                        "class": class_name,
                        "day": day,
                        "period": period + 1,
                        "subject": slot.subject if slot else "",
                        "teacher": slot.teacher if slot else "",
                        "teacher_id": slot.teacher_id if slot else "",
                    }
                )
    return rows


def teacher_slot_rows(result: GenerationResult) -> list[dict]:
    """One row per occupied teacher slot."""
    rows = []
    for teacher_id, grid in result.teacher_schedules.items():
        for day in result.days:
            for period, slot in enumerate(grid.get(day, [])):
                if slot is None:
                    continue
                rows.append(
                    {
                        "teacher_id": teacher_id,
                        "day": day,
                        "period": period + 1,
                        "class": slot.class_name,
                        "subject": slot.subject,
                    }
                )
    return rows


def diagnostic_rows(result: GenerationResult) -> list[dict]:
    """Flatten every diagnostic into a single table."""
    diagnostics = result.diagnostics
    rows = []
    for item in diagnostics.under_assignments:
        rows.append(
            {
                "kind": "under_assignment",
                "class": item.class_name,
                "subject": item.subject,
                "teacher_id": item.teacher_id,
                "detail": f"placed {item.placed} of {item.requested}",
            }
        )
    for item in diagnostics.cap_overruns:
        rows.append(
            {
                "kind": "cap_overrun",
                "class": "",
                "subject": "",
                "teacher_id": item.teacher_id,
                "detail": f"{item.placed} periods, cap {item.cap}",
            }
        )
    for item in diagnostics.skipped_assignments:
        rows.append(
            {
                "kind": "skipped",
                "class": item.class_name,
                "subject": item.subject,
                "teacher_id": item.teacher_id,
                "detail": item.reason.value,
            }
        )
    for item in diagnostics.substitutions:
        rows.append(
            {
                "kind": "substitution",
                "class": item.class_name,
                "subject": item.subject,
                "teacher_id": item.substitute_teacher_id,
                "detail": (
                    f"{item.day} period {item.period + 1} instead of {item.original_teacher_id}"
                ),
            }
        )
    return rows


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: GenerationResult, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, result: GenerationResult, output_path: str | Path) -> None:
        """Export generation result to CSV files.

        Creates three files:
        - class_timetables.csv: Every class slot
        - teacher_schedules.csv: Every occupied teacher slot
        - diagnostics.csv: Shortfalls, overruns, skips and substitutions

        Args:
            result: GenerationResult to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(output_dir / "class_timetables.csv", class_slot_rows(result))
        self._write_csv(output_dir / "teacher_schedules.csv", teacher_slot_rows(result))
        self._write_csv(output_dir / "diagnostics.csv", diagnostic_rows(result))

    def _write_csv(self, output_path: Path, rows: list[dict]) -> None:
        """Write rows to CSV file."""
        if not rows:
            return

        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=rows[0].keys())
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, result: GenerationResult, output_path: str | Path) -> None:
        """Export generation result to an Excel file.

        Creates workbook with sheets:
        - One sheet per class: periods down, days across
        - Teachers: weekly load per teacher and day
        - Diagnostics: Flattened diagnostics

        Args:
            result: GenerationResult to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            used = {TEACHERS_SHEET.lower(), DIAGNOSTICS_SHEET.lower()}
            for class_name in sorted(result.timetables):
                sheet_name = unique_sheet_name(class_name, used)
                self._export_class_sheet(result, class_name, sheet_name, writer)
            self._export_teachers_sheet(result, writer)
            self._export_diagnostics_sheet(result, writer)

    def _export_class_sheet(
        self,
        result: GenerationResult,
        class_name: str,
        sheet_name: str,
        writer: pd.ExcelWriter,
    ) -> None:
        grid = result.timetables[class_name]
        longest = max((len(slots) for slots in grid.values()), default=0)
        data = {}
        for day in result.days:
            slots = grid.get(day, [])
            data[day] = [
                f"{slots[p].subject} ({slots[p].teacher})" if p < len(slots) and slots[p] else ""
                for p in range(longest)
            ]
        df = pd.DataFrame(data, index=[f"Period {p + 1}" for p in range(longest)])
        df.to_excel(writer, sheet_name=sheet_name)

    def _export_teachers_sheet(self, result: GenerationResult, writer: pd.ExcelWriter) -> None:
        rows = []
        for teacher_id, grid in result.teacher_schedules.items():
            row = {"teacher_id": teacher_id}
            for day in result.days:
                row[day] = sum(1 for slot in grid.get(day, []) if slot is not None)
            row["total"] = result.statistics.teacher_load.get(teacher_id, 0)
            rows.append(row)
        df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=["teacher_id"])
        df.to_excel(writer, sheet_name=TEACHERS_SHEET, index=False)

    def _export_diagnostics_sheet(
        self, result: GenerationResult, writer: pd.ExcelWriter
    ) -> None:
        rows = diagnostic_rows(result)
        df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=["kind", "detail"])
        df.to_excel(writer, sheet_name=DIAGNOSTICS_SHEET, index=False)


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
