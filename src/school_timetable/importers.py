"""Bulk teacher import from CSV files."""

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from .constants import (
    DEFAULT_PERIOD_LIMIT,
    IMPORT_OPTIONAL_COLUMNS,
    IMPORT_REQUIRED_COLUMNS,
    IMPORT_TEMPLATE_ROWS,
    TRUTHY_VALUES,
)
from .exceptions import TeacherImportError
from .models import Teacher
from .utils import normalize_header, parse_subject_periods, safe_int, safe_str, split_list
from .validators import validate_period_limit

logger = logging.getLogger(__name__)


@dataclass
class RowError:
    """A CSV row that could not be imported."""

    row: int
    message: str

    def __str__(self) -> str:
        return f"Row {self.row}: {self.message}"


@dataclass
class ImportResult:
    """Outcome of a bulk teacher import."""

    teachers: list[Teacher] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    total_rows: int = 0
    file_path: str = ""

    @property
    def imported(self) -> int:
        return len(self.teachers)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        """Convert result to dictionary."""
        return {
            "file_path": self.file_path,
            "total_rows": self.total_rows,
            "imported": self.imported,
            "failed": self.failed,
            "teachers": [t.to_dict() for t in self.teachers],
            "errors": [str(e) for e in self.errors],
        }


class TeacherCSVImporter:
    """Importer for teacher roster CSV files.

    Headers are matched case-insensitively with whitespace removed, so
    "Period Limit" and "periodlimit" are the same column. Bad rows are
    collected in the result; only file-level problems raise.
    """

    def __init__(
        self,
        existing: list[Teacher] | None = None,
        default_period_limit: int = DEFAULT_PERIOD_LIMIT,
    ):
        """Initialize importer.

        Args:
            existing: Teachers already on the roster (for duplicate detection)
            default_period_limit: Limit used when the column is empty
        """
        self.existing = list(existing or [])
        self.default_period_limit = default_period_limit

    def import_file(self, file_path: str | Path) -> ImportResult:
        """Import teachers from a CSV file.

        Raises:
            TeacherImportError: If the file is missing, empty or lacks a required column
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise TeacherImportError("File not found", str(file_path))

        try:
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False, skipinitialspace=True)
        except pd.errors.EmptyDataError:
            raise TeacherImportError("File is empty", str(file_path)) from None
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise TeacherImportError(f"Could not read CSV: {e}", str(file_path)) from e

        result = self.import_dataframe(df)
        result.file_path = str(file_path)
        return result

    def import_dataframe(self, df: pd.DataFrame) -> ImportResult:
        """Import teachers from an already loaded DataFrame."""
        df = df.rename(columns=normalize_header)

        missing = [c for c in IMPORT_REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise TeacherImportError(f"Missing required column(s): {', '.join(missing)}")
        if df.empty:
            raise TeacherImportError("File has no data rows")

        unknown = [c for c in df.columns if c not in IMPORT_REQUIRED_COLUMNS + IMPORT_OPTIONAL_COLUMNS]
        if unknown:
            logger.debug(f"Ignoring unknown columns: {', '.join(unknown)}")

        result = ImportResult(total_rows=len(df))
        seen_names = {t.name.strip().lower() for t in self.existing}

        # Row numbers are 1-based and count the header line
        for offset, (_, row) in enumerate(df.iterrows()):
            row_number = offset + 2
            try:
                teacher = self._parse_row(row)
            except ValueError as e:
                result.errors.append(RowError(row_number, str(e)))
                continue

            key = teacher.name.lower()
            if key in seen_names:
                result.errors.append(RowError(row_number, f"Duplicate teacher name '{teacher.name}'"))
                continue
            seen_names.add(key)
            result.teachers.append(teacher)

        logger.info(f"Imported {result.imported} of {result.total_rows} teachers")
        return result

    def _parse_row(self, row: pd.Series) -> Teacher:
        name = safe_str(row.get("name"))
        if not name:
            raise ValueError("Name is required")

        subjects = split_list(row.get("subjects"))
        if not subjects:
            raise ValueError(f"Teacher '{name}' has no subjects")

        raw_limit = safe_str(row.get("periodlimit"))
        valid, message = validate_period_limit(raw_limit)
        if not valid:
            raise ValueError(message)
        period_limit = safe_int(raw_limit, default=self.default_period_limit)

        assigned = parse_subject_periods(row.get("subjectperiods"))
        total = sum(assigned.values())
        if total > period_limit:
            raise ValueError(
                f"Subject periods total {total} exceeds period limit {period_limit}"
            )

        is_class_teacher = safe_str(row.get("isclassteacher")).lower() in TRUTHY_VALUES
        class_teacher_of = safe_str(row.get("classteacherof")) or None

        return Teacher(
            id=safe_str(row.get("id")) or str(uuid.uuid4()),
            name=name,
            subjects=subjects,
            main_subjects=split_list(row.get("mainsubjects")),
            extra_subjects=split_list(row.get("extrasubjects")),
            contact_info=safe_str(row.get("contactinfo")) or None,
            assigned_periods=assigned,
            period_limit=period_limit,
            is_class_teacher=is_class_teacher,
            class_teacher_of=class_teacher_of if is_class_teacher else None,
        )


def write_template(output_path: str | Path) -> Path:
    """Write an example import CSV with every supported column."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    columns = IMPORT_REQUIRED_COLUMNS + [
        c for c in IMPORT_OPTIONAL_COLUMNS if c in IMPORT_TEMPLATE_ROWS[0]
    ]
    pd.DataFrame(IMPORT_TEMPLATE_ROWS, columns=columns).to_csv(output_path, index=False)
    return output_path
