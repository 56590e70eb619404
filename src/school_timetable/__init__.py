"""School Timetable - weekly timetable generator for schools.

Builds one timetable per class from a teacher roster and per-class subject
requirements, then projects each teacher's weekly schedule from the class
timetables.

Example usage:
    from school_timetable import ClassConfig, Teacher, generate

    teachers = [Teacher(id="t1", name="A. Shah", subjects=["Maths"])]
    classes = [ClassConfig.from_dict({"class": "6", "division": "A", ...})]
    result = generate(teachers, classes, seed=42)

    for item in result.diagnostics.under_assignments:
        print(f"{item.class_name} {item.subject}: short by {item.shortfall}")

    # Export to JSON
    from school_timetable.exporters import JSONExporter
    exporter = JSONExporter()
    exporter.export(result, "timetables.json")
"""

from .exceptions import (
    HistoryNotFoundError,
    InvalidConfigError,
    SolverError,
    TeacherImportError,
    TimetableError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .history import HistoryEntry, TimetableHistory
from .importers import ImportResult, TeacherCSVImporter, write_template
from .models import ClassConfig, SubjectAssignment, Teacher
from .scheduler import (
    CPSATScheduler,
    GenerationResult,
    SchedulerSettings,
    TimetableScheduler,
    create_scheduler,
    generate,
)

__version__ = "0.1.0"

__all__ = [
    # Generation
    "generate",
    "create_scheduler",
    "TimetableScheduler",
    "CPSATScheduler",
    "SchedulerSettings",
    "GenerationResult",
    # Models
    "Teacher",
    "SubjectAssignment",
    "ClassConfig",
    # Import and history
    "TeacherCSVImporter",
    "ImportResult",
    "write_template",
    "TimetableHistory",
    "HistoryEntry",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "TimetableError",
    "InvalidConfigError",
    "TeacherImportError",
    "HistoryNotFoundError",
    "SolverError",
]
