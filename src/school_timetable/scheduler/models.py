"""Data models for generated timetables."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class RejectionReason(str, Enum):
    """Reasons why a subject could not be placed in a slot."""

    CLASS_SLOT_OCCUPIED = "class_slot_occupied"
    TEACHER_BUSY = "teacher_busy"
    TEACHER_AT_CAP = "teacher_at_cap"
    SUBJECT_ALREADY_TODAY = "subject_already_today"
    TEACHER_FATIGUE = "teacher_fatigue"
    UNKNOWN_TEACHER = "unknown_teacher"
    UNKNOWN_SLOT = "unknown_slot"


class SkipReason(str, Enum):
    """Reasons why a subject assignment was left out of a run."""

    UNKNOWN_TEACHER = "unknown_teacher"


@dataclass(frozen=True)
class PeriodSlot:
    """One occupied slot of a class timetable."""

    subject: str
    teacher: str
    teacher_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert slot to dictionary."""
        return {
            "subject": self.subject,
            "teacher": self.teacher,
            "teacherId": self.teacher_id,
        }


@dataclass(frozen=True)
class TeacherSlot:
    """One occupied slot of a teacher timetable."""

    class_name: str
    subject: str

    def to_dict(self) -> dict[str, Any]:
        """Convert slot to dictionary."""
        return {"class": self.class_name, "subject": self.subject}


# class -> day -> period-indexed slots
ClassGrid = dict[str, dict[str, list[PeriodSlot | None]]]
# teacher id -> day -> period-indexed slots
TeacherGrid = dict[str, dict[str, list[TeacherSlot | None]]]


@dataclass
class UnderAssignment:
    """A subject that received fewer periods than requested."""

    class_name: str
    subject: str
    teacher_id: str
    requested: int
    placed: int

    @property
    def shortfall(self) -> int:
        return self.requested - self.placed

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "class": self.class_name,
            "subject": self.subject,
            "teacher_id": self.teacher_id,
            "requested": self.requested,
            "placed": self.placed,
            "shortfall": self.shortfall,
        }


@dataclass
class CapOverrun:
    """A teacher that finished the run above their weekly cap."""

    teacher_id: str
    teacher_name: str
    cap: int
    placed: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "teacher_id": self.teacher_id,
            "teacher_name": self.teacher_name,
            "cap": self.cap,
            "placed": self.placed,
            "overrun": self.placed - self.cap,
        }


@dataclass
class SkippedAssignment:
    """A subject assignment the engine did not schedule at all."""

    class_name: str
    subject: str
    teacher_id: str
    reason: SkipReason

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "class": self.class_name,
            "subject": self.subject,
            "teacher_id": self.teacher_id,
            "reason": self.reason.value,
        }


@dataclass
class Substitution:
    """A period taught by a substitute instead of the designated teacher."""

    class_name: str
    day: str
    period: int
    subject: str
    original_teacher_id: str
    substitute_teacher_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "class": self.class_name,
            "day": self.day,
            "period": self.period,
            "subject": self.subject,
            "original_teacher_id": self.original_teacher_id,
            "substitute_teacher_id": self.substitute_teacher_id,
        }


@dataclass
class FreePeriod:
    """An empty class slot left after all placement phases."""

    class_name: str
    day: str
    period: int
    adjacent_free: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "class": self.class_name,
            "day": self.day,
            "period": self.period,
            "adjacent_free": self.adjacent_free,
        }


@dataclass
class Diagnostics:
    """Soft failures accumulated during a run."""

    under_assignments: list[UnderAssignment] = field(default_factory=list)
    cap_overruns: list[CapOverrun] = field(default_factory=list)
    skipped_assignments: list[SkippedAssignment] = field(default_factory=list)
    substitutions: list[Substitution] = field(default_factory=list)
    free_periods: list[FreePeriod] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when every request was met without overruns or skips."""
        return not (self.under_assignments or self.cap_overruns or self.skipped_assignments)

    @property
    def total_shortfall(self) -> int:
        return sum(u.shortfall for u in self.under_assignments)

    def shortfall_for(self, class_name: str, subject: str) -> int:
        """Missing periods for one (class, subject)."""
        for item in self.under_assignments:
            if item.class_name == class_name and item.subject == subject:
                return item.shortfall
        return 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "under_assignments": [u.to_dict() for u in self.under_assignments],
            "cap_overruns": [c.to_dict() for c in self.cap_overruns],
            "skipped_assignments": [s.to_dict() for s in self.skipped_assignments],
            "substitutions": [s.to_dict() for s in self.substitutions],
            "free_periods": [f.to_dict() for f in self.free_periods],
            "total_shortfall": self.total_shortfall,
        }


@dataclass
class ScheduleStatistics:
    """Statistics about the generated timetable."""

    total_slots: int = 0
    filled_slots: int = 0
    by_day: dict[str, int] = field(default_factory=dict)
    teacher_load: dict[str, int] = field(default_factory=dict)
    solver_time_seconds: float = 0.0

    @property
    def fill_rate(self) -> float:
        return self.filled_slots / self.total_slots if self.total_slots > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_slots": self.total_slots,
            "filled_slots": self.filled_slots,
            "fill_rate": self.fill_rate,
            "by_day": self.by_day,
            "teacher_load": self.teacher_load,
            "solver_time_seconds": self.solver_time_seconds,
        }


@dataclass
class GenerationResult:
    """Result of one generation run."""

    timetables: ClassGrid = field(default_factory=dict)
    teacher_schedules: TeacherGrid = field(default_factory=dict)
    days: list[str] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    generator: str = "heuristic"
    seed: int | None = None
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    def timetables_dict(self) -> dict[str, Any]:
        """Class timetables in the exported wire shape."""
        return {
            class_name: {
                day: [slot.to_dict() if slot else None for slot in slots]
                for day, slots in grid.items()
            }
            for class_name, grid in self.timetables.items()
        }

    def teacher_schedules_dict(self) -> dict[str, Any]:
        """Teacher timetables in the exported wire shape."""
        return {
            teacher_id: {
                day: [slot.to_dict() if slot else None for slot in slots]
                for day, slots in grid.items()
            }
            for teacher_id, grid in self.teacher_schedules.items()
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "generator": self.generator,
            "seed": self.seed,
            "days": self.days,
            "timetables": self.timetables_dict(),
            "teacherSchedules": self.teacher_schedules_dict(),
            "diagnostics": self.diagnostics.to_dict(),
            "statistics": self.statistics.to_dict(),
        }
