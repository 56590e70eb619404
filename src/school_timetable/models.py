"""Data models for teachers and class configurations."""

from dataclasses import dataclass, field
from typing import Any

from .constants import (
    DEFAULT_PERIOD_LIMIT,
    DEFAULT_SATURDAY_PERIODS,
    DEFAULT_WEEKDAY_PERIODS,
    SIXTH_DAY,
    get_active_days,
)


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, so camelCase and snake_case both load."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass
class Teacher:
    """A teacher on the school roster."""

    id: str
    name: str
    subjects: list[str] = field(default_factory=list)
    main_subjects: list[str] = field(default_factory=list)
    extra_subjects: list[str] = field(default_factory=list)
    contact_info: str | None = None
    assigned_periods: dict[str, int] = field(default_factory=dict)
    period_limit: int | None = None
    is_class_teacher: bool = False
    class_teacher_of: str | None = None

    @property
    def all_subjects(self) -> list[str]:
        """All subjects this teacher may teach, in first-seen order."""
        seen: dict[str, None] = {}
        for subject in self.subjects + self.main_subjects + self.extra_subjects:
            seen.setdefault(subject, None)
        return list(seen)

    def teaches(self, subject: str) -> bool:
        """Check if the teacher is qualified for a subject."""
        return subject in self.all_subjects

    def effective_limit(self, default: int = DEFAULT_PERIOD_LIMIT) -> int:
        """Weekly cap, falling back to the school default."""
        return self.period_limit if self.period_limit else default

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Teacher":
        """Create a Teacher from a dictionary."""
        limit = _pick(data, "periodLimit", "period_limit")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            subjects=list(_pick(data, "subjects", default=[])),
            main_subjects=list(_pick(data, "mainSubjects", "main_subjects", default=[])),
            extra_subjects=list(_pick(data, "extraSubjects", "extra_subjects", default=[])),
            contact_info=_pick(data, "contactInfo", "contact_info"),
            assigned_periods=dict(
                _pick(data, "assignedPeriods", "assigned_periods", default={})
            ),
            period_limit=int(limit) if limit is not None else None,
            is_class_teacher=bool(_pick(data, "isClassTeacher", "is_class_teacher", default=False)),
            class_teacher_of=_pick(data, "classTeacherOf", "class_teacher_of"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert teacher to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "subjects": self.subjects,
            "mainSubjects": self.main_subjects,
            "extraSubjects": self.extra_subjects,
            "contactInfo": self.contact_info,
            "assignedPeriods": self.assigned_periods,
            "periodLimit": self.period_limit,
            "isClassTeacher": self.is_class_teacher,
            "classTeacherOf": self.class_teacher_of,
        }


@dataclass
class SubjectAssignment:
    """A subject requested by a class, with its designated teacher."""

    subject: str
    periods_per_week: int
    teacher_id: str
    is_main_subject: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubjectAssignment":
        """Create a SubjectAssignment from a dictionary."""
        return cls(
            subject=data["subject"],
            periods_per_week=int(_pick(data, "periodsPerWeek", "periods_per_week", default=0)),
            teacher_id=str(_pick(data, "teacherId", "teacher_id", default="")),
            is_main_subject=bool(_pick(data, "isMainSubject", "is_main_subject", default=True)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert assignment to dictionary."""
        return {
            "subject": self.subject,
            "periodsPerWeek": self.periods_per_week,
            "teacherId": self.teacher_id,
            "isMainSubject": self.is_main_subject,
        }


@dataclass
class ClassConfig:
    """Weekly shape and subject requirements of one class."""

    grade: str
    division: str = ""
    subject_assignments: list[SubjectAssignment] = field(default_factory=list)
    class_teacher_id: str | None = None
    weekday_periods: int = DEFAULT_WEEKDAY_PERIODS
    saturday_periods: int = DEFAULT_SATURDAY_PERIODS
    include_saturday: bool = False

    @property
    def name(self) -> str:
        """Class identifier, e.g. '6A'."""
        return f"{self.grade}{self.division}"

    @property
    def days(self) -> list[str]:
        """Ordered active days for this class."""
        return get_active_days(self.include_saturday)

    def periods_for(self, day: str) -> int:
        """Number of periods on a given day."""
        if day == SIXTH_DAY:
            return self.saturday_periods if self.include_saturday else 0
        return self.weekday_periods

    @property
    def total_periods(self) -> int:
        """Total weekly slots of the class."""
        return sum(self.periods_for(day) for day in self.days)

    @property
    def requested_periods(self) -> int:
        """Sum of periods requested by all subject assignments."""
        return sum(a.periods_per_week for a in self.subject_assignments)

    def assignment_for(self, subject: str) -> SubjectAssignment | None:
        """Get the assignment for a subject, if any."""
        for assignment in self.subject_assignments:
            if assignment.subject == subject:
                return assignment
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClassConfig":
        """Create a ClassConfig from a dictionary.

        Raises:
            KeyError: If the class grade is missing.
        """
        grade = _pick(data, "class", "grade")
        if grade is None:
            raise KeyError("class")
        assignments = _pick(data, "subjectAssignments", "subject_assignments", default=[])
        return cls(
            grade=str(grade),
            division=str(_pick(data, "division", default="")),
            subject_assignments=[SubjectAssignment.from_dict(a) for a in assignments],
            class_teacher_id=_pick(data, "classTeacherId", "class_teacher_id"),
            weekday_periods=int(
                _pick(data, "weekdayPeriods", "weekday_periods", default=DEFAULT_WEEKDAY_PERIODS)
            ),
            saturday_periods=int(
                _pick(data, "saturdayPeriods", "saturday_periods", default=DEFAULT_SATURDAY_PERIODS)
            ),
            include_saturday=bool(_pick(data, "includeSaturday", "include_saturday", default=False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert class configuration to dictionary."""
        return {
            "class": self.grade,
            "division": self.division,
            "classTeacherId": self.class_teacher_id,
            "subjectAssignments": [a.to_dict() for a in self.subject_assignments],
            "weekdayPeriods": self.weekday_periods,
            "saturdayPeriods": self.saturday_periods,
            "includeSaturday": self.include_saturday,
        }
