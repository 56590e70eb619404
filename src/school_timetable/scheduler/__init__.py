"""Weekly timetable generation.

The heuristic engine fills each class grid in four phases (anchor, primary,
secondary, residual) against an explicit ScheduleState; an alternative
CP-SAT generator shares the same contract, projection and diagnostics.

Main classes:
- TimetableScheduler: Heuristic four-phase engine
- CPSATScheduler: Constraint-programming generator using OR-Tools
- ConfigLoader: Loads teachers, classes and settings from an input directory

Usage:
    from school_timetable.scheduler import TimetableScheduler

    scheduler = TimetableScheduler(seed=42)
    result = scheduler.generate(teachers, class_configs)
"""

from .algorithm import TimetableScheduler, create_scheduler, generate
from .config import ConfigLoader, SchedulerSettings
from .constants import (
    ACTIVITY_SUBJECTS,
    CORE_SUBJECTS,
    DEFAULT_SEED,
    DEFAULT_TIME_LIMIT,
    MAX_CONSECUTIVE_PERIODS,
    PRIMARY_WINDOW,
    SubjectKind,
)
from .constraints import HardConstraints, can_place
from .load import TeacherLoadTracker
from .models import (
    CapOverrun,
    Diagnostics,
    FreePeriod,
    GenerationResult,
    PeriodSlot,
    RejectionReason,
    ScheduleStatistics,
    SkippedAssignment,
    SkipReason,
    Substitution,
    TeacherSlot,
    UnderAssignment,
)
from .projection import project_teacher_schedules
from .scheduler import CPSATScheduler
from .state import ScheduleState

__all__ = [
    # Generators
    "TimetableScheduler",
    "CPSATScheduler",
    "create_scheduler",
    "generate",
    # Configuration
    "ConfigLoader",
    "SchedulerSettings",
    # Engine parts
    "ScheduleState",
    "HardConstraints",
    "can_place",
    "TeacherLoadTracker",
    "project_teacher_schedules",
    # Models
    "CapOverrun",
    "Diagnostics",
    "FreePeriod",
    "GenerationResult",
    "PeriodSlot",
    "RejectionReason",
    "ScheduleStatistics",
    "SkippedAssignment",
    "SkipReason",
    "Substitution",
    "TeacherSlot",
    "UnderAssignment",
    # Constants
    "ACTIVITY_SUBJECTS",
    "CORE_SUBJECTS",
    "DEFAULT_SEED",
    "DEFAULT_TIME_LIMIT",
    "MAX_CONSECUTIVE_PERIODS",
    "PRIMARY_WINDOW",
    "SubjectKind",
]
