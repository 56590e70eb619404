"""Diagnostics and statistics for a finished generation run."""

import logging
from collections import defaultdict

from ..models import ClassConfig, Teacher
from .constraints.soft import would_leave_adjacent_free
from .load import TeacherLoadTracker
from .models import (
    CapOverrun,
    Diagnostics,
    FreePeriod,
    GenerationResult,
    ScheduleStatistics,
    SkippedAssignment,
    Substitution,
    UnderAssignment,
)
from .projection import project_teacher_schedules
from .state import ScheduleState, teacher_day_lengths

logger = logging.getLogger(__name__)


def collect_under_assignments(
    state: ScheduleState,
    class_configs: list[ClassConfig],
    skipped: list[SkippedAssignment],
) -> list[UnderAssignment]:
    """Subjects placed fewer times than requested, substitutes included."""
    skipped_keys = {(s.class_name, s.subject) for s in skipped}
    result = []
    for config in class_configs:
        for assignment in config.subject_assignments:
            if (config.name, assignment.subject) in skipped_keys:
                continue
            placed = state.placed_periods(config.name, assignment.subject)
            if placed < assignment.periods_per_week:
                result.append(
                    UnderAssignment(
                        class_name=config.name,
                        subject=assignment.subject,
                        teacher_id=assignment.teacher_id,
                        requested=assignment.periods_per_week,
                        placed=placed,
                    )
                )
    return result


def collect_cap_overruns(tracker: TeacherLoadTracker) -> list[CapOverrun]:
    """Teachers who ended the run above their weekly cap."""
    return [
        CapOverrun(
            teacher_id=teacher.id,
            teacher_name=teacher.name,
            cap=tracker.cap(teacher.id),
            placed=load,
        )
        for teacher, load in tracker.over_cap()
    ]


def collect_free_periods(state: ScheduleState) -> list[FreePeriod]:
    """Every empty class slot, flagging those next to another empty slot."""
    free = []
    for class_name in state.class_grid:
        for day in state.class_days(class_name):
            for period in range(state.periods_for(class_name, day)):
                if state.is_class_slot_free(class_name, day, period):
                    free.append(
                        FreePeriod(
                            class_name=class_name,
                            day=day,
                            period=period,
                            adjacent_free=would_leave_adjacent_free(
                                state, class_name, day, period
                            ),
                        )
                    )
    return free


def compute_statistics(
    state: ScheduleState, tracker: TeacherLoadTracker
) -> ScheduleStatistics:
    """Fill counts per day and per teacher."""
    by_day: dict[str, int] = defaultdict(int)
    total = 0
    filled = 0
    for grid in state.class_grid.values():
        for day, slots in grid.items():
            total += len(slots)
            occupied = sum(1 for slot in slots if slot is not None)
            filled += occupied
            by_day[day] += occupied

    return ScheduleStatistics(
        total_slots=total,
        filled_slots=filled,
        by_day={day: by_day[day] for day in state.days},
        teacher_load=tracker.loads(),
    )


def assemble_result(
    state: ScheduleState,
    teachers: list[Teacher],
    class_configs: list[ClassConfig],
    tracker: TeacherLoadTracker,
    skipped: list[SkippedAssignment] | None = None,
    substitutions: list[Substitution] | None = None,
    free_periods: list[FreePeriod] | None = None,
    generator: str = "heuristic",
    seed: int | None = None,
) -> GenerationResult:
    """Project the finished state and attach diagnostics."""
    skipped = skipped or []
    diagnostics = Diagnostics(
        under_assignments=collect_under_assignments(state, class_configs, skipped),
        cap_overruns=collect_cap_overruns(tracker),
        skipped_assignments=list(skipped),
        substitutions=list(substitutions or []),
        free_periods=(
            free_periods if free_periods is not None else collect_free_periods(state)
        ),
    )

    for item in diagnostics.under_assignments:
        logger.warning(
            f"{item.class_name} - {item.subject}: placed {item.placed}/{item.requested} periods"
        )
    for item in diagnostics.cap_overruns:
        logger.warning(
            f"Teacher {item.teacher_name} is over cap: {item.placed}/{item.cap} periods"
        )

    teacher_schedules = project_teacher_schedules(
        state.class_grid,
        [t.id for t in teachers],
        state.days,
        teacher_day_lengths(state.days, class_configs),
    )

    return GenerationResult(
        timetables=state.class_grid,
        teacher_schedules=teacher_schedules,
        days=list(state.days),
        diagnostics=diagnostics,
        statistics=compute_statistics(state, tracker),
        generator=generator,
        seed=seed,
    )
