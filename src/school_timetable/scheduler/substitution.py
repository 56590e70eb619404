"""Fallback teacher search."""

from ..models import Teacher
from .constraints.hard import HardConstraints
from .load import TeacherLoadTracker
from .state import ScheduleState


def find_substitutes(
    state: ScheduleState,
    teachers: list[Teacher],
    checker: HardConstraints,
    tracker: TeacherLoadTracker,
    class_name: str,
    day: str,
    period: int,
    subject: str,
    exclude: set[str] | None = None,
) -> list[Teacher]:
    """Find teachers who could take a slot instead of the designated one.

    A candidate teaches the subject, is strictly below their own cap and
    passes every hard constraint for the slot. Nothing is mutated.

    Args:
        state: Current schedule state
        teachers: Full roster
        checker: Hard constraint checker for the roster
        tracker: Load view over the same state
        class_name: Class needing the period
        day: Day name
        period: Period index
        subject: Subject to be taught
        exclude: Teacher ids that must not be proposed

    Returns:
        Qualified teachers, least loaded first (then by name).
    """
    excluded = exclude or set()
    candidates = [
        teacher
        for teacher in teachers
        if teacher.id not in excluded
        and teacher.teaches(subject)
        and tracker.is_below_cap(teacher.id)
        and checker.can_place(state, class_name, day, period, subject, teacher.id)
    ]
    return sorted(candidates, key=lambda t: (tracker.load(t.id), t.name, t.id))
