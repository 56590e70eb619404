"""Hard placement rules.

Hard constraints are never violated by a placement the engine makes:
- HC-01: Class single allocation (one subject per class slot)
- HC-02: Teacher single allocation (one class per teacher slot)
- HC-03: Teacher weekly cap
- HC-04: One period per subject per class per day
- HC-05: Teacher fatigue (no run longer than the consecutive limit)
"""

from ...models import Teacher
from ..constants import DEFAULT_PERIOD_LIMIT, MAX_CONSECUTIVE_PERIODS
from ..load import TeacherLoadTracker
from ..models import RejectionReason
from ..state import ScheduleState


class HardConstraints:
    """Side-effect-free checker answering "can this subject go here?"."""

    def __init__(
        self,
        teachers: list[Teacher],
        default_limit: int = DEFAULT_PERIOD_LIMIT,
        max_consecutive: int = MAX_CONSECUTIVE_PERIODS,
    ) -> None:
        self.teachers = list(teachers)
        self.default_limit = default_limit
        self.max_consecutive = max_consecutive
        self._teacher_by_id = {t.id: t for t in self.teachers}

    def check(
        self,
        state: ScheduleState,
        class_name: str,
        day: str,
        period: int,
        subject: str,
        teacher_id: str,
    ) -> tuple[bool, RejectionReason | None, str]:
        """Check a placement and explain a rejection.

        Returns:
            Tuple of (allowed, reason, details). Reason and details are
            None / "" when the placement is allowed.
        """
        if teacher_id not in self._teacher_by_id or not state.has_teacher(teacher_id):
            return (False, RejectionReason.UNKNOWN_TEACHER, f"Teacher '{teacher_id}' is not on the roster")

        if not state.has_class_day(class_name, day) or not (
            0 <= period < state.periods_for(class_name, day)
        ):
            return (False, RejectionReason.UNKNOWN_SLOT, f"{class_name} has no period {period} on {day}")

        # HC-01
        if not state.is_class_slot_free(class_name, day, period):
            return (
                False,
                RejectionReason.CLASS_SLOT_OCCUPIED,
                f"{class_name} already has a subject on {day} period {period}",
            )

        # HC-02
        busy_with = state.teacher_slot(teacher_id, day, period)
        if busy_with is not None:
            return (
                False,
                RejectionReason.TEACHER_BUSY,
                f"Teacher '{teacher_id}' is teaching {busy_with} on {day} period {period}",
            )

        # HC-03
        tracker = TeacherLoadTracker(state, self.teachers, self.default_limit)
        if tracker.is_at_cap(teacher_id):
            return (
                False,
                RejectionReason.TEACHER_AT_CAP,
                f"Teacher '{teacher_id}' reached the weekly cap of {tracker.cap(teacher_id)}",
            )

        # HC-04
        if state.subject_count_on_day(class_name, subject, day) > 0:
            return (
                False,
                RejectionReason.SUBJECT_ALREADY_TODAY,
                f"{subject} is already taught to {class_name} on {day}",
            )

        # HC-05
        if self._violates_fatigue(state, teacher_id, day, period):
            return (
                False,
                RejectionReason.TEACHER_FATIGUE,
                f"Teacher '{teacher_id}' needs a break before {day} period {period}",
            )

        return (True, None, "")

    def can_place(
        self,
        state: ScheduleState,
        class_name: str,
        day: str,
        period: int,
        subject: str,
        teacher_id: str,
    ) -> bool:
        """Check a placement without the explanation."""
        allowed, _, _ = self.check(state, class_name, day, period, subject, teacher_id)
        return allowed

    def _violates_fatigue(
        self, state: ScheduleState, teacher_id: str, day: str, period: int
    ) -> bool:
        """Teacher would exceed the allowed run of back-to-back periods."""
        if state.consecutive_count(teacher_id, day) >= self.max_consecutive:
            if period > 0 and not state.is_teacher_free(teacher_id, day, period - 1):
                return True
        return state.teacher_run_length(teacher_id, day, period) > self.max_consecutive


def can_place(
    state: ScheduleState,
    class_name: str,
    day: str,
    period: int,
    subject: str,
    teacher_id: str,
    teachers: list[Teacher],
) -> bool:
    """Check whether `subject` taught by `teacher_id` fits at (class, day, period)."""
    return HardConstraints(teachers).can_place(
        state, class_name, day, period, subject, teacher_id
    )
