"""Teacher weekly load queries over the schedule state."""

from ..models import Teacher
from .constants import DEFAULT_PERIOD_LIMIT
from .state import ScheduleState


class TeacherLoadTracker:
    """Derived view of per-teacher period counts against their weekly cap.

    Holds no counters of its own: every figure is read from the teacher grid,
    so it can never drift from what was actually placed.
    """

    def __init__(
        self,
        state: ScheduleState,
        teachers: list[Teacher],
        default_limit: int = DEFAULT_PERIOD_LIMIT,
    ) -> None:
        self.state = state
        self.default_limit = default_limit
        self._teachers = {t.id: t for t in teachers}

    def load(self, teacher_id: str) -> int:
        """Total placed periods for a teacher."""
        return self.state.teacher_total(teacher_id)

    def cap(self, teacher_id: str) -> int:
        """Weekly cap for a teacher (default cap for unknown ids)."""
        teacher = self._teachers.get(teacher_id)
        if teacher is None:
            return self.default_limit
        return teacher.effective_limit(self.default_limit)

    def remaining(self, teacher_id: str) -> int:
        return self.cap(teacher_id) - self.load(teacher_id)

    def is_at_cap(self, teacher_id: str) -> bool:
        return self.load(teacher_id) >= self.cap(teacher_id)

    def is_below_cap(self, teacher_id: str) -> bool:
        return self.load(teacher_id) < self.cap(teacher_id)

    def loads(self) -> dict[str, int]:
        """Placed periods for every roster teacher."""
        return {teacher_id: self.load(teacher_id) for teacher_id in self._teachers}

    def over_cap(self) -> list[tuple[Teacher, int]]:
        """Teachers whose load exceeds their cap, with that load."""
        result = []
        for teacher_id, teacher in self._teachers.items():
            load = self.load(teacher_id)
            if load > self.cap(teacher_id):
                result.append((teacher, load))
        return result
