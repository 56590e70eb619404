"""CP-SAT model construction."""

from ortools.sat.python import cp_model

from ...models import ClassConfig, SubjectAssignment, Teacher
from ..config.settings import SchedulerSettings
from ..constants import SOLVER_WEIGHTS
from ..constraints.soft import primary_periods, secondary_periods
from ..state import ScheduleState

# (class name, subject, day, period)
VarKey = tuple[str, str, str, int]


class ModelBuilder:
    """Builds one boolean per (class, subject, day, period) candidate.

    Hard rules mirror the heuristic engine: one subject per class slot, one
    class per teacher slot, one period per subject per class per day, the
    weekly request as an upper bound, the teacher cap and the consecutive
    period limit. The objective rewards placed periods first, then the class
    teacher opening period and subjects in their preferred part of the day.
    """

    def __init__(
        self,
        state: ScheduleState,
        assignments: dict[str, list[tuple[SubjectAssignment, Teacher]]],
        class_teachers: dict[str, Teacher],
        settings: SchedulerSettings,
    ):
        self.state = state
        self.assignments = assignments
        self.class_teachers = class_teachers
        self.settings = settings

        self.model = cp_model.CpModel()
        self.x: dict[VarKey, cp_model.IntVar] = {}
        self.teacher_of: dict[VarKey, Teacher] = {}

    def build(self) -> cp_model.CpModel:
        """Build the complete CP-SAT model."""
        self._create_variables()
        self._add_class_slot_constraints()
        self._add_subject_constraints()
        self._add_teacher_constraints()
        self._add_objective()
        return self.model

    def _create_variables(self) -> None:
        for class_name, items in self.assignments.items():
            for assignment, teacher in items:
                for day in self.state.class_days(class_name):
                    for period in range(self.state.periods_for(class_name, day)):
                        key = (class_name, assignment.subject, day, period)
                        self.x[key] = self.model.NewBoolVar(
                            f"x_{class_name}_{assignment.subject}_{day}_{period}"
                        )
                        self.teacher_of[key] = teacher

    def _add_class_slot_constraints(self) -> None:
        by_slot: dict[tuple[str, str, int], list[cp_model.IntVar]] = {}
        for (class_name, _, day, period), var in self.x.items():
            by_slot.setdefault((class_name, day, period), []).append(var)
        for variables in by_slot.values():
            self.model.AddAtMostOne(variables)

    def _add_subject_constraints(self) -> None:
        per_day: dict[tuple[str, str, str], list[cp_model.IntVar]] = {}
        per_week: dict[tuple[str, str], list[cp_model.IntVar]] = {}
        for (class_name, subject, day, _), var in self.x.items():
            per_day.setdefault((class_name, subject, day), []).append(var)
            per_week.setdefault((class_name, subject), []).append(var)

        for variables in per_day.values():
            self.model.AddAtMostOne(variables)

        requested = {
            (class_name, a.subject): a.periods_per_week
            for class_name, items in self.assignments.items()
            for a, _ in items
        }
        for key, variables in per_week.items():
            self.model.Add(sum(variables) <= requested[key])

    def _add_teacher_constraints(self) -> None:
        busy: dict[tuple[str, str, int], list[cp_model.IntVar]] = {}
        weekly: dict[str, list[cp_model.IntVar]] = {}
        caps: dict[str, int] = {}
        for key, var in self.x.items():
            _, _, day, period = key
            teacher = self.teacher_of[key]
            busy.setdefault((teacher.id, day, period), []).append(var)
            weekly.setdefault(teacher.id, []).append(var)
            caps[teacher.id] = teacher.effective_limit(self.settings.default_period_limit)

        teaching: dict[tuple[str, str, int], cp_model.IntVar] = {}
        for (teacher_id, day, period), variables in busy.items():
            self.model.AddAtMostOne(variables)
            flag = self.model.NewBoolVar(f"busy_{teacher_id}_{day}_{period}")
            self.model.Add(flag == sum(variables))
            teaching[(teacher_id, day, period)] = flag

        for teacher_id, variables in weekly.items():
            self.model.Add(sum(variables) <= caps[teacher_id])

        # Any window of limit+1 consecutive periods holds at most `limit` lessons
        limit = self.settings.max_consecutive_periods
        for teacher_id in weekly:
            for day in self.state.days:
                length = self.state.teacher_day_lengths.get(day, 0)
                for start in range(0, length - limit):
                    window = [
                        teaching[(teacher_id, day, p)]
                        for p in range(start, start + limit + 1)
                        if (teacher_id, day, p) in teaching
                    ]
                    if len(window) > limit:
                        self.model.Add(sum(window) <= limit)

    def _add_objective(self) -> None:
        terms = []
        for key, var in self.x.items():
            class_name, subject, day, period = key
            weight = SOLVER_WEIGHTS["placed"]
            periods = self.state.periods_for(class_name, day)
            teacher = self.teacher_of[key]
            is_primary = self._is_primary(class_name, subject)

            anchor = self.class_teachers.get(class_name)
            if period == 0 and anchor is not None and teacher.id == anchor.id:
                weight += SOLVER_WEIGHTS["anchor"]
            if is_primary and period in primary_periods(periods, self.settings.primary_window)[0]:
                weight += SOLVER_WEIGHTS["primary_early"]
            if not is_primary and period in secondary_periods(periods):
                weight += SOLVER_WEIGHTS["secondary_late"]
            terms.append(weight * var)
        self.model.Maximize(sum(terms))

    def _is_primary(self, class_name: str, subject: str) -> bool:
        for assignment, _ in self.assignments[class_name]:
            if assignment.subject == subject:
                return assignment.is_main_subject
        return False

    def get_variables(self) -> dict[VarKey, cp_model.IntVar]:
        return self.x
