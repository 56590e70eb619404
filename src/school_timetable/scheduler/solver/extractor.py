"""Solution extraction from the CP-SAT solver."""

from ortools.sat.python import cp_model

from ...models import Teacher
from ..state import ScheduleState
from .builder import VarKey


class SolutionExtractor:
    """Replays a solved model into a ScheduleState."""

    def __init__(
        self,
        solver: cp_model.CpSolver,
        variables: dict[VarKey, cp_model.IntVar],
        teacher_of: dict[VarKey, Teacher],
    ):
        self.solver = solver
        self.variables = variables
        self.teacher_of = teacher_of

    def extract(self, state: ScheduleState) -> int:
        """Place every chosen lesson into `state`.

        Lessons are replayed in day then period order so the state's
        consecutive counters match a left-to-right fill.

        Returns:
            Number of periods placed
        """
        day_order = {day: i for i, day in enumerate(state.days)}
        chosen = [key for key, var in self.variables.items() if self.solver.Value(var) == 1]
        chosen.sort(key=lambda k: (day_order[k[2]], k[3], k[0]))

        for key in chosen:
            class_name, subject, day, period = key
            teacher = self.teacher_of[key]
            state.place(class_name, day, period, subject, teacher.id, teacher.name)
        return len(chosen)
