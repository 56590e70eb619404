"""Alternative generator using the OR-Tools CP-SAT solver."""

import logging
import time

from ortools.sat.python import cp_model

from ..exceptions import SolverError
from ..models import ClassConfig, Teacher
from ..validators import ensure_valid_input, resolve_class_teacher
from .algorithm import split_assignments
from .config.settings import SchedulerSettings
from .diagnostics import assemble_result
from .load import TeacherLoadTracker
from .models import GenerationResult
from .solver import ModelBuilder, SolutionExtractor
from .state import ScheduleState

logger = logging.getLogger(__name__)


class CPSATScheduler:
    """
    Timetable generator using the OR-Tools CP-SAT solver.

    Shares the generate() contract of the heuristic engine. The solved
    model is replayed into a ScheduleState, so teacher projection and
    diagnostics come from the same code paths.
    """

    name = "cpsat"

    def __init__(
        self,
        settings: SchedulerSettings | None = None,
        seed: int | None = None,
        time_limit: int | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            settings: Generation settings.
            seed: Solver random seed (defaults to settings.seed).
            time_limit: Maximum solving time in seconds (defaults to settings.time_limit).
        """
        self.settings = settings or SchedulerSettings()
        self.seed = seed if seed is not None else self.settings.seed
        self.time_limit = time_limit if time_limit is not None else self.settings.time_limit

    def generate(
        self, teachers: list[Teacher], class_configs: list[ClassConfig]
    ) -> GenerationResult:
        """
        Generate timetables with the CP-SAT solver.

        Raises:
            InvalidConfigError: If the input is structurally malformed.
            SolverError: If the solver finds no solution within the time limit.
        """
        ensure_valid_input(teachers, class_configs)
        teachers_by_id = {t.id: t for t in teachers}

        assignments = {}
        skipped = []
        class_teachers = {}
        for config in class_configs:
            schedulable, missing = split_assignments(config, teachers_by_id)
            assignments[config.name] = schedulable
            skipped.extend(missing)
            anchor = resolve_class_teacher(config, teachers_by_id)
            if anchor is not None:
                class_teachers[config.name] = anchor

        state = ScheduleState.create(teachers, class_configs)
        builder = ModelBuilder(state, assignments, class_teachers, self.settings)
        model = builder.build()
        logger.info(
            f"Built CP-SAT model with {len(builder.get_variables())} variables, "
            f"{self.time_limit}s time limit"
        )

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.time_limit
        solver.parameters.log_search_progress = False
        if self.seed is not None:
            solver.parameters.random_seed = self.seed

        logger.info("Starting CP-SAT solver...")
        started = time.perf_counter()
        status = solver.Solve(model)
        elapsed = time.perf_counter() - started

        if status == cp_model.OPTIMAL:
            logger.info("Found optimal solution")
        elif status == cp_model.FEASIBLE:
            logger.info("Found feasible solution (may not be optimal)")
        elif status == cp_model.INFEASIBLE:
            logger.warning("Problem is infeasible")
            raise SolverError(solver.StatusName(status), "No feasible timetable exists")
        else:
            logger.warning(f"Solver returned status: {solver.StatusName(status)}")
            raise SolverError(
                solver.StatusName(status),
                f"No solution within the time limit ({self.time_limit}s)",
            )

        extractor = SolutionExtractor(solver, builder.get_variables(), builder.teacher_of)
        placed = extractor.extract(state)
        logger.info(f"Placed {placed} periods in {elapsed:.2f}s")

        tracker = TeacherLoadTracker(state, teachers, self.settings.default_period_limit)
        result = assemble_result(
            state,
            teachers,
            class_configs,
            tracker,
            skipped=skipped,
            generator=self.name,
            seed=self.seed,
        )
        result.statistics.solver_time_seconds = elapsed
        return result
