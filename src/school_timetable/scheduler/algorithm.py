"""Greedy placement engine for weekly class timetables."""

import logging
import random
from dataclasses import dataclass

from ..models import ClassConfig, SubjectAssignment, Teacher
from ..validators import ensure_valid_input, resolve_class_teacher
from .config.settings import SchedulerSettings
from .constants import CORE_SUBJECTS, SubjectKind
from .constraints import (
    HardConstraints,
    is_adjacent_to_other_activity,
    order_days,
    order_periods,
    primary_periods,
    secondary_periods,
)
from .diagnostics import assemble_result, collect_free_periods
from .load import TeacherLoadTracker
from .models import FreePeriod, GenerationResult, SkippedAssignment, SkipReason, Substitution
from .state import ScheduleState
from .substitution import find_substitutes

logger = logging.getLogger(__name__)


@dataclass
class QueueEntry:
    """A (class, subject) still waiting for periods."""

    config: ClassConfig
    assignment: SubjectAssignment
    teacher: Teacher
    remaining: int

    @property
    def class_name(self) -> str:
        return self.config.name

    @property
    def subject(self) -> str:
        return self.assignment.subject


def split_assignments(
    config: ClassConfig, teachers_by_id: dict[str, Teacher]
) -> tuple[list[tuple[SubjectAssignment, Teacher]], list[SkippedAssignment]]:
    """Separate schedulable assignments from those naming an unknown teacher.

    Assignments asking for zero periods are dropped silently.
    """
    schedulable = []
    skipped = []
    for assignment in config.subject_assignments:
        if assignment.periods_per_week <= 0:
            continue
        teacher = teachers_by_id.get(assignment.teacher_id)
        if teacher is None:
            logger.warning(
                f"{config.name} - {assignment.subject}: unknown teacher "
                f"'{assignment.teacher_id}', skipping"
            )
            skipped.append(
                SkippedAssignment(
                    class_name=config.name,
                    subject=assignment.subject,
                    teacher_id=assignment.teacher_id,
                    reason=SkipReason.UNKNOWN_TEACHER,
                )
            )
            continue
        schedulable.append((assignment, teacher))
    return schedulable, skipped


class TimetableScheduler:
    """Heuristic generator that fills every class grid in four phases.

    Phases:
    A. Anchor: the class teacher takes period 0 on each day
    B. Primary: main subjects go early-to-mid day, largest demand first
    C. Secondary: remaining subjects go in the back half of the day
    D. Residual: leftover empty slots are recorded as free periods

    Every placement goes through the hard constraint checker, so a run never
    produces an invalid grid. Shortfalls are reported, not raised.
    """

    name = "heuristic"

    def __init__(self, settings: SchedulerSettings | None = None, seed: int | None = None) -> None:
        self.settings = settings or SchedulerSettings()
        self.seed = seed if seed is not None else self.settings.seed

    def generate(
        self, teachers: list[Teacher], class_configs: list[ClassConfig]
    ) -> GenerationResult:
        """Generate class timetables and the projected teacher schedules.

        Args:
            teachers: Teacher roster
            class_configs: Per-class configuration

        Returns:
            GenerationResult with grids, days, diagnostics and statistics

        Raises:
            InvalidConfigError: If the input is structurally malformed
        """
        ensure_valid_input(teachers, class_configs)
        run = _GenerationRun(teachers, class_configs, self.settings, random.Random(self.seed))
        result = run.execute()
        result.seed = self.seed
        return result


class _GenerationRun:
    """Mutable state of one generate() call; never shared between calls."""

    def __init__(
        self,
        teachers: list[Teacher],
        class_configs: list[ClassConfig],
        settings: SchedulerSettings,
        rng: random.Random,
    ) -> None:
        self.teachers = teachers
        self.class_configs = class_configs
        self.settings = settings
        self.rng = rng
        self.teachers_by_id = {t.id: t for t in teachers}
        # Listed activity subjects plus every secondary subject of the class
        self.activity_subjects = {
            config.name: set(settings.activity_subjects)
            | {a.subject for a in config.subject_assignments if not a.is_main_subject}
            for config in class_configs
        }

        self.state = ScheduleState.create(teachers, class_configs)
        self.checker = HardConstraints(
            teachers,
            default_limit=settings.default_period_limit,
            max_consecutive=settings.max_consecutive_periods,
        )
        self.tracker = TeacherLoadTracker(self.state, teachers, settings.default_period_limit)

        self.skipped: list[SkippedAssignment] = []
        self.substitutions: list[Substitution] = []
        self.free_periods: list[FreePeriod] = []
        self.schedulable = {c.name: self._schedulable_assignments(c) for c in class_configs}

    def execute(self) -> GenerationResult:
        logger.info(
            f"Generating timetables for {len(self.class_configs)} classes "
            f"with {len(self.teachers)} teachers over {len(self.state.days)} days"
        )

        anchored = self._place_anchors()
        logger.info(f"Phase A: placed {anchored} anchor periods")

        primary = self._fill(SubjectKind.PRIMARY)
        logger.info(f"Phase B: placed {primary} primary periods")

        secondary = self._fill(SubjectKind.SECONDARY)
        logger.info(f"Phase C: placed {secondary} secondary periods")

        self._collect_residual()
        logger.info(f"Phase D: {len(self.free_periods)} free periods left")

        return assemble_result(
            self.state,
            self.teachers,
            self.class_configs,
            self.tracker,
            skipped=self.skipped,
            substitutions=self.substitutions,
            free_periods=self.free_periods,
            generator=TimetableScheduler.name,
        )

    def _schedulable_assignments(
        self, config: ClassConfig
    ) -> list[tuple[SubjectAssignment, Teacher]]:
        schedulable, skipped = split_assignments(config, self.teachers_by_id)
        self.skipped.extend(skipped)
        return schedulable

    def _remaining(self, config: ClassConfig, assignment: SubjectAssignment) -> int:
        return assignment.periods_per_week - self.state.placed_periods(config.name, assignment.subject)

    # Phase A

    def _place_anchors(self) -> int:
        placed = 0
        for config in self.class_configs:
            placed += self._place_class_anchor(config)
        return placed

    def _place_class_anchor(self, config: ClassConfig) -> int:
        anchor = resolve_class_teacher(config, self.teachers_by_id)
        if anchor is None:
            logger.debug(f"{config.name}: no class teacher, skipping anchor")
            return 0

        own = [a for a, t in self.schedulable[config.name] if t.id == anchor.id]
        subjects = (
            [a for a in own if a.is_main_subject]
            or [a for a in own if a.subject in CORE_SUBJECTS]
            or own
        )
        if not subjects:
            logger.warning(
                f"{config.name}: class teacher {anchor.name} has no subject in this class"
            )
            return 0

        placed = 0
        for day_index, day in enumerate(self.state.class_days(config.name)):
            open_subjects = [a for a in subjects if self._remaining(config, a) > 0]
            if not open_subjects:
                break
            assignment = open_subjects[day_index % len(open_subjects)]
            allowed, reason, details = self.checker.check(
                self.state, config.name, day, 0, assignment.subject, anchor.id
            )
            if not allowed:
                logger.debug(f"{config.name} anchor on {day} rejected ({reason.value}): {details}")
                continue
            self.state.place(config.name, day, 0, assignment.subject, anchor.id, anchor.name)
            placed += 1
        return placed

    # Phases B and C

    def _fill(self, kind: SubjectKind) -> int:
        """Work through the classes in input order, one queue per class."""
        placed = 0
        for config in self.class_configs:
            for entry in self._build_queue(config, kind):
                count = self._place_entry(entry, kind)
                placed += count
                if count < entry.remaining:
                    logger.debug(
                        f"{entry.class_name} - {entry.subject}: placed "
                        f"{count}/{entry.remaining} {kind.value} periods"
                    )
        return placed

    def _build_queue(self, config: ClassConfig, kind: SubjectKind) -> list[QueueEntry]:
        """Entries of one kind for a class, most remaining periods first, ties shuffled."""
        queue = []
        for assignment, teacher in self.schedulable[config.name]:
            if assignment.is_main_subject != (kind == SubjectKind.PRIMARY):
                continue
            remaining = self._remaining(config, assignment)
            if remaining > 0:
                queue.append(QueueEntry(config, assignment, teacher, remaining))
        self.rng.shuffle(queue)
        queue.sort(key=lambda e: -e.remaining)
        return queue

    def _place_entry(self, entry: QueueEntry, kind: SubjectKind) -> int:
        placed = 0
        days = order_days(self.state, entry.class_name, entry.subject, entry.remaining, self.rng)
        for day in days:
            if placed >= entry.remaining:
                break
            if self._place_on_day(entry, day, kind):
                placed += 1
        return placed

    def _place_on_day(self, entry: QueueEntry, day: str, kind: SubjectKind) -> bool:
        periods = self.state.periods_for(entry.class_name, day)
        if kind == SubjectKind.PRIMARY:
            preferred, fallback = primary_periods(periods, self.settings.primary_window)
            passes = [preferred, fallback]
        else:
            back_half = secondary_periods(periods)
            passes = [back_half]

        for candidates in passes:
            ordered = order_periods(self.state, entry.class_name, entry.subject, candidates)
            if kind == SubjectKind.SECONDARY and self.settings.avoid_adjacent_activities:
                apart = [
                    p
                    for p in ordered
                    if not is_adjacent_to_other_activity(
                        self.state,
                        entry.class_name,
                        day,
                        p,
                        entry.subject,
                        self.activity_subjects[entry.class_name],
                    )
                ]
                ordered = apart + [p for p in ordered if p not in apart]
            for period in ordered:
                if self._try_place(entry, day, period):
                    return True
        return False

    def _try_place(self, entry: QueueEntry, day: str, period: int) -> bool:
        """Place with the designated teacher, or a substitute if they are at cap."""
        designated = entry.teacher
        if not self.tracker.is_at_cap(designated.id):
            if not self.checker.can_place(
                self.state, entry.class_name, day, period, entry.subject, designated.id
            ):
                return False
            self.state.place(
                entry.class_name, day, period, entry.subject, designated.id, designated.name
            )
            return True

        substitutes = find_substitutes(
            self.state,
            self.teachers,
            self.checker,
            self.tracker,
            entry.class_name,
            day,
            period,
            entry.subject,
            exclude={designated.id},
        )
        if not substitutes:
            return False

        substitute = substitutes[0]
        self.state.place(entry.class_name, day, period, entry.subject, substitute.id, substitute.name)
        self.substitutions.append(
            Substitution(
                class_name=entry.class_name,
                day=day,
                period=period,
                subject=entry.subject,
                original_teacher_id=designated.id,
                substitute_teacher_id=substitute.id,
            )
        )
        logger.debug(
            f"{entry.class_name} - {entry.subject} on {day} period {period}: "
            f"{substitute.name} substitutes for {designated.name}"
        )
        return True

    # Phase D

    def _collect_residual(self) -> None:
        self.free_periods = collect_free_periods(self.state)
        adjacent = sum(1 for f in self.free_periods if f.adjacent_free)
        if adjacent:
            logger.debug(f"{adjacent} free periods sit next to another free period")


def generate(
    teachers: list[Teacher],
    class_configs: list[ClassConfig],
    seed: int | None = None,
    settings: SchedulerSettings | None = None,
) -> GenerationResult:
    """Generate timetables with the heuristic engine."""
    return TimetableScheduler(settings=settings, seed=seed).generate(teachers, class_configs)


def create_scheduler(
    strategy: str | None = None,
    settings: SchedulerSettings | None = None,
    seed: int | None = None,
    time_limit: int | None = None,
):
    """Factory for a generator by strategy name.

    Raises:
        ValueError: If strategy is not supported
    """
    settings = settings or SchedulerSettings()
    strategy = strategy or settings.strategy
    if strategy == "heuristic":
        return TimetableScheduler(settings=settings, seed=seed)
    if strategy == "cpsat":
        from .scheduler import CPSATScheduler

        return CPSATScheduler(
            settings=settings,
            seed=seed,
            time_limit=time_limit if time_limit is not None else settings.time_limit,
        )
    raise ValueError(f"Unknown strategy: {strategy}. Supported: heuristic, cpsat")
