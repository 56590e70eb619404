"""Mutable grids for one timetable generation run."""

from collections import defaultdict

from ..models import ClassConfig, Teacher
from .constants import SIXTH_DAY, WEEKDAYS, get_default_periods
from .models import ClassGrid, PeriodSlot


class ScheduleState:
    """Holds the class and teacher grids of a single generation run.

    The state is created empty, filled only through `place`, and never shared
    between runs:
    - class_grid: class -> day -> period-indexed (subject, teacher) slots
    - teacher_grid: teacher id -> day -> period-indexed class names
    - subject_last_placed: (class, subject, day) -> last period used
    - subject_day_count: (class, subject, day) -> placements that day
    - teacher_consecutive: (teacher id, day) -> length of the run in progress
    """

    def __init__(
        self,
        days: list[str],
        class_periods: dict[str, dict[str, int]],
        teacher_ids: list[str],
        teacher_day_lengths: dict[str, int],
    ) -> None:
        self.days = list(days)
        self.teacher_day_lengths = dict(teacher_day_lengths)
        self.class_grid: ClassGrid = {
            class_name: {day: [None] * count for day, count in periods.items()}
            for class_name, periods in class_periods.items()
        }
        self.teacher_grid: dict[str, dict[str, list[str | None]]] = {
            teacher_id: {day: [None] * teacher_day_lengths[day] for day in self.days}
            for teacher_id in teacher_ids
        }
        self.subject_last_placed: dict[tuple[str, str, str], int] = {}
        self.subject_day_count: dict[tuple[str, str, str], int] = defaultdict(int)
        self.teacher_consecutive: dict[tuple[str, str], int] = defaultdict(int)

    @classmethod
    def create(
        cls, teachers: list[Teacher], class_configs: list[ClassConfig]
    ) -> "ScheduleState":
        """Build an empty state sized for the given roster and classes."""
        days = list(WEEKDAYS)
        if any(config.include_saturday for config in class_configs):
            days.append(SIXTH_DAY)

        class_periods = {
            config.name: {day: config.periods_for(day) for day in config.days}
            for config in class_configs
        }
        return cls(
            days=days,
            class_periods=class_periods,
            teacher_ids=[t.id for t in teachers],
            teacher_day_lengths=teacher_day_lengths(days, class_configs),
        )

    # -- queries ---------------------------------------------------------

    def has_class_day(self, class_name: str, day: str) -> bool:
        return day in self.class_grid.get(class_name, {})

    def has_teacher(self, teacher_id: str) -> bool:
        return teacher_id in self.teacher_grid

    def periods_for(self, class_name: str, day: str) -> int:
        """Number of periods the class has on a day (0 if inactive)."""
        return len(self.class_grid.get(class_name, {}).get(day, []))

    def class_days(self, class_name: str) -> list[str]:
        """Active days of a class in calendar order."""
        return [day for day in self.days if self.has_class_day(class_name, day)]

    def class_slot(self, class_name: str, day: str, period: int) -> PeriodSlot | None:
        return self.class_grid[class_name][day][period]

    def teacher_slot(self, teacher_id: str, day: str, period: int) -> str | None:
        """Class occupying a teacher at (day, period), or None."""
        slots = self.teacher_grid[teacher_id][day]
        if period < 0 or period >= len(slots):
            return None
        return slots[period]

    def is_class_slot_free(self, class_name: str, day: str, period: int) -> bool:
        return self.class_grid[class_name][day][period] is None

    def is_teacher_free(self, teacher_id: str, day: str, period: int) -> bool:
        return self.teacher_slot(teacher_id, day, period) is None

    def subject_count_on_day(self, class_name: str, subject: str, day: str) -> int:
        return self.subject_day_count.get((class_name, subject, day), 0)

    def last_placed_period(self, class_name: str, subject: str, day: str) -> int | None:
        return self.subject_last_placed.get((class_name, subject, day))

    def consecutive_count(self, teacher_id: str, day: str) -> int:
        return self.teacher_consecutive.get((teacher_id, day), 0)

    def placed_periods(
        self, class_name: str, subject: str, teacher_id: str | None = None
    ) -> int:
        """Count periods of a subject in a class, optionally for one teacher."""
        count = 0
        for slots in self.class_grid.get(class_name, {}).values():
            for slot in slots:
                if slot is None or slot.subject != subject:
                    continue
                if teacher_id is None or slot.teacher_id == teacher_id:
                    count += 1
        return count

    def class_day_load(self, class_name: str, day: str) -> int:
        """Number of occupied periods of a class on a day."""
        return sum(1 for slot in self.class_grid[class_name][day] if slot is not None)

    def teacher_total(self, teacher_id: str) -> int:
        """Occupied periods of a teacher across the week."""
        return sum(
            1
            for slots in self.teacher_grid.get(teacher_id, {}).values()
            for slot in slots
            if slot is not None
        )

    def teacher_run_length(self, teacher_id: str, day: str, period: int) -> int:
        """Length of the teaching run a placement at `period` would create."""
        run = 1
        p = period - 1
        while p >= 0 and self.teacher_slot(teacher_id, day, p) is not None:
            run += 1
            p -= 1
        p = period + 1
        while self.teacher_slot(teacher_id, day, p) is not None:
            run += 1
            p += 1
        return run

    # -- mutation --------------------------------------------------------

    def place(
        self,
        class_name: str,
        day: str,
        period: int,
        subject: str,
        teacher_id: str,
        teacher_name: str,
    ) -> None:
        """Write one slot into both grids and update the tracking counters.

        Raises:
            ValueError: If the class or teacher slot is already taken.
        """
        if self.class_grid[class_name][day][period] is not None:
            raise ValueError(f"{class_name} {day} period {period} is already occupied")
        teacher_day = self.teacher_grid[teacher_id][day]
        if teacher_day[period] is not None:
            raise ValueError(f"Teacher {teacher_id} is already teaching on {day} period {period}")

        self.class_grid[class_name][day][period] = PeriodSlot(
            subject=subject, teacher=teacher_name, teacher_id=teacher_id
        )
        teacher_day[period] = class_name

        self.subject_last_placed[(class_name, subject, day)] = period
        self.subject_day_count[(class_name, subject, day)] += 1

        key = (teacher_id, day)
        if period > 0 and teacher_day[period - 1] is not None:
            self.teacher_consecutive[key] += 1
        else:
            self.teacher_consecutive[key] = 1

        # A free period right after means the run is not in progress any more
        if period + 1 < len(teacher_day) and teacher_day[period + 1] is None:
            self.teacher_consecutive[key] = 0


def teacher_day_lengths(days: list[str], class_configs: list[ClassConfig]) -> dict[str, int]:
    """Length of each teacher day: the longest class day on that day."""
    lengths: dict[str, int] = {}
    for day in days:
        counts = [config.periods_for(day) for config in class_configs if day in config.days]
        longest = max(counts, default=0)
        lengths[day] = longest if longest > 0 else get_default_periods(day)
    return lengths
