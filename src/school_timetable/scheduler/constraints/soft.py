"""Distribution heuristics.

Soft preferences only decide the order in which candidate days and periods
are tried; they never reject a placement on their own.
- SC-01: Spread a subject evenly across the class week
- SC-02: Primary subjects early-to-mid day, secondary subjects in the back half
- SC-03: Avoid the same subject at the same period day after day
- SC-04: Keep different activity subjects apart
- SC-05: Avoid back-to-back free periods
"""

import math
import random
from collections.abc import Iterable

from ..constants import PRIMARY_WINDOW
from ..state import ScheduleState


def spread_days(days: list[str], count: int) -> list[str]:
    """Pick `count` days spaced as evenly as possible across the week.

    Args:
        days: Ordered active days.
        count: Number of days wanted.

    Returns:
        Subset of days in calendar order, e.g. 3 of Mon-Fri gives Mon/Tue/Thu.
    """
    if count <= 0 or not days:
        return []
    if count >= len(days):
        return list(days)
    indices = sorted({int(i * len(days) / count) for i in range(count)})
    return [days[i] for i in indices]


def primary_periods(periods: int, window: float = PRIMARY_WINDOW) -> tuple[list[int], list[int]]:
    """Split a day into preferred (early-to-mid) and fallback periods."""
    cut = min(periods, max(1, math.ceil(periods * window)))
    return list(range(cut)), list(range(cut, periods))


def secondary_periods(periods: int) -> list[int]:
    """Back half of the day, where secondary subjects are placed."""
    return list(range(periods // 2, periods))


def slot_pattern_penalty(
    state: ScheduleState, class_name: str, subject: str, period: int
) -> int:
    """Number of days the subject already sits at this same period."""
    return sum(
        1
        for day in state.class_days(class_name)
        if state.last_placed_period(class_name, subject, day) == period
    )


def order_days(
    state: ScheduleState,
    class_name: str,
    subject: str,
    remaining: int,
    rng: random.Random,
) -> list[str]:
    """Order a class's days for placing a subject.

    Days without the subject come first, preferring an even spread for the
    remaining count, then lighter days; ties are broken by `rng`.
    """
    days = state.class_days(class_name)
    already = {d for d in days if state.subject_count_on_day(class_name, subject, d) > 0}
    open_days = [d for d in days if d not in already]
    preferred = set(spread_days(open_days, remaining))

    shuffled = list(open_days)
    rng.shuffle(shuffled)
    ordered = sorted(
        shuffled,
        key=lambda d: (d not in preferred, state.class_day_load(class_name, d)),
    )
    return ordered + [d for d in days if d in already]


def order_periods(
    state: ScheduleState,
    class_name: str,
    subject: str,
    periods: Iterable[int],
) -> list[int]:
    """Stable-sort candidate periods so repeated time slots are tried last."""
    return sorted(
        periods,
        key=lambda p: slot_pattern_penalty(state, class_name, subject, p),
    )


def is_adjacent_to_other_activity(
    state: ScheduleState,
    class_name: str,
    day: str,
    period: int,
    subject: str,
    activity_subjects: set[str],
) -> bool:
    """Check if a neighbouring period holds a different activity subject."""
    if subject not in activity_subjects:
        return False
    for neighbour in (period - 1, period + 1):
        if 0 <= neighbour < state.periods_for(class_name, day):
            slot = state.class_slot(class_name, day, neighbour)
            if slot is not None and slot.subject != subject and slot.subject in activity_subjects:
                return True
    return False


def would_leave_adjacent_free(
    state: ScheduleState, class_name: str, day: str, period: int
) -> bool:
    """Check if an empty period sits next to another empty period."""
    for neighbour in (period - 1, period + 1):
        if 0 <= neighbour < state.periods_for(class_name, day):
            if state.is_class_slot_free(class_name, day, neighbour):
                return True
    return False
