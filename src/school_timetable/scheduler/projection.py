"""Teacher-centric projection of the class timetables."""

from .models import ClassGrid, TeacherGrid, TeacherSlot


def project_teacher_schedules(
    class_grid: ClassGrid,
    teacher_ids: list[str],
    days: list[str],
    day_lengths: dict[str, int],
) -> TeacherGrid:
    """Re-index the class grid by teacher.

    The class grid is the single source of truth; the returned grid is built
    from scratch on every call, so projecting the same class grid twice gives
    equal output.

    Args:
        class_grid: class -> day -> period-indexed slots
        teacher_ids: Roster teacher ids, each gets a (possibly empty) grid
        days: Ordered active day names
        day_lengths: Number of periods in a teacher day, per day

    Returns:
        teacher id -> day -> period-indexed TeacherSlot or None
    """
    teacher_grid: TeacherGrid = {
        teacher_id: {day: [None] * day_lengths[day] for day in days}
        for teacher_id in teacher_ids
    }

    for class_name in sorted(class_grid):
        for day, slots in class_grid[class_name].items():
            for period, slot in enumerate(slots):
                if slot is None:
                    continue
                teacher_days = teacher_grid.get(slot.teacher_id)
                if teacher_days is None or day not in teacher_days:
                    continue
                teacher_days[day][period] = TeacherSlot(
                    class_name=class_name, subject=slot.subject
                )

    return teacher_grid
