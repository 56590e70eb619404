"""Validation logic for timetable generation input."""

from collections import Counter
from typing import Any

from .constants import MAX_PERIOD_LIMIT, MIN_PERIOD_LIMIT
from .exceptions import InvalidConfigError
from .models import ClassConfig, Teacher


def validate_period_limit(limit: Any) -> tuple[bool, str | None]:
    """Validate an explicit weekly period limit.

    Args:
        limit: Raw limit value (None means "use the default cap")

    Returns:
        Tuple of (is_valid, error_message)
    """
    if limit is None or limit == "":
        return True, None

    try:
        value = int(float(limit))
    except (ValueError, TypeError):
        return False, f"Invalid period limit: '{limit}'"

    if value < MIN_PERIOD_LIMIT or value > MAX_PERIOD_LIMIT:
        return False, f"Period limit must be between {MIN_PERIOD_LIMIT} and {MAX_PERIOD_LIMIT}, got {value}"

    return True, None


def validate_teacher(teacher: Teacher) -> list[str]:
    """Validate a single roster entry.

    Returns:
        List of problems (empty if valid)
    """
    problems = []
    if not str(teacher.id).strip():
        problems.append("Teacher id is empty")
    if not teacher.name or not teacher.name.strip():
        problems.append(f"Teacher '{teacher.id}' has no name")
    if teacher.period_limit is not None and teacher.period_limit < 1:
        problems.append(f"Teacher '{teacher.name}' has a non-positive period limit")
    return problems


def validate_class_config(config: ClassConfig) -> list[str]:
    """Validate the shape and subject list of one class.

    Returns:
        List of problems (empty if valid)
    """
    problems = []
    if not config.grade or not str(config.grade).strip():
        problems.append("Class configuration has no class identifier")
        return problems

    name = config.name
    if config.weekday_periods < 1:
        problems.append(f"{name}: weekday periods must be at least 1")
    if config.include_saturday and config.saturday_periods < 1:
        problems.append(f"{name}: Saturday periods must be at least 1 when Saturday is included")

    for assignment in config.subject_assignments:
        if not assignment.subject or not assignment.subject.strip():
            problems.append(f"{name}: subject assignment without a subject name")
        if assignment.periods_per_week < 0:
            problems.append(f"{name}: negative periods for {assignment.subject}")

    counts = Counter(a.subject for a in config.subject_assignments)
    for subject, count in counts.items():
        if count > 1:
            problems.append(f"{name}: subject '{subject}' is assigned {count} times")

    return problems


def resolve_class_teacher(
    config: ClassConfig, teachers_by_id: dict[str, Teacher]
) -> Teacher | None:
    """Find the class teacher of a class.

    An explicit `class_teacher_id` on the class wins when it names a roster
    teacher; otherwise the roster teacher flagged as class teacher of this
    class is used.
    """
    if config.class_teacher_id and config.class_teacher_id in teachers_by_id:
        return teachers_by_id[config.class_teacher_id]
    for teacher in teachers_by_id.values():
        if teacher.is_class_teacher and teacher.class_teacher_of == config.name:
            return teacher
    return None


def validate_generation_input(
    teachers: list[Teacher], class_configs: list[ClassConfig]
) -> list[str]:
    """Collect every structural problem in a roster plus class set.

    References to unknown teachers are not structural; the engine skips them.
    """
    problems: list[str] = []

    for teacher in teachers:
        problems.extend(validate_teacher(teacher))
    for teacher_id, count in Counter(t.id for t in teachers).items():
        if count > 1:
            problems.append(f"Teacher id '{teacher_id}' appears {count} times")

    for config in class_configs:
        problems.extend(validate_class_config(config))
    for name, count in Counter(c.name for c in class_configs).items():
        if count > 1:
            problems.append(f"Class '{name}' is configured {count} times")

    anchors = Counter(
        t.class_teacher_of for t in teachers if t.is_class_teacher and t.class_teacher_of
    )
    for class_name, count in anchors.items():
        if count > 1:
            problems.append(f"Class '{class_name}' has {count} class teachers")

    # A teacher opens the day for at most one class
    teachers_by_id = {t.id: t for t in teachers}
    anchored: dict[str, list[str]] = {}
    for config in class_configs:
        anchor = resolve_class_teacher(config, teachers_by_id)
        if anchor is not None:
            anchored.setdefault(anchor.id, []).append(config.name)
    for teacher_id, class_names in anchored.items():
        if len(class_names) > 1:
            problems.append(
                f"Teacher '{teacher_id}' is class teacher of {len(class_names)} classes: "
                f"{', '.join(class_names)}"
            )

    return problems


def ensure_valid_input(teachers: list[Teacher], class_configs: list[ClassConfig]) -> None:
    """Raise if the input is structurally malformed.

    Raises:
        InvalidConfigError: With every problem found
    """
    problems = validate_generation_input(teachers, class_configs)
    if problems:
        raise InvalidConfigError(problems)


def parse_generation_input(data: dict[str, Any]) -> tuple[list[Teacher], list[ClassConfig]]:
    """Build models from a raw {"teachers": [...], "classConfigs": [...]} mapping.

    Raises:
        InvalidConfigError: If required fields are missing or mistyped
    """
    problems: list[str] = []
    teachers: list[Teacher] = []
    class_configs: list[ClassConfig] = []

    raw_classes = data.get("classConfigs", data.get("class_configs", data.get("classes")))
    if raw_classes is None:
        problems.append("Input has no class configurations")
        raw_classes = []

    for index, raw in enumerate(data.get("teachers", [])):
        try:
            teachers.append(Teacher.from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            problems.append(f"Teacher #{index + 1}: missing or invalid field {e}")

    for index, raw in enumerate(raw_classes):
        try:
            class_configs.append(ClassConfig.from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            problems.append(f"Class configuration #{index + 1}: missing or invalid field {e}")

    if problems:
        raise InvalidConfigError(problems)
    return teachers, class_configs
