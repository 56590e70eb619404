"""Test fixtures for school timetable tests."""

import pytest

from school_timetable.models import ClassConfig, SubjectAssignment, Teacher
from school_timetable.scheduler.state import ScheduleState


def make_class(grade, division="A", assignments=None, **kwargs):
    """Build a ClassConfig from (subject, periods, teacher_id[, is_main]) tuples."""
    subject_assignments = []
    for item in assignments or []:
        subject, periods, teacher_id = item[:3]
        is_main = item[3] if len(item) > 3 else True
        subject_assignments.append(
            SubjectAssignment(
                subject=subject,
                periods_per_week=periods,
                teacher_id=teacher_id,
                is_main_subject=is_main,
            )
        )
    return ClassConfig(
        grade=grade, division=division, subject_assignments=subject_assignments, **kwargs
    )


@pytest.fixture
def teachers():
    """Small roster covering main and activity subjects."""
    return [
        Teacher(
            id="t1",
            name="Asha Patel",
            subjects=["Maths"],
            is_class_teacher=True,
            class_teacher_of="6A",
        ),
        Teacher(id="t2", name="Ravi Shah", subjects=["English", "Hindi"]),
        Teacher(id="t3", name="Meera Joshi", subjects=["Science"]),
        Teacher(id="t4", name="Karan Desai", subjects=["PE", "Computer"]),
        Teacher(id="t5", name="Nisha Rao", subjects=["SST", "Drawing"]),
    ]


@pytest.fixture
def class_6a():
    """Class 6A with five main subjects and three activities."""
    return make_class(
        "6",
        "A",
        [
            ("Maths", 5, "t1"),
            ("English", 5, "t2"),
            ("Hindi", 4, "t2"),
            ("Science", 5, "t3"),
            ("PE", 2, "t4", False),
            ("Computer", 2, "t4", False),
            ("SST", 3, "t5", False),
            ("Drawing", 2, "t5", False),
        ],
    )


@pytest.fixture
def class_7b():
    """Class 7B sharing teachers with 6A."""
    return make_class(
        "7",
        "B",
        [
            ("Maths", 4, "t1"),
            ("English", 4, "t2"),
            ("Science", 4, "t3"),
            ("PE", 2, "t4", False),
            ("SST", 2, "t5", False),
        ],
    )


@pytest.fixture
def empty_state(teachers, class_6a):
    """Empty schedule state for class 6A and the standard roster."""
    return ScheduleState.create(teachers, [class_6a])


@pytest.fixture
def generation_input(teachers, class_6a, class_7b):
    """Raw input mapping as read from a JSON file."""
    return {
        "teachers": [t.to_dict() for t in teachers],
        "classConfigs": [class_6a.to_dict(), class_7b.to_dict()],
    }


@pytest.fixture
def class_factory():
    """Factory for ClassConfig objects from compact assignment tuples."""
    return make_class
