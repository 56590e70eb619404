"""Tests for fallback teacher search."""

from school_timetable.models import Teacher
from school_timetable.scheduler.constraints import HardConstraints
from school_timetable.scheduler.load import TeacherLoadTracker
from school_timetable.scheduler.state import ScheduleState
from school_timetable.scheduler.substitution import find_substitutes


def _setup(roster, class_factory):
    state = ScheduleState.create(roster, [class_factory("6", "A", []), class_factory("7", "A", [])])
    return state, HardConstraints(roster), TeacherLoadTracker(state, roster)


class TestFindSubstitutes:
    """Tests for find_substitutes function."""

    def test_only_qualified_teachers(self, class_factory):
        roster = [
            Teacher(id="a", name="Anil", subjects=["Science"]),
            Teacher(id="b", name="Bina", subjects=["Maths"]),
        ]
        state, checker, tracker = _setup(roster, class_factory)
        found = find_substitutes(state, roster, checker, tracker, "6A", "Monday", 0, "Science")
        assert [t.id for t in found] == ["a"]

    def test_least_loaded_first_then_name(self, class_factory):
        roster = [
            Teacher(id="c", name="Chitra", subjects=["Science"]),
            Teacher(id="b", name="Bina", subjects=["Science"]),
            Teacher(id="a", name="Anil", subjects=["Science"]),
        ]
        state, checker, tracker = _setup(roster, class_factory)
        state.place("7A", "Tuesday", 0, "Science", "a", "Anil")

        found = find_substitutes(state, roster, checker, tracker, "6A", "Monday", 0, "Science")
        assert [t.id for t in found] == ["b", "c", "a"]

    def test_excludes_designated_and_busy(self, class_factory):
        roster = [
            Teacher(id="a", name="Anil", subjects=["Science"]),
            Teacher(id="b", name="Bina", subjects=["Science"]),
            Teacher(id="c", name="Chitra", subjects=["Science"]),
        ]
        state, checker, tracker = _setup(roster, class_factory)
        state.place("7A", "Monday", 0, "Science", "b", "Bina")

        found = find_substitutes(
            state, roster, checker, tracker, "6A", "Monday", 0, "Science", exclude={"a"}
        )
        assert [t.id for t in found] == ["c"]

    def test_teacher_at_cap_not_offered(self, class_factory):
        roster = [Teacher(id="a", name="Anil", subjects=["Science"], period_limit=1)]
        state, checker, tracker = _setup(roster, class_factory)
        state.place("7A", "Tuesday", 0, "Science", "a", "Anil")

        assert find_substitutes(state, roster, checker, tracker, "6A", "Monday", 0, "Science") == []

    def test_extra_subjects_qualify(self, class_factory):
        roster = [Teacher(id="a", name="Anil", subjects=["Maths"], extra_subjects=["PE"])]
        state, checker, tracker = _setup(roster, class_factory)
        found = find_substitutes(state, roster, checker, tracker, "6A", "Monday", 5, "PE")
        assert [t.id for t in found] == ["a"]
