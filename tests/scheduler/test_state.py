"""Tests for ScheduleState."""

import pytest

from school_timetable.scheduler.models import PeriodSlot
from school_timetable.scheduler.state import ScheduleState, teacher_day_lengths


class TestScheduleStateCreate:
    """Tests for building an empty state."""

    def test_weekdays_only(self, empty_state):
        assert empty_state.days == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
        assert empty_state.class_days("6A") == empty_state.days

    def test_grids_are_empty(self, empty_state):
        assert all(
            slot is None
            for day in empty_state.class_grid["6A"].values()
            for slot in day
        )
        assert empty_state.teacher_total("t1") == 0
        assert len(empty_state.teacher_grid["t1"]["Monday"]) == 7

    def test_saturday_added_when_any_class_opts_in(self, teachers, class_factory):
        weekday = class_factory("6", "A", [])
        six_day = class_factory("7", "A", [], include_saturday=True, saturday_periods=4)
        state = ScheduleState.create(teachers, [weekday, six_day])

        assert state.days[-1] == "Saturday"
        assert not state.has_class_day("6A", "Saturday")
        assert state.periods_for("7A", "Saturday") == 4
        assert "Saturday" not in state.class_days("6A")

    def test_teacher_day_length_is_longest_class_day(self, class_factory):
        short = class_factory("6", "A", [], weekday_periods=6)
        long = class_factory("7", "A", [], weekday_periods=8)
        lengths = teacher_day_lengths(["Monday"], [short, long])
        assert lengths == {"Monday": 8}

    def test_teacher_day_length_default_when_no_class_uses_day(self, class_factory):
        lengths = teacher_day_lengths(["Saturday"], [class_factory("6", "A", [])])
        assert lengths == {"Saturday": 4}


class TestScheduleStatePlace:
    """Tests for placing lessons."""

    def test_place_writes_both_grids(self, empty_state):
        empty_state.place("6A", "Monday", 2, "Maths", "t1", "Asha Patel")

        assert empty_state.class_slot("6A", "Monday", 2) == PeriodSlot(
            subject="Maths", teacher="Asha Patel", teacher_id="t1"
        )
        assert empty_state.teacher_slot("t1", "Monday", 2) == "6A"
        assert empty_state.subject_count_on_day("6A", "Maths", "Monday") == 1
        assert empty_state.last_placed_period("6A", "Maths", "Monday") == 2
        assert empty_state.teacher_total("t1") == 1

    def test_place_occupied_class_slot_raises(self, empty_state):
        empty_state.place("6A", "Monday", 0, "Maths", "t1", "Asha Patel")
        with pytest.raises(ValueError, match="already occupied"):
            empty_state.place("6A", "Monday", 0, "English", "t2", "Ravi Shah")

    def test_place_busy_teacher_raises(self, teachers, class_factory):
        configs = [class_factory("6", "A", []), class_factory("7", "A", [])]
        state = ScheduleState.create(teachers, configs)
        state.place("6A", "Monday", 0, "Maths", "t1", "Asha Patel")
        with pytest.raises(ValueError, match="already teaching"):
            state.place("7A", "Monday", 0, "Maths", "t1", "Asha Patel")

    def test_consecutive_counter_increments_on_adjacent_period(self, empty_state):
        empty_state.place("6A", "Monday", 0, "Maths", "t1", "Asha Patel")
        # Next period is free, so the run is closed
        assert empty_state.consecutive_count("t1", "Monday") == 0

    def test_consecutive_counter_tracks_run(self, teachers, class_factory):
        configs = [class_factory("6", "A", []), class_factory("7", "A", [])]
        state = ScheduleState.create(teachers, configs)
        state.place("6A", "Monday", 1, "Maths", "t1", "Asha Patel")
        state.place("7A", "Monday", 0, "Maths", "t1", "Asha Patel")
        # Placing period 0 after period 1: period 1 is occupied, so no reset
        assert state.consecutive_count("t1", "Monday") == 1

        state.place("6A", "Tuesday", 3, "Maths", "t1", "Asha Patel")
        state.place("7A", "Tuesday", 4, "Maths", "t1", "Asha Patel")
        assert state.consecutive_count("t1", "Tuesday") == 0

    def test_placed_periods_filters_by_teacher(self, empty_state):
        empty_state.place("6A", "Monday", 0, "Maths", "t1", "Asha Patel")
        empty_state.place("6A", "Tuesday", 0, "Maths", "t3", "Meera Joshi")

        assert empty_state.placed_periods("6A", "Maths") == 2
        assert empty_state.placed_periods("6A", "Maths", "t1") == 1

    def test_teacher_run_length(self, empty_state):
        empty_state.place("6A", "Monday", 1, "Maths", "t1", "Asha Patel")
        assert empty_state.teacher_run_length("t1", "Monday", 2) == 2
        assert empty_state.teacher_run_length("t1", "Monday", 4) == 1

    def test_class_day_load(self, empty_state):
        empty_state.place("6A", "Monday", 1, "Maths", "t1", "Asha Patel")
        empty_state.place("6A", "Monday", 3, "English", "t2", "Ravi Shah")
        assert empty_state.class_day_load("6A", "Monday") == 2
        assert empty_state.class_day_load("6A", "Tuesday") == 0

    def test_teacher_slot_out_of_range_is_none(self, empty_state):
        assert empty_state.teacher_slot("t1", "Monday", -1) is None
        assert empty_state.teacher_slot("t1", "Monday", 99) is None
