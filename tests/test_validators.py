"""Tests for input validation."""

import pytest

from school_timetable.exceptions import InvalidConfigError
from school_timetable.models import Teacher
from school_timetable.validators import (
    ensure_valid_input,
    parse_generation_input,
    validate_class_config,
    validate_generation_input,
    validate_period_limit,
)


class TestValidatePeriodLimit:
    """Tests for validate_period_limit function."""

    @pytest.mark.parametrize("value", [None, "", 1, 35, "50", 12.0])
    def test_valid(self, value):
        assert validate_period_limit(value) == (True, None)

    @pytest.mark.parametrize("value", [0, 51, "-3"])
    def test_out_of_range(self, value):
        valid, message = validate_period_limit(value)
        assert not valid
        assert "between 1 and 50" in message

    def test_not_a_number(self):
        valid, message = validate_period_limit("many")
        assert not valid
        assert "Invalid period limit" in message


class TestValidateClassConfig:
    """Tests for validate_class_config function."""

    def test_valid_class(self, class_6a):
        assert validate_class_config(class_6a) == []

    def test_duplicate_subject(self, class_factory):
        config = class_factory("6", "A", [("Maths", 3, "t1"), ("Maths", 2, "t2")])
        problems = validate_class_config(config)
        assert any("assigned 2 times" in p for p in problems)

    def test_negative_periods(self, class_factory):
        config = class_factory("6", "A", [("Maths", -1, "t1")])
        assert any("negative periods" in p for p in validate_class_config(config))

    def test_zero_weekday_periods(self, class_factory):
        config = class_factory("6", "A", [], weekday_periods=0)
        assert validate_class_config(config)


class TestValidateGenerationInput:
    """Tests for whole-input validation."""

    def test_valid_input(self, teachers, class_6a, class_7b):
        assert validate_generation_input(teachers, [class_6a, class_7b]) == []

    def test_unknown_teacher_is_not_structural(self, teachers, class_factory):
        config = class_factory("6", "A", [("Maths", 3, "ghost")])
        assert validate_generation_input(teachers, [config]) == []

    def test_duplicate_teacher_ids(self, teachers, class_6a):
        roster = teachers + [Teacher(id="t1", name="Copy")]
        problems = validate_generation_input(roster, [class_6a])
        assert any("'t1' appears 2 times" in p for p in problems)

    def test_duplicate_class_names(self, teachers, class_6a):
        problems = validate_generation_input(teachers, [class_6a, class_6a])
        assert any("'6A' is configured 2 times" in p for p in problems)

    def test_two_class_teachers_for_one_class(self, teachers, class_6a):
        roster = teachers + [
            Teacher(id="t9", name="Other", is_class_teacher=True, class_teacher_of="6A")
        ]
        problems = validate_generation_input(roster, [class_6a])
        assert any("2 class teachers" in p for p in problems)

    def test_teacher_anchoring_two_classes(self, teachers, class_factory):
        configs = [
            class_factory("6", "A", [], class_teacher_id="t3"),
            class_factory("7", "B", [], class_teacher_id="t3"),
        ]
        problems = validate_generation_input(teachers, configs)
        assert any("'t3' is class teacher of 2 classes: 6A, 7B" in p for p in problems)

    def test_flagged_and_explicit_anchor_same_teacher(self, teachers, class_6a, class_factory):
        """t1 is flagged for 6A and also named explicitly by 7B."""
        other = class_factory("7", "B", [], class_teacher_id="t1")
        problems = validate_generation_input(teachers, [class_6a, other])
        assert any("'t1' is class teacher of 2 classes" in p for p in problems)

    def test_stale_class_teacher_id_does_not_count(self, teachers, class_6a, class_factory):
        other = class_factory("7", "B", [], class_teacher_id="ghost")
        assert validate_generation_input(teachers, [class_6a, other]) == []

    def test_ensure_valid_input_raises_with_problems(self, teachers, class_6a):
        with pytest.raises(InvalidConfigError) as exc_info:
            ensure_valid_input(teachers, [class_6a, class_6a])
        assert len(exc_info.value.problems) == 1


class TestParseGenerationInput:
    """Tests for parse_generation_input function."""

    def test_parses_models(self, generation_input):
        teachers, configs = parse_generation_input(generation_input)
        assert len(teachers) == 5
        assert [c.name for c in configs] == ["6A", "7B"]

    def test_accepts_snake_case_key(self, generation_input):
        data = {
            "teachers": generation_input["teachers"],
            "class_configs": generation_input["classConfigs"],
        }
        _, configs = parse_generation_input(data)
        assert len(configs) == 2

    def test_missing_classes(self):
        with pytest.raises(InvalidConfigError, match="no class configurations"):
            parse_generation_input({"teachers": []})

    def test_teacher_without_id(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            parse_generation_input({"teachers": [{"name": "A"}], "classConfigs": []})
        assert "Teacher #1" in exc_info.value.problems[0]
