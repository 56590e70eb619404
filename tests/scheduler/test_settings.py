"""Tests for generation settings and the input loader."""

import json

import pytest

from school_timetable.exceptions import InvalidConfigError
from school_timetable.scheduler.config import ConfigLoader, SchedulerSettings, load_settings
from school_timetable.scheduler.constants import MAX_CONSECUTIVE_PERIODS


class TestSchedulerSettings:
    """Tests for SchedulerSettings."""

    def test_defaults(self):
        settings = SchedulerSettings()
        assert settings.strategy == "heuristic"
        assert settings.max_consecutive_periods == MAX_CONSECUTIVE_PERIODS
        assert settings.seed is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"strategy": "annealing"},
            {"primary_window": 0},
            {"primary_window": 1.5},
            {"max_consecutive_periods": 0},
        ],
    )
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(ValueError):
            SchedulerSettings(**kwargs)

    def test_from_dict_ignores_unknown_keys(self):
        settings = SchedulerSettings.from_dict({"seed": 9, "colour": "blue"})
        assert settings.seed == 9

    def test_with_overrides_skips_none(self):
        base = SchedulerSettings(seed=1, time_limit=20)
        updated = base.with_overrides(seed=None, time_limit=5, strategy="cpsat")
        assert updated.seed == 1
        assert updated.time_limit == 5
        assert updated.strategy == "cpsat"
        assert base.strategy == "heuristic"

    def test_load_settings_missing_file(self, tmp_path):
        assert load_settings(tmp_path / "settings.json") == SchedulerSettings()

    def test_load_settings_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"seed": 5, "avoid_adjacent_activities": False}))
        settings = load_settings(path)
        assert settings.seed == 5
        assert settings.avoid_adjacent_activities is False


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_single_file(self, tmp_path, generation_input):
        path = tmp_path / "input.json"
        path.write_text(json.dumps({**generation_input, "settings": {"seed": 11}}))

        loader = ConfigLoader(path)
        assert [t.id for t in loader.teachers] == ["t1", "t2", "t3", "t4", "t5"]
        assert [c.name for c in loader.class_configs] == ["6A", "7B"]
        assert loader.settings.seed == 11

    def test_directory_with_json_roster(self, tmp_path, generation_input):
        (tmp_path / "teachers.json").write_text(json.dumps(generation_input["teachers"]))
        (tmp_path / "classes.json").write_text(
            json.dumps({"classConfigs": generation_input["classConfigs"]})
        )
        (tmp_path / "settings.json").write_text(json.dumps({"strategy": "cpsat"}))

        loader = ConfigLoader(tmp_path)
        assert len(loader.teachers) == 5
        assert len(loader.class_configs) == 2
        assert loader.settings.strategy == "cpsat"

    def test_directory_with_csv_roster(self, tmp_path, generation_input):
        (tmp_path / "teachers.csv").write_text(
            "id,name,subjects,isclassteacher,classteacherof\n"
            "t1,Asha Patel,Maths,yes,6A\n"
            "t2,Ravi Shah,\"English,Hindi\",,\n"
        )
        (tmp_path / "classes.json").write_text(json.dumps(generation_input["classConfigs"][:1]))

        loader = ConfigLoader(tmp_path)
        by_id = {t.id: t for t in loader.teachers}
        assert by_id["t1"].class_teacher_of == "6A"
        assert by_id["t2"].subjects == ["English", "Hindi"]
        assert loader.settings == SchedulerSettings()

    def test_csv_row_errors_raise(self, tmp_path):
        (tmp_path / "teachers.csv").write_text("name,subjects\nAsha,\n")
        (tmp_path / "classes.json").write_text("[]")

        with pytest.raises(InvalidConfigError, match="Row 2"):
            ConfigLoader(tmp_path)

    def test_missing_classes(self, tmp_path):
        (tmp_path / "teachers.json").write_text("[]")
        with pytest.raises(InvalidConfigError, match="classes.json"):
            ConfigLoader(tmp_path)

    def test_missing_roster(self, tmp_path):
        (tmp_path / "classes.json").write_text("[]")
        with pytest.raises(InvalidConfigError, match="teachers"):
            ConfigLoader(tmp_path)

    def test_missing_input(self, tmp_path):
        with pytest.raises(InvalidConfigError, match="Input not found"):
            ConfigLoader(tmp_path / "nowhere")
