"""Tests for saved timetable history."""

import json

import pytest

from school_timetable.exceptions import HistoryNotFoundError
from school_timetable.history import HistoryEntry, TimetableHistory
from school_timetable.scheduler.algorithm import generate


@pytest.fixture
def store(tmp_path):
    return TimetableHistory(tmp_path / "history")


@pytest.fixture
def result(teachers, class_6a):
    return generate(teachers, [class_6a], seed=42)


class TestTimetableHistory:
    """Tests for TimetableHistory."""

    def test_save_and_get(self, store, result, teachers, class_6a):
        entry = store.save("Term 1", result, teachers, [class_6a])

        loaded = store.get(entry.id)
        assert loaded.name == "Term 1"
        assert loaded.days == result.days
        assert loaded.timetable_data == result.timetables_dict()
        assert loaded.teacher_schedules == result.teacher_schedules_dict()
        assert loaded.class_configs == [class_6a.to_dict()]
        assert len(loaded.teachers_data) == len(teachers)

    def test_list_newest_first(self, store, result, teachers, class_6a):
        older = store.save("Old", result, teachers, [class_6a])
        newer = store.save("New", result, teachers, [class_6a])

        # Pin timestamps so ordering does not depend on clock resolution
        for entry, stamp in ((older, "2024-01-01T08:00:00"), (newer, "2024-06-01T08:00:00")):
            path = store.history_dir / f"{entry.id}.json"
            data = json.loads(path.read_text(encoding="utf-8"))
            data["created_at"] = stamp
            path.write_text(json.dumps(data), encoding="utf-8")

        assert [e.name for e in store.list()] == ["New", "Old"]

    def test_list_without_directory(self, store):
        assert store.list() == []

    def test_delete(self, store, result, teachers, class_6a):
        entry = store.save("Term 1", result, teachers, [class_6a])
        store.delete(entry.id)

        assert store.list() == []
        with pytest.raises(HistoryNotFoundError):
            store.get(entry.id)

    def test_unknown_id(self, store):
        with pytest.raises(HistoryNotFoundError, match="nope"):
            store.get("nope")
        with pytest.raises(HistoryNotFoundError):
            store.delete("nope")


class TestHistoryEntry:
    """Tests for HistoryEntry."""

    def test_summary(self):
        entry = HistoryEntry(
            id="abc",
            name="Draft",
            timetable_data={"6A": {}, "7B": {}},
            teacher_schedules={},
            teachers_data=[{"id": "t1"}],
            days=["Monday", "Tuesday"],
            created_at="2024-01-01T00:00:00",
        )
        summary = entry.summary()
        assert summary["classes"] == 2
        assert summary["teachers"] == 1
        assert summary["days"] == 2

    def test_from_dict_defaults(self):
        entry = HistoryEntry.from_dict({"id": "abc", "name": "Draft"})
        assert entry.timetable_data == {}
        assert entry.days == []
