"""Saved timetable history stored as JSON records."""

import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .exceptions import HistoryNotFoundError
from .models import ClassConfig, Teacher
from .scheduler.models import GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DIR = Path(".timetable-history")


@dataclass
class HistoryEntry:
    """One saved generation with the input that produced it."""

    id: str
    name: str
    timetable_data: dict[str, Any]
    teacher_schedules: dict[str, Any]
    class_configs: list[dict[str, Any]] = field(default_factory=list)
    teachers_data: list[dict[str, Any]] = field(default_factory=list)
    days: list[str] = field(default_factory=list)
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        return cls(
            id=data["id"],
            name=data["name"],
            timetable_data=data.get("timetable_data", {}),
            teacher_schedules=data.get("teacher_schedules", {}),
            class_configs=data.get("class_configs", []),
            teachers_data=data.get("teachers_data", []),
            days=data.get("days", []),
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "timetable_data": self.timetable_data,
            "teacher_schedules": self.teacher_schedules,
            "class_configs": self.class_configs,
            "teachers_data": self.teachers_data,
            "days": self.days,
            "created_at": self.created_at,
        }

    def summary(self) -> dict[str, Any]:
        """Listing view without the grids."""
        return {
            "id": self.id,
            "name": self.name,
            "classes": len(self.timetable_data),
            "teachers": len(self.teachers_data),
            "days": len(self.days),
            "created_at": self.created_at,
        }


class TimetableHistory:
    """Directory of saved timetables, one JSON file per entry."""

    def __init__(self, history_dir: Path | str = DEFAULT_HISTORY_DIR):
        self.history_dir = Path(history_dir)

    def _path(self, entry_id: str) -> Path:
        return self.history_dir / f"{entry_id}.json"

    def save(
        self,
        name: str,
        result: GenerationResult,
        teachers: list[Teacher],
        class_configs: list[ClassConfig],
    ) -> HistoryEntry:
        """Store a generation result together with its input."""
        entry = HistoryEntry(
            id=str(uuid.uuid4()),
            name=name,
            timetable_data=result.timetables_dict(),
            teacher_schedules=result.teacher_schedules_dict(),
            class_configs=[c.to_dict() for c in class_configs],
            teachers_data=[t.to_dict() for t in teachers],
            days=list(result.days),
        )
        self.history_dir.mkdir(parents=True, exist_ok=True)
        with open(self._path(entry.id), "w", encoding="utf-8") as f:
            json.dump(entry.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info(f"Saved timetable '{name}' as {entry.id}")
        return entry

    def list(self) -> list[HistoryEntry]:
        """All saved entries, newest first."""
        if not self.history_dir.exists():
            return []
        entries = []
        for path in self.history_dir.glob("*.json"):
            with open(path, encoding="utf-8") as f:
                entries.append(HistoryEntry.from_dict(json.load(f)))
        return sorted(entries, key=lambda e: e.created_at, reverse=True)

    def get(self, entry_id: str) -> HistoryEntry:
        """Load one entry.

        Raises:
            HistoryNotFoundError: If no entry has this id
        """
        path = self._path(entry_id)
        if not path.exists():
            raise HistoryNotFoundError(entry_id)
        with open(path, encoding="utf-8") as f:
            return HistoryEntry.from_dict(json.load(f))

    def delete(self, entry_id: str) -> None:
        """Remove one entry.

        Raises:
            HistoryNotFoundError: If no entry has this id
        """
        path = self._path(entry_id)
        if not path.exists():
            raise HistoryNotFoundError(entry_id)
        path.unlink()
        logger.info(f"Deleted timetable {entry_id}")
