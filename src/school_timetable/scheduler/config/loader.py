"""Unified input loader."""

import json
from pathlib import Path

from ...exceptions import InvalidConfigError
from ...importers import TeacherCSVImporter
from ...models import ClassConfig, Teacher
from ...validators import parse_generation_input
from .settings import SchedulerSettings, load_settings


class ConfigLoader:
    """Loader for a generation input directory or a single JSON file."""

    def __init__(self, input_path: Path | str | None = None):
        """
        Initialize configuration loader.

        Args:
            input_path: Directory containing input files, or one JSON file
                       with "teachers" and "classConfigs" keys.
                       Expected directory files:
                       - teachers.json or teachers.csv
                       - classes.json
                       - settings.json (optional)
        """
        if input_path is None:
            input_path = Path("input")

        self.input_path = Path(input_path)
        self.teachers: list[Teacher] = []
        self.class_configs: list[ClassConfig] = []
        self.settings = SchedulerSettings()

        if self.input_path.is_file():
            self._load_single_file(self.input_path)
        else:
            self._load_directory()

    def _get_path(self, filename: str) -> Path | None:
        """Get path to input file if it exists."""
        path = self.input_path / filename
        return path if path.exists() else None

    def _load_single_file(self, path: Path) -> None:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        self.teachers, self.class_configs = parse_generation_input(data)
        if "settings" in data:
            self.settings = SchedulerSettings.from_dict(data["settings"])

    def _load_directory(self) -> None:
        if not self.input_path.is_dir():
            raise InvalidConfigError([f"Input not found: {self.input_path}"])

        classes_path = self._get_path("classes.json")
        if classes_path is None:
            raise InvalidConfigError([f"No classes.json in {self.input_path}"])

        with open(classes_path, encoding="utf-8") as f:
            raw_classes = json.load(f)
        if isinstance(raw_classes, dict):
            raw_classes = raw_classes.get("classConfigs", raw_classes.get("classes", []))

        raw_teachers = self._load_raw_teachers()
        self.teachers, self.class_configs = parse_generation_input(
            {"teachers": raw_teachers, "classConfigs": raw_classes}
        )
        self.settings = load_settings(self._get_path("settings.json"))

    def _load_raw_teachers(self) -> list[dict]:
        json_path = self._get_path("teachers.json")
        if json_path is not None:
            with open(json_path, encoding="utf-8") as f:
                data = json.load(f)
            return data.get("teachers", []) if isinstance(data, dict) else data

        csv_path = self._get_path("teachers.csv")
        if csv_path is not None:
            result = TeacherCSVImporter().import_file(csv_path)
            if not result.success:
                raise InvalidConfigError([str(e) for e in result.errors])
            return [t.to_dict() for t in result.teachers]

        raise InvalidConfigError([f"No teachers.json or teachers.csv in {self.input_path}"])
