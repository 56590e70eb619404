"""Generation settings."""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from ..constants import (
    ACTIVITY_SUBJECTS,
    DEFAULT_PERIOD_LIMIT,
    DEFAULT_TIME_LIMIT,
    MAX_CONSECUTIVE_PERIODS,
    PRIMARY_WINDOW,
)

STRATEGIES = ("heuristic", "cpsat")


@dataclass
class SchedulerSettings:
    """Tunable knobs shared by both generators.

    Attributes:
        seed: Random seed for tie-breaking (None for an unseeded run)
        default_period_limit: Weekly cap for teachers without their own limit
        max_consecutive_periods: Longest allowed run of back-to-back periods
        primary_window: Fraction of the day preferred for primary subjects
        avoid_adjacent_activities: Keep different activity subjects apart
        activity_subjects: Subjects treated as activities
        strategy: "heuristic" or "cpsat"
        time_limit: CP-SAT time limit in seconds
    """

    seed: int | None = None
    default_period_limit: int = DEFAULT_PERIOD_LIMIT
    max_consecutive_periods: int = MAX_CONSECUTIVE_PERIODS
    primary_window: float = PRIMARY_WINDOW
    avoid_adjacent_activities: bool = True
    activity_subjects: list[str] = field(default_factory=lambda: list(ACTIVITY_SUBJECTS))
    strategy: str = "heuristic"
    time_limit: int = DEFAULT_TIME_LIMIT

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown strategy: {self.strategy}. Supported: {', '.join(STRATEGIES)}"
            )
        if not 0 < self.primary_window <= 1:
            raise ValueError(f"primary_window must be in (0, 1], got {self.primary_window}")
        if self.max_consecutive_periods < 1:
            raise ValueError("max_consecutive_periods must be at least 1")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SchedulerSettings":
        """Create settings from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **overrides: Any) -> "SchedulerSettings":
        """Copy with non-None overrides applied (used by CLI options)."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return SchedulerSettings.from_dict(data)


def load_settings(path: Path | None) -> SchedulerSettings:
    """Load settings from a JSON file, or defaults when the file is absent."""
    if path is None or not path.exists():
        return SchedulerSettings()
    with open(path, encoding="utf-8") as f:
        return SchedulerSettings.from_dict(json.load(f))
