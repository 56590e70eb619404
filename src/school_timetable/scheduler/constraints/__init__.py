"""Placement rules for the timetable engine."""

from .hard import HardConstraints, can_place
from .soft import (
    is_adjacent_to_other_activity,
    order_days,
    order_periods,
    primary_periods,
    secondary_periods,
    slot_pattern_penalty,
    spread_days,
    would_leave_adjacent_free,
)

__all__ = [
    "HardConstraints",
    "can_place",
    "is_adjacent_to_other_activity",
    "order_days",
    "order_periods",
    "primary_periods",
    "secondary_periods",
    "slot_pattern_penalty",
    "spread_days",
    "would_leave_adjacent_free",
]
