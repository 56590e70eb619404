"""Utility functions for parsing roster files."""

import re

import pandas as pd


def safe_int(value, default: int = 0) -> int:
    """Safely convert a value to integer.

    Args:
        value: Value to convert
        default: Default value if conversion fails

    Returns:
        Integer value
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return default
    if isinstance(value, str) and not value.strip():
        return default
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return default


def safe_str(value, default: str = "") -> str:
    """Safely convert a value to a stripped string."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return default
    return str(value).strip()


def normalize_header(header: str) -> str:
    """Lowercase a column header and drop all whitespace."""
    return re.sub(r"\s+", "", str(header)).lower()


def split_list(value, separator: str = ",") -> list[str]:
    """Split a delimited cell into non-empty stripped items."""
    text = safe_str(value)
    if not text:
        return []
    return [item.strip() for item in text.split(separator) if item.strip()]


def parse_subject_periods(value) -> dict[str, int]:
    """Parse "Maths:5,Science:3" into {"Maths": 5, "Science": 3}.

    Raises:
        ValueError: If an entry is not SUBJECT:COUNT with a non-negative count
    """
    result: dict[str, int] = {}
    for entry in split_list(value):
        subject, sep, count = entry.partition(":")
        subject = subject.strip()
        if not sep or not subject:
            raise ValueError(f"Invalid subject period entry '{entry}'")
        try:
            periods = int(count.strip())
        except ValueError:
            raise ValueError(f"Invalid period count in '{entry}'") from None
        if periods < 0:
            raise ValueError(f"Negative period count in '{entry}'")
        result[subject] = periods
    return result
