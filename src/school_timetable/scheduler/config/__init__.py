"""Configuration loaders for the scheduler."""

from .loader import ConfigLoader
from .settings import SchedulerSettings, load_settings

__all__ = [
    "ConfigLoader",
    "SchedulerSettings",
    "load_settings",
]
