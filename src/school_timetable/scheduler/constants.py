"""Constants for timetable generation."""

from enum import Enum

from ..constants import (
    DEFAULT_PERIOD_LIMIT,
    DEFAULT_SATURDAY_PERIODS,
    DEFAULT_WEEKDAY_PERIODS,
    SIXTH_DAY,
    WEEKDAYS,
    get_active_days,
    get_default_periods,
)


class SubjectKind(str, Enum):
    """Placement category of a subject within a class."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


# Maximum run of back-to-back teaching periods for one teacher
MAX_CONSECUTIVE_PERIODS = 2

# Fraction of the day treated as "early-to-mid" for primary subjects
PRIMARY_WINDOW = 2 / 3

# Subjects preferred for the class teacher's opening period
CORE_SUBJECTS = ["English", "Maths", "Science", "Hindi", "Gujarati"]

# Activity subjects kept apart from each other in the back half of the day
ACTIVITY_SUBJECTS = ["PE", "Computer", "SST"]

# Seed used when reproducible output is requested without an explicit seed
DEFAULT_SEED = 42

# CP-SAT solver time limit in seconds
DEFAULT_TIME_LIMIT = 30

# Objective weights for the CP-SAT generator
SOLVER_WEIGHTS = {
    "placed": 100,
    "anchor": 20,
    "primary_early": 3,
    "secondary_late": 2,
}
