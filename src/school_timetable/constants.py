"""Constants for teacher rosters, class configurations and import files."""

# Working days in order
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

# Optional sixth day, only active when a class opts into it
SIXTH_DAY = "Saturday"

# Period shape defaults
DEFAULT_WEEKDAY_PERIODS = 7
DEFAULT_SATURDAY_PERIODS = 4

# Weekly cap used when a teacher has no period limit of their own
DEFAULT_PERIOD_LIMIT = 35

# Allowed range for an explicit period limit
MIN_PERIOD_LIMIT = 1
MAX_PERIOD_LIMIT = 50

# Bulk teacher import columns (normalized: lowercase, no whitespace)
IMPORT_REQUIRED_COLUMNS = ["name", "subjects"]
IMPORT_OPTIONAL_COLUMNS = [
    "id",
    "contactinfo",
    "periodlimit",
    "isclassteacher",
    "classteacherof",
    "subjectperiods",
    "mainsubjects",
    "extrasubjects",
]

# Values accepted as "true" in boolean import columns
TRUTHY_VALUES = ("true", "yes", "y", "1")

IMPORT_TEMPLATE_ROWS = [
    {
        "name": "John Smith",
        "subjects": "Maths,Science",
        "contactinfo": "john.smith@school.edu",
        "periodlimit": 35,
        "isclassteacher": "true",
        "classteacherof": "10A",
        "subjectperiods": "Maths:5,Science:3",
    },
    {
        "name": "Jane Doe",
        "subjects": "English,Hindi",
        "contactinfo": "jane.doe@school.edu",
        "periodlimit": 40,
        "isclassteacher": "false",
        "classteacherof": "",
        "subjectperiods": "English:4,Hindi:4",
    },
]


def get_active_days(include_saturday: bool) -> list[str]:
    """Get the ordered day names for a class."""
    if include_saturday:
        return WEEKDAYS + [SIXTH_DAY]
    return list(WEEKDAYS)


def get_default_periods(day: str) -> int:
    """Get the fallback period count for a day no class defines."""
    return DEFAULT_SATURDAY_PERIODS if day == SIXTH_DAY else DEFAULT_WEEKDAY_PERIODS
