"""Custom exceptions for the timetable generator."""


class TimetableError(Exception):
    """Base exception for timetable errors."""

    pass


class InvalidConfigError(TimetableError):
    """Generation input is structurally malformed.

    Raised before any scheduling starts, so no partial state is returned.
    """

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        message = f"Invalid timetable input ({len(self.problems)} problem(s))"
        if self.problems:
            message += ": " + "; ".join(self.problems)
        super().__init__(message)


class TeacherImportError(TimetableError):
    """A teacher import file could not be read."""

    def __init__(self, message: str, file_path: str | None = None):
        self.file_path = file_path
        location = f" in '{file_path}'" if file_path else ""
        super().__init__(f"Teacher import failed{location}: {message}")


class HistoryNotFoundError(TimetableError):
    """No saved timetable with the given id."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Timetable '{entry_id}' not found in history")


class SolverError(TimetableError):
    """The constraint solver produced no usable schedule."""

    def __init__(self, status: str, details: str = ""):
        self.status = status
        message = f"Solver finished without a schedule (status: {status})"
        if details:
            message += f". {details}"
        super().__init__(message)
