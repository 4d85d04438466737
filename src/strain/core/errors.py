"""
Error taxonomy for tracker operations.

Every operation validates before it writes, so any of these leaves the
AppState exactly as it was.
"""


class StrainError(Exception):
    """Base class for all recoverable tracker errors."""

    pass


class NotFoundError(StrainError):
    """Referenced day, exercise, best lift or active session does not exist."""

    pass


class EmptyDayError(StrainError):
    """A day with no exercises cannot start a workout."""

    pass


class InvalidInputError(StrainError):
    """Missing or non-positive weight/reps, or a blank name."""

    pass


class NothingToUndoError(StrainError):
    """The current exercise has no logged sets."""

    pass


class CapacityError(StrainError):
    """The best-lift list is already full."""

    pass


class DuplicateError(StrainError):
    """The exercise is already tracked as a best lift."""

    pass


class UnknownExerciseError(StrainError):
    """The name does not match any exercise across all days."""

    pass
