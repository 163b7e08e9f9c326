"""
Exception hierarchy for the Marking Assistant.

User-correctable problems (bad request fields, an empty marking guide)
are kept apart from invariant violations and judge failures so callers
can decide what to show and what to treat as a bug.
"""


class MarkingError(Exception):
    """Base class for all marking errors."""


class RequestValidationError(MarkingError):
    """
    Raised when a grading request field is missing or malformed.

    Only the first offending field is reported.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class EmptyGuideError(MarkingError):
    """Raised when a marking guide yields no usable criteria."""

    def __init__(self, message: str = "Marking guide contains no marking points"):
        super().__init__(message)


class DivisionByZeroError(MarkingError, ZeroDivisionError):
    """Raised when marks are apportioned across zero criteria."""


class JudgeError(MarkingError):
    """Raised when a judge strategy cannot reach a verdict."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)
