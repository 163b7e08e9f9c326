"""
Request validation module.

Checks the four raw form fields of a grading request before any grading
work starts. Validation stops at the first violation and reports only that
field, in the fixed order the form presents them.
"""

import logging
from decimal import Decimal, InvalidOperation

from marking_assistant.errors import RequestValidationError
from marking_assistant.models import GradingRequest, ValidatedRequest

LOG = logging.getLogger(__name__)


class RequestValidator:
    """
    Validates grading requests field by field.

    Checks, in order:
    1. question is present
    2. total_marks is present, numeric and positive
    3. student_answer is present
    4. marking_guide is present
    """

    # Field order matters: the first failing field is the one reported.
    FIELD_LABELS: tuple[tuple[str, str], ...] = (
        ("question", "Question"),
        ("total_marks", "Total marks"),
        ("student_answer", "Student answer"),
        ("marking_guide", "Marking guide"),
    )

    def validate(self, request: GradingRequest) -> ValidatedRequest:
        """
        Validate a grading request.

        Args:
            request: The raw request from the caller.

        Returns:
            ValidatedRequest with trimmed text and parsed total marks.

        Raises:
            RequestValidationError: On the first missing or malformed field.
        """
        values: dict[str, str | Decimal] = {}

        for field, label in self.FIELD_LABELS:
            value = (getattr(request, field) or "").strip()
            if not value:
                raise self._fail(field, f"{label} is required")
            values[field] = self._parse_total_marks(value) if field == "total_marks" else value

        return ValidatedRequest(**values)

    def _parse_total_marks(self, value: str) -> Decimal:
        """Parse the total marks field as a positive finite number."""
        # Decimal accepts digit-group underscores ("1_0"); a typed mark does not
        if "_" in value:
            raise self._fail("total_marks", "Total marks must be a number")
        try:
            marks = Decimal(value)
        except InvalidOperation as e:
            raise self._fail("total_marks", "Total marks must be a number") from e

        if not marks.is_finite():
            raise self._fail("total_marks", "Total marks must be a number")
        if marks <= 0:
            raise self._fail("total_marks", "Total marks must be a positive number")
        return marks

    @staticmethod
    def _fail(field: str, message: str) -> RequestValidationError:
        LOG.debug("Rejected request field %s: %s", field, message)
        return RequestValidationError(field, message)
