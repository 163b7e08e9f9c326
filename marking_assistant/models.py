"""
Pydantic models for the Marking Assistant.

These models define the schemas for:
- Raw and validated grading requests
- Marking criteria and their judged outcomes
- The final grading result

Every model is frozen: entities are created for a single grading call
and never mutated afterwards.
"""

from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)


def _to_decimal(v: Any) -> Decimal:
    """Convert numeric values to Decimal for precision."""
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))


# ==============================================================================
# Request Models
# ==============================================================================


class GradingRequest(BaseModel):
    """
    The four raw form fields supplied by the caller.

    Fields are unconstrained; RequestValidator checks them in a fixed order.
    """

    model_config = ConfigDict(frozen=True)

    question: str = Field(default="", description="The question being answered")
    total_marks: str = Field(default="", description="Maximum mark, as typed by the user")
    student_answer: str = Field(default="", description="Free-text student answer")
    marking_guide: str = Field(default="", description="Marking points, one per line")


class ValidatedRequest(BaseModel):
    """A grading request whose fields passed validation."""

    model_config = ConfigDict(frozen=True, strict=True)

    question: str = Field(..., min_length=1)
    total_marks: Decimal = Field(..., gt=0)
    student_answer: str = Field(..., min_length=1)
    marking_guide: str = Field(..., min_length=1)

    @field_validator("total_marks", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Decimal:
        return _to_decimal(v)


# ==============================================================================
# Criterion Models
# ==============================================================================


class Criterion(BaseModel):
    """
    A single marking point taken from one line of the marking guide.

    The position records where the line sat among the non-blank guide lines
    and drives the order of the breakdown.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    position: int = Field(..., ge=0, description="Zero-based index among non-blank guide lines")
    description: str = Field(..., min_length=1, description="Trimmed guide line")


class CriterionOutcome(BaseModel):
    """The judged result for one criterion."""

    model_config = ConfigDict(frozen=True, strict=True)

    criterion: Criterion
    earned: bool
    value: Decimal = Field(..., ge=0, description="Marks this criterion is worth")

    @field_validator("value", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Decimal:
        return _to_decimal(v)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def awarded(self) -> Decimal:
        """Marks actually awarded for this criterion."""
        return self.value if self.earned else Decimal(0)


# ==============================================================================
# Grading Result Models
# ==============================================================================


class GradingResult(BaseModel):
    """
    Complete grading result for a student answer.

    Contains the score, the ordered per-criterion breakdown and the feedback text.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    earned_marks: Decimal = Field(..., ge=0)
    total_marks: Decimal = Field(..., gt=0)
    percentage: float = Field(..., ge=0)
    outcomes: tuple[CriterionOutcome, ...] = Field(..., min_length=1)
    feedback: str = Field(..., min_length=1)

    @field_validator("earned_marks", "total_marks", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Decimal:
        return _to_decimal(v)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def earned_count(self) -> int:
        """Number of criteria that were earned."""
        return sum(1 for o in self.outcomes if o.earned)

    @property
    def score_line(self) -> str:
        """Score formatted for display, e.g. '8 / 10'."""
        return f"{_format_marks(self.earned_marks)} / {_format_marks(self.total_marks)}"

    @property
    def percentage_display(self) -> str:
        """Percentage with one decimal place, e.g. '80.0%'."""
        return f"{self.percentage:.1f}%"


def _format_marks(value: Decimal) -> str:
    """Render marks without trailing zeros, at most two decimal places."""
    text = f"{value:.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
