"""
Feedback composition.

Builds the narrative feedback report from the percentage score and the
per-criterion outcomes. Output is a pure function of the inputs.
"""

from enum import Enum
from typing import Sequence

from marking_assistant.models import CriterionOutcome


class FeedbackBand(str, Enum):
    """Qualitative tier for a percentage score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_IMPROVEMENT = "needs_improvement"


class FeedbackComposer:
    """
    Composes feedback text for a graded answer.

    The report has an opening assessment chosen by score band, a
    Strengths section, an Areas for Improvement section and a fixed
    Recommendations block. Empty sections are left out entirely.
    """

    # Lower bounds, highest first; a score falls in the first band it reaches.
    BAND_THRESHOLDS: tuple[tuple[float, FeedbackBand], ...] = (
        (85.0, FeedbackBand.EXCELLENT),
        (70.0, FeedbackBand.GOOD),
        (50.0, FeedbackBand.FAIR),
    )

    OPENINGS: dict[FeedbackBand, str] = {
        FeedbackBand.EXCELLENT: (
            "Excellent work! Your response demonstrates comprehensive understanding of the topic."
        ),
        FeedbackBand.GOOD: (
            "Good effort! Your response shows solid understanding with some room for improvement."
        ),
        FeedbackBand.FAIR: (
            "Fair attempt. Your response demonstrates basic understanding but needs more development."
        ),
        FeedbackBand.NEEDS_IMPROVEMENT: (
            "Your response needs significant improvement. Please review the topic carefully."
        ),
    }

    RECOMMENDATIONS: tuple[str, ...] = (
        "Review the marking points you missed above.",
        "Provide more specific examples to support your answers.",
        "Ensure your response directly addresses each marking criterion.",
    )

    STRENGTH_BULLET = "✓"
    WEAKNESS_BULLET = "•"

    @classmethod
    def band_for(cls, percentage: float) -> FeedbackBand:
        """Map a percentage to its feedback band."""
        for lower_bound, band in cls.BAND_THRESHOLDS:
            if percentage >= lower_bound:
                return band
        return FeedbackBand.NEEDS_IMPROVEMENT

    def compose(self, percentage: float, outcomes: Sequence[CriterionOutcome]) -> str:
        """
        Compose the feedback report.

        Args:
            percentage: Overall score as a percentage.
            outcomes: Per-criterion outcomes in guide order.

        Returns:
            Feedback text with sections separated by blank lines.
        """
        sections = [
            "Overall Assessment:\n\n" + self.OPENINGS[self.band_for(percentage)],
        ]

        strengths = [o.criterion.description for o in outcomes if o.earned]
        if strengths:
            sections.append(self._section("Strengths", self.STRENGTH_BULLET, strengths))

        weaknesses = [o.criterion.description for o in outcomes if not o.earned]
        if weaknesses:
            sections.append(self._section("Areas for Improvement", self.WEAKNESS_BULLET, weaknesses))

        sections.append(self._section("Recommendations", self.WEAKNESS_BULLET, self.RECOMMENDATIONS))

        return "\n\n".join(sections)

    @staticmethod
    def _section(heading: str, bullet: str, items: Sequence[str]) -> str:
        return f"{heading}:\n" + "\n".join(f"{bullet} {item}" for item in items)
