"""
Score aggregation.

Splits the total marks equally across the criteria, asks the judge about
each one in guide order and sums the value of the criteria earned.
"""

import logging
from decimal import Decimal
from typing import Sequence

from marking_assistant.errors import DivisionByZeroError
from marking_assistant.grading.judge import CriterionJudge
from marking_assistant.models import Criterion, CriterionOutcome

LOG = logging.getLogger(__name__)


class ScoreAggregator:
    """
    Apportions marks across criteria and totals the earned value.

    Every criterion is worth total_marks / len(criteria). Nothing is
    rounded here; rounding is a display concern.
    """

    def aggregate(
        self,
        answer: str,
        criteria: Sequence[Criterion],
        total_marks: Decimal,
        judge: CriterionJudge,
    ) -> tuple[tuple[CriterionOutcome, ...], Decimal]:
        """
        Judge every criterion and total the earned marks.

        Args:
            answer: The student's answer text.
            criteria: Criteria in guide order.
            total_marks: Maximum mark for the question.
            judge: Strategy deciding each criterion.

        Returns:
            Tuple of (outcomes in guide order, earned marks).

        Raises:
            DivisionByZeroError: If there are no criteria.
        """
        if not criteria:
            raise DivisionByZeroError("Cannot apportion marks across zero criteria")

        value = total_marks / len(criteria)

        outcomes = tuple(
            CriterionOutcome(
                criterion=criterion,
                earned=bool(judge.judge(answer, criterion)),
                value=value,
            )
            for criterion in criteria
        )
        earned_marks = sum((o.value for o in outcomes if o.earned), Decimal(0))

        LOG.debug(
            "%s judge earned %d/%d criteria worth %s each",
            judge.name,
            sum(1 for o in outcomes if o.earned),
            len(outcomes),
            value,
        )
        return outcomes, earned_marks
