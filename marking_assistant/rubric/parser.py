"""
Marking guide parser module.

Turns a marking guide, written one marking point per line, into an
ordered sequence of Criterion models.
"""

import logging
import re

from marking_assistant.errors import EmptyGuideError
from marking_assistant.models import Criterion

LOG = logging.getLogger(__name__)


class CriterionParser:
    """
    Parses marking guide text into criteria.

    Every non-blank line becomes one criterion. Lines are trimmed and
    numbered from zero in the order they appear; all criteria carry
    equal weight.
    """

    LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

    def parse(self, marking_guide: str) -> tuple[Criterion, ...]:
        """
        Parse a marking guide into criteria.

        Args:
            marking_guide: Raw guide text, one marking point per line.

        Returns:
            Tuple of criteria in guide order.

        Raises:
            EmptyGuideError: If every line is blank.
        """
        lines = (line.strip() for line in self.LINE_BREAK_PATTERN.split(marking_guide or ""))
        criteria = tuple(
            Criterion(position=position, description=line)
            for position, line in enumerate(line for line in lines if line)
        )

        if not criteria:
            raise EmptyGuideError()

        LOG.debug("Parsed %d criteria from marking guide", len(criteria))
        return criteria
