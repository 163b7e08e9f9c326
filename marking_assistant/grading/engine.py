"""
Grading engine - the core orchestrator.

Runs validation, guide parsing, criterion judging, aggregation and
feedback composition for one request, with a cooperative delay that
stands in for service latency.
"""

import asyncio
import logging
from typing import Sequence

from marking_assistant.config import Settings, get_settings
from marking_assistant.grading.aggregator import ScoreAggregator
from marking_assistant.grading.feedback import FeedbackComposer
from marking_assistant.grading.judge import CriterionJudge, create_judge
from marking_assistant.models import GradingRequest, GradingResult
from marking_assistant.rubric import CriterionParser
from marking_assistant.validator import RequestValidator

LOG = logging.getLogger(__name__)


class GradingEngine:
    """
    Main grading engine.

    Each call to `grade` builds its entities from scratch and shares
    nothing with other calls, so many gradings can run concurrently on
    one engine. Errors from any stage propagate unchanged and no partial
    result is returned.
    """

    def __init__(self, settings: Settings | None = None, judge: CriterionJudge | None = None):
        """
        Initialize the grading engine.

        Args:
            settings: Configuration settings. Uses global settings if not provided.
            judge: Criterion judge. Built from settings if not provided.
        """
        self._settings = settings or get_settings()
        self._judge = judge or create_judge(self._settings)
        self._validator = RequestValidator()
        self._parser = CriterionParser()
        self._aggregator = ScoreAggregator()
        self._composer = FeedbackComposer()

    @property
    def judge(self) -> CriterionJudge:
        return self._judge

    async def grade(self, request: GradingRequest) -> GradingResult:
        """
        Grade a student answer against its marking guide.

        Args:
            request: The raw grading request.

        Returns:
            The GradingResult.

        Raises:
            RequestValidationError: If a request field is missing or malformed.
            EmptyGuideError: If the marking guide has no marking points.
            JudgeError: If the judge cannot reach a verdict.
        """
        validated = self._validator.validate(request)

        # Simulated service latency; cancellable and local to this call.
        await asyncio.sleep(self._settings.simulated_latency_seconds)

        criteria = self._parser.parse(validated.marking_guide)

        if self._judge.blocking:
            outcomes, earned_marks = await asyncio.to_thread(
                self._aggregator.aggregate,
                validated.student_answer,
                criteria,
                validated.total_marks,
                self._judge,
            )
        else:
            outcomes, earned_marks = self._aggregator.aggregate(
                validated.student_answer, criteria, validated.total_marks, self._judge
            )

        percentage = float(earned_marks / validated.total_marks * 100)
        feedback = self._composer.compose(percentage, outcomes)

        LOG.info(
            "Graded answer: %s/%s (%.1f%%) across %d criteria",
            earned_marks,
            validated.total_marks,
            percentage,
            len(outcomes),
        )

        return GradingResult(
            earned_marks=earned_marks,
            total_marks=validated.total_marks,
            percentage=percentage,
            outcomes=outcomes,
            feedback=feedback,
        )

    async def grade_many(
        self, requests: Sequence[GradingRequest]
    ) -> list[GradingResult | Exception]:
        """
        Grade several requests concurrently.

        At most `max_concurrent_gradings` requests are in flight at once.

        Args:
            requests: Requests to grade.

        Returns:
            One entry per request, in input order: the GradingResult, or
            the exception that request raised.
        """
        semaphore = asyncio.Semaphore(self._settings.max_concurrent_gradings)

        async def grade_with_semaphore(request: GradingRequest) -> GradingResult:
            async with semaphore:
                return await self.grade(request)

        results = await asyncio.gather(
            *(grade_with_semaphore(r) for r in requests), return_exceptions=True
        )

        outcomes: list[GradingResult | Exception] = []
        for index, result in enumerate(results):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
            if isinstance(result, Exception):
                LOG.warning("Request %d failed: %s", index, result)
            outcomes.append(result)
        return outcomes

    def grade_sync(self, request: GradingRequest) -> GradingResult:
        """Blocking wrapper around `grade` for callers without an event loop."""
        return asyncio.run(self.grade(request))

    def health_check(self) -> bool:
        """
        Check if the grading engine is operational.

        Returns:
            True if the judge's backing service (if any) is reachable.
        """
        check = getattr(self._judge, "health_check", None)
        return check() if check is not None else True
