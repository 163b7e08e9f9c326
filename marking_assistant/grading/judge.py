"""
Criterion judges.

A judge decides whether one marking point is satisfied by a student
answer. The aggregator only ever talks to the CriterionJudge interface,
so strategies can be swapped without touching scoring or feedback.
"""

import logging
import random
import re
from abc import ABC, abstractmethod
from typing import ClassVar

from marking_assistant.config import JudgeStrategy, Settings, get_settings
from marking_assistant.grading.llm_client import LLMClient
from marking_assistant.grading.prompt_builder import PromptBuilder
from marking_assistant.grading.scorer import VerdictParser
from marking_assistant.models import Criterion

LOG = logging.getLogger(__name__)


class CriterionJudge(ABC):
    """
    Abstract base class for criterion judges.

    Implementations must not mutate the answer or the criterion.
    Judges that block on I/O set `blocking` so the engine can run
    them off the event loop.
    """

    name: ClassVar[str] = "judge"
    blocking: ClassVar[bool] = False

    @abstractmethod
    def judge(self, answer: str, criterion: Criterion) -> bool:
        """
        Decide whether the answer satisfies the criterion.

        Args:
            answer: The student's answer text.
            criterion: The marking point to check.

        Returns:
            True if the criterion is earned.
        """
        ...


class RandomJudge(CriterionJudge):
    """
    Placeholder judge that ignores its inputs.

    Awards each criterion independently with a fixed probability.
    Unseeded by default, so results are not reproducible.
    """

    name = "random"

    def __init__(self, pass_probability: float = 0.7, seed: int | None = None):
        if not 0.0 <= pass_probability <= 1.0:
            raise ValueError(f"pass_probability must be within [0, 1], got {pass_probability}")
        self._pass_probability = pass_probability
        self._rng = random.Random(seed)

    def judge(self, answer: str, criterion: Criterion) -> bool:
        return self._rng.random() < self._pass_probability


class KeywordJudge(CriterionJudge):
    """
    Deterministic judge based on word overlap.

    A criterion is earned when enough of its content words (longer than
    three characters) appear in the answer, ignoring case.
    """

    name = "keyword"

    WORD_PATTERN = re.compile(r"\w+")
    MIN_WORD_LENGTH = 4

    def __init__(self, threshold: float = 0.5):
        if not 0.0 < threshold <= 1.0:
            raise ValueError(f"threshold must be within (0, 1], got {threshold}")
        self._threshold = threshold

    def judge(self, answer: str, criterion: Criterion) -> bool:
        keywords = self.keywords(criterion.description)
        if not keywords:
            # Nothing to look for, e.g. "Use of SI"
            return criterion.description.lower() in answer.lower()

        answer_words = set(self.WORD_PATTERN.findall(answer.lower()))
        hits = sum(1 for word in keywords if word in answer_words)
        return hits / len(keywords) >= self._threshold

    def keywords(self, text: str) -> frozenset[str]:
        """Return the content words of a marking point."""
        return frozenset(
            word for word in self.WORD_PATTERN.findall(text.lower()) if len(word) >= self.MIN_WORD_LENGTH
        )


class LLMJudge(CriterionJudge):
    """
    Judge that asks a chat model for a verdict on each criterion.

    Makes one blocking API call per criterion.
    """

    name = "llm"
    blocking = True

    def __init__(self, settings: Settings | None = None, client: LLMClient | None = None):
        self._settings = settings or get_settings()
        self._client = client or LLMClient(self._settings)
        self._parser = VerdictParser()

    def judge(self, answer: str, criterion: Criterion) -> bool:
        """
        Raises:
            LLMError: If the API call fails.
            ScoringError: If the verdict cannot be parsed.
        """
        raw_response = self._client.generate(
            system_prompt=PromptBuilder.get_system_prompt(),
            user_prompt=PromptBuilder.build_judging_prompt(answer, criterion),
            temperature=self._settings.llm_temperature,
        )
        verdict = self._parser.parse(raw_response)
        LOG.debug("LLM verdict for criterion %d: %s (%s)", criterion.position, verdict.earned, verdict.reason)
        return verdict.earned

    def health_check(self) -> bool:
        return self._client.health_check()


def create_judge(settings: Settings | None = None, strategy: JudgeStrategy | None = None) -> CriterionJudge:
    """
    Create the judge selected by configuration.

    Args:
        settings: Configuration settings. Uses global settings if not provided.
        strategy: Override the configured strategy.

    Returns:
        A ready-to-use CriterionJudge.
    """
    settings = settings or get_settings()
    strategy = strategy or settings.judge_strategy

    if strategy == JudgeStrategy.KEYWORD:
        return KeywordJudge(threshold=settings.keyword_match_threshold)
    if strategy == JudgeStrategy.LLM:
        return LLMJudge(settings)
    return RandomJudge(pass_probability=settings.judge_pass_probability, seed=settings.judge_seed)
