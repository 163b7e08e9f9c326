"""
Grading Engine Module.

Core grading logic: pluggable criterion judges, score aggregation and
feedback composition.
"""

from marking_assistant.grading.aggregator import ScoreAggregator
from marking_assistant.grading.engine import GradingEngine
from marking_assistant.grading.feedback import FeedbackBand, FeedbackComposer
from marking_assistant.grading.judge import (
    CriterionJudge,
    KeywordJudge,
    LLMJudge,
    RandomJudge,
    create_judge,
)
from marking_assistant.grading.llm_client import LLMClient, LLMError
from marking_assistant.grading.prompt_builder import PromptBuilder
from marking_assistant.grading.scorer import ScoringError, Verdict, VerdictParser

__all__ = [
    "CriterionJudge",
    "FeedbackBand",
    "FeedbackComposer",
    "GradingEngine",
    "KeywordJudge",
    "LLMClient",
    "LLMError",
    "LLMJudge",
    "PromptBuilder",
    "RandomJudge",
    "ScoreAggregator",
    "ScoringError",
    "Verdict",
    "VerdictParser",
    "create_judge",
]
