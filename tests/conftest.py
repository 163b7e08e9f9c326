"""
Pytest configuration and fixtures.

Provides common test fixtures for all test modules.
"""

import json
from decimal import Decimal
from typing import Mapping
from unittest.mock import MagicMock

import pytest

from marking_assistant.config import JudgeStrategy, Settings
from marking_assistant.grading.judge import CriterionJudge
from marking_assistant.models import Criterion, CriterionOutcome, GradingRequest


# ==============================================================================
# Judge Fakes
# ==============================================================================


class FixedJudge(CriterionJudge):
    """Table-driven judge: looks each criterion description up in a mapping."""

    name = "fixed"

    def __init__(self, verdicts: Mapping[str, bool], default: bool = False):
        self.verdicts = dict(verdicts)
        self.default = default
        self.calls: list[tuple[str, Criterion]] = []

    def judge(self, answer: str, criterion: Criterion) -> bool:
        self.calls.append((answer, criterion))
        return self.verdicts.get(criterion.description, self.default)


class ConstantJudge(CriterionJudge):
    """Judge that returns the same verdict for every criterion."""

    name = "constant"

    def __init__(self, verdict: bool):
        self.verdict = verdict

    def judge(self, answer: str, criterion: Criterion) -> bool:
        return self.verdict


# ==============================================================================
# Marking Guide Fixtures
# ==============================================================================


GUIDE_LINES = (
    "Correct definition",
    "Clear explanation",
    "Proper examples",
    "Logical structure",
    "Proper conclusion",
)


@pytest.fixture
def sample_guide() -> str:
    """Five-point marking guide."""
    return "\n".join(GUIDE_LINES)


@pytest.fixture
def sample_criteria() -> tuple[Criterion, ...]:
    """Criteria matching the sample guide."""
    return tuple(Criterion(position=i, description=line) for i, line in enumerate(GUIDE_LINES))


@pytest.fixture
def sample_student_answer() -> str:
    """Sample student answer text."""
    return (
        "X is the rate at which a quantity changes over time. For example, speed is the "
        "rate of change of distance. The explanation follows a logical order from the "
        "definition to the examples."
    )


@pytest.fixture
def sample_request(sample_guide: str, sample_student_answer: str) -> GradingRequest:
    """A complete, valid grading request."""
    return GradingRequest(
        question="Explain X",
        total_marks="10",
        student_answer=sample_student_answer,
        marking_guide=sample_guide,
    )


# ==============================================================================
# Outcome Fixtures
# ==============================================================================


def make_outcomes(verdicts: list[bool], value: Decimal = Decimal("2")) -> tuple[CriterionOutcome, ...]:
    """Build outcomes for the sample guide lines with the given verdicts."""
    return tuple(
        CriterionOutcome(
            criterion=Criterion(position=i, description=GUIDE_LINES[i]),
            earned=earned,
            value=value,
        )
        for i, earned in enumerate(verdicts)
    )


# ==============================================================================
# Judge Fixtures
# ==============================================================================


@pytest.fixture
def four_of_five_judge() -> FixedJudge:
    """Judge that awards every sample criterion except 'Proper examples'."""
    return FixedJudge({line: line != "Proper examples" for line in GUIDE_LINES})


@pytest.fixture
def all_earned_judge() -> ConstantJudge:
    return ConstantJudge(True)


@pytest.fixture
def none_earned_judge() -> ConstantJudge:
    return ConstantJudge(False)


# ==============================================================================
# Settings Fixtures
# ==============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with no latency and no API access."""
    return Settings(
        judge_strategy=JudgeStrategy.RANDOM,
        judge_pass_probability=0.7,
        judge_seed=1234,
        keyword_match_threshold=0.5,
        simulated_latency_seconds=0.0,
        max_concurrent_gradings=2,
        llm_api_key="test-api-key-for-testing",
        llm_base_url="https://test.api.local",
        llm_model="test-model",
        log_level="WARNING",
    )


# ==============================================================================
# LLM Fixtures
# ==============================================================================


@pytest.fixture
def earned_llm_response() -> str:
    """LLM verdict awarding the criterion."""
    return json.dumps({"earned": True, "reason": "The answer defines X as a rate of change."})


@pytest.fixture
def mock_llm_client(earned_llm_response: str) -> MagicMock:
    """Mock LLM client to avoid actual API calls."""
    client = MagicMock()
    client.generate.return_value = earned_llm_response
    client.health_check.return_value = True
    return client
