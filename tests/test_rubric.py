"""
Unit tests for marking guide parsing and request validation.

Tests the criterion parser with various guide layouts and edge cases,
and the request validator's first-failure ordering.
"""

from decimal import Decimal

import pytest

from marking_assistant.errors import EmptyGuideError, RequestValidationError
from marking_assistant.models import GradingRequest
from marking_assistant.rubric import CriterionParser
from marking_assistant.validator import RequestValidator


class TestCriterionParser:
    """Tests for CriterionParser."""

    def test_parse_one_point_per_line(self, sample_guide: str) -> None:
        """Test each line becomes a criterion in order."""
        criteria = CriterionParser().parse(sample_guide)

        assert [c.description for c in criteria] == [
            "Correct definition",
            "Clear explanation",
            "Proper examples",
            "Logical structure",
            "Proper conclusion",
        ]
        assert [c.position for c in criteria] == [0, 1, 2, 3, 4]

    def test_parse_skips_blank_lines_and_trims(self) -> None:
        """Test blank lines are dropped and positions stay contiguous."""
        content = "\n  First point  \n\n   \n\tSecond point\n\n"
        criteria = CriterionParser().parse(content)

        assert len(criteria) == 2
        assert criteria[0].description == "First point"
        assert criteria[1].description == "Second point"
        assert criteria[1].position == 1

    def test_parse_windows_and_old_mac_line_breaks(self) -> None:
        """Test CRLF and CR are treated as line breaks."""
        criteria = CriterionParser().parse("One\r\nTwo\rThree")

        assert [c.description for c in criteria] == ["One", "Two", "Three"]

    def test_parse_keeps_duplicate_lines(self) -> None:
        """Test repeated marking points are separate criteria."""
        criteria = CriterionParser().parse("Cites a source\nCites a source")

        assert len(criteria) == 2
        assert criteria[0].position != criteria[1].position

    def test_parse_empty_content(self) -> None:
        """Test parsing empty content raises error."""
        with pytest.raises(EmptyGuideError):
            CriterionParser().parse("")

    def test_parse_whitespace_only(self) -> None:
        """Test parsing whitespace-only content raises error."""
        with pytest.raises(EmptyGuideError, match="no marking points"):
            CriterionParser().parse("   \n\t\n   ")

    def test_parse_is_idempotent(self, sample_guide: str) -> None:
        """Test parsing the same guide twice yields identical criteria."""
        parser = CriterionParser()

        assert parser.parse(sample_guide) == parser.parse(sample_guide)


class TestRequestValidator:
    """Tests for RequestValidator."""

    def test_valid_request(self, sample_request: GradingRequest) -> None:
        """Test a complete request validates and parses total marks."""
        validated = RequestValidator().validate(sample_request)

        assert validated.question == "Explain X"
        assert validated.total_marks == Decimal("10")

    def test_trims_fields(self) -> None:
        """Test surrounding whitespace is removed."""
        request = GradingRequest(
            question="  Explain X \n",
            total_marks=" 7.5 ",
            student_answer=" answer ",
            marking_guide="\npoint\n",
        )
        validated = RequestValidator().validate(request)

        assert validated.question == "Explain X"
        assert validated.total_marks == Decimal("7.5")
        assert validated.student_answer == "answer"
        assert validated.marking_guide == "point"

    def test_first_failure_is_question(self, sample_guide: str) -> None:
        """Test missing question is reported before missing answer."""
        request = GradingRequest(
            question="",
            total_marks="10",
            student_answer="   ",
            marking_guide=sample_guide,
        )

        with pytest.raises(RequestValidationError) as exc_info:
            RequestValidator().validate(request)

        assert exc_info.value.field == "question"
        assert exc_info.value.message == "Question is required"

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"total_marks": ""}, "total_marks"),
            ({"student_answer": "\t"}, "student_answer"),
            ({"marking_guide": " \n "}, "marking_guide"),
            ({"total_marks": "", "marking_guide": ""}, "total_marks"),
        ],
    )
    def test_reports_first_missing_field(
        self, sample_request: GradingRequest, overrides: dict[str, str], field: str
    ) -> None:
        """Test the reported field follows the fixed check order."""
        request = sample_request.model_copy(update=overrides)

        with pytest.raises(RequestValidationError) as exc_info:
            RequestValidator().validate(request)

        assert exc_info.value.field == field

    @pytest.mark.parametrize("value", ["ten", "1O", "nan", "Infinity", "10 marks", "1_0", "1_000"])
    def test_rejects_non_numeric_total_marks(self, sample_request: GradingRequest, value: str) -> None:
        """Test total marks must parse as a finite number."""
        request = sample_request.model_copy(update={"total_marks": value})

        with pytest.raises(RequestValidationError, match="must be a number") as exc_info:
            RequestValidator().validate(request)

        assert exc_info.value.field == "total_marks"

    @pytest.mark.parametrize("value", ["0", "-5", "0.0"])
    def test_rejects_non_positive_total_marks(self, sample_request: GradingRequest, value: str) -> None:
        """Test total marks must be positive."""
        request = sample_request.model_copy(update={"total_marks": value})

        with pytest.raises(RequestValidationError, match="positive"):
            RequestValidator().validate(request)

    def test_bad_total_marks_reported_before_missing_answer(self, sample_request: GradingRequest) -> None:
        """Test a malformed total beats a later missing field."""
        request = sample_request.model_copy(update={"total_marks": "abc", "student_answer": ""})

        with pytest.raises(RequestValidationError) as exc_info:
            RequestValidator().validate(request)

        assert exc_info.value.field == "total_marks"
