"""
Verdict parser for LLM judging output.

Parses the JSON verdict returned by the LLM for a single marking point
and validates that it carries a usable earned/not-earned decision.
"""

import json
import re
from typing import Any

from pydantic import BaseModel, ConfigDict

from marking_assistant.errors import JudgeError


class ScoringError(JudgeError):
    """Raised when a verdict cannot be parsed or validated."""

    def __init__(self, message: str, raw_response: str | None = None):
        self.raw_response = raw_response
        super().__init__(message)


class Verdict(BaseModel):
    """A parsed judgement on one marking point."""

    model_config = ConfigDict(frozen=True)

    earned: bool
    reason: str = ""


class VerdictParser:
    """
    Parses and validates LLM verdict responses.

    Ensures:
    1. Response contains a JSON object
    2. The "earned" field is present
    3. "earned" is a real boolean (or an unambiguous yes/no string)
    """

    _TRUTHY = frozenset(["true", "yes", "earned"])
    _FALSY = frozenset(["false", "no", "not earned"])

    def parse(self, response: str) -> Verdict:
        """
        Parse an LLM response into a Verdict.

        Args:
            response: Raw LLM response (expected JSON).

        Returns:
            Validated Verdict.

        Raises:
            ScoringError: If parsing or validation fails.
        """
        json_str = self._extract_json(response)

        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ScoringError(f"Invalid JSON in response: {e}", raw_response=response) from e

        if not isinstance(data, dict):
            raise ScoringError("Verdict must be a JSON object", raw_response=response)
        if "earned" not in data:
            raise ScoringError("Missing required field: earned", raw_response=response)

        return Verdict(
            earned=self._parse_earned(data["earned"], response),
            reason=str(data.get("reason") or ""),
        )

    def _extract_json(self, response: str) -> str:
        """
        Extract JSON from response, handling markdown code blocks.

        Args:
            response: Raw response text.

        Returns:
            Extracted JSON string.
        """
        json_match = re.search(r"```(?:json)?\s*([\s\S]*?)```", response)
        if json_match:
            return json_match.group(1).strip()

        brace_start = response.find("{")
        if brace_start == -1:
            raise ScoringError("No JSON object found in response", raw_response=response)

        # Find matching closing brace
        depth = 0
        for i, char in enumerate(response[brace_start:], start=brace_start):
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return response[brace_start : i + 1]

        raise ScoringError("Unclosed JSON object in response", raw_response=response)

    def _parse_earned(self, value: Any, raw_response: str) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in self._TRUTHY:
                return True
            if normalized in self._FALSY:
                return False
        raise ScoringError(f"Invalid value for earned: {value!r}", raw_response=raw_response)
