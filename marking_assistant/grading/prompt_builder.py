"""
Prompt builder for criterion judging.

Constructs prompts that ask a chat model for a single yes/no verdict
on one marking point, with a fixed JSON output format.
"""

from marking_assistant.models import Criterion


class PromptBuilder:
    """
    Builds judging prompts for one criterion at a time.

    The prompts are designed to:
    1. Keep the model focused on a single marking point
    2. Ignore style unless the marking point asks about it
    3. Produce a consistent JSON verdict
    """

    SYSTEM_PROMPT = """You are an impartial examiner checking a student answer against ONE marking point.

RULES:
1. Award the marking point only if the answer clearly satisfies it. Do not infer intent.
2. Judge the content of the answer, not its length, tone or formatting, unless the marking point says otherwise.
3. Identical answers MUST receive identical verdicts.

OUTPUT RULES:
- Respond with valid JSON only, in the exact format requested.
- Do not add any text before or after the JSON."""

    @staticmethod
    def build_judging_prompt(student_answer: str, criterion: Criterion) -> str:
        """
        Build the user prompt for judging a single criterion.

        Args:
            student_answer: The student's answer text.
            criterion: The marking point to check.

        Returns:
            The formatted user prompt.
        """
        return f"""JUDGING TASK

MARKING POINT {criterion.position + 1}:
{criterion.description}

STUDENT ANSWER:
---BEGIN ANSWER---
{student_answer}
---END ANSWER---

OUTPUT FORMAT (respond with ONLY this JSON, no other text):
{{
  "earned": <true or false>,
  "reason": "<one sentence citing the answer>"
}}"""

    @staticmethod
    def get_system_prompt() -> str:
        """Get the system prompt for criterion judging."""
        return PromptBuilder.SYSTEM_PROMPT
