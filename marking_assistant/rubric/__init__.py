"""
Marking Guide Module.

Provides parsing of marking guides into ordered criteria.
"""

from marking_assistant.errors import EmptyGuideError
from marking_assistant.rubric.parser import CriterionParser

__all__ = [
    "CriterionParser",
    "EmptyGuideError",
]
