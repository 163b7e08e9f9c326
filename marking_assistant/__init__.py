"""
Marking Assistant - automated answer grading against a marking guide.

This package scores a free-text student answer against a marking guide
written one criterion per line, and produces a per-criterion breakdown
together with a structured feedback report.
"""

__version__ = "1.0.0"
__author__ = "Marking Assistant Team"
