"""
smashlog Analysis - aggregation of parsed battle logs.

This module contains:
- analyzer: category counts and action-code frequency tables
"""

from smashlog.analysis.analyzer import analyze, count_action_codes, count_categories

__all__: list[str] = [
    "analyze",
    "count_action_codes",
    "count_categories",
]
