"""
smashlog Core - Foundation modules for battle log parsing.

This module contains the fundamental components:
- constants: Action categories and the fixed action-code tables
- taxonomy: Code classification and display names
- errors: Battle log error taxonomy
- models: Data contracts passed between parser, analyzer and reports
- parser: Battle log file parsing
- config: Application configuration management
"""

from smashlog.core.constants import (
    ATTACK_ACTIONS,
    DODGE_ACTIONS,
    SHIELD_ACTIONS,
    ActionCategory,
)
from smashlog.core.errors import (
    BattleLogError,
    EmptyDataError,
    FieldParseError,
    InvalidFormatError,
    LogIOError,
)
from smashlog.core.models import (
    ActionFrequency,
    ActionRecord,
    AnalysisResult,
    BattleLog,
    CategoryCounts,
    PlayerHeader,
)
from smashlog.core.parser import (
    BattleLogParser,
    parse_battle_log,
    parse_lines,
    read_battle_log,
)
from smashlog.core.taxonomy import classify, display_name, is_known_code

__all__ = [
    # Enums
    "ActionCategory",
    # Tables
    "ATTACK_ACTIONS",
    "DODGE_ACTIONS",
    "SHIELD_ACTIONS",
    # Taxonomy
    "classify",
    "display_name",
    "is_known_code",
    # Errors
    "BattleLogError",
    "EmptyDataError",
    "FieldParseError",
    "InvalidFormatError",
    "LogIOError",
    # Models
    "ActionFrequency",
    "ActionRecord",
    "AnalysisResult",
    "BattleLog",
    "CategoryCounts",
    "PlayerHeader",
    # Parser
    "BattleLogParser",
    "parse_battle_log",
    "parse_lines",
    "read_battle_log",
]
