"""
Battle log aggregation.

Contains:
- count_categories: Attack / Shield / Dodge counters
- count_action_codes: per-code frequency table
- analyze: builds the AnalysisResult for a parsed log
"""

import logging
from collections import Counter
from collections.abc import Iterable

from smashlog.core.constants import ActionCategory
from smashlog.core.models import (
    ActionFrequency,
    ActionRecord,
    AnalysisResult,
    BattleLog,
    CategoryCounts,
)

logger = logging.getLogger(__name__)


def count_categories(actions: Iterable[ActionRecord]) -> CategoryCounts:
    """Count actions per category using each record's stored category."""
    tally = Counter(action.category for action in actions)
    return CategoryCounts(
        attack=tally[ActionCategory.ATTACK],
        shield=tally[ActionCategory.SHIELD],
        dodge=tally[ActionCategory.DODGE],
    )


def count_action_codes(actions: Iterable[ActionRecord]) -> tuple[ActionFrequency, ...]:
    """
    Count occurrences of each raw action code.

    Returns:
        One entry per distinct code, sorted by count descending and then by
        code ascending, independent of input order.
    """
    tally = Counter(action.raw_code for action in actions)
    ordered = sorted(tally.items(), key=lambda item: (-item[1], item[0]))
    return tuple(ActionFrequency(raw_code=code, count=count) for code, count in ordered)


def analyze(battle_log: BattleLog) -> AnalysisResult:
    """
    Aggregate a parsed battle log.

    Args:
        battle_log: Log produced by the parser (non-empty)

    Returns:
        AnalysisResult with category counts and the code frequency table
    """
    counts = count_categories(battle_log.actions)
    frequencies = count_action_codes(battle_log.actions)

    logger.debug(
        f"Analyzed {counts.total} actions: attack={counts.attack}, "
        f"shield={counts.shield}, dodge={counts.dodge}, "
        f"{len(frequencies)} distinct codes"
    )

    return AnalysisResult(
        header=battle_log.header,
        counts=counts,
        frequencies=frequencies,
    )
