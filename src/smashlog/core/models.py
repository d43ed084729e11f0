"""
Data Models for Battle Log Analysis

Immutable dataclasses passed between the parser, the analyzer and the
presentation layer:
- ActionRecord / PlayerHeader / BattleLog: parser output
- CategoryCounts / ActionFrequency / AnalysisResult: analyzer output
"""

from dataclasses import dataclass

from smashlog.core.constants import ActionCategory

# =============================================================================
# Parsed Log
# =============================================================================


@dataclass(frozen=True)
class ActionRecord:
    """One logged action: when it happened and what it was."""

    timestamp: float  # seconds; monotonicity is not enforced
    category: ActionCategory
    raw_code: str  # verbatim action code from the log


@dataclass(frozen=True)
class PlayerHeader:
    """Player identity from the first line of the log."""

    student_id: str
    match_number: int


@dataclass(frozen=True)
class BattleLog:
    """A parsed log: one header plus its actions in file order.

    A successfully parsed log always has at least one action.
    """

    header: PlayerHeader
    actions: tuple[ActionRecord, ...]

    def __len__(self) -> int:
        return len(self.actions)


# =============================================================================
# Analysis Results
# =============================================================================


@dataclass(frozen=True)
class CategoryCounts:
    """Per-category action counts with derived totals and ratios."""

    attack: int = 0
    shield: int = 0
    dodge: int = 0

    @property
    def total(self) -> int:
        return self.attack + self.shield + self.dodge

    def count(self, category: ActionCategory) -> int:
        """Count for a single category."""
        if category is ActionCategory.ATTACK:
            return self.attack
        if category is ActionCategory.SHIELD:
            return self.shield
        return self.dodge

    def ratio(self, category: ActionCategory) -> float:
        """Share of a category as a percentage (0.0 when there are no actions)."""
        total = self.total
        if total == 0:
            return 0.0
        return self.count(category) / total * 100

    @property
    def attack_ratio(self) -> float:
        return self.ratio(ActionCategory.ATTACK)

    @property
    def shield_ratio(self) -> float:
        return self.ratio(ActionCategory.SHIELD)

    @property
    def dodge_ratio(self) -> float:
        return self.ratio(ActionCategory.DODGE)

    @property
    def most_frequent(self) -> ActionCategory:
        """Category with the highest ratio.

        Ties resolve Attack before Shield before Dodge.
        """
        attack = self.attack_ratio
        shield = self.shield_ratio
        dodge = self.dodge_ratio

        if attack >= shield and attack >= dodge:
            return ActionCategory.ATTACK
        if shield >= dodge:
            return ActionCategory.SHIELD
        return ActionCategory.DODGE


@dataclass(frozen=True)
class ActionFrequency:
    """Occurrence count for one raw action code."""

    raw_code: str
    count: int


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal output of the analyzer, consumed by reports and exports."""

    header: PlayerHeader
    counts: CategoryCounts
    # sorted by count descending, then raw_code ascending
    frequencies: tuple[ActionFrequency, ...]

    @property
    def total_actions(self) -> int:
        return self.counts.total

    @property
    def top_action(self) -> ActionFrequency | None:
        """Most frequent raw code, or None if nothing was counted."""
        if not self.frequencies:
            return None
        return self.frequencies[0]
