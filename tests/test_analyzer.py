"""Tests for aggregation and the result models."""

import pytest

from smashlog.analysis.analyzer import analyze, count_action_codes, count_categories
from smashlog.core.constants import ActionCategory
from smashlog.core.models import (
    ActionFrequency,
    ActionRecord,
    AnalysisResult,
    BattleLog,
    CategoryCounts,
    PlayerHeader,
)
from smashlog.core.parser import parse_lines
from smashlog.core.taxonomy import classify


def _record(code: str, timestamp: float = 0.0) -> ActionRecord:
    return ActionRecord(timestamp=timestamp, category=classify(code), raw_code=code)


def _log(*codes: str) -> BattleLog:
    return BattleLog(
        header=PlayerHeader(student_id="tester", match_number=1),
        actions=tuple(_record(code, float(i)) for i, code in enumerate(codes)),
    )


class TestCategoryCounts:
    """Tests for CategoryCounts derived values."""

    def test_total(self):
        """Test total is the sum of the three counters."""
        assert CategoryCounts(attack=3, shield=2, dodge=1).total == 6

    def test_ratios(self):
        """Test ratios are percentages of the total."""
        counts = CategoryCounts(attack=2, shield=1, dodge=1)
        assert counts.attack_ratio == 50.0
        assert counts.shield_ratio == 25.0
        assert counts.dodge_ratio == 25.0

    def test_ratios_sum_to_100(self):
        """Test ratios add up to 100 whenever there are actions."""
        counts = CategoryCounts(attack=1, shield=1, dodge=1)
        total = counts.attack_ratio + counts.shield_ratio + counts.dodge_ratio
        assert total == pytest.approx(100.0)

    def test_zero_total_ratios(self):
        """Test ratios are 0.0 with no actions instead of dividing by zero."""
        counts = CategoryCounts()
        assert counts.total == 0
        assert counts.attack_ratio == 0.0
        assert counts.shield_ratio == 0.0
        assert counts.dodge_ratio == 0.0

    def test_count_accessor(self):
        """Test count() by category."""
        counts = CategoryCounts(attack=4, shield=5, dodge=6)
        assert counts.count(ActionCategory.ATTACK) == 4
        assert counts.count(ActionCategory.SHIELD) == 5
        assert counts.count(ActionCategory.DODGE) == 6

    @pytest.mark.parametrize(
        "attack,shield,dodge,expected",
        [
            (5, 1, 1, ActionCategory.ATTACK),
            (1, 5, 1, ActionCategory.SHIELD),
            (1, 1, 5, ActionCategory.DODGE),
            (1, 1, 1, ActionCategory.ATTACK),
            (2, 2, 0, ActionCategory.ATTACK),
            (2, 0, 2, ActionCategory.ATTACK),
            (0, 2, 2, ActionCategory.SHIELD),
            (0, 0, 0, ActionCategory.ATTACK),
        ],
    )
    def test_most_frequent_tie_break(self, attack, shield, dodge, expected):
        """Test ties resolve Attack, then Shield, then Dodge."""
        counts = CategoryCounts(attack=attack, shield=shield, dodge=dodge)
        assert counts.most_frequent is expected

    def test_frozen(self):
        """Test counts cannot be mutated."""
        counts = CategoryCounts(attack=1)
        with pytest.raises(AttributeError):
            counts.attack = 2


class TestCountCategories:
    """Tests for count_categories()."""

    def test_mixed_categories(self):
        """Test each category is counted."""
        counts = count_categories(_log("us", "s", "s", "nd", "sd", "ad").actions)
        assert counts == CategoryCounts(attack=1, shield=2, dodge=3)

    def test_uses_stored_category(self):
        """Test the record's category is used rather than re-classifying the code."""
        record = ActionRecord(timestamp=0.0, category=ActionCategory.SHIELD, raw_code="us")
        assert count_categories([record]) == CategoryCounts(shield=1)

    def test_empty(self):
        """Test no actions gives all zeros."""
        assert count_categories([]) == CategoryCounts()


class TestCountActionCodes:
    """Tests for the frequency table."""

    def test_sorted_by_count_then_code(self):
        """Test count descending with alphabetical tie-break."""
        codes = ["ss"] * 3 + ["ds"] * 3 + ["us"] * 5
        table = count_action_codes(_log(*codes).actions)
        assert [(f.raw_code, f.count) for f in table] == [("us", 5), ("ds", 3), ("ss", 3)]

    def test_independent_of_input_order(self):
        """Test the same multiset gives the same table in any order."""
        first = count_action_codes(_log("g", "na", "g", "fa", "na").actions)
        second = count_action_codes(_log("na", "fa", "na", "g", "g").actions)
        assert first == second
        assert [f.raw_code for f in first] == ["g", "na", "fa"]

    def test_lexicographic_code_order(self):
        """Test ties use plain string ordering (uppercase before lowercase)."""
        table = count_action_codes(_log("da", "DA", "ba").actions)
        assert [f.raw_code for f in table] == ["DA", "ba", "da"]

    def test_counts_sum_to_total(self):
        """Test every record is counted exactly once."""
        codes = ["j1", "j2", "j1", "s", "zz", "s", "j1"]
        table = count_action_codes(_log(*codes).actions)
        assert sum(f.count for f in table) == len(codes)
        assert len({f.raw_code for f in table}) == len(table)

    def test_unknown_codes_counted(self):
        """Test unknown codes get their own entry."""
        table = count_action_codes(_log("zz", "zz").actions)
        assert table == (ActionFrequency(raw_code="zz", count=2),)


class TestAnalyze:
    """Tests for analyze()."""

    def test_reference_example(self):
        """Test the documented end-to-end example."""
        log = parse_lines(["b1022024,1", "1.04,us", "1.64,ss", "2.41,ds", "1.64,ss"])
        result = analyze(log)

        assert isinstance(result, AnalysisResult)
        assert result.header == PlayerHeader(student_id="b1022024", match_number=1)
        assert result.counts == CategoryCounts(attack=4, shield=0, dodge=0)
        assert result.counts.total == 4
        assert result.counts.attack_ratio == 100.0
        assert result.counts.most_frequent is ActionCategory.ATTACK
        assert [(f.raw_code, f.count) for f in result.frequencies] == [
            ("ss", 2),
            ("ds", 1),
            ("us", 1),
        ]
        assert result.top_action == ActionFrequency(raw_code="ss", count=2)

    def test_header_copied(self):
        """Test the header is carried over from the log."""
        log = _log("s")
        assert analyze(log).header is log.header

    def test_mixed_log(self):
        """Test a log with all three categories."""
        result = analyze(_log("us", "s", "nd", "s", "ss", "ad"))
        assert result.counts == CategoryCounts(attack=2, shield=2, dodge=2)
        assert result.counts.most_frequent is ActionCategory.ATTACK
        assert result.total_actions == 6
        assert result.frequencies[0] == ActionFrequency(raw_code="s", count=2)

    def test_top_action_empty(self):
        """Test top_action is None when there are no frequencies."""
        result = AnalysisResult(
            header=PlayerHeader(student_id="x", match_number=0),
            counts=CategoryCounts(),
            frequencies=(),
        )
        assert result.top_action is None
