"""
smashlog - Battle Action-Log Analyzer

Parses a timestamped action log for one player and match, classifies every
action as Attack, Shield or Dodge, and reports counts, ratios and a
per-code frequency breakdown.

Usage:
    from smashlog import parse_battle_log, analyze

    log = parse_battle_log("match1.csv")
    result = analyze(log)

    print(result.counts.attack_ratio)
    for freq in result.frequencies:
        print(f"{freq.raw_code}: {freq.count}")
"""

__version__ = "0.1.0"
__author__ = "smashlog Contributors"


def __getattr__(name):
    """Lazy import so the CLI stack is not loaded for library use."""
    # Parser
    if name == "BattleLogParser":
        from smashlog.core.parser import BattleLogParser
        return BattleLogParser
    elif name == "parse_battle_log":
        from smashlog.core.parser import parse_battle_log
        return parse_battle_log
    elif name == "parse_lines":
        from smashlog.core.parser import parse_lines
        return parse_lines
    # Taxonomy
    elif name == "ActionCategory":
        from smashlog.core.constants import ActionCategory
        return ActionCategory
    elif name == "classify":
        from smashlog.core.taxonomy import classify
        return classify
    elif name == "display_name":
        from smashlog.core.taxonomy import display_name
        return display_name
    # Analysis
    elif name == "analyze":
        from smashlog.analysis.analyzer import analyze
        return analyze
    elif name == "AnalysisResult":
        from smashlog.core.models import AnalysisResult
        return AnalysisResult
    elif name == "BattleLogError":
        from smashlog.core.errors import BattleLogError
        return BattleLogError
    raise AttributeError(f"module 'smashlog' has no attribute '{name}'")


__all__ = [
    # Version
    "__version__",
    # Parser
    "BattleLogParser",
    "parse_battle_log",
    "parse_lines",
    # Taxonomy
    "ActionCategory",
    "classify",
    "display_name",
    # Analysis
    "analyze",
    "AnalysisResult",
    "BattleLogError",
]
