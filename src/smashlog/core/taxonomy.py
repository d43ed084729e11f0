"""
Action taxonomy lookups.

Maps raw action codes to their category and display name using the fixed
tables in smashlog.core.constants. Both lookups are total: unknown codes are
classified as attacks and displayed verbatim.
"""

import logging
from types import MappingProxyType

from smashlog.core.constants import (
    ACTION_TABLES,
    ATTACK_CODES,
    DODGE_CODES,
    FALLBACK_CATEGORY,
    SHIELD_CODES,
    ActionCategory,
)

logger = logging.getLogger(__name__)


def _build_name_index() -> MappingProxyType:
    """Build code -> display name, first table entry wins."""
    index: dict[str, str] = {}
    for _, table in ACTION_TABLES:
        for code, name in table:
            index.setdefault(code, name)
    return MappingProxyType(index)


_DISPLAY_NAMES = _build_name_index()


def classify(code: str) -> ActionCategory:
    """
    Classify a raw action code.

    Lookup order is shield codes, dodge codes, attack codes, then the
    attack fallback for anything unrecognized.

    Args:
        code: Raw action code, matched verbatim (case-sensitive)

    Returns:
        The ActionCategory for the code
    """
    if code in SHIELD_CODES:
        return ActionCategory.SHIELD
    if code in DODGE_CODES:
        return ActionCategory.DODGE
    if code in ATTACK_CODES:
        return ActionCategory.ATTACK

    logger.debug(f"Unknown action code {code!r}, classifying as {FALLBACK_CATEGORY.label}")
    return FALLBACK_CATEGORY


def display_name(code: str) -> str:
    """Human-readable name for a code, or the code itself if it has none."""
    return _DISPLAY_NAMES.get(code, code)


def is_known_code(code: str) -> bool:
    """Check whether a code appears in any of the action tables."""
    return code in _DISPLAY_NAMES


def iter_taxonomy():
    """Yield (code, display name, category) for every table entry in lookup order."""
    for category, table in ACTION_TABLES:
        for code, name in table:
            yield code, name, category
