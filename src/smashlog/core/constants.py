"""
smashlog - Constants

Defines the action categories and the fixed action-code tables used to
classify and label entries in a battle log.
"""

from enum import StrEnum


class ActionCategory(StrEnum):
    """
    Semantic bucket for a logged action.

    Closed set: every action code resolves to exactly one category.
    """

    ATTACK = "attack"
    SHIELD = "shield"
    DODGE = "dodge"

    @property
    def label(self) -> str:
        """Display label (e.g. "Attack")."""
        return self.value.capitalize()


# ============================================================================
# Action Code Tables
# ============================================================================
# Ordered (code, display name) pairs. Codes are case-sensitive.

ATTACK_ACTIONS: tuple[tuple[str, str], ...] = (
    # Jab
    ("j1", "Jab 1"),
    ("j2", "Jab 2"),
    # Tilts
    ("st", "Forward tilt"),
    ("ut", "Up tilt"),
    ("dt", "Down tilt"),
    ("DA", "Dash attack"),
    # Smash attacks
    ("ss", "Forward smash"),
    ("us", "Up smash"),
    ("ds", "Down smash"),
    # Aerials
    ("na", "Neutral air"),
    ("fa", "Forward air"),
    ("ba", "Back air"),
    ("ua", "Up air"),
    ("da", "Down air"),
    # Specials
    ("nb_c", "Neutral special (charge)"),
    ("nb_a", "Neutral special (attack)"),
    ("sb", "Side special"),
    ("ub_g", "Up special (ground)"),
    ("ub_a", "Up special (air)"),
    ("db_g", "Down special (ground)"),
    ("db_a", "Down special (air)"),
    # Grabs and throws
    ("g", "Grab"),
    ("ga", "Pummel"),
    ("fth", "Forward throw"),
    ("bth", "Back throw"),
    ("uth", "Up throw"),
    ("dth", "Down throw"),
    ("fc", "Forward throw (forward follow-up)"),
    ("bc", "Forward throw (back follow-up)"),
    ("uc", "Forward throw (up follow-up)"),
    ("dc", "Forward throw (down follow-up)"),
)

SHIELD_ACTIONS: tuple[tuple[str, str], ...] = (
    ("s", "Shield"),
)

DODGE_ACTIONS: tuple[tuple[str, str], ...] = (
    ("nd", "Spot dodge"),
    ("sd", "Roll"),
    ("ad", "Air dodge"),
)

# Lookup order for display names
ACTION_TABLES: tuple[tuple[ActionCategory, tuple[tuple[str, str], ...]], ...] = (
    (ActionCategory.ATTACK, ATTACK_ACTIONS),
    (ActionCategory.SHIELD, SHIELD_ACTIONS),
    (ActionCategory.DODGE, DODGE_ACTIONS),
)

SHIELD_CODES: frozenset[str] = frozenset(code for code, _ in SHIELD_ACTIONS)
DODGE_CODES: frozenset[str] = frozenset(code for code, _ in DODGE_ACTIONS)
ATTACK_CODES: frozenset[str] = frozenset(code for code, _ in ATTACK_ACTIONS)

# Category assigned to codes absent from every table
FALLBACK_CATEGORY = ActionCategory.ATTACK

# ============================================================================
# Presentation Defaults
# ============================================================================

BAR_MAX_WIDTH = 30
BAR_CHAR = "#"
RATIO_PRECISION = 1
