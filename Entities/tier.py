"""
Skill tier entity module for DiscGolfHandicap.

Defines the SkillTier class, a coarse skill classification derived from a
handicap index, and the static table of tiers built from Constants.
"""

# ---------------- Standard library ----------------
from typing import Dict

# ---------------- Entities ----------------
from Entities.constants import Constants


class SkillTier:
    """Represents a skill tier with its display data.

    Attributes:
        key (str): Stable identifier (e.g. 'pro', 'unrated').
        label (str): Display label.
        color (str): Hex color token.
        description (str): Short description.
    """

    __slots__ = ("key", "label", "color", "description")

    def __init__(self, key: str, label: str, color: str, description: str) -> None:
        self.key = key
        self.label = label
        self.color = color
        self.description = description

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SkillTier):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"SkillTier({self.label})"


TIERS: Dict[str, SkillTier] = {
    key: SkillTier(key, label, color, description)
    for key, (label, color, description) in Constants.TIER_DATA.items()
}
