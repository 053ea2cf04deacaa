"""Character sheet data model and ability score arithmetic."""

import re
from dataclasses import dataclass, field
from typing import Any

from .inventory import InventoryItem

MIN_SCORE = 1
MAX_SCORE = 30

ATTRIBUTE_NAMES = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)

ATTRIBUTE_ABBREVIATIONS = {
    "strength": "STR",
    "dexterity": "DEX",
    "constitution": "CON",
    "intelligence": "INT",
    "wisdom": "WIS",
    "charisma": "CHA",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def modifier(score: int) -> int:
    """Get the modifier for an ability score."""
    return (score - 10) // 2


def format_modifier(score: Any) -> str:
    """Format the modifier for display, e.g. ``+2`` or ``-1``.

    Scores that are not integers (possible after a lenient import) render
    as ``?``.
    """
    if isinstance(score, bool) or not isinstance(score, int):
        return "?"
    return f"{modifier(score):+d}"


def clamp_score(value: int) -> int:
    """Clamp an ability score into the legal range."""
    return max(MIN_SCORE, min(MAX_SCORE, value))


def parse_or_default(value: Any, default: int) -> int:
    """Read an integer from form input, falling back to ``default``.

    Integers pass through. Text is read like a number field would: leading
    whitespace, an optional sign, then digits; anything after the digits is
    ignored. Everything else yields ``default``.

    Args:
        value: Raw value from an input widget or caller.
        default: Value to use when nothing can be parsed.

    Returns:
        The parsed integer or the default.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return default


@dataclass
class AttributeScores:
    """The six ability scores."""

    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    # Unknown keys from an imported attributes object
    extra: dict[str, Any] = field(default_factory=dict)

    def get_score(self, ability: str) -> Any:
        """Get the stored score for an ability."""
        return getattr(self, _attribute_name(ability))

    def set_score(self, ability: str, value: int) -> int:
        """Store a score, clamped into range. Returns the stored value."""
        score = clamp_score(value)
        setattr(self, _attribute_name(ability), score)
        return score

    def get_modifier(self, ability: str) -> int:
        """Get the modifier for an ability score."""
        return modifier(self.get_score(ability))

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access to ability scores."""
        return self.get_score(key)

    def to_dict(self) -> dict[str, Any]:
        """Convert scores to their exported form."""
        data = {name: getattr(self, name) for name in ATTRIBUTE_NAMES}
        data.update(self.extra)
        return data


def _attribute_name(ability: str) -> str:
    name = ability.lower()
    if name not in ATTRIBUTE_NAMES:
        raise KeyError(f"Unknown attribute: {ability}")
    return name


@dataclass
class Character:
    """The editable character record."""

    name: str = "Unknown Hero"
    race: str = "Human"
    character_class: str = "Fighter"
    level: int = 1
    attributes: AttributeScores = field(default_factory=AttributeScores)
    hp: int = 10
    max_hp: int = 10
    ac: int = 10
    inventory: list[InventoryItem] = field(default_factory=list)

    # Unknown top-level keys from an imported document
    extra: dict[str, Any] = field(default_factory=dict)

    def find_item(self, item_id: str) -> InventoryItem | None:
        """Find an inventory item by id."""
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

    @property
    def item_ids(self) -> set[str]:
        """Get the ids currently used in the inventory."""
        return {item.id for item in self.inventory}

    def get_summary(self) -> str:
        """Get a brief one-line summary for headers."""
        return (
            f"{self.name} - {self.race} {self.character_class} {self.level} | "
            f"HP: {self.hp}/{self.max_hp} | AC: {self.ac}"
        )


def default_character() -> Character:
    """Create the fixed default character used at start-up and on reset."""
    return Character()
