"""Character data model: ability scores, sheet record, and inventory."""

from .sheet import (
    ATTRIBUTE_NAMES,
    AttributeScores,
    Character,
    default_character,
    format_modifier,
    modifier,
    parse_or_default,
)
from .inventory import InventoryItem, ItemDraft, ItemIdFactory

__all__ = [
    "ATTRIBUTE_NAMES",
    "AttributeScores",
    "Character",
    "default_character",
    "format_modifier",
    "modifier",
    "parse_or_default",
    "InventoryItem",
    "ItemDraft",
    "ItemIdFactory",
]
