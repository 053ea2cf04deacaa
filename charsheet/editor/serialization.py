"""JSON export and import of character records.

The document layout is the only persisted format the editor has::

    {"name", "race", "class", "level",
     "attributes": {"strength", ..., "charisma"},
     "hp", "maxHp", "ac",
     "inventory": [{"id", "name", "quantity", "description"}, ...]}

Import is lenient by default: scalar values are accepted without type
checks, missing keys take the default character's values and unknown keys
are carried along so they survive the next export. Strict mode validates
the document against a pydantic schema first.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as SchemaError

from ..characters.inventory import InventoryItem, ItemIdFactory
from ..characters.sheet import (
    ATTRIBUTE_NAMES,
    MAX_SCORE,
    MIN_SCORE,
    AttributeScores,
    Character,
    default_character,
)
from ..errors import ParseError

logger = logging.getLogger(__name__)

CHARACTER_KEYS = ("name", "race", "class", "level", "attributes", "hp", "maxHp", "ac", "inventory")
ITEM_KEYS = ("id", "name", "quantity", "description")

_WHITESPACE_RUN = re.compile(r"\s+")


class ItemDocument(BaseModel):
    """Schema for one exported inventory item."""

    model_config = ConfigDict(extra="forbid", strict=True)

    id: str
    name: str
    quantity: int
    description: str = ""


class AttributesDocument(BaseModel):
    """Schema for the exported ability scores."""

    model_config = ConfigDict(extra="forbid", strict=True)

    strength: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    dexterity: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    constitution: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    intelligence: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    wisdom: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    charisma: int = Field(ge=MIN_SCORE, le=MAX_SCORE)


class CharacterDocument(BaseModel):
    """Schema for a complete exported character."""

    model_config = ConfigDict(extra="forbid", strict=True)

    name: str
    race: str
    character_class: str = Field(alias="class")
    level: int
    attributes: AttributesDocument
    hp: int
    max_hp: int = Field(alias="maxHp")
    ac: int
    inventory: list[ItemDocument]

    @model_validator(mode="after")
    def check_unique_ids(self) -> "CharacterDocument":
        ids = [item.id for item in self.inventory]
        if len(ids) != len(set(ids)):
            raise ValueError("inventory item ids must be unique")
        return self


def character_to_dict(character: Character) -> dict[str, Any]:
    """Convert a character to its exported dictionary form."""
    data = {
        "name": character.name,
        "race": character.race,
        "class": character.character_class,
        "level": character.level,
        "attributes": character.attributes.to_dict(),
        "hp": character.hp,
        "maxHp": character.max_hp,
        "ac": character.ac,
        "inventory": [item.to_dict() for item in character.inventory],
    }
    data.update(character.extra)
    return data


def character_from_dict(
    data: dict[str, Any],
    strict: bool = False,
    id_factory: ItemIdFactory | None = None,
) -> Character:
    """Build a character from a decoded JSON object.

    Args:
        data: Decoded document.
        strict: Validate against CharacterDocument before building.
        id_factory: Source of ids for items that arrive without one.

    Returns:
        A new Character.

    Raises:
        ParseError: If strict validation fails.
    """
    if strict:
        try:
            CharacterDocument.model_validate(data)
        except SchemaError as e:
            raise ParseError(f"Character data does not match the schema: {e}") from e

    defaults = default_character()
    return Character(
        name=data.get("name", defaults.name),
        race=data.get("race", defaults.race),
        character_class=data.get("class", defaults.character_class),
        level=data.get("level", defaults.level),
        attributes=_attributes_from(data.get("attributes")),
        hp=data.get("hp", defaults.hp),
        max_hp=data.get("maxHp", defaults.max_hp),
        ac=data.get("ac", defaults.ac),
        inventory=_inventory_from(data.get("inventory"), id_factory or ItemIdFactory()),
        extra={k: v for k, v in data.items() if k not in CHARACTER_KEYS},
    )


def _attributes_from(raw: Any) -> AttributeScores:
    scores = AttributeScores()
    if raw is None:
        return scores
    if not isinstance(raw, dict):
        logger.warning(f"Ignoring attributes of type {type(raw).__name__}; using defaults")
        return scores

    for name in ATTRIBUTE_NAMES:
        if name in raw:
            setattr(scores, name, raw[name])
    scores.extra = {k: v for k, v in raw.items() if k not in ATTRIBUTE_NAMES}
    return scores


def _inventory_from(raw: Any, id_factory: ItemIdFactory) -> list[InventoryItem]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning(f"Ignoring inventory of type {type(raw).__name__}")
        return []

    # Ids from the document are reserved so generated ids never collide with them
    reserved = {
        entry["id"] for entry in raw
        if isinstance(entry, dict) and isinstance(entry.get("id"), str)
    }
    items: list[InventoryItem] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping inventory entry of type {type(entry).__name__}")
            continue

        item_id = entry.get("id")
        if not isinstance(item_id, str) or item_id in seen:
            item_id = id_factory.next_id(seen | reserved)
        seen.add(item_id)

        items.append(InventoryItem(
            id=item_id,
            name=entry.get("name", ""),
            quantity=entry.get("quantity", 1),
            description=entry.get("description", ""),
            extra={k: v for k, v in entry.items() if k not in ITEM_KEYS},
        ))
    return items


def _reject_constant(token: str):
    raise ValueError(f"{token} is not valid JSON")


def export_character(character: Character) -> bytes:
    """Serialize a character to UTF-8 JSON with 2-space indentation.

    Raises:
        ValueError: If a value is a NaN or infinite float.
    """
    text = json.dumps(character_to_dict(character), indent=2, ensure_ascii=False, allow_nan=False)
    return text.encode("utf-8")


def export_filename(character: Character) -> str:
    """Suggest a file name for an exported character.

    Whitespace runs in the name become underscores. Path separators are
    replaced too so the name cannot leave the export directory.
    """
    stem = _WHITESPACE_RUN.sub("_", str(character.name))
    stem = stem.replace("/", "_").replace("\\", "_")
    if not stem:
        stem = "character"
    return f"{stem}.json"


def write_export(character: Character, directory: Path | str) -> Path:
    """Write an exported character into ``directory``.

    Returns:
        Path of the written file.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(character)
    path.write_bytes(export_character(character))
    logger.info(f"Exported character '{character.name}' to {path}")
    return path


def import_character(
    text: str | bytes,
    strict: bool = False,
    id_factory: ItemIdFactory | None = None,
) -> Character:
    """Parse JSON text into a new character.

    Args:
        text: JSON document text.
        strict: Validate the document schema before accepting it.
        id_factory: Source of ids for items that arrive without one.

    Returns:
        The imported Character.

    Raises:
        ParseError: If the text is not well-formed JSON, is not an object,
            or fails strict validation.
    """
    try:
        # NaN and Infinity are not JSON even though the decoder accepts them
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as e:
        raise ParseError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    return character_from_dict(data, strict=strict, id_factory=id_factory)
