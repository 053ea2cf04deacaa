"""Editor state - the character being edited plus the pending form drafts.

One EditorState is owned by the running app and passed to whatever needs
it. Every edit is a synchronous mutation of this object; the UI refreshes
from it afterwards.
"""

import logging
from pathlib import Path

from ..characters.inventory import InventoryItem, ItemDraft, ItemIdFactory
from ..characters.sheet import Character, default_character, parse_or_default
from ..errors import ParseError, ValidationError
from .serialization import import_character, write_export

logger = logging.getLogger(__name__)

TEXT_FIELDS = {
    "name": "name",
    "race": "race",
    "class": "character_class",
    "character_class": "character_class",
}

# Numeric fields and the value used when input cannot be parsed
NUMERIC_FIELDS = {
    "level": ("level", 1),
    "hp": ("hp", 0),
    "maxHp": ("max_hp", 0),
    "max_hp": ("max_hp", 0),
    "ac": ("ac", 0),
}


class EditorState:
    """Authoritative state of one editing session."""

    def __init__(self, character: Character | None = None, strict_import: bool = False):
        """Initialize editor state.

        Args:
            character: Starting record. Defaults to the default character.
            strict_import: Validate imported documents against the schema.
        """
        self.character = character or default_character()
        self.item_draft = ItemDraft()
        self.import_text = ""
        self.strict_import = strict_import
        self.id_factory = ItemIdFactory()

    # Character record

    def set_field(self, field: str, value) -> None:
        """Replace one top-level scalar field.

        Numeric fields never reject input: unparseable values fall back to
        1 for level and 0 for hp, maxHp and ac.
        """
        if field in TEXT_FIELDS:
            setattr(self.character, TEXT_FIELDS[field], value)
        elif field in NUMERIC_FIELDS:
            attr, fallback = NUMERIC_FIELDS[field]
            setattr(self.character, attr, parse_or_default(value, fallback))
        else:
            raise KeyError(f"Unknown field: {field}")

    def set_attribute(self, attribute: str, value) -> int:
        """Set an ability score, clamped into [1, 30].

        Returns:
            The stored score.
        """
        current = self.character.attributes.get_score(attribute)
        fallback = current if isinstance(current, int) and not isinstance(current, bool) else 10
        return self.character.attributes.set_score(attribute, parse_or_default(value, fallback))

    def adjust_attribute(self, attribute: str, delta: int) -> int:
        """Raise or lower an ability score by ``delta``."""
        current = parse_or_default(self.character.attributes.get_score(attribute), 10)
        return self.set_attribute(attribute, current + delta)

    def reset(self) -> Character:
        """Replace the character with the default one and clear drafts."""
        self.character = default_character()
        self.item_draft = ItemDraft()
        self.import_text = ""
        logger.info("Character reset to defaults")
        return self.character

    # Inventory

    def set_draft(self, name: str | None = None, quantity=None, description: str | None = None) -> ItemDraft:
        """Update the pending new-item draft."""
        if name is not None:
            self.item_draft.name = name
        if quantity is not None:
            self.item_draft.quantity = parse_or_default(quantity, 1)
        if description is not None:
            self.item_draft.description = description
        return self.item_draft

    def add_item(self, draft: ItemDraft | None = None) -> InventoryItem:
        """Append an item built from a draft to the inventory.

        Args:
            draft: Item values. Defaults to the pending draft.

        Returns:
            The added item.

        Raises:
            ValidationError: If the draft name is empty.
        """
        draft = draft or self.item_draft
        if draft.is_blank:
            raise ValidationError("empty name")

        item = InventoryItem(
            id=self.id_factory.next_id(self.character.item_ids),
            name=draft.name,
            quantity=draft.quantity,
            description=draft.description,
        )
        self.character.inventory.append(item)
        self.item_draft = ItemDraft()
        logger.info(f"Added {item.name} x{item.quantity} (id {item.id})")
        return item

    def remove_item(self, item_id: str) -> InventoryItem | None:
        """Remove an item by id. Unknown ids are ignored.

        Returns:
            The removed item, or None if nothing matched.
        """
        item = self.character.find_item(item_id)
        if item is None:
            return None
        self.character.inventory = [i for i in self.character.inventory if i.id != item_id]
        logger.info(f"Removed {item.name} (id {item_id})")
        return item

    # Import / export

    def export_to(self, directory: Path | str) -> Path:
        """Write the current character into ``directory``."""
        return write_export(self.character, directory)

    def load_import_file(self, path: Path | str) -> str:
        """Read a file into the import buffer.

        Raises:
            ParseError: If the file cannot be read.
        """
        try:
            self.import_text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Could not read {path}: {e}") from e
        return self.import_text

    def import_text_buffer(self) -> Character:
        """Replace the character with the one in the import buffer.

        The buffer is cleared only on success.

        Raises:
            ParseError: If the buffer does not hold a usable document.
        """
        try:
            character = import_character(
                self.import_text,
                strict=self.strict_import,
                id_factory=self.id_factory,
            )
        except ParseError as e:
            logger.warning(f"Import failed: {e}")
            raise

        self.character = character
        self.import_text = ""
        logger.info(f"Imported character '{character.name}'")
        return character
