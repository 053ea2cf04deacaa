"""Tests for the editor state operations."""

import json

import pytest

from charsheet.characters.inventory import ItemDraft
from charsheet.characters.sheet import ATTRIBUTE_NAMES, default_character
from charsheet.editor.state import EditorState
from charsheet.errors import ParseError, ValidationError


@pytest.fixture
def state():
    """Fresh editor state."""
    return EditorState()


class TestSetField:
    """Test scalar field edits."""

    def test_text_fields(self, state):
        """Test text fields store values unchanged."""
        state.set_field("name", "Elara Moonwhisper")
        state.set_field("race", "Elf")
        state.set_field("class", "Wizard")
        assert state.character.name == "Elara Moonwhisper"
        assert state.character.race == "Elf"
        assert state.character.character_class == "Wizard"

    def test_numeric_fields(self, state):
        """Test numeric text is parsed."""
        state.set_field("level", "5")
        state.set_field("hp", "23")
        state.set_field("maxHp", "31")
        state.set_field("ac", "17")
        assert state.character.level == 5
        assert state.character.hp == 23
        assert state.character.max_hp == 31
        assert state.character.ac == 17

    def test_numeric_fallbacks(self, state):
        """Test unparseable input falls back silently."""
        state.set_field("level", "abc")
        state.set_field("hp", "")
        state.set_field("maxHp", "x")
        state.set_field("ac", "--")
        assert state.character.level == 1
        assert state.character.hp == 0
        assert state.character.max_hp == 0
        assert state.character.ac == 0

    def test_no_cross_field_validation(self, state):
        """Test hp may exceed max hp."""
        state.set_field("maxHp", 10)
        state.set_field("hp", 50)
        assert state.character.hp == 50

    def test_unknown_field(self, state):
        """Test unknown fields raise KeyError."""
        with pytest.raises(KeyError):
            state.set_field("gold", 100)


class TestSetAttribute:
    """Test ability score edits."""

    def test_clamps_high(self, state):
        """Test values above 30 become 30."""
        assert state.set_attribute("strength", 35) == 30
        assert state.character.attributes.strength == 30

    def test_clamps_low(self, state):
        """Test values below 1 become 1."""
        assert state.set_attribute("strength", -4) == 1
        assert state.character.attributes.strength == 1

    def test_in_range(self, state):
        """Test in-range values are stored."""
        for name in ATTRIBUTE_NAMES:
            state.set_attribute(name, 15)
            assert state.character.attributes.get_score(name) == 15

    def test_text_value(self, state):
        """Test text input is parsed and clamped."""
        assert state.set_attribute("wisdom", "40") == 30
        assert state.set_attribute("wisdom", "abc") == 30

    def test_adjust(self, state):
        """Test +/- adjustments stay within range."""
        assert state.adjust_attribute("dexterity", 1) == 11
        assert state.adjust_attribute("dexterity", -2) == 9
        state.set_attribute("charisma", 30)
        assert state.adjust_attribute("charisma", 1) == 30
        state.set_attribute("charisma", 1)
        assert state.adjust_attribute("charisma", -1) == 1

    def test_adjust_non_integer_score(self, state):
        """Test adjusting a score of the wrong type starts from 10."""
        state.character.attributes.strength = "strong"
        assert state.adjust_attribute("strength", 1) == 11

    def test_unknown_attribute(self, state):
        """Test unknown ability names raise KeyError."""
        with pytest.raises(KeyError):
            state.set_attribute("luck", 10)


class TestReset:
    """Test resetting the character."""

    def test_reset_restores_defaults(self, state):
        """Test reset yields the default character regardless of prior edits."""
        state.set_field("name", "Changed")
        state.set_attribute("strength", 25)
        state.set_draft(name="Sword")
        state.add_item()
        state.import_text = "{}"

        character = state.reset()

        assert character == default_character()
        assert state.character == default_character()
        assert state.item_draft == ItemDraft()
        assert state.import_text == ""


class TestInventoryOperations:
    """Test inventory add and remove."""

    def test_add_empty_name_rejected(self, state):
        """Test empty names raise ValidationError and leave inventory unchanged."""
        with pytest.raises(ValidationError):
            state.add_item(ItemDraft(name="", quantity=1, description=""))
        assert state.character.inventory == []

    def test_add_whitespace_name_rejected(self, state):
        """Test whitespace-only names are rejected and the draft is kept."""
        state.set_draft(name="   ", quantity="3")
        with pytest.raises(ValidationError):
            state.add_item()
        assert state.character.inventory == []
        assert state.item_draft.quantity == 3

    def test_add_item(self, state):
        """Test a valid draft appends an item and clears the draft."""
        item = state.add_item(ItemDraft(name="Sword", quantity=2, description="sharp"))

        assert len(state.character.inventory) == 1
        assert state.character.inventory[0] is item
        assert item.name == "Sword"
        assert item.quantity == 2
        assert item.description == "sharp"
        assert item.id
        assert state.item_draft == ItemDraft(name="", quantity=1, description="")

    def test_add_from_pending_draft(self, state):
        """Test the pending draft is used by default."""
        state.set_draft(name="Rope", quantity="abc", description="50 ft")
        assert state.item_draft.quantity == 1
        item = state.add_item()
        assert item.name == "Rope"
        assert item.description == "50 ft"

    def test_order_and_unique_ids(self, state):
        """Test insertion order is kept and ids are unique."""
        names = ["Sword", "Shield", "Torch", "Rations"]
        for name in names:
            state.add_item(ItemDraft(name=name))

        assert [item.name for item in state.character.inventory] == names
        assert len(state.character.item_ids) == len(names)

    def test_remove_item(self, state):
        """Test removing by id."""
        sword = state.add_item(ItemDraft(name="Sword"))
        torch = state.add_item(ItemDraft(name="Torch"))

        removed = state.remove_item(sword.id)

        assert removed is sword
        assert state.character.inventory == [torch]

    def test_remove_unknown_is_noop(self, state):
        """Test removing a missing id leaves inventory unchanged."""
        state.add_item(ItemDraft(name="Sword"))
        before = list(state.character.inventory)

        assert state.remove_item("missing") is None
        assert state.character.inventory == before

    def test_remove_is_idempotent(self, state):
        """Test removing the same id twice."""
        item = state.add_item(ItemDraft(name="Sword"))
        state.remove_item(item.id)
        assert state.remove_item(item.id) is None
        assert state.character.inventory == []

    def test_ids_unique_after_import(self, state):
        """Test new ids never collide with imported ones."""
        state.import_text = json.dumps({
            "inventory": [{"id": str(n), "name": "Coin", "quantity": 1, "description": ""}
                          for n in range(3)],
        })
        state.import_text_buffer()
        state.id_factory._clock = lambda: 0.0

        item = state.add_item(ItemDraft(name="Gem"))

        assert item.id not in {"0", "1", "2"}
        assert len(state.character.item_ids) == 4


class TestImportExport:
    """Test import and export through the editor state."""

    def test_import_buffer(self, state):
        """Test a valid buffer replaces the character and is cleared."""
        state.import_text = json.dumps({"name": "Aragorn", "race": "Human", "level": 10})

        character = state.import_text_buffer()

        assert state.character is character
        assert character.name == "Aragorn"
        assert character.level == 10
        assert state.import_text == ""

    def test_import_invalid_json(self, state):
        """Test bad JSON leaves the character and buffer untouched."""
        state.set_field("name", "Keep Me")
        before = state.character
        state.import_text = "not json"

        with pytest.raises(ParseError):
            state.import_text_buffer()

        assert state.character is before
        assert state.character.name == "Keep Me"
        assert state.import_text == "not json"

    def test_import_replaces_wholesale(self, state):
        """Test import discards the previous record without merging."""
        state.add_item(ItemDraft(name="Sword"))
        state.set_field("ac", 18)
        state.import_text = json.dumps({"name": "Fresh"})

        state.import_text_buffer()

        assert state.character.inventory == []
        assert state.character.ac == 10

    def test_strict_import(self):
        """Test strict mode rejects incomplete documents."""
        state = EditorState(strict_import=True)
        state.import_text = json.dumps({"name": "Partial"})
        with pytest.raises(ParseError):
            state.import_text_buffer()

    def test_export_to(self, state, tmp_path):
        """Test export writes a named file."""
        state.set_field("name", "Sir Lancelot")
        path = state.export_to(tmp_path / "exports")

        assert path == tmp_path / "exports" / "Sir_Lancelot.json"
        assert json.loads(path.read_text(encoding="utf-8"))["name"] == "Sir Lancelot"

    def test_load_import_file(self, state, tmp_path):
        """Test reading a file into the import buffer."""
        source = tmp_path / "hero.json"
        source.write_text('{"name": "Legolas"}', encoding="utf-8")

        text = state.load_import_file(source)

        assert text == '{"name": "Legolas"}'
        assert state.import_text == text
        assert state.character.name != "Legolas"

    def test_load_missing_file(self, state, tmp_path):
        """Test unreadable files raise ParseError."""
        with pytest.raises(ParseError):
            state.load_import_file(tmp_path / "missing.json")
        assert state.import_text == ""
