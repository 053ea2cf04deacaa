"""Character editor screen: profile, inventory, settings and import/export tabs."""

import logging
from pathlib import Path

from rich.markup import escape
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Grid, Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
    TabbedContent,
    TabPane,
    TextArea,
)

from ... import __version__
from ...characters.sheet import ATTRIBUTE_NAMES
from ...editor.serialization import export_filename
from ...editor.state import EditorState
from ...errors import ParseError, ValidationError
from ..widgets.attribute_card import AttributeCard

logger = logging.getLogger(__name__)

# (field, label, attribute on Character)
PROFILE_FIELDS = [
    ("name", "Name:", "name"),
    ("race", "Race:", "race"),
    ("class", "Class:", "character_class"),
    ("level", "Level:", "level"),
    ("hp", "HP:", "hp"),
    ("maxHp", "Max HP:", "max_hp"),
    ("ac", "Armor Class:", "ac"),
]


class CharacterEditorScreen(Screen):
    """Single-page editor for the session's character."""

    CSS = """
    #summary {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    .section {
        height: auto;
        margin-bottom: 1;
        border: solid $secondary;
        padding: 1;
    }

    .section-title {
        text-style: bold;
        color: $secondary;
        margin-bottom: 1;
    }

    .form-row {
        height: 3;
    }

    .form-label {
        width: 15;
        padding-top: 1;
    }

    Input {
        width: 1fr;
    }

    #attribute-grid {
        grid-size: 3;
        grid-gutter: 1;
        height: auto;
    }

    #draft-description {
        height: 5;
    }

    #inventory-table {
        height: auto;
        max-height: 20;
    }

    #import-text {
        height: 12;
    }

    .hint {
        color: $text-muted;
        text-style: italic;
    }

    .wide-button {
        width: 100%;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "export", "Export", show=True),
        Binding("delete", "remove_item", "Remove item", show=False),
    ]

    def __init__(self, state: EditorState, export_dir: Path | str = Path("./exports"),
                 notification_timeout: float = 3.0):
        """Initialize the editor screen.

        Args:
            state: Editing session state shared with the app.
            export_dir: Directory exported characters are written to.
            notification_timeout: Seconds notifications stay visible.
        """
        super().__init__()
        self.state = state
        self.export_dir = Path(export_dir)
        self.notification_timeout = notification_timeout
        self.selected_item_id: str | None = None

    def compose(self) -> ComposeResult:
        character = self.state.character

        yield Header()
        yield Static(character.get_summary(), id="summary", markup=False)

        with TabbedContent(initial="tab-profile"):
            with TabPane("Profile", id="tab-profile"):
                with VerticalScroll():
                    with Container(classes="section"):
                        yield Label("Basic Information", classes="section-title")
                        for field, label, attr in PROFILE_FIELDS:
                            with Horizontal(classes="form-row"):
                                yield Label(label, classes="form-label")
                                yield Input(
                                    value=str(getattr(character, attr)),
                                    id=f"input-{field}",
                                )

                    with Container(classes="section"):
                        yield Label("Ability Scores (1-30)", classes="section-title")
                        with Grid(id="attribute-grid"):
                            for name in ATTRIBUTE_NAMES:
                                yield AttributeCard(
                                    name,
                                    character.attributes.get_score(name),
                                    id=f"card-{name}",
                                )

            with TabPane("Inventory", id="tab-inventory"):
                with VerticalScroll():
                    with Container(classes="section"):
                        yield Label("Add Item", classes="section-title")
                        with Horizontal(classes="form-row"):
                            yield Label("Name:", classes="form-label")
                            yield Input(placeholder="Sword, Healing Potion...", id="draft-name")
                        with Horizontal(classes="form-row"):
                            yield Label("Quantity:", classes="form-label")
                            yield Input(value="1", id="draft-quantity")
                        yield Label("Description:")
                        yield TextArea("", id="draft-description")
                        yield Button("Add to Inventory", id="btn-add-item",
                                     variant="primary", classes="wide-button")

                    with Container(classes="section"):
                        yield Label("Inventory", classes="section-title")
                        yield Label("", id="inventory-count", classes="hint")
                        yield DataTable(id="inventory-table")
                        yield Button("Remove Selected", id="btn-remove-item",
                                     variant="error", classes="wide-button")

            with TabPane("Settings", id="tab-settings"):
                with Container(classes="section"):
                    yield Label("Version", classes="section-title")
                    yield Label(f"Character Sheet v{__version__}")
                with Container(classes="section"):
                    yield Label("Actions", classes="section-title")
                    yield Button("Reset Character", id="btn-reset",
                                 variant="error", classes="wide-button")

            with TabPane("Import/Export", id="tab-import-export"):
                with VerticalScroll():
                    with Container(classes="section"):
                        yield Label("Export", classes="section-title")
                        yield Label("", id="export-target", classes="hint")
                        yield Button("Export Character", id="btn-export",
                                     variant="primary", classes="wide-button")

                    with Container(classes="section"):
                        yield Label("Import", classes="section-title")
                        with Horizontal(classes="form-row"):
                            yield Label("File:", classes="form-label")
                            yield Input(placeholder="path/to/character.json", id="import-path")
                            yield Button("Load File", id="btn-load-file")
                        yield Label("JSON data:")
                        yield TextArea("", id="import-text")
                        yield Button("Import Character", id="btn-import",
                                     variant="success", classes="wide-button")

        yield Footer()

    def on_mount(self) -> None:
        """Set up the inventory table."""
        table = self.query_one("#inventory-table", DataTable)
        table.add_columns("Name", "Qty", "Description")
        table.cursor_type = "row"
        self._refresh_inventory()
        self._refresh_export_target()

    # Refresh helpers

    def _refresh_all(self) -> None:
        self._refresh_profile()
        self._refresh_draft()
        self._refresh_inventory()
        self._refresh_import_text()
        self._refresh_export_target()

    def _refresh_summary(self) -> None:
        self.query_one("#summary", Static).update(self.state.character.get_summary())

    def _refresh_profile(self) -> None:
        """Copy the character back into the form without re-triggering edits."""
        character = self.state.character
        with self.prevent(Input.Changed):
            for field, _, attr in PROFILE_FIELDS:
                self.query_one(f"#input-{field}", Input).value = str(getattr(character, attr))
        for name in ATTRIBUTE_NAMES:
            self.query_one(f"#card-{name}", AttributeCard).update_score(
                character.attributes.get_score(name)
            )
        self._refresh_summary()

    def _refresh_draft(self) -> None:
        draft = self.state.item_draft
        with self.prevent(Input.Changed, TextArea.Changed):
            self.query_one("#draft-name", Input).value = draft.name
            self.query_one("#draft-quantity", Input).value = str(draft.quantity)
            self.query_one("#draft-description", TextArea).load_text(draft.description)

    def _refresh_inventory(self) -> None:
        table = self.query_one("#inventory-table", DataTable)
        table.clear()

        inventory = self.state.character.inventory
        for item in inventory:
            table.add_row(
                Text(str(item.name)),
                Text(item.display_quantity),
                Text(str(item.description)),
                key=item.id,
            )

        count = self.query_one("#inventory-count", Label)
        if inventory:
            count.update(f"Total items: {len(inventory)}")
        else:
            count.update("Inventory is empty")

        if self.selected_item_id not in self.state.character.item_ids:
            self.selected_item_id = None

    def _refresh_import_text(self) -> None:
        with self.prevent(TextArea.Changed):
            self.query_one("#import-text", TextArea).load_text(self.state.import_text)

    def _refresh_export_target(self) -> None:
        target = self.export_dir / export_filename(self.state.character)
        self.query_one("#export-target", Label).update(f"Saves to {escape(str(target))}")

    def _notify(self, message: str, title: str, severity: str = "information") -> None:
        self.app.notify(message, title=title, severity=severity, timeout=self.notification_timeout)

    # Form edits

    def on_input_changed(self, event: Input.Changed) -> None:
        """Write form edits straight into the editor state."""
        input_id = event.input.id or ""

        if input_id.startswith("input-"):
            self.state.set_field(input_id.removeprefix("input-"), event.value)
            self._refresh_summary()
            if input_id == "input-name":
                self._refresh_export_target()
        elif input_id == "draft-name":
            self.state.set_draft(name=event.value)
        elif input_id == "draft-quantity":
            self.state.set_draft(quantity=event.value)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        """Track multi-line drafts."""
        area_id = event.text_area.id
        if area_id == "draft-description":
            self.state.set_draft(description=event.text_area.text)
        elif area_id == "import-text":
            self.state.import_text = event.text_area.text

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Remember which inventory row is selected."""
        self.selected_item_id = event.row_key.value if event.row_key else None

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id or ""

        if button_id.startswith("dec-") or button_id.startswith("inc-"):
            action, attribute = button_id.split("-", 1)
            self._adjust_attribute(attribute, -1 if action == "dec" else 1)
        elif button_id == "btn-add-item":
            self._add_item()
        elif button_id == "btn-remove-item":
            self.action_remove_item()
        elif button_id == "btn-reset":
            self.action_reset()
        elif button_id == "btn-export":
            self.action_export()
        elif button_id == "btn-load-file":
            self._load_import_file()
        elif button_id == "btn-import":
            self._import_character()

    # Operations

    def _adjust_attribute(self, attribute: str, delta: int) -> None:
        score = self.state.adjust_attribute(attribute, delta)
        self.query_one(f"#card-{attribute}", AttributeCard).update_score(score)

    def _add_item(self) -> None:
        try:
            item = self.state.add_item()
        except ValidationError:
            self._notify("Enter an item name.", title="Error", severity="error")
            return

        self._refresh_draft()
        self._refresh_inventory()
        self._notify(f"{escape(item.name)} added to inventory.", title="Item added")

    def action_remove_item(self) -> None:
        """Remove the selected inventory item."""
        if self.selected_item_id is None:
            self._notify("Select an item first.", title="Inventory")
            return

        item = self.state.remove_item(self.selected_item_id)
        self._refresh_inventory()
        if item is not None:
            self._notify(f"{escape(str(item.name))} removed from inventory.", title="Item removed")

    def action_reset(self) -> None:
        """Replace the character with the default one."""
        self.state.reset()
        self._refresh_all()
        self._notify("Character reset to defaults.", title="Reset")

    def action_export(self) -> None:
        """Write the character to the export directory."""
        try:
            path = self.state.export_to(self.export_dir)
        except (OSError, ValueError) as e:
            logger.error(f"Export failed: {e}")
            self._notify(f"Could not export: {escape(str(e))}", title="Export failed", severity="error")
            return

        self._notify(f"Character saved to {escape(str(path))}", title="Export complete")

    def _load_import_file(self) -> None:
        path = self.query_one("#import-path", Input).value.strip()
        if not path:
            self._notify("Enter a file path.", title="Import")
            return

        try:
            self.state.load_import_file(path)
        except ParseError as e:
            self._notify(escape(str(e)), title="Import failed", severity="error")
            return

        self._refresh_import_text()

    def _import_character(self) -> None:
        try:
            self.state.import_text_buffer()
        except ParseError as e:
            self._notify(f"Invalid data format. {escape(str(e))}", title="Import failed", severity="error")
            return

        self._refresh_all()
        self._notify("Character loaded.", title="Import complete")
