"""Main Textual application for the character sheet editor."""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..config import AppConfig, get_config
from ..editor.state import EditorState
from .screens.editor import CharacterEditorScreen

logger = logging.getLogger(__name__)


class CharacterSheetApp(App):
    """The character sheet editor application."""

    TITLE = "Character Sheet"
    SUB_TITLE = "Tabletop RPG character editor"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True),
        Binding("f1", "help", "Help", show=True),
    ]

    def __init__(self, config: AppConfig | None = None):
        """Initialize the application.

        Args:
            config: Application configuration. Defaults to the global config.
        """
        super().__init__()
        self.app_config = config or get_config()
        self.editor = EditorState(strict_import=self.app_config.importing.validate_schema)

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        yield Header()
        yield Footer()

    def on_mount(self) -> None:
        """Apply the configured theme and open the editor."""
        theme = self.app_config.ui.theme
        if theme in self.available_themes:
            self.theme = theme
        else:
            logger.warning(f"Unknown theme '{theme}', keeping {self.theme}")

        self.push_screen(CharacterEditorScreen(
            self.editor,
            export_dir=self.app_config.paths.exports,
            notification_timeout=self.app_config.ui.notification_timeout,
        ))

    def action_help(self) -> None:
        """Show help."""
        self.notify(
            "Character Sheet\n"
            "Use Tab to move between fields, arrow keys in tables.\n"
            "Ctrl+S exports, Delete removes the selected item, Ctrl+Q quits.",
            title="Help",
            timeout=5,
        )


def run_app(config: AppConfig | None = None) -> None:
    """Run the character sheet application."""
    app = CharacterSheetApp(config)
    app.run()


if __name__ == "__main__":
    run_app()
