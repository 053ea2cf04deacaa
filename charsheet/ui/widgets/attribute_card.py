"""Ability score card widget with +/- adjustment buttons."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Label, Static

from ...characters.sheet import ATTRIBUTE_ABBREVIATIONS, format_modifier


class AttributeCard(Static):
    """Shows one ability score, its modifier and adjustment buttons.

    Button ids are ``dec-<attribute>`` and ``inc-<attribute>``; the owning
    screen handles the presses and calls :meth:`update_score` afterwards.
    """

    DEFAULT_CSS = """
    AttributeCard {
        height: auto;
        border: solid $primary;
        padding: 0 1;
    }

    AttributeCard .card-title {
        text-style: bold;
        color: $primary;
        width: 100%;
        text-align: center;
    }

    AttributeCard .card-score {
        text-style: bold;
        color: $accent;
        text-align: center;
    }

    AttributeCard .card-mod {
        color: $text-muted;
        text-align: center;
    }

    AttributeCard .card-buttons {
        height: 3;
        align: center middle;
    }

    AttributeCard Button {
        min-width: 5;
        margin: 0 1;
    }
    """

    def __init__(self, attribute: str, score: int = 10, **kwargs):
        """Initialize the card.

        Args:
            attribute: Full ability name, e.g. ``"strength"``.
            score: Current score.
        """
        super().__init__(**kwargs)
        self.attribute = attribute
        self.score = score

    @property
    def heading(self) -> str:
        abbreviation = ATTRIBUTE_ABBREVIATIONS.get(self.attribute, "")
        return f"{self.attribute.title()} ({abbreviation})"

    def compose(self) -> ComposeResult:
        yield Label(self.heading, classes="card-title")
        yield Static(str(self.score), id=f"score-{self.attribute}", classes="card-score", markup=False)
        yield Static(self._mod_text(), id=f"mod-{self.attribute}", classes="card-mod")
        with Horizontal(classes="card-buttons"):
            yield Button("-", id=f"dec-{self.attribute}", variant="error")
            yield Button("+", id=f"inc-{self.attribute}", variant="success")

    def _mod_text(self) -> str:
        return f"Modifier: {format_modifier(self.score)}"

    def update_score(self, score: int) -> None:
        """Update the displayed score and modifier."""
        self.score = score
        self.query_one(f"#score-{self.attribute}", Static).update(str(score))
        self.query_one(f"#mod-{self.attribute}", Static).update(self._mod_text())
