"""UI screens for the character sheet editor."""

from .editor import CharacterEditorScreen

__all__ = ["CharacterEditorScreen"]
