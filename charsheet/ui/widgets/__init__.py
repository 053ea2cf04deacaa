"""Custom Textual widgets for the character sheet editor."""

from .attribute_card import AttributeCard

__all__ = ["AttributeCard"]
