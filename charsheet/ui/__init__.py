"""Textual user interface for the character sheet editor."""
