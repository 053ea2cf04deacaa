"""Character sheet editor for tabletop role-playing games."""

__version__ = "1.0.0"
