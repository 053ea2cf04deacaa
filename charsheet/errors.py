"""Error types raised by the character editing core."""


class CharacterSheetError(Exception):
    """Base class for recoverable editor errors."""

    pass


class ValidationError(CharacterSheetError):
    """Raised when a new inventory item is rejected."""

    pass


class ParseError(CharacterSheetError):
    """Raised when imported character data cannot be read."""

    pass
