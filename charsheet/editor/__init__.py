"""Editing core: session state and JSON import/export."""

from .state import EditorState
from .serialization import (
    export_character,
    export_filename,
    import_character,
    write_export,
)

__all__ = [
    "EditorState",
    "export_character",
    "export_filename",
    "import_character",
    "write_export",
]
