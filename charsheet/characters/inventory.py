"""Inventory items and the pending new-item draft."""

import time
from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass
class InventoryItem:
    """A single inventory entry owned by a character."""

    id: str
    name: str
    quantity: int = 1
    description: str = ""

    # Unknown keys from an imported item
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert the item to its exported form."""
        data = {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "description": self.description,
        }
        data.update(self.extra)
        return data

    @property
    def display_quantity(self) -> str:
        """Get the quantity badge shown next to the name."""
        return f"x{self.quantity}"


@dataclass
class ItemDraft:
    """Form values for an item that has not been added yet."""

    name: str = ""
    quantity: int = 1
    description: str = ""

    @property
    def is_blank(self) -> bool:
        """Check if the draft has no usable name."""
        return not self.name.strip()


class ItemIdFactory:
    """Generates inventory ids from the wall clock.

    Ids are millisecond timestamps, bumped forward whenever two items are
    created within the same millisecond or the candidate is already taken.
    """

    def __init__(self, clock=None):
        self._clock = clock or time.time
        self._last = 0

    def next_id(self, taken: Iterable[str] = ()) -> str:
        """Return an id that is not in ``taken``."""
        taken = set(taken)
        candidate = max(int(self._clock() * 1000), self._last + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)
