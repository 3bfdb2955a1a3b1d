"""components.item_registry — Functional item lookup table.

Maps item keys ("apple", "bed", …) to ``ItemDef`` templates.  Populated
from ``data/items.toml`` by ``core.data.DataLoader``; falls back to the
built-in table below so tests and a bare checkout still have furniture.

    registry = world.res(ItemRegistry)
    definition = registry.create("meal")   # fresh copy, safe to mutate
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, field

from components.items import ItemDef
from components.needs import NeedKind
from components.rendering import Sprite


H, T, S, J, C = (NeedKind.HUNGER, NeedKind.THIRST, NeedKind.SLEEP,
                 NeedKind.HAPPINESS, NeedKind.SOCIAL)

# key: (name, category, satisfies, use_time, (sheet col, sheet row))
_DEFAULTS: dict[str, tuple] = {
    "apple":    ("Apple", "food", {H: 30, J: 5}, 2, (0, 0)),
    "meal":     ("Meal", "food", {H: 60, J: 10}, 5, (1, 0)),
    "water":    ("Water", "drink", {T: 40}, 1, (2, 0)),
    "juice":    ("Juice", "drink", {T: 50, J: 10}, 2, (3, 0)),
    "bed":      ("Bed", "furniture", {S: 80, J: 5}, 10, (0, 1)),
    "couch":    ("Couch", "furniture", {S: 30, J: 15, C: 10}, 5, (1, 1)),
    "tv":       ("TV", "entertainment", {J: 40, C: 20}, 8, (2, 1)),
    "book":     ("Book", "entertainment", {J: 25}, 6, (3, 1)),
    "table":    ("Table", "furniture", {C: 30, J: 10}, 5, (0, 2)),
    "sandwich": ("Sandwich", "food", {H: 40, J: 8}, 3, (4, 0)),
    "pizza":    ("Pizza", "food", {H: 70, J: 20}, 6, (5, 0)),
    "coffee":   ("Coffee", "drink", {T: 30, S: -10, J: 15}, 2, (6, 0)),
    "soda":     ("Soda", "drink", {T: 45, J: 12}, 2, (7, 0)),
    "chair":    ("Chair", "furniture", {S: 15, J: 5}, 3, (2, 2)),
    "desk":     ("Desk", "furniture", {J: 10, C: 5}, 4, (3, 2)),
    "computer": ("Computer", "entertainment", {J: 50, C: 15}, 10, (4, 1)),
    "game":     ("Game Console", "entertainment", {J: 60, C: 25}, 12, (5, 1)),
}


def default_definitions() -> dict[str, ItemDef]:
    out = {}
    for key, (name, category, satisfies, use_time, (col, row)) in _DEFAULTS.items():
        out[key] = ItemDef(
            name=name, category=category,
            satisfies={k: float(v) for k, v in satisfies.items()},
            use_time=float(use_time),
            sprite=Sprite("furniture", col, row),
        )
    return out


@dataclass
class ItemRegistry:
    """Lookup table mapping item keys → ``ItemDef`` templates."""
    _entries: dict[str, ItemDef] = field(default_factory=default_definitions)

    def register(self, key: str, definition: ItemDef):
        self._entries[key] = definition

    def keys(self) -> list[str]:
        """Registered keys in registration order (hotbar order in the viewer)."""
        return list(self._entries)

    def get(self, key: str) -> ItemDef | None:
        """The shared template for *key*, or None.  Do not mutate."""
        return self._entries.get(key)

    def create(self, key: str) -> ItemDef | None:
        """Fresh copy of the template for *key*.

        Unknown keys print a warning and return None.
        """
        template = self._entries.get(key)
        if template is None:
            print(f"[ITEMS] Unknown item '{key}'")
            return None
        return copy.deepcopy(template)

    def display_name(self, key: str) -> str:
        entry = self._entries.get(key)
        return entry.name if entry else key

    def key_for_name(self, name: str) -> str | None:
        """Reverse lookup by display name (case-insensitive)."""
        lowered = name.lower()
        for key, entry in self._entries.items():
            if entry.name.lower() == lowered:
                return key
        return None
