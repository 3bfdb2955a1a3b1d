"""
core/data.py — TOML → ItemRegistry loader

Reads ``data/items.toml`` and fills the world's ``ItemRegistry`` with
one ``ItemDef`` per top-level table.  The mapping from TOML keys to
``ItemDef`` fields lives here.

Usage:
    loader = DataLoader(world)
    keys = loader.load_items("data/items.toml")   # ["apple", "meal", ...]
"""

from __future__ import annotations
import tomllib
from pathlib import Path

from core.ecs import World
from components.items import ItemDef, DEFAULT_USE_TIME
from components.item_registry import ItemRegistry
from components.needs import need_kind
from components.rendering import Sprite


DEFAULT_ITEMS_PATH = Path(__file__).resolve().parent.parent / "data" / "items.toml"


class DataLoader:
    def __init__(self, world: World):
        self.world = world

    def registry(self) -> ItemRegistry:
        """The world's ItemRegistry, installed on first use."""
        registry = self.world.res(ItemRegistry)
        if registry is None:
            registry = ItemRegistry()
            self.world.set_res(registry)
        return registry

    def load_items(self, path: str | Path | None = None) -> list[str]:
        """Load an items file into the ItemRegistry.

        Entries from the file replace built-in ones with the same key.
        A missing or unreadable file leaves the built-in table in place.
        Returns the keys that were loaded from the file.
        """
        path = Path(path) if path is not None else DEFAULT_ITEMS_PATH
        registry = self.registry()
        if not path.exists():
            print(f"[ITEMS] {path} not found, using built-in items")
            return []
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as ex:
            print(f"[ITEMS] Could not parse {path}: {ex}")
            return []

        loaded: list[str] = []
        for key, section in data.items():
            if not isinstance(section, dict):
                continue
            registry.register(key, _build_item(key, section))
            loaded.append(key)
        print(f"[ITEMS] Loaded {len(loaded)} items from {path}")
        return loaded


def _build_item(key: str, section: dict) -> ItemDef:
    """Build an ItemDef, skipping unknown need kinds and bad numbers."""
    satisfies = {}
    for name, amount in (section.get("satisfies") or {}).items():
        kind = need_kind(name)
        if kind is None:
            print(f"[ITEMS] {key}: unknown need '{name}' ignored")
            continue
        satisfies[kind] = float(amount)

    sprite = None
    cell = section.get("sprite")
    if isinstance(cell, (list, tuple)) and len(cell) == 2:
        sprite = Sprite("furniture", int(cell[0]), int(cell[1]))

    return ItemDef(
        name=str(section.get("name", key.title())),
        category=str(section.get("category", "furniture")),
        satisfies=satisfies,
        use_time=float(section.get("use_time", DEFAULT_USE_TIME)),
        sprite=sprite,
    )
