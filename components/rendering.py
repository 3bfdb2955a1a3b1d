"""components.rendering — Identity and sprite reference."""

from __future__ import annotations
from dataclasses import dataclass


# Entity types known to the index.  Anything else loads as "entity".
KIND_NPC = "npc"
KIND_FUNCTIONAL = "functional"
KIND_ITEM = "item"
KIND_ENTITY = "entity"


def _cell(v) -> int:
    """Tileset cell index from a saved value; anything unusable is 0."""
    try:
        return max(0, int(v))
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass
class Identity:
    """What an entity is called and which type bucket it lives in.

    ``kind`` is the entity type ("npc", "functional", "item", "entity").
    ``active`` is cleared when the entity is marked for removal; systems
    skip inactive entities.
    """
    name: str = "Entity"
    kind: str = KIND_ENTITY
    interactable: bool = False
    active: bool = True


@dataclass
class Sprite:
    """Reference into a tileset image: which sheet, which cell."""
    tileset: str = "furniture"
    tile_x: int = 0
    tile_y: int = 0

    def to_dict(self) -> dict:
        return {"tileset": self.tileset, "tileX": self.tile_x, "tileY": self.tile_y}

    @classmethod
    def from_dict(cls, data: dict | None) -> "Sprite | None":
        if not isinstance(data, dict):
            return None
        return cls(
            tileset=str(data.get("tileset", "furniture")),
            tile_x=_cell(data.get("tileX")),
            tile_y=_cell(data.get("tileY")),
        )


@dataclass
class Collectible:
    """Plain placed item that is not a functional (need-satisfying) one."""
    item_type: str = "collectible"
    quantity: int = 1
