"""components.resources — World-level singletons (stored with ``set_res``)."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class MapInfo:
    """Size of the tile map the agents live on.

    ``width``/``height`` are in tiles.  ``tile_size`` is px per tile and
    only matters to the renderer and the saved map file.
    """
    width: int = 30
    height: int = 20
    tile_size: int = 32
