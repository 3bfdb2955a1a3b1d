"""components.spatial — Tile position and smooth movement state.

All coordinates are in tiles.  ``Position`` is the authoritative tile an
entity occupies (what the entity index files it under); ``Motion`` holds
the interpolated float position an agent has while walking between
tiles.  Pixels are the renderer's business (see ``TILE_SIZE``).
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Position:
    x: int = 0            # tile
    y: int = 0            # tile


# Facing values, in sprite-sheet row order.
DOWN, LEFT, RIGHT, UP = 0, 1, 2, 3


@dataclass
class Motion:
    """Walk state for entities that move on their own.

    ``fx``/``fy`` are the interpolated position (tiles, float).
    ``target_x``/``target_y`` is the tile being walked to while
    ``moving`` is set.  ``speed`` is tiles per second.
    ``frame`` is the walk-cycle frame (0–3) for the renderer.
    """
    fx: float = 0.0
    fy: float = 0.0
    target_x: int = 0
    target_y: int = 0
    moving: bool = False
    speed: float = 1.5         # tiles/s
    direction: int = DOWN
    frame: int = 0
    frame_timer: float = 0.0
