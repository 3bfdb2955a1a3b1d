"""core/bootstrap.py — World bootstrap helpers.

Extracted from main.py to keep the entry point clean and readable.
Handles:
  - Installing the shared resources (clock, activity log, map, items)
  - Populating a fresh map with a few townsfolk and furniture
"""

from __future__ import annotations
import random

from core.ecs import World
from core.data import DataLoader
from core.tuning import get as _tun
from core.constants import TILE_GRASS
from components import GameClock, ActivityLog, MapInfo
from logic.entity_factory import spawn_npc, spawn_item


# ── World resources ──────────────────────────────────────────────────

def setup_world_resources(world: World, *, load_items: bool = True) -> None:
    """Install GameClock, ActivityLog, MapInfo and ItemRegistry."""
    clock = GameClock(time_scale=float(_tun("clock", "time_scale", 60.0)))
    clock.set_time(int(_tun("clock", "start_hour", 6)))
    world.set_res(clock)
    world.set_res(ActivityLog(max_entries=int(_tun("log", "max_entries", 50)),
                              clock=clock))
    world.set_res(MapInfo(
        width=int(_tun("map", "width", 30)),
        height=int(_tun("map", "height", 20)),
        tile_size=int(_tun("map", "tile_size", 32)),
    ))
    loader = DataLoader(world)
    if load_items:
        loader.load_items()
    else:
        loader.registry()


# ── Starter town ─────────────────────────────────────────────────────

# (item key, tile x, tile y): kitchen and lounge, then the bedroom.
_STARTER_ITEMS = [
    ("meal", 3, 3), ("apple", 5, 3), ("water", 7, 3), ("coffee", 9, 3),
    ("couch", 4, 9), ("tv", 6, 9), ("book", 8, 9), ("table", 12, 6),
    ("bed", 22, 3), ("bed", 24, 3), ("computer", 20, 12), ("game", 24, 12),
]


def grass_tiles(world: World) -> list[list[int]]:
    info = world.res(MapInfo) or MapInfo()
    return [[TILE_GRASS] * info.width for _ in range(info.height)]


def populate_town(world: World, npc_count: int = 6) -> list[int]:
    """Place the starter furniture and *npc_count* autonomous agents.

    Returns the new NPC ids.
    """
    for key, x, y in _STARTER_ITEMS:
        spawn_item(world, key, x, y)

    width, height = world.map_bounds()
    npcs = []
    for _ in range(npc_count):
        x = random.randrange(1, max(2, width - 1))
        y = random.randrange(1, max(2, height - 1))
        npcs.append(spawn_npc(world, x, y))
    print(f"[SPAWN] Populated town: {len(_STARTER_ITEMS)} items, {len(npcs)} townsfolk")
    return npcs
