"""logic/brains/_helpers.py — Shared AI helper functions.

Neighbour search, item search and the one-step wander used by more than
one brain.  Distances are Euclidean, in tiles; "first found" means the
entity index's creation order.
"""

from __future__ import annotations
import random

from core.ecs import World
from components import (
    Brain, Goal, Identity, Position, FunctionalItem, NeedKind, ActivityLog,
)
from components.ai import IDLE, HELPING, SEEKING, WANDERING
from components.rendering import KIND_NPC, KIND_FUNCTIONAL
from logic.movement import can_move_to, move_to
from logic.social import tile_distance


# (dx, dy) in facing order: down, left, right, up.
STEPS = [(0, 1), (-1, 0), (1, 0), (0, -1)]


def actor(world: World, eid: int) -> tuple[int, str]:
    """``(eid, name)`` pair the activity log expects."""
    ident = world.get(eid, Identity)
    return (eid, ident.name if ident else f"e{eid}")


def nearby_agents(world: World, eid: int, radius: float) -> list[int]:
    """Other active agents within *radius* tiles of *eid*, index order."""
    pos = world.get(eid, Position)
    if pos is None:
        return []
    out = []
    for other in world.entities_of_type(KIND_NPC):
        if other == eid:
            continue
        ident = world.get(other, Identity)
        other_pos = world.get(other, Position)
        if other_pos is None or (ident is not None and not ident.active):
            continue
        if tile_distance(pos, other_pos) <= radius:
            out.append(other)
    return out


def find_item_for_need(world: World, eid: int, kind: NeedKind) -> int | None:
    """Nearest available functional item that can satisfy *kind*.

    Ties keep the first item found.
    """
    pos = world.get(eid, Position)
    if pos is None:
        return None
    best: int | None = None
    best_dist = float("inf")
    for item_eid in world.entities_of_type(KIND_FUNCTIONAL):
        item = world.get(item_eid, FunctionalItem)
        item_pos = world.get(item_eid, Position)
        if item is None or item_pos is None:
            continue
        if not item.can_satisfy(kind) or not item.is_available():
            continue
        dist = tile_distance(pos, item_pos)
        if dist < best_dist:
            best, best_dist = item_eid, dist
    return best


def go_to_item(world: World, eid: int, item_eid: int, kind: NeedKind,
               helping: int | None = None) -> bool:
    """Adopt a goal for *item_eid* and start walking there.

    Unreachable items are refused (False) without touching the brain.
    Own-need goals are logged as seeking; help goals are logged by the
    caller.
    """
    brain = world.get(eid, Brain)
    item_pos = world.get(item_eid, Position)
    item = world.get(item_eid, FunctionalItem)
    if brain is None or item_pos is None or item is None:
        return False
    if not can_move_to(world, item_pos.x, item_pos.y):
        return False

    brain.goal = Goal(kind, item_eid, helping)
    brain.target_item = item_eid
    brain.state = HELPING if helping is not None else SEEKING

    if helping is None:
        log = world.res(ActivityLog)
        if log is not None:
            log.log_seeking(actor(world, eid), kind, item.name)

    if not move_to(world, eid, item_pos.x, item_pos.y):
        brain.drop_goal()
        return False
    return True


def wander(world: World, eid: int) -> bool:
    """Take one step in a random legal direction.  False if boxed in."""
    pos = world.get(eid, Position)
    brain = world.get(eid, Brain)
    if pos is None:
        return False
    steps = list(STEPS)
    random.shuffle(steps)
    if brain is not None:
        brain.state = WANDERING
    for dx, dy in steps:
        nx, ny = pos.x + dx, pos.y + dy
        if can_move_to(world, nx, ny):
            return move_to(world, eid, nx, ny)
    if brain is not None:
        brain.state = IDLE
    return False
