"""logic/movement.py — Tile-to-tile walking.

Agents walk in straight lines between tiles.  ``move_to`` sets a target;
``movement_system`` interpolates ``Motion.fx/fy`` toward it at
``Motion.speed`` tiles/s and commits ``Position`` only on arrival, so the
entity index always sees whole tiles.  There is no pathfinding: targets
are either one step away (wander, socialize) or a straight walk to an
item or patrol point.
"""

from __future__ import annotations
import math

from core.ecs import World
from components import Position, Motion, Brain, Identity, FunctionalItem
from components.ai import IDLE, MOVING
from components.rendering import KIND_FUNCTIONAL
from components.spatial import DOWN, LEFT, RIGHT, UP
from core.tuning import get as _tun


def can_move_to(world: World, x: int, y: int) -> bool:
    """False when (x, y) is off the map or holds a functional item in use."""
    width, height = world.map_bounds()
    if not (0 <= x < width and 0 <= y < height):
        return False
    for other in world.entities_at(x, y):
        ident = world.get(other, Identity)
        if ident is None or ident.kind != KIND_FUNCTIONAL:
            continue
        item = world.get(other, FunctionalItem)
        if item is not None and not item.is_available():
            return False
    return True


def ensure_motion(world: World, eid: int) -> Motion | None:
    """Return the entity's Motion, creating one at its tile if missing."""
    motion = world.get(eid, Motion)
    if motion is None:
        pos = world.get(eid, Position)
        if pos is None:
            return None
        motion = Motion(fx=float(pos.x), fy=float(pos.y),
                        target_x=pos.x, target_y=pos.y,
                        speed=float(_tun("agent", "move_speed", 1.5)))
        world.add(eid, motion)
    return motion


def move_to(world: World, eid: int, x: int, y: int) -> bool:
    """Start walking *eid* toward tile (x, y).

    Ignored (False) while already walking.  Sets the facing from the
    step direction; vertical-down wins, then left, right, up.
    """
    pos = world.get(eid, Position)
    motion = ensure_motion(world, eid)
    if pos is None or motion is None or motion.moving:
        return False

    if y > pos.y:
        motion.direction = DOWN
    elif x < pos.x:
        motion.direction = LEFT
    elif x > pos.x:
        motion.direction = RIGHT
    elif y < pos.y:
        motion.direction = UP

    motion.target_x = x
    motion.target_y = y
    motion.moving = True
    motion.frame = 0
    motion.frame_timer = 0.0

    brain = world.get(eid, Brain)
    if brain is not None:
        brain.state = MOVING
    return True


def movement_system(world: World, dt: float) -> None:
    """Advance every walking entity; handle arrival."""
    from logic.items import start_using

    frame_time = float(_tun("agent", "walk_frame_time", 0.15))

    for eid, motion, pos in world.query(Motion, Position):
        if not motion.moving:
            continue
        ident = world.get(eid, Identity)
        if ident is not None and not ident.active:
            continue

        dx = motion.target_x - motion.fx
        dy = motion.target_y - motion.fy
        dist = math.hypot(dx, dy)
        step = motion.speed * dt

        if dist <= step:
            # ── Arrival ──────────────────────────────────────────────
            motion.fx = float(motion.target_x)
            motion.fy = float(motion.target_y)
            pos.x = motion.target_x
            pos.y = motion.target_y
            motion.moving = False
            motion.frame = 0
            motion.frame_timer = 0.0
            _arrive(world, eid, pos, start_using)
            continue

        motion.fx += dx / dist * step
        motion.fy += dy / dist * step

        motion.frame_timer += dt
        while motion.frame_timer >= frame_time:
            motion.frame_timer -= frame_time
            motion.frame = (motion.frame + 1) % 4


def _arrive(world: World, eid: int, pos: Position, start_using) -> None:
    brain = world.get(eid, Brain)
    if brain is None:
        return
    if brain.target_item is not None:
        item_pos = world.get(brain.target_item, Position)
        if (item_pos is not None and world.alive(brain.target_item)
                and (item_pos.x, item_pos.y) == (pos.x, pos.y)):
            start_using(world, eid)
            return
        # Item gone or moved while we walked.
        brain.drop_goal()
        return
    if brain.state == MOVING:
        brain.state = IDLE
