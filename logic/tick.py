"""logic/tick.py — System tick orchestration.

One call runs a full simulation pass::

    clock → needs → item use → movement → brains → reindex → purge

Usage::

    from logic.tick import tick_systems
    tick_systems(world, dt)

Removals requested during the pass (``world.kill``) take effect at the
end of it.  Items held by an agent that is purged are released.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import GameClock
from logic.needs import needs_system
from logic.items import item_use_system, release_items_of
from logic.movement import movement_system
from logic.brains import run_brains

if TYPE_CHECKING:
    from core.ecs import World


def tick_systems(world: "World", dt: float,
                 *, skip_needs: bool = False,
                 skip_brains: bool = False) -> None:
    """Run all simulation systems for one frame.

    Parameters
    ----------
    world : World
        The ECS world (entity index plus resources).
    dt : float
        Real seconds since the last frame.
    skip_needs : bool
        Freeze need decay (scripted tests).
    skip_brains : bool
        Skip decisions; movement and item use still run.
    """
    clock = world.res(GameClock)
    if clock:
        clock.advance(dt)

    if not skip_needs:
        needs_system(world, dt)

    item_use_system(world, dt)
    movement_system(world, dt)

    if not skip_brains:
        run_brains(world, dt)

    world.reindex()

    dead = world.marked()
    if dead:
        release_items_of(world, dead)
    world.purge()
