"""logic/brains — Brain registry and decision runner.

Public API
----------
``register_brain(name, fn)``  — add a brain to the registry
``get_brain(name)``           — look up a brain by name
``run_brains(world, dt)``     — let every due agent make a decision

Brain modules register themselves at import time via ``register_brain``.
A brain function has the signature::

    fn(world, eid, brain, dt, game_time)

Cadence
-------
Each ``Brain`` accumulates ``dt`` in ``think_timer``.  An agent decides
at most once per ``[agent] think_interval`` seconds, and only while it is
neither walking nor using an item.  The timer keeps running while busy,
so an agent that just finished something decides on its next tick.
"""

from __future__ import annotations
import traceback

from core.ecs import World
from components import Brain, Identity, Position, Motion, GameClock
from logic.brains.registry import register_brain, get_brain, registered_names
from core.tuning import get as _tun


def run_brains(world: World, dt: float) -> None:
    clock = world.res(GameClock)
    game_time = clock.time if clock else 0.0
    interval = float(_tun("agent", "think_interval", 1.0))

    for eid, brain, ident in world.query(Brain, Identity):
        if not ident.active:
            continue
        if not world.has(eid, Position):
            continue
        brain.think_timer += dt
        if brain.think_timer < interval or brain.busy:
            continue
        motion = world.get(eid, Motion)
        if motion is not None and motion.moving:
            continue
        brain.think_timer = 0.0

        fn = get_brain(brain.kind)
        if fn is None:
            continue
        try:
            fn(world, eid, brain, dt, game_time)
        except Exception:
            traceback.print_exc()
            print(f"[BRAIN] '{brain.kind}' crashed for {ident.name} (e{eid})")
            brain.drop_goal()


# Import brain modules to trigger their register_brain() calls.
from logic.brains import autonomous as _autonomous                # noqa: F401, E402
from logic.brains import wander as _wander                        # noqa: F401, E402

__all__ = ["register_brain", "get_brain", "registered_names", "run_brains"]
