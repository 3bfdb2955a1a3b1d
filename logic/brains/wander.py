"""logic/brains/wander.py — Random-walk, patrol and idle brains.

``wander`` takes one random legal step per think.  ``patrol`` walks
``Patrol.path`` point to point and turns around at either end.  ``idle``
stands still.
"""

from __future__ import annotations

from core.ecs import World
from components import Brain, Patrol
from logic.brains.registry import register_brain
from logic.brains._helpers import wander
from logic.movement import can_move_to, move_to


def _wander_brain(world: World, eid: int, brain: Brain, dt: float,
                  game_time: float = 0.0):
    wander(world, eid)


def next_patrol_index(patrol: Patrol) -> int:
    """Index of the next point, flipping ``patrol.direction`` at the ends."""
    n = len(patrol.path)
    if n <= 1:
        return 0
    nxt = patrol.index + patrol.direction
    if not 0 <= nxt < n:
        patrol.direction = -patrol.direction
        nxt = patrol.index + patrol.direction
    return max(0, min(n - 1, nxt))


def _patrol_brain(world: World, eid: int, brain: Brain, dt: float,
                  game_time: float = 0.0):
    """Walk to the next patrol point (ping-pong)."""
    patrol = world.get(eid, Patrol)
    if patrol is None or not patrol.path:
        return
    nxt = next_patrol_index(patrol)
    x, y = patrol.path[nxt]
    if can_move_to(world, x, y) and move_to(world, eid, x, y):
        patrol.index = nxt


def _idle_brain(world: World, eid: int, brain: Brain, dt: float,
                game_time: float = 0.0):
    pass


register_brain("wander", _wander_brain)
register_brain("patrol", _patrol_brain)
register_brain("idle", _idle_brain)
