"""logic/brains/autonomous.py — Needs-driven townsfolk brain.

Each think, in priority order:

1. **Help**: a nearby agent whose needs are critical gets pointed at
   the nearest free item for its most urgent need.  The helper walks
   there and uses it (a simplification of "showing the way").
2. **Own need**: walk to the nearest free item for the most urgent need;
   wander if there is none.
3. **Content**: sometimes chat with a neighbour, otherwise wander.
"""

from __future__ import annotations
import random

from core.ecs import World
from components import Brain, Identity, ActivityLog, FunctionalItem
from components.ai import HELPING, SEEKING
from logic.brains.registry import register_brain
from logic.brains._helpers import (
    actor, nearby_agents, find_item_for_need, go_to_item, wander,
)
from logic.needs import ensure_needs, most_urgent, is_critical
from logic.social import interact_with
from core.tuning import get as _tun


def try_help_others(world: World, eid: int) -> bool:
    """Adopt a critical neighbour's need as our goal.  True if helping."""
    radius = float(_tun("agent", "help_radius", 3))
    for other in nearby_agents(world, eid, radius):
        needs = ensure_needs(world, other)
        urgent = most_urgent(needs)
        if urgent is None or not is_critical(needs):
            continue
        item_eid = find_item_for_need(world, eid, urgent)
        if item_eid is None:
            continue
        if not go_to_item(world, eid, item_eid, urgent, helping=other):
            continue
        log = world.res(ActivityLog)
        if log is not None:
            other_ident = world.get(other, Identity)
            item = world.get(item_eid, FunctionalItem)
            log.log_action(actor(world, eid), "is helping",
                           f"{other_ident.name if other_ident else other} "
                           f"find {item.name}")
        return True
    return False


def try_socialize(world: World, eid: int) -> bool:
    radius = float(_tun("social", "radius", 2))
    partners = nearby_agents(world, eid, radius)
    if not partners:
        return wander(world, eid)
    return interact_with(world, eid, random.choice(partners))


def _autonomous_brain(world: World, eid: int, brain: Brain, dt: float,
                      game_time: float = 0.0):
    """One decision for a needs-driven agent."""
    if try_help_others(world, eid):
        return

    needs = ensure_needs(world, eid)
    urgent = most_urgent(needs)
    if urgent is not None:
        item_eid = find_item_for_need(world, eid, urgent)
        if item_eid is None:
            wander(world, eid)
        else:
            # an unreachable item is refused and the agent waits a decision
            go_to_item(world, eid, item_eid, urgent)
        return

    if random.random() < float(_tun("social", "chance", 0.3)):
        try_socialize(world, eid)
    else:
        wander(world, eid)


def goal_state(brain: Brain) -> str:
    """What the agent is doing toward its goal, for display."""
    if brain.goal is None:
        return brain.state
    return HELPING if brain.goal.helping_eid is not None else SEEKING


register_brain("autonomous", _autonomous_brain)
