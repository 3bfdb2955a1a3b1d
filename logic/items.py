"""logic/items.py — Using functional items.

Arrival at the target item calls ``start_using``; ``item_use_system``
ticks every item an agent is using and hands completion to
``complete_use``, which applies the item's satisfaction table to the
user's needs.

Contention is resolved at arrival: if two agents walk to the same item,
the first to ``reserve`` it wins and the loser drops its goal and
re-decides on its next think.
"""

from __future__ import annotations

from core.ecs import World
from components import Brain, Identity, FunctionalItem, ActivityLog
from components.ai import IDLE, USING
from logic.needs import ensure_needs, satisfy_need


def _actor(world: World, eid: int) -> tuple[int, str]:
    ident = world.get(eid, Identity)
    return (eid, ident.name if ident else f"e{eid}")


def start_using(world: World, eid: int) -> bool:
    """Reserve the agent's target item and switch to ``using``.

    On refusal (taken, or gone) the goal is dropped and the agent goes
    back to ``idle``.
    """
    brain = world.get(eid, Brain)
    if brain is None or brain.target_item is None:
        return False
    item = world.get(brain.target_item, FunctionalItem)
    if item is None or not world.alive(brain.target_item) or not item.reserve(eid):
        abandon_goal(world, eid)
        return False
    brain.state = USING
    return True


def abandon_goal(world: World, eid: int) -> None:
    brain = world.get(eid, Brain)
    if brain is not None:
        brain.drop_goal()


def complete_use(world: World, eid: int, item: FunctionalItem) -> None:
    """Apply a finished use of *item* to agent *eid*.

    The goal's need gets the item's amount for it; every other non-zero
    entry in the table is applied too, costs included.
    """
    brain = world.get(eid, Brain)
    if brain is None:
        return
    goal = brain.goal
    if goal is not None:
        needs = ensure_needs(world, eid)
        satisfy_need(needs, goal.need, item.satisfaction(goal.need))
        log = world.res(ActivityLog)
        if log is not None:
            log.log_need_satisfaction(_actor(world, eid), goal.need, item.name)
        for kind, amount in item.definition.entries():
            if kind is not goal.need and amount != 0:
                satisfy_need(needs, kind, amount)
    brain.goal = None
    brain.target_item = None
    brain.state = IDLE


def item_use_system(world: World, dt: float) -> None:
    """Tick the item each using agent holds; complete or abandon."""
    for eid, brain, ident in world.query(Brain, Identity):
        if brain.state != USING or not ident.active:
            continue
        target = brain.target_item
        item = world.get(target, FunctionalItem) if target is not None else None
        if item is None or not world.alive(target) or item.occupant != eid:
            # Item removed or interrupted under us.
            abandon_goal(world, eid)
            continue
        if item.tick(dt):
            complete_use(world, eid, item)


def release_items_of(world: World, eids: set[int]) -> int:
    """Interrupt every item occupied by one of *eids*.  Returns the count."""
    released = 0
    for _, item in world.all_of(FunctionalItem):
        if item.occupant is not None and item.occupant in eids:
            item.interrupt()
            released += 1
    return released
