"""logic/social.py — Agents talking to each other.

An idle, content agent may pick a nearby agent and walk toward it one
tile at a time; once adjacent both get a relationship bump and a social
and happiness boost (the partner gets ``partner_share`` of it).

Relationship status by value::

    ≥ 80 Best Friend   ≥ 50 Friend   ≥ 20 Acquaintance
    ≥ -20 Neutral      ≥ -50 Unfriendly   below: Enemy
"""

from __future__ import annotations
import math

from core.ecs import World
from components import (
    Brain, Identity, Position, Personality, Social, NeedKind,
    GameClock, ActivityLog,
)
from components.ai import IDLE, SOCIALIZING
from logic.movement import can_move_to, move_to
from logic.needs import ensure_needs, satisfy_need
from core.tuning import get as _tun


_STATUS = [
    (80, "Best Friend"),
    (50, "Friend"),
    (20, "Acquaintance"),
    (-20, "Neutral"),
    (-50, "Unfriendly"),
]


def relationship_status(value: float) -> str:
    for floor, label in _STATUS:
        if value >= floor:
            return label
    return "Enemy"


def ensure_social(world: World, eid: int) -> Social:
    social = world.get(eid, Social)
    if social is None:
        social = Social()
        world.add(eid, social)
    return social


def _now(world: World) -> float:
    clock = world.res(GameClock)
    return clock.time if clock is not None else 0.0


def get_relationship(world: World, eid: int, other: int) -> float:
    """*eid*'s opinion of *other*; 0 if they never met."""
    social = world.get(eid, Social)
    if social is None or other not in social.relationships:
        return 0.0
    return social.relationships[other].value


def update_relationship(world: World, eid: int, other: int, change: float) -> None:
    rel = ensure_social(world, eid).relationship(other)
    rel.value = max(-100.0, min(100.0, rel.value + change))
    rel.interactions += 1
    rel.last_interaction = _now(world)


def record_interaction(world: World, eid: int, other: int, kind: str) -> None:
    ident = world.get(other, Identity)
    ensure_social(world, eid).remember({
        "with": other,
        "name": ident.name if ident else f"e{other}",
        "type": kind,
        "time": _now(world),
    })


def tile_distance(a: Position, b: Position) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def perform_interaction(world: World, eid: int, other: int) -> None:
    """Adjacent agents talk: relationships, needs, history, log."""
    gain = float(_tun("social", "relationship_gain", 5.0))
    update_relationship(world, eid, other, gain)
    update_relationship(world, other, eid, gain)

    personality = world.get(eid, Personality) or Personality()
    soc = personality.sociability
    social_gain = (_tun("social", "social_gain", 10.0)
                   + soc * _tun("social", "social_gain_per_sociability", 5.0))
    happiness_gain = (_tun("social", "happiness_gain", 5.0)
                      + soc * _tun("social", "happiness_gain_per_sociability", 3.0))
    share = float(_tun("social", "partner_share", 0.8))

    mine = ensure_needs(world, eid)
    satisfy_need(mine, NeedKind.HAPPINESS, happiness_gain)
    satisfy_need(mine, NeedKind.SOCIAL, social_gain)
    theirs = ensure_needs(world, other)
    satisfy_need(theirs, NeedKind.HAPPINESS, happiness_gain * share)
    satisfy_need(theirs, NeedKind.SOCIAL, social_gain * share)

    record_interaction(world, eid, other, "talk")
    record_interaction(world, other, eid, "talk")

    log = world.res(ActivityLog)
    if log is not None:
        a = world.get(eid, Identity)
        b = world.get(other, Identity)
        log.log_interaction((eid, a.name if a else f"e{eid}"),
                            (other, b.name if b else f"e{other}"), "talked")


def interact_with(world: World, eid: int, other: int) -> bool:
    """Step toward *other*, or talk if already adjacent.

    Returns True if the agent moved or talked.
    """
    if other == eid:
        return False
    pos = world.get(eid, Position)
    other_pos = world.get(other, Position)
    if pos is None or other_pos is None:
        return False

    brain = world.get(eid, Brain)
    if brain is not None:
        brain.state = SOCIALIZING

    if tile_distance(pos, other_pos) > 1:
        dx = other_pos.x - pos.x
        dy = other_pos.y - pos.y
        nx, ny = pos.x, pos.y
        if abs(dx) > abs(dy):
            nx += 1 if dx > 0 else -1
        else:
            ny += 1 if dy > 0 else -1
        if can_move_to(world, nx, ny):
            return move_to(world, eid, nx, ny)
        if brain is not None:
            brain.state = IDLE
        return False

    perform_interaction(world, eid, other)
    if brain is not None:
        brain.state = IDLE
    return True
