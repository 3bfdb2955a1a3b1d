"""logic/needs.py — Need decay, satisfaction and urgency.

The pure functions operate on a ``Needs`` component and know nothing
about the world; ``needs_system`` is the per-frame driver that decays
every agent's needs on a fixed cadence, scaled by the day/night clock.

Urgency (``priority = 1 - value / maximum``)::

    ≤ 0.3   not urgent          most_urgent() returns None
    > 0.3   urgent              brain goes looking for an item
    value/max < 0.2 on any need → is_critical(), nearby agents help
"""

from __future__ import annotations
from typing import Callable

from components import Brain, Needs, Identity, GameClock
from components.needs import Need, NeedKind, NEED_KINDS
from core.tuning import get as _tun


_BASE_DECAY = {
    NeedKind.HUNGER: 0.5,
    NeedKind.THIRST: 0.4,
    NeedKind.SLEEP: 0.3,
    NeedKind.HAPPINESS: 0.2,
    NeedKind.SOCIAL: 0.25,
}


def base_rate(kind: NeedKind) -> float:
    """Points per second a need loses before any clock modifier."""
    return float(_tun("needs.decay", kind.value, _BASE_DECAY[kind]))


# ── Pure operations ──────────────────────────────────────────────────

def init_needs() -> Needs:
    """Every need full, priority 0."""
    maximum = float(_tun("needs", "maximum", 100.0))
    return Needs({kind: Need(maximum, maximum, 0.0) for kind in NEED_KINDS})


def decay_needs(needs: Needs, dt: float,
                modifier: Callable[[NeedKind], float] | None = None) -> None:
    """Drain each need by ``rate * modifier(kind) * dt``, floored at 0."""
    for kind, need in needs.items():
        if dt > 0:
            mult = modifier(kind) if modifier is not None else 1.0
            need.value = max(0.0, need.value - base_rate(kind) * mult * dt)
        need.refresh()


def satisfy_need(needs: Needs, kind: NeedKind, amount: float) -> None:
    """Add *amount* (may be negative) to a need, clamped to [0, maximum]."""
    need = needs[kind]
    need.value += amount
    need.refresh()


def most_urgent(needs: Needs) -> NeedKind | None:
    """The need with the highest priority, if it is past the urgency line.

    Ties go to the earlier kind in ``NEED_KINDS``.
    """
    threshold = float(_tun("needs", "urgency_threshold", 0.3))
    best: NeedKind | None = None
    best_priority = -1.0
    for kind, need in needs.items():
        if need.priority > best_priority:
            best, best_priority = kind, need.priority
    if best is None or best_priority <= threshold:
        return None
    return best


def is_critical(needs: Needs) -> bool:
    critical = float(_tun("needs", "critical_ratio", 0.2))
    return any(need.ratio < critical for _, need in needs.items())


def need_percentage(needs: Needs, kind: NeedKind) -> float:
    return needs[kind].ratio * 100.0


# ── System ───────────────────────────────────────────────────────────

def ensure_needs(world, eid: int) -> Needs:
    """Return the agent's Needs, creating a full set if it has none."""
    needs = world.get(eid, Needs)
    if needs is None:
        needs = init_needs()
        world.add(eid, needs)
    return needs


def needs_system(world, dt: float) -> None:
    """Decay needs for every active agent on a fixed cadence.

    Each brain accumulates ``dt`` in ``need_timer``; once it passes
    ``[agent] need_interval`` the needs decay by the whole accumulated
    time and the timer resets.  Decay is modified by the clock resource
    when there is one.
    """
    interval = float(_tun("agent", "need_interval", 0.1))
    clock = world.res(GameClock)
    modifier = clock.decay_modifier if clock is not None else None

    for eid, brain, ident in world.query(Brain, Identity):
        if not ident.active:
            continue
        brain.need_timer += dt
        if brain.need_timer < interval:
            continue
        needs = ensure_needs(world, eid)
        decay_needs(needs, brain.need_timer, modifier)
        brain.need_timer = 0.0
