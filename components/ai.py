"""components.ai — Brain, goal, personality, patrol route."""

from __future__ import annotations
from dataclasses import dataclass, field

from components.needs import NeedKind


# Brain states.  ``moving`` and ``using`` block new decisions.
IDLE = "idle"
HELPING = "helping"
SEEKING = "seeking"
SOCIALIZING = "socializing"
WANDERING = "wandering"
MOVING = "moving"
USING = "using"


@dataclass
class Goal:
    """What an agent is walking toward and why.

    ``helping_eid`` is set when the goal was adopted on behalf of another
    agent whose need is critical; the helper still uses the item itself.
    """
    need: NeedKind
    item_eid: int
    helping_eid: int | None = None


@dataclass
class Brain:
    """Agent AI controller.

    ``kind`` selects the decision function ("autonomous", "patrol",
    "wander", "idle").  ``need_timer`` and ``think_timer`` are the
    per-agent accumulators for the needs and decision cadences (s).
    ``target_item`` is the functional item the agent is heading for or
    using; it normally matches ``goal.item_eid``.
    """
    kind: str = "autonomous"
    state: str = IDLE
    goal: Goal | None = None
    target_item: int | None = None
    need_timer: float = 0.0
    think_timer: float = 0.0

    @property
    def busy(self) -> bool:
        return self.state in (MOVING, USING)

    def drop_goal(self) -> None:
        self.goal = None
        self.target_item = None
        self.state = IDLE


@dataclass(frozen=True)
class Personality:
    """Fixed at spawn.  Each trait is in [0, 1)."""
    sociability: float = 0.5
    helpfulness: float = 0.5
    activity: float = 0.5


@dataclass
class Patrol:
    """Ping-pong route: walk points in order, reverse at either end."""
    path: list[tuple[int, int]] = field(default_factory=list)
    index: int = 0
    direction: int = 1
