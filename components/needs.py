"""components.needs — The five decaying needs every NPC carries.

Need kinds are a closed enumeration with a fixed order.  Everything
that walks the needs (decay, "most urgent" tie-breaks, saving) walks
``NEED_KINDS`` so results never depend on dict insertion order.

``value`` runs from 0 (empty) to ``maximum`` (full).
``priority`` is derived: ``1 - value / maximum`` (0 = full, 1 = empty).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class NeedKind(str, Enum):
    HUNGER = "hunger"
    THIRST = "thirst"
    SLEEP = "sleep"
    HAPPINESS = "happiness"
    SOCIAL = "social"


NEED_KINDS: tuple[NeedKind, ...] = (
    NeedKind.HUNGER,
    NeedKind.THIRST,
    NeedKind.SLEEP,
    NeedKind.HAPPINESS,
    NeedKind.SOCIAL,
)


def need_kind(name) -> NeedKind | None:
    """Parse a need name ("hunger", NeedKind.HUNGER, …) or return None."""
    if isinstance(name, NeedKind):
        return name
    try:
        return NeedKind(str(name))
    except ValueError:
        return None


@dataclass
class Need:
    value: float = 100.0
    maximum: float = 100.0
    priority: float = 0.0

    def refresh(self) -> None:
        """Clamp ``value`` and recompute ``priority`` from it."""
        self.value = max(0.0, min(self.maximum, self.value))
        self.priority = 1.0 - self.value / self.maximum if self.maximum > 0 else 0.0

    @property
    def ratio(self) -> float:
        return self.value / self.maximum if self.maximum > 0 else 0.0


def _full_table() -> dict[NeedKind, Need]:
    return {kind: Need() for kind in NEED_KINDS}


@dataclass
class Needs:
    """One ``Need`` per kind.  Owned by exactly one agent."""
    table: dict[NeedKind, Need] = field(default_factory=_full_table)

    def __getitem__(self, kind: NeedKind) -> Need:
        return self.table[kind]

    def items(self):
        """Yield ``(kind, need)`` in the fixed kind order."""
        for kind in NEED_KINDS:
            yield kind, self.table[kind]

    def snapshot(self) -> dict[str, dict[str, float]]:
        """Plain-dict copy used by the map file."""
        return {
            kind.value: {
                "value": need.value,
                "max": need.maximum,
                "priority": need.priority,
            }
            for kind, need in self.items()
        }
