"""components.items — Functional items: placed things that satisfy needs.

A functional item carries an ``ItemDef`` (what it does) and a use state.
It is a shared resource with exactly one seat::

    Available ──reserve(eid)──▶ InUse(eid, t=0) ──tick…t ≥ use_time──▶ Available
                                      │
                                      └──interrupt()──▶ Available

``reserve`` never double-books: a second occupant is refused without
touching the current one.  Completion releases the seat by itself.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field

from components.needs import NeedKind, NEED_KINDS, need_kind
from components.rendering import Sprite


DEFAULT_USE_TIME = 5.0   # s


@dataclass
class ItemDef:
    """Static description of a functional item.

    ``satisfies`` maps need kind → amount restored on completion.
    Amounts may be negative (coffee costs sleep).
    ``use_time`` is seconds of exclusive use needed to finish.
    """
    name: str = "Item"
    category: str = "furniture"
    satisfies: dict[NeedKind, float] = field(default_factory=dict)
    use_time: float = DEFAULT_USE_TIME
    sprite: Sprite | None = None

    def amount(self, kind: NeedKind) -> float:
        return self.satisfies.get(kind, 0.0)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": self.category,
            "satisfies": {k.value: v for k, v in self.entries()},
            "useTime": self.use_time,
            "sprite": self.sprite.to_dict() if self.sprite else None,
        }

    def entries(self):
        """Yield ``(kind, amount)`` for listed kinds, in the fixed kind order."""
        for kind in NEED_KINDS:
            if kind in self.satisfies:
                yield kind, self.satisfies[kind]

    @classmethod
    def from_dict(cls, data: dict) -> "ItemDef":
        """Build from a saved ``itemDef`` block; bad fields fall back to defaults."""
        satisfies: dict[NeedKind, float] = {}
        raw = data.get("satisfies") if isinstance(data, dict) else None
        if isinstance(raw, dict):
            for key, amount in raw.items():
                kind = need_kind(key)
                if kind is None:
                    continue
                try:
                    value = float(amount)
                except (TypeError, ValueError, OverflowError):
                    continue
                if math.isfinite(value):
                    satisfies[kind] = value
        if not isinstance(data, dict):
            data = {}
        try:
            use_time = float(data.get("useTime") or DEFAULT_USE_TIME)
        except (TypeError, ValueError, OverflowError):
            use_time = DEFAULT_USE_TIME
        if not math.isfinite(use_time) or use_time <= 0:
            use_time = DEFAULT_USE_TIME
        return cls(
            name=str(data.get("name", "Item")),
            category=str(data.get("category", "furniture")),
            satisfies=satisfies,
            use_time=use_time,
            sprite=Sprite.from_dict(data.get("sprite")),
        )


class FunctionalItem:
    """Use state of one placed functional item."""

    def __init__(self, definition: ItemDef | None = None):
        self.definition = definition or ItemDef()
        self.max_use_time = self.definition.use_time or DEFAULT_USE_TIME
        self.occupant: int | None = None
        self.elapsed = 0.0

    def __repr__(self) -> str:
        state = "available" if self.occupant is None else f"in use by {self.occupant}"
        return f"<FunctionalItem {self.definition.name!r} {state}>"

    @property
    def name(self) -> str:
        return self.definition.name

    # ── capability ───────────────────────────────────────────────────

    def can_satisfy(self, kind: NeedKind) -> bool:
        return self.definition.amount(kind) > 0

    def satisfaction(self, kind: NeedKind) -> float:
        return self.definition.amount(kind)

    # ── exclusive-use lifecycle ──────────────────────────────────────

    def is_available(self) -> bool:
        return self.occupant is None

    def reserve(self, occupant: int) -> bool:
        """Claim the item for *occupant*.  False (and no change) if taken."""
        if self.occupant is not None:
            return False
        self.occupant = occupant
        self.elapsed = 0.0
        return True

    def tick(self, dt: float) -> bool:
        """Accumulate use time.  True once finished (the item is released)."""
        if self.occupant is None:
            return False
        self.elapsed += dt
        if self.elapsed >= self.max_use_time:
            self._release()
            return True
        return False

    def interrupt(self) -> None:
        """Kick the occupant out, discarding progress."""
        self._release()

    def _release(self) -> None:
        self.occupant = None
        self.elapsed = 0.0
