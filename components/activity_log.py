"""components.activity_log — What the townsfolk have been up to.

A ring-buffer resource fed by the agent brains and the item system.
The viewer's activity console subscribes as a listener.

Usage:
    log = world.res(ActivityLog)
    log.log_action((eid, "Alex Smith"), "is wandering")
    log.add_listener(console.push)

Each entry is a dict:
    {"t": float, "clock": str, "message": str, "type": str,
     "data": dict | None}

``type`` is "action", "interaction" or "need".  Listeners receive every
new entry as it is recorded, and ``None`` once when the log is cleared.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable

from components.needs import NeedKind, need_kind


# Past-tense verb used when a need is satisfied.
SATISFY_VERBS = {
    NeedKind.HUNGER: "ate",
    NeedKind.THIRST: "drank",
    NeedKind.SLEEP: "slept",
    NeedKind.HAPPINESS: "enjoyed",
    NeedKind.SOCIAL: "socialized",
}

# How an agent feels while seeking something for a need.
SEEK_FEELINGS = {
    NeedKind.HUNGER: "hungry",
    NeedKind.THIRST: "thirsty",
    NeedKind.SLEEP: "tired",
    NeedKind.HAPPINESS: "unhappy",
    NeedKind.SOCIAL: "lonely",
}

Actor = tuple[int, str]
Listener = Callable[[dict | None], None]


@dataclass
class ActivityLog:
    """Ring-buffer of simulation events."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 50
    # GameClock used to stamp entries; None stamps t=0 and no clock text.
    clock: Any = None
    _listeners: list[Listener] = field(default_factory=list)

    # ── core ─────────────────────────────────────────────────────────

    def record(self, message: str, type: str = "action",
               data: dict | None = None) -> dict:
        entry = {
            "t": self.clock.time if self.clock else 0.0,
            "clock": self.clock.formatted() if self.clock else "",
            "message": message,
            "type": type,
            "data": data,
        }
        self.entries.append(entry)
        if len(self.entries) > self.max_entries:
            del self.entries[:-self.max_entries]
        for listener in list(self._listeners):
            listener(entry)
        return entry

    def clear(self):
        self.entries.clear()
        for listener in list(self._listeners):
            listener(None)

    def recent(self, n: int = 10) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        if n <= 0:
            return []
        return self.entries[-n:]

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── helpers used by the brains ───────────────────────────────────

    def log_action(self, actor: Actor, verb: str, detail: str = "") -> None:
        eid, name = actor
        message = f"{name} {verb}: {detail}" if detail else f"{name} {verb}"
        self.record(message, "action", {"eid": eid, "verb": verb, "detail": detail})

    def log_interaction(self, actor: Actor, other: Actor,
                        verb: str = "talked") -> None:
        message = f"{actor[1]} {verb} with {other[1]}"
        self.record(message, "interaction",
                    {"eid": actor[0], "other": other[0], "verb": verb})

    def log_need_satisfaction(self, actor: Actor, kind, item_name: str) -> None:
        kind = need_kind(kind)
        verb = SATISFY_VERBS.get(kind, "used")
        self.record(f"{actor[1]} {verb} {item_name}", "need",
                    {"eid": actor[0], "need": kind.value if kind else None,
                     "item": item_name})

    def log_seeking(self, actor: Actor, kind, item_name: str) -> None:
        kind = need_kind(kind)
        feeling = SEEK_FEELINGS.get(kind, "restless")
        self.record(f"{actor[1]} is {feeling}, seeking {item_name}", "action",
                    {"eid": actor[0], "need": kind.value if kind else None,
                     "item": item_name})
