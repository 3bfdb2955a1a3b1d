"""components.social — Relationships, interaction history, dialogue lines."""

from __future__ import annotations
from dataclasses import dataclass, field


HISTORY_LIMIT = 20


@dataclass
class Relationship:
    """One agent's opinion of another.

    ``value`` runs from -100 (enemy) to 100 (best friend).
    ``last_interaction`` is ``GameClock.time`` of the last change (s).
    """
    value: float = 0.0
    interactions: int = 0
    last_interaction: float = 0.0


@dataclass
class Social:
    """Relationships keyed by the other entity's id, plus recent history.

    Each side owns its own records; A's opinion of B and B's opinion of
    A are stored on A and B respectively and may differ.  ``history``
    keeps the newest ``HISTORY_LIMIT`` interactions, oldest first::

        {"with": eid, "name": str, "type": "talk", "time": float}
    """
    relationships: dict[int, Relationship] = field(default_factory=dict)
    history: list[dict] = field(default_factory=list)

    def relationship(self, other: int) -> Relationship:
        """The record for *other*, created on first access."""
        rel = self.relationships.get(other)
        if rel is None:
            rel = Relationship()
            self.relationships[other] = rel
        return rel

    def remember(self, entry: dict) -> None:
        self.history.append(entry)
        if len(self.history) > HISTORY_LIMIT:
            del self.history[:-HISTORY_LIMIT]


@dataclass
class Dialogue:
    """Lines an NPC says when clicked, cycled in order."""
    lines: list[str] = field(default_factory=lambda: ["Hello!", "How can I help you?"])
    index: int = 0

    def next_line(self) -> str:
        if not self.lines:
            return ""
        line = self.lines[self.index % len(self.lines)]
        self.index = (self.index + 1) % len(self.lines)
        return line
