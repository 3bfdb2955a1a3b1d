"""components.clock — Day/night clock resource.

The clock keeps two times:

``minute``  minute-of-day, wraps at ``day_length`` (1440 = 24 h).
            Advanced by ``dt * time_scale / 60`` per update, so the
            default ``time_scale`` of 60 is one game-minute per real
            second.  Frozen while ``paused``.
``time``    monotonic seconds since the session started.  Never wraps
            and never pauses; used to timestamp log entries and
            relationship updates.

Day segments (minutes from midnight)::

    dawn 06:00   morning 09:00   noon 12:00
    afternoon 15:00   evening 18:00   night 21:00 → 06:00

Night covers both late evening and the hours before dawn.
"""

from __future__ import annotations


DAWN = 6 * 60
MORNING = 9 * 60
NOON = 12 * 60
AFTERNOON = 15 * 60
EVENING = 18 * 60
NIGHT = 21 * 60

# Ascending thresholds; anything before dawn or after NIGHT is night.
_SEGMENTS = [
    (NIGHT, "night"),
    (EVENING, "evening"),
    (AFTERNOON, "afternoon"),
    (NOON, "noon"),
    (MORNING, "morning"),
    (DAWN, "dawn"),
]

MIN_TIME_SCALE = 1.0
MAX_TIME_SCALE = 3600.0


class GameClock:
    """Wrapping minute-of-day clock plus a monotonic session clock."""

    def __init__(self, minute: float = DAWN, day_length: float = 24 * 60,
                 time_scale: float = 60.0, paused: bool = False):
        self.day_length = day_length
        self.minute = minute % day_length
        self._time_scale = 60.0
        self.time_scale = time_scale
        self.paused = paused
        self.time = 0.0

    # ── time scale ───────────────────────────────────────────────────

    @property
    def time_scale(self) -> float:
        return self._time_scale

    @time_scale.setter
    def time_scale(self, scale: float) -> None:
        self._time_scale = max(MIN_TIME_SCALE, min(MAX_TIME_SCALE, float(scale)))

    # ── ticking ──────────────────────────────────────────────────────

    def advance(self, dt: float) -> None:
        """Move the clock forward by *dt* real seconds."""
        self.time += dt
        if self.paused:
            return
        self.minute = (self.minute + dt * (self._time_scale / 60.0)) % self.day_length

    def set_time(self, hours: int, minutes: int = 0) -> None:
        self.minute = (hours * 60 + minutes) % self.day_length

    # ── queries ──────────────────────────────────────────────────────

    def segment(self) -> str:
        """'night', 'dawn', 'morning', 'noon', 'afternoon' or 'evening'."""
        m = self.minute
        if m >= NIGHT or m < DAWN:
            return "night"
        for start, name in _SEGMENTS:
            if m >= start:
                return name
        return "night"

    def is_night(self) -> bool:
        return self.segment() == "night"

    def is_day(self) -> bool:
        return not self.is_night()

    def decay_modifier(self, kind) -> float:
        """Multiplier applied to a need's base decay rate right now.

        Sleep drains slowly at night and fast by day; happiness and
        social drain a little slower at night; hunger and thirst are
        unaffected.
        """
        name = getattr(kind, "value", kind)
        night = self.is_night()
        if name == "sleep":
            return 0.3 if night else 1.5
        if name in ("happiness", "social"):
            return 0.7 if night else 1.0
        return 1.0

    def activity_preferences(self) -> dict[str, bool]:
        if self.is_night():
            return {
                "prefer_sleep": True,
                "prefer_social": False,
                "prefer_entertainment": True,
                "prefer_food": False,
            }
        return {
            "prefer_sleep": False,
            "prefer_social": True,
            "prefer_entertainment": True,
            "prefer_food": True,
        }

    def day_progress(self) -> float:
        """Fraction of the day elapsed (0–1)."""
        return self.minute / self.day_length

    def formatted(self) -> str:
        """'HH:MM AM/PM' for the HUD and log entries."""
        hours = int(self.minute // 60)
        minutes = int(self.minute % 60)
        hour12 = hours % 12 or 12
        ampm = "AM" if hours < 12 else "PM"
        return f"{hour12:02d}:{minutes:02d} {ampm}"
