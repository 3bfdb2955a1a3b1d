"""test_social.py — Relationships, interactions and dialogue.

Run:  python test_social.py     (or: pytest test_social.py)
"""
from __future__ import annotations
import sys, traceback

from core.tuning import load as _load_tuning
_load_tuning()

from core.ecs import World
from components import (
    Brain, Needs, NeedKind, Motion, Personality, Social, Dialogue,
    FunctionalItem, GameClock, MapInfo, ItemRegistry, ActivityLog,
)
from components.ai import IDLE, MOVING
from components.social import HISTORY_LIMIT
from logic.social import (
    relationship_status, get_relationship, update_relationship,
    perform_interaction, interact_with,
)
from logic.brains.autonomous import try_socialize
from logic.entity_factory import spawn_npc, spawn_item


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)


def _approx(a: float, b: float, eps: float = 1e-9) -> bool:
    return abs(a - b) <= eps


def _world() -> World:
    w = World()
    w.set_res(MapInfo(width=12, height=12))
    w.set_res(ItemRegistry())
    w.set_res(ActivityLog())
    return w


def _pair(w: World, a_at=(0, 0), b_at=(1, 0)) -> tuple[int, int]:
    calm = Personality(sociability=0.5, helpfulness=0.5, activity=0.5)
    a = spawn_npc(w, *a_at, name="Jordan Garcia", personality=calm)
    b = spawn_npc(w, *b_at, name="Avery Miller", personality=calm)
    return a, b


# ── Relationships ────────────────────────────────────────────────────

def test_relationship_status_labels():
    cases = [(100, "Best Friend"), (80, "Best Friend"), (79.9, "Friend"),
             (50, "Friend"), (20, "Acquaintance"), (0, "Neutral"),
             (-20, "Neutral"), (-21, "Unfriendly"), (-50, "Unfriendly"),
             (-51, "Enemy"), (-100, "Enemy")]
    for value, label in cases:
        assert relationship_status(value) == label, (value, label)


def test_unknown_relationship_is_zero():
    w = _world()
    a, b = _pair(w)
    assert get_relationship(w, a, b) == 0.0
    assert w.get(a, Social).relationships == {}


def test_relationship_is_clamped():
    w = _world()
    a, b = _pair(w)
    for _ in range(30):
        update_relationship(w, a, b, 5.0)
    assert get_relationship(w, a, b) == 100.0
    for _ in range(50):
        update_relationship(w, a, b, -5.0)
    assert get_relationship(w, a, b) == -100.0
    assert w.get(a, Social).relationships[b].interactions == 80
    # one-sided
    assert get_relationship(w, b, a) == 0.0


def test_relationship_timestamp_uses_clock():
    w = _world()
    clock = GameClock()
    clock.advance(12.0)
    w.set_res(clock)
    a, b = _pair(w)
    update_relationship(w, a, b, 5.0)
    assert w.get(a, Social).relationships[b].last_interaction == 12.0


# ── Talking ──────────────────────────────────────────────────────────

def test_interaction_gains():
    w = _world()
    a, b = _pair(w)
    for eid in (a, b):
        needs = w.get(eid, Needs)
        for kind in (NeedKind.SOCIAL, NeedKind.HAPPINESS):
            needs[kind].value = 50.0
            needs[kind].refresh()

    perform_interaction(w, a, b)

    mine, theirs = w.get(a, Needs), w.get(b, Needs)
    assert _approx(mine[NeedKind.SOCIAL].value, 62.5)
    assert _approx(mine[NeedKind.HAPPINESS].value, 56.5)
    assert _approx(theirs[NeedKind.SOCIAL].value, 60.0)
    assert _approx(theirs[NeedKind.HAPPINESS].value, 55.2)
    assert get_relationship(w, a, b) == 5.0
    assert get_relationship(w, b, a) == 5.0

    history = w.get(a, Social).history
    assert history[-1]["with"] == b and history[-1]["type"] == "talk"
    assert history[-1]["name"] == "Avery Miller"
    assert w.get(b, Social).history[-1]["with"] == a

    entry = w.res(ActivityLog).entries[-1]
    assert entry["message"] == "Jordan Garcia talked with Avery Miller"
    assert entry["type"] == "interaction"


def test_history_is_capped():
    w = _world()
    a, b = _pair(w)
    clock = GameClock()
    w.set_res(clock)
    for _ in range(HISTORY_LIMIT + 5):
        clock.advance(1.0)
        perform_interaction(w, a, b)
    history = w.get(a, Social).history
    assert len(history) == HISTORY_LIMIT
    # oldest five dropped
    assert history[0]["time"] == 6.0
    assert history[-1]["time"] == 25.0
    assert w.get(a, Social).relationships[b].interactions == 25


def test_adjacent_agents_talk():
    w = _world()
    a, b = _pair(w, (0, 0), (1, 0))
    assert interact_with(w, a, b)
    assert get_relationship(w, a, b) == 5.0
    assert w.get(a, Brain).state == IDLE
    assert not w.get(a, Motion).moving


def test_far_agent_steps_along_major_axis():
    cases = [((3, 1), (1, 0)), ((1, 3), (0, 1)), ((-3, 2), (-1, 0)),
             ((2, 2), (0, 1)), ((1, 1), (0, 1)), ((0, -4), (0, -1))]
    for offset, step in cases:
        w = _world()
        a, b = _pair(w, (5, 5), (5 + offset[0], 5 + offset[1]))
        assert interact_with(w, a, b), offset
        motion = w.get(a, Motion)
        assert (motion.target_x, motion.target_y) == (5 + step[0], 5 + step[1]), offset
        assert w.get(a, Brain).state == MOVING
        assert get_relationship(w, a, b) == 0.0


def test_blocked_step_gives_up():
    w = _world()
    a, b = _pair(w, (0, 0), (0, 3))
    bed = spawn_item(w, "bed", 0, 1)
    w.get(bed, FunctionalItem).reserve(99)
    assert not interact_with(w, a, b)
    assert w.get(a, Brain).state == IDLE
    assert not w.get(a, Motion).moving


def test_cannot_talk_to_self():
    w = _world()
    a, _ = _pair(w)
    assert not interact_with(w, a, a)


def test_try_socialize_picks_neighbour():
    w = _world()
    a, b = _pair(w, (4, 4), (5, 4))
    assert try_socialize(w, a)
    assert get_relationship(w, b, a) == 5.0


def test_dialogue_cycles():
    d = Dialogue(["Hi", "Bye"])
    assert [d.next_line() for _ in range(3)] == ["Hi", "Bye", "Hi"]
    assert Dialogue([]).next_line() == ""
    assert Dialogue().next_line() == "Hello!"


if __name__ == "__main__":
    tests = [(name, fn) for name, fn in sorted(globals().items())
             if name.startswith("test_") and callable(fn)]
    print("\n── Social ──")
    for name, fn in tests:
        try:
            fn()
            ok(name)
        except AssertionError as ex:
            fail(name, str(ex))
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Social Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
