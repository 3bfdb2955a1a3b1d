"""test_agent.py — Decision engine: seeking, contention, helping, movement.

Scenario tests drive ``tick_systems`` with a fixed ``DT`` of 0.25 s and
need decay frozen, so every number below is exact.

Run:  python test_agent.py     (or: pytest test_agent.py)
"""
from __future__ import annotations
import random, sys, traceback

from core.tuning import load as _load_tuning
_load_tuning()

from core.ecs import World
from components import (
    Brain, Needs, NeedKind, Position, Motion, Patrol, Personality,
    FunctionalItem, MapInfo, ItemRegistry, ActivityLog,
)
from components.ai import IDLE, USING, MOVING, HELPING
from components.spatial import DOWN, LEFT, RIGHT, UP
from logic.tick import tick_systems
from logic.brains import run_brains, register_brain, registered_names
from logic.brains.autonomous import goal_state
from logic.brains.wander import next_patrol_index
from logic.movement import can_move_to, move_to, movement_system
from logic.entity_factory import spawn_npc, spawn_item, BRAIN_KINDS


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


DT = 0.25
CALM = Personality(sociability=0.5, helpfulness=0.5, activity=0.5)


def _world(width: int = 12, height: int = 12) -> World:
    w = World()
    w.set_res(MapInfo(width=width, height=height))
    w.set_res(ItemRegistry())
    w.set_res(ActivityLog())
    return w


def _npc(w: World, x: int, y: int, name: str, ai_type: str = "autonomous",
         **values: float) -> int:
    eid = spawn_npc(w, x, y, name=name, ai_type=ai_type, personality=CALM)
    needs = w.get(eid, Needs)
    for key, value in values.items():
        needs[NeedKind(key)].value = value
        needs[NeedKind(key)].refresh()
    return eid


def _tick(w: World, n: int = 1):
    for _ in range(n):
        tick_systems(w, DT, skip_needs=True)


def _think_now(w: World, *eids: int):
    for eid in eids:
        w.get(eid, Brain).think_timer = 1.0
    run_brains(w, 0.0)


# ── Seeking an item ──────────────────────────────────────────────────

def test_hungry_agent_eats_meal():
    random.seed(7)
    w = _world()
    meal = spawn_item(w, "meal", 5, 5)
    npc = _npc(w, 4, 5, "Alex Smith", hunger=15.0, happiness=95.0)
    brain = w.get(npc, Brain)
    item = w.get(meal, FunctionalItem)

    _tick(w, 3)
    assert brain.goal is None, "decided before the think interval"
    _tick(w)
    assert brain.goal is not None, "no goal after one decision cycle"
    assert brain.goal.need is NeedKind.HUNGER
    assert brain.goal.item_eid == meal
    assert brain.goal.helping_eid is None
    assert brain.state == MOVING
    assert goal_state(brain) == "seeking"
    assert w.res(ActivityLog).entries[-1]["message"] == "Alex Smith is hungry, seeking Meal"

    for _ in range(10):
        _tick(w)
        if brain.state == USING:
            break
    assert brain.state == USING
    assert item.occupant == npc
    assert w.get(npc, Position) == Position(5, 5)

    use_ticks = 0
    while brain.goal is not None and use_ticks < 40:
        _tick(w)
        use_ticks += 1
    assert use_ticks * DT == 5.0, use_ticks

    needs = w.get(npc, Needs)
    assert needs[NeedKind.HUNGER].value == 75.0
    assert needs[NeedKind.HAPPINESS].value == 100.0
    assert item.is_available()
    messages = [e["message"] for e in w.res(ActivityLog).entries]
    assert "Alex Smith ate Meal" in messages


def test_contention_first_arrival_wins():
    random.seed(11)
    w = _world()
    meal = spawn_item(w, "meal", 5, 5)
    a = _npc(w, 4, 5, "Riley Brown", hunger=25.0)
    b = _npc(w, 6, 5, "Quinn Davis", hunger=25.0)
    item = w.get(meal, FunctionalItem)
    brain_a, brain_b = w.get(a, Brain), w.get(b, Brain)

    _tick(w, 4)
    assert brain_a.goal.item_eid == meal
    assert brain_b.goal.item_eid == meal

    _tick(w, 3)
    assert item.occupant == a
    assert brain_a.state == USING
    assert brain_b.goal is None and brain_b.state == IDLE

    for _ in range(40):
        _tick(w)
        if brain_a.goal is None:
            break
    assert w.get(a, Needs)[NeedKind.HUNGER].value == 85.0
    assert w.get(b, Needs)[NeedKind.HUNGER].value == 25.0
    uses = [e for e in w.res(ActivityLog).entries if e["type"] == "need"]
    assert len(uses) == 1


def test_no_item_means_wander():
    random.seed(2)
    w = _world()
    npc = _npc(w, 5, 5, "Avery Lopez", thirst=10.0)
    _think_now(w, npc)
    brain = w.get(npc, Brain)
    assert brain.goal is None
    assert w.get(npc, Motion).moving


def test_unreachable_item_means_stay_idle():
    random.seed(2)
    w = _world()
    busy = spawn_item(w, "apple", 6, 5)
    spare = spawn_item(w, "apple", 6, 5)
    w.get(busy, FunctionalItem).reserve(999)
    npc = _npc(w, 5, 5, "Avery Lopez", hunger=10.0)
    _think_now(w, npc)
    brain = w.get(npc, Brain)
    assert brain.goal is None and brain.state == IDLE
    assert not w.get(npc, Motion).moving
    assert w.get(npc, Position) == Position(5, 5)
    w.get(busy, FunctionalItem).interrupt()
    _think_now(w, npc)
    assert brain.goal.item_eid == busy
    assert spare != busy


def test_nearest_item_is_chosen():
    w = _world()
    far = spawn_item(w, "apple", 9, 5)
    near = spawn_item(w, "apple", 3, 5)
    npc = _npc(w, 4, 5, "Logan Lee", hunger=40.0)
    _think_now(w, npc)
    assert w.get(npc, Brain).goal.item_eid == near
    assert far != near


def test_in_use_item_is_skipped():
    w = _world()
    busy = spawn_item(w, "apple", 4, 6)
    free = spawn_item(w, "apple", 9, 9)
    w.get(busy, FunctionalItem).reserve(999)
    npc = _npc(w, 4, 5, "Jamie Moore", hunger=40.0)
    _think_now(w, npc)
    assert w.get(npc, Brain).goal.item_eid == free


# ── Helping ──────────────────────────────────────────────────────────

def test_helper_adopts_critical_neighbours_need():
    w = _world()
    apple = spawn_item(w, "apple", 2, 4)
    helper = _npc(w, 2, 2, "Harper Moore")
    victim = _npc(w, 4, 2, "Kai Lee", ai_type="idle", hunger=10.0)
    _think_now(w, helper, victim)

    brain = w.get(helper, Brain)
    assert brain.goal is not None
    assert brain.goal.need is NeedKind.HUNGER
    assert brain.goal.item_eid == apple
    assert brain.goal.helping_eid == victim
    assert goal_state(brain) == HELPING
    messages = [e["message"] for e in w.res(ActivityLog).entries]
    assert messages == ["Harper Moore is helping: Kai Lee find Apple"]


def test_help_skips_neighbours_with_no_free_item():
    w = _world()
    spawn_item(w, "apple", 2, 4)
    helper = _npc(w, 2, 2, "Harper Moore")
    _npc(w, 3, 2, "Noah Wilson", ai_type="idle", thirst=5.0)
    second = _npc(w, 2, 1, "Emery Jones", ai_type="idle", hunger=5.0)
    _think_now(w, helper)
    goal = w.get(helper, Brain).goal
    assert goal is not None and goal.helping_eid == second


def test_help_ignores_far_agents():
    random.seed(5)
    w = _world()
    spawn_item(w, "apple", 2, 4)
    helper = _npc(w, 2, 2, "Harper Moore")
    _npc(w, 9, 9, "Kai Lee", ai_type="idle", hunger=5.0)
    _think_now(w, helper)
    assert w.get(helper, Brain).goal is None


# ── Cadence and registry ─────────────────────────────────────────────

def test_think_cadence_and_busy_block():
    w = _world()
    calls = []
    register_brain("counting", lambda world, eid, brain, dt, t: calls.append(eid))
    npc = _npc(w, 1, 1, "Dakota Lee")
    brain = w.get(npc, Brain)
    brain.kind = "counting"

    run_brains(w, 0.5)
    assert calls == []
    run_brains(w, 0.5)
    assert calls == [npc]
    assert brain.think_timer == 0.0

    brain.state = USING
    run_brains(w, 5.0)
    assert calls == [npc]
    brain.state = IDLE
    w.get(npc, Motion).moving = True
    run_brains(w, 5.0)
    assert calls == [npc]


def test_removed_agent_stops_thinking():
    w = _world()
    calls = []
    register_brain("counting", lambda world, eid, brain, dt, t: calls.append(eid))
    gone = _npc(w, 1, 1, "Rowan Hale")
    stays = _npc(w, 3, 3, "Quinn Hale")
    for eid in (gone, stays):
        w.get(eid, Brain).kind = "counting"
    w.kill(gone)
    _think_now(w, gone, stays)
    assert calls == [stays]
    assert not hasattr(w.get(stays, Brain), "active")


def test_crashing_brain_is_contained():
    w = _world()

    def broken(world, eid, brain, dt, t):
        raise RuntimeError("boom")

    register_brain("broken", broken)
    a = _npc(w, 1, 1, "Finley Lee")
    b = _npc(w, 3, 3, "Blake Lee", ai_type="idle")
    w.get(a, Brain).kind = "broken"
    w.get(a, Brain).state = "seeking"
    _think_now(w, a, b)
    assert w.get(a, Brain).state == IDLE
    assert w.get(b, Brain).think_timer == 0.0


def test_unknown_ai_type_falls_back():
    w = _world()
    npc = spawn_npc(w, 1, 1, ai_type="hivemind")
    assert w.get(npc, Brain).kind == "autonomous"
    assert set(BRAIN_KINDS) <= set(registered_names())


def test_idle_brain_stands_still():
    w = _world()
    npc = _npc(w, 3, 3, "Casey Lee", ai_type="idle", hunger=5.0)
    _think_now(w, npc)
    assert not w.get(npc, Motion).moving
    assert w.get(npc, Brain).goal is None


# ── Wander and patrol ────────────────────────────────────────────────

def test_wander_stays_in_bounds():
    random.seed(3)
    w = _world(3, 3)
    npc = _npc(w, 1, 1, "Morgan Lee", ai_type="wander")
    seen = set()
    for _ in range(200):
        _tick(w)
        pos = w.get(npc, Position)
        assert 0 <= pos.x < 3 and 0 <= pos.y < 3, (pos.x, pos.y)
        seen.add((pos.x, pos.y))
    assert len(seen) > 1


def test_wander_boxed_in():
    w = _world(1, 1)
    npc = _npc(w, 0, 0, "Taylor Lee", ai_type="wander")
    _think_now(w, npc)
    assert not w.get(npc, Motion).moving
    assert w.get(npc, Brain).state == IDLE


def test_patrol_ping_pong_order():
    patrol = Patrol(path=[(0, 0), (1, 0), (2, 0)])
    seq = []
    for _ in range(6):
        patrol.index = next_patrol_index(patrol)
        seq.append(patrol.index)
    assert seq == [1, 2, 1, 0, 1, 2]
    assert next_patrol_index(Patrol(path=[(4, 4)])) == 0


def test_patrol_brain_walks_route():
    w = _world()
    npc = spawn_npc(w, 1, 1, name="Cameron Lee", ai_type="patrol",
                    patrol_path=[(1, 1), (3, 1)])
    patrol = w.get(npc, Patrol)
    _think_now(w, npc)
    assert patrol.index == 1
    movement_system(w, 2.0)
    assert w.get(npc, Position) == Position(3, 1)
    _think_now(w, npc)
    assert patrol.index == 0
    assert patrol.direction == -1


def test_patrol_index_holds_when_move_refused():
    w = _world()
    npc = spawn_npc(w, 1, 1, name="Cameron Lee", ai_type="patrol",
                    patrol_path=[(1, 1), (3, 1)])
    w.get(npc, Motion).moving = True
    from logic.brains.wander import _patrol_brain
    _patrol_brain(w, npc, w.get(npc, Brain), 0.0)
    assert w.get(npc, Patrol).index == 0


def test_patrol_point_off_map_is_skipped():
    w = _world(5, 5)
    npc = spawn_npc(w, 4, 4, name="Dana Fox", ai_type="patrol",
                    patrol_path=[(4, 4), (9, 4)])
    for _ in range(3):
        _think_now(w, npc)
        movement_system(w, 1.0)
    assert w.get(npc, Position) == Position(4, 4)
    assert not w.get(npc, Motion).moving
    assert w.get(npc, Patrol).index == 0
    assert w.get(npc, Brain).state == IDLE


def test_patrol_waits_for_item_in_use():
    w = _world(5, 5)
    bed = spawn_item(w, "bed", 3, 0)
    w.get(bed, FunctionalItem).reserve(42)
    npc = spawn_npc(w, 0, 0, name="Dana Fox", ai_type="patrol",
                    patrol_path=[(0, 0), (3, 0)])
    _think_now(w, npc)
    assert not w.get(npc, Motion).moving
    assert w.get(npc, Patrol).index == 0
    w.get(bed, FunctionalItem).interrupt()
    _think_now(w, npc)
    motion = w.get(npc, Motion)
    assert motion.moving and (motion.target_x, motion.target_y) == (3, 0)
    assert w.get(npc, Patrol).index == 1


# ── Movement ─────────────────────────────────────────────────────────

def test_can_move_to_rules():
    w = _world(5, 5)
    free_bed = spawn_item(w, "bed", 1, 1)
    used_bed = spawn_item(w, "bed", 2, 2)
    w.get(used_bed, FunctionalItem).reserve(42)
    _npc(w, 3, 3, "Hayden Lee")
    assert not can_move_to(w, -1, 0)
    assert not can_move_to(w, 5, 0)
    assert not can_move_to(w, 0, 5)
    assert can_move_to(w, 1, 1)
    assert not can_move_to(w, 2, 2)
    assert can_move_to(w, 3, 3)
    assert w.get(free_bed, FunctionalItem).is_available()


def test_move_to_sets_facing():
    w = _world()
    npc = _npc(w, 2, 2, "Sam Lee")
    motion = w.get(npc, Motion)
    for (x, y), facing in (((2, 3), DOWN), ((1, 2), LEFT),
                           ((3, 2), RIGHT), ((2, 1), UP)):
        assert move_to(w, npc, x, y)
        assert motion.direction == facing
        assert w.get(npc, Brain).state == MOVING
        motion.moving = False


def test_move_to_ignored_while_moving():
    w = _world()
    npc = _npc(w, 2, 2, "Sam Lee")
    assert move_to(w, npc, 4, 2)
    assert not move_to(w, npc, 0, 2)
    assert w.get(npc, Motion).target_x == 4


def test_walk_frames_and_arrival():
    w = _world()
    npc = _npc(w, 0, 0, "Sam Lee")
    move_to(w, npc, 3, 0)
    motion = w.get(npc, Motion)
    movement_system(w, 0.2)
    movement_system(w, 0.2)
    assert motion.moving
    assert motion.frame == 2
    assert w.get(npc, Position) == Position(0, 0)
    movement_system(w, 5.0)
    assert not motion.moving
    assert motion.frame == 0
    assert w.get(npc, Position) == Position(3, 0)
    assert w.get(npc, Brain).state == IDLE


def test_arrival_at_vanished_item_drops_goal():
    w = _world()
    apple = spawn_item(w, "apple", 3, 0)
    npc = _npc(w, 0, 0, "Sam Lee", hunger=40.0)
    _think_now(w, npc)
    assert w.get(npc, Brain).goal.item_eid == apple
    w.remove_entity(apple)
    movement_system(w, 5.0)
    brain = w.get(npc, Brain)
    assert brain.goal is None and brain.state == IDLE


if __name__ == "__main__":
    tests = [(name, fn) for name, fn in sorted(globals().items())
             if name.startswith("test_") and callable(fn)]
    print("\n── Agents ──")
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
    print(f"  Agent Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
