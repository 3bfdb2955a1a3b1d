"""logic/entity_factory.py — Creating townsfolk and furniture.

Every spawn helper attaches the full component set an entity of that
type needs, so systems never have to guess:

    npc         Identity, Position, Motion, Needs, Brain, Personality,
                Social, Dialogue, Sprite (+ Patrol for patrol brains)
    functional  Identity, Position, FunctionalItem, Sprite
    item        Identity, Position, Collectible, Sprite
    entity      Identity, Position, Sprite

``eid`` arguments let the map loader reuse saved ids when they are free.
"""

from __future__ import annotations
import random

from core.ecs import World
from components import (
    Identity, Position, Motion, Sprite, Collectible, Brain, Personality,
    Patrol, Social, Dialogue, FunctionalItem, ItemDef, ItemRegistry,
)
from components.rendering import KIND_NPC, KIND_FUNCTIONAL, KIND_ITEM, KIND_ENTITY
from logic.needs import init_needs
from core.tuning import get as _tun


FIRST_NAMES = [
    "Alex", "Sam", "Jordan", "Taylor", "Casey", "Morgan", "Riley", "Avery",
    "Quinn", "Blake", "Cameron", "Dakota", "Emery", "Finley", "Harper",
    "Hayden", "Jamie", "Kai", "Logan", "Noah",
]
LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez", "Wilson",
    "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin", "Lee",
]

BRAIN_KINDS = ("autonomous", "patrol", "wander", "idle")


def generate_npc_name() -> str:
    return f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"


def _new_id(world: World, eid: int | None) -> int:
    return world.spawn() if eid is None else world.spawn_with_id(eid)


def spawn_npc(world: World, x: int, y: int, *,
              name: str | None = None,
              ai_type: str = "autonomous",
              personality: Personality | None = None,
              patrol_path: list[tuple[int, int]] | None = None,
              dialogue: list[str] | None = None,
              sprite: Sprite | None = None,
              eid: int | None = None) -> int:
    """Create an agent at tile (x, y).  Personality is rolled if not given."""
    if ai_type not in BRAIN_KINDS:
        print(f"[SPAWN] Unknown AI type '{ai_type}', using 'autonomous'")
        ai_type = "autonomous"
    eid = _new_id(world, eid)
    world.add(eid, Identity(name=name or generate_npc_name(),
                            kind=KIND_NPC, interactable=True))
    world.add(eid, Position(x, y))
    world.add(eid, Motion(fx=float(x), fy=float(y), target_x=x, target_y=y,
                          speed=float(_tun("agent", "move_speed", 1.5))))
    world.add(eid, init_needs())
    world.add(eid, Brain(kind=ai_type))
    world.add(eid, personality or Personality(
        sociability=random.random(),
        helpfulness=random.random(),
        activity=random.random(),
    ))
    world.add(eid, Social())
    world.add(eid, Dialogue(list(dialogue)) if dialogue else Dialogue())
    world.add(eid, sprite or Sprite("character", 0, 0))
    if patrol_path or ai_type == "patrol":
        world.add(eid, Patrol(path=list(patrol_path or [])))
    return eid


def spawn_functional(world: World, definition: ItemDef, x: int, y: int, *,
                     eid: int | None = None) -> int:
    """Place a functional item built from *definition* at tile (x, y)."""
    eid = _new_id(world, eid)
    world.add(eid, Identity(name=definition.name, kind=KIND_FUNCTIONAL,
                            interactable=True))
    world.add(eid, Position(x, y))
    world.add(eid, FunctionalItem(definition))
    world.add(eid, definition.sprite or Sprite("furniture", 0, 0))
    return eid


def spawn_item(world: World, key: str, x: int, y: int, *,
               eid: int | None = None) -> int | None:
    """Place the registered functional item *key*.  None if unknown."""
    registry = world.res(ItemRegistry)
    if registry is None:
        registry = ItemRegistry()
        world.set_res(registry)
    definition = registry.create(key)
    if definition is None:
        return None
    return spawn_functional(world, definition, x, y, eid=eid)


def spawn_collectible(world: World, x: int, y: int, *,
                      name: str = "Item", item_type: str = "collectible",
                      quantity: int = 1, sprite: Sprite | None = None,
                      eid: int | None = None) -> int:
    eid = _new_id(world, eid)
    world.add(eid, Identity(name=name, kind=KIND_ITEM, interactable=True))
    world.add(eid, Position(x, y))
    world.add(eid, Collectible(item_type=item_type, quantity=quantity))
    world.add(eid, sprite or Sprite("items", 0, 0))
    return eid


def spawn_entity(world: World, x: int, y: int, *,
                 name: str = "Entity", interactable: bool = False,
                 sprite: Sprite | None = None,
                 eid: int | None = None) -> int:
    """A plain map object with no behaviour."""
    eid = _new_id(world, eid)
    world.add(eid, Identity(name=name, kind=KIND_ENTITY, interactable=interactable))
    world.add(eid, Position(x, y))
    world.add(eid, sprite or Sprite("objects", 0, 0))
    return eid
