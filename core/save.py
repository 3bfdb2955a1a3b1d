"""core/save.py — Map persistence (JSON).

A map file holds the grid and everything placed on it::

    {
      "width": 30, "height": 20, "tileSize": 32,
      "map": [[0, 0, ...], ...],        # tile ids, row-major
      "player": null,
      "entities": [ {entity}, ... ]
    }

Entity records share ``id, type, tileX, tileY, name, sprite,
interactable``.  NPCs add ``aiType, patrolPath, dialogue, needs``;
functional items add ``itemDef``; collectibles add ``itemType,
quantity``.

Only durable state is written.  Goals, walking and items in use are
not: after a load every agent is idle and every item available.  Reading
is forgiving; missing or malformed fields take their defaults and
entities of unknown type load as plain entities.
"""

from __future__ import annotations
import json
import math
import random
from pathlib import Path
from typing import Any

from core.ecs import World
from core.constants import TILE_VOID
from components import (
    Identity, Position, Sprite, Collectible, Brain, Needs, Patrol,
    Dialogue, Personality, FunctionalItem, ItemDef, ItemRegistry, MapInfo,
)
from components.needs import need_kind
from components.rendering import KIND_NPC, KIND_FUNCTIONAL, KIND_ITEM
from logic.entity_factory import (
    spawn_npc, spawn_functional, spawn_collectible, spawn_entity,
)


MAPS_DIR = Path("maps")


def get_map_file(name: str = "map") -> Path:
    """Path for a named map in the maps directory."""
    MAPS_DIR.mkdir(parents=True, exist_ok=True)
    return MAPS_DIR / f"{name}.json"


# ── Field readers ────────────────────────────────────────────────────

def _int(v: Any, default: int = 0) -> int:
    try:
        return int(v)
    except (TypeError, ValueError, OverflowError):
        return default


def _float(v: Any, default: float = 0.0) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError, OverflowError):
        return default
    return f if math.isfinite(f) else default


def _patrol_path(raw: Any) -> list[tuple[int, int]]:
    path = []
    if not isinstance(raw, list):
        return path
    for point in raw:
        if isinstance(point, dict) and "x" in point and "y" in point:
            path.append((_int(point["x"]), _int(point["y"])))
        elif isinstance(point, (list, tuple)) and len(point) == 2:
            path.append((_int(point[0]), _int(point[1])))
    return path


def apply_needs(needs: Needs, raw: Any) -> None:
    """Overwrite needs from a saved snapshot.  Unknown kinds are ignored."""
    if not isinstance(raw, dict):
        return
    for key, entry in raw.items():
        kind = need_kind(key)
        if kind is None or not isinstance(entry, dict):
            continue
        need = needs[kind]
        need.maximum = _float(entry.get("max"), need.maximum) or need.maximum
        need.value = _float(entry.get("value"), need.value)
        need.refresh()


# ── Entities ─────────────────────────────────────────────────────────

def serialize_entity(world: World, eid: int) -> dict[str, Any] | None:
    """Plain-dict record for *eid*, or None if it has no identity."""
    ident = world.get(eid, Identity)
    if ident is None:
        return None
    pos = world.get(eid, Position) or Position()
    sprite = world.get(eid, Sprite)
    data: dict[str, Any] = {
        "id": eid,
        "type": ident.kind,
        "tileX": pos.x,
        "tileY": pos.y,
        "name": ident.name,
        "sprite": sprite.to_dict() if sprite else None,
        "interactable": ident.interactable,
    }

    if ident.kind == KIND_NPC:
        brain = world.get(eid, Brain)
        patrol = world.get(eid, Patrol)
        dialogue = world.get(eid, Dialogue)
        needs = world.get(eid, Needs)
        personality = world.get(eid, Personality)
        data["aiType"] = brain.kind if brain else "autonomous"
        data["patrolPath"] = [{"x": x, "y": y} for x, y in (patrol.path if patrol else [])]
        data["dialogue"] = list(dialogue.lines) if dialogue else []
        data["needs"] = needs.snapshot() if needs else None
        if personality is not None:
            data["personality"] = {
                "sociability": personality.sociability,
                "helpfulness": personality.helpfulness,
                "activity": personality.activity,
            }

    elif ident.kind == KIND_FUNCTIONAL:
        item = world.get(eid, FunctionalItem)
        data["itemDef"] = (item.definition if item else ItemDef()).to_dict()
        data["type"] = KIND_FUNCTIONAL

    elif ident.kind == KIND_ITEM:
        coll = world.get(eid, Collectible) or Collectible()
        data["itemType"] = coll.item_type
        data["quantity"] = coll.quantity

    return data


def deserialize_entity(world: World, data: Any) -> int | None:
    """Spawn an entity from a saved record.  Returns its id, or None.

    The saved id is reused when it is free.
    """
    if not isinstance(data, dict):
        return None
    kind = data.get("type") or "entity"
    saved_id = _int(data.get("id"), 0)
    eid_hint = saved_id if saved_id > 0 else None
    x = _int(data.get("tileX"), 0)
    y = _int(data.get("tileY"), 0)
    name = data.get("name")
    sprite = Sprite.from_dict(data.get("sprite"))

    if kind == KIND_NPC:
        raw_dialogue = data.get("dialogue")
        dialogue = ([str(line) for line in raw_dialogue]
                    if isinstance(raw_dialogue, list) and raw_dialogue else None)
        raw_p = data.get("personality")
        personality = None
        if isinstance(raw_p, dict):
            personality = Personality(
                sociability=_float(raw_p.get("sociability"), 0.5),
                helpfulness=_float(raw_p.get("helpfulness"), 0.5),
                activity=_float(raw_p.get("activity"), 0.5),
            )
        eid = spawn_npc(
            world, x, y,
            name=str(name) if name else None,
            ai_type=str(data.get("aiType") or "autonomous"),
            personality=personality,
            patrol_path=_patrol_path(data.get("patrolPath")),
            dialogue=dialogue,
            sprite=sprite,
            eid=eid_hint,
        )
        apply_needs(world.get(eid, Needs), data.get("needs"))

    elif kind == KIND_FUNCTIONAL:
        raw_def = data.get("itemDef")
        if isinstance(raw_def, dict):
            definition = ItemDef.from_dict(raw_def)
        else:
            definition = _definition_by_name(world, name)
        if sprite is not None and definition.sprite is None:
            definition.sprite = sprite
        eid = spawn_functional(world, definition, x, y, eid=eid_hint)

    elif kind == KIND_ITEM:
        eid = spawn_collectible(
            world, x, y,
            name=str(name or "Item"),
            item_type=str(data.get("itemType") or "collectible"),
            quantity=_int(data.get("quantity"), 1),
            sprite=sprite,
            eid=eid_hint,
        )

    else:
        eid = spawn_entity(world, x, y, name=str(name or "Entity"),
                           interactable=bool(data.get("interactable", False)),
                           sprite=sprite, eid=eid_hint)

    ident = world.get(eid, Identity)
    if ident is not None and "interactable" in data:
        ident.interactable = bool(data["interactable"])
    return eid


def _definition_by_name(world: World, name: Any) -> ItemDef:
    registry = world.res(ItemRegistry)
    if registry is not None and name:
        key = registry.key_for_name(str(name))
        if key is not None:
            return registry.create(key)
    return ItemDef(name=str(name or "Item"))


# ── Maps ─────────────────────────────────────────────────────────────

def blank_tiles(width: int, height: int) -> list[list[int]]:
    return [[TILE_VOID] * width for _ in range(height)]


def map_to_dict(world: World, tiles: list[list[int]] | None = None) -> dict[str, Any]:
    info = world.res(MapInfo) or MapInfo()
    entities = []
    for eid in world.all_entities():
        record = serialize_entity(world, eid)
        if record is not None:
            entities.append(record)
    return {
        "width": info.width,
        "height": info.height,
        "tileSize": info.tile_size,
        "map": tiles if tiles is not None else blank_tiles(info.width, info.height),
        "player": None,
        "entities": entities,
    }


def _spawn_records(world: World, records: list) -> list[int]:
    loaded = []
    for record in records:
        eid = deserialize_entity(world, record)
        if eid is not None:
            loaded.append(eid)
    return loaded


def apply_map_data(world: World, data: dict[str, Any]) -> list[int]:
    """Replace the world's contents with a loaded map.  Returns new ids.

    Records are built in a scratch world first, so a record that still
    raises leaves *world* exactly as it was.
    """
    raw_entities = data.get("entities")
    records = raw_entities if isinstance(raw_entities, list) else []

    # Rolled names and personalities must come out the same on the real pass
    rng_state = random.getstate()
    scratch = World()
    registry = world.res(ItemRegistry)
    if registry is not None:
        scratch.set_res(registry)
    try:
        _spawn_records(scratch, records)
    finally:
        random.setstate(rng_state)

    info = world.res(MapInfo) or MapInfo()
    info.width = _int(data.get("width"), info.width)
    info.height = _int(data.get("height"), info.height)
    info.tile_size = _int(data.get("tileSize"), info.tile_size)
    world.set_res(info)

    world.clear()
    return _spawn_records(world, records)


def save_map(world: World, path: str | Path,
             tiles: list[list[int]] | None = None) -> Path:
    """Write the world to a JSON map file.  Returns the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = map_to_dict(world, tiles)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"[SAVE] Saved {len(data['entities'])} entities to {path}")
    return path


def install_map(world: World, data: dict[str, Any],
                source: str | Path = "map") -> list[int] | None:
    """``apply_map_data`` for data read from disk.

    Returns the new ids, or None (world untouched) if a record is unusable.
    """
    try:
        loaded = apply_map_data(world, data)
    except (TypeError, ValueError, AttributeError, KeyError, OverflowError) as ex:
        print(f"[SAVE] Bad entity record in {source}: {ex}")
        return None
    print(f"[SAVE] Loaded {len(loaded)} entities from {source}")
    return loaded


def load_map(world: World, path: str | Path) -> dict[str, Any] | None:
    """Read a JSON map file and load it into *world*.

    Returns the map dict, or None (world untouched) if the file is
    missing or not a valid map.
    """
    path = Path(path)
    if not path.exists():
        print(f"[SAVE] Map file {path} not found")
        return None
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as ex:
        print(f"[SAVE] Error loading map file: {ex}")
        return None
    if not isinstance(data, dict):
        print(f"[SAVE] {path} is not a map file")
        return None
    if install_map(world, data, path) is None:
        return None
    return data
