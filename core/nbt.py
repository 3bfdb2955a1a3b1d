"""core/nbt.py — NBT export of map files.

Writes the same map schema as ``core.save`` into an NBT compound via
``nbtlib``, so maps can be inspected with NBT tooling::

    TAG_Compound
      width, height, tileSize : TAG_Int
      map                     : TAG_Int_Array (row-major tile ids)
      entities                : TAG_List of TAG_Compound (one per entity)

Entity compounds mirror the JSON records key for key.  Booleans become
TAG_Byte, floats TAG_Double, nested dicts compounds, lists typed lists.
``None`` fields are left out; the loader's defaults cover them.

``load_map_nbt`` returns the dict shape ``core.save.apply_map_data``
takes, so both formats restore the same way.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any

import nbtlib
from nbtlib import tag

from core.ecs import World
from core.save import map_to_dict, blank_tiles


def _to_tag(value: Any):
    if isinstance(value, bool):
        return tag.Byte(1 if value else 0)
    if isinstance(value, int):
        return tag.Int(value)
    if isinstance(value, float):
        return tag.Double(value)
    if isinstance(value, str):
        return tag.String(value)
    if isinstance(value, dict):
        comp = nbtlib.Compound()
        for k, v in value.items():
            if v is not None:
                comp[str(k)] = _to_tag(v)
        return comp
    if isinstance(value, (list, tuple)):
        items = [_to_tag(v) for v in value if v is not None]
        if not items:
            return nbtlib.List[tag.String]()
        return nbtlib.List[type(items[0])](items)
    return tag.String(str(value))


def _from_tag(value: Any) -> Any:
    if isinstance(value, (tag.ByteArray, tag.IntArray, tag.LongArray)):
        return [int(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _from_tag(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_tag(v) for v in value]
    if isinstance(value, str):
        # plain str, not the SNBT form str() gives for String tags
        return str.__str__(value)
    if isinstance(value, (tag.Float, tag.Double)):
        return float(value)
    if isinstance(value, int):
        return int(value)
    return value


def save_map_nbt(world: World, path: str | Path,
                 tiles: list[list[int]] | None = None) -> Path:
    """Write the world as an NBT map file.  Returns the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = map_to_dict(world, tiles)

    root = nbtlib.Compound()
    root["width"] = tag.Int(data["width"])
    root["height"] = tag.Int(data["height"])
    root["tileSize"] = tag.Int(data["tileSize"])
    root["map"] = tag.IntArray([int(v) for row in data["map"] for v in row])
    entities = nbtlib.List[nbtlib.Compound]()
    for record in data["entities"]:
        entities.append(_to_tag(record))
    root["entities"] = entities

    if path.exists():
        path.unlink()
    nbtlib.File(root).save(path)
    print(f"[NBT] Exported {len(entities)} entities to {path}")
    return path


def load_map_nbt(path: str | Path) -> dict[str, Any] | None:
    """Read an NBT map file into the JSON map dict shape, or None."""
    path = Path(path)
    if not path.exists():
        print(f"[NBT] {path} not found")
        return None
    try:
        # In nbtlib 2.0+, the File object IS the root compound
        root = nbtlib.load(path)
    except Exception as ex:
        print(f"[NBT] Error reading {path}: {ex}")
        return None

    w = int(root.get("width") or 0)
    h = int(root.get("height") or 0)
    flat = _from_tag(root["map"]) if "map" in root else []
    if w > 0 and h > 0 and len(flat) >= w * h:
        tiles = [flat[r * w:(r + 1) * w] for r in range(h)]
    else:
        tiles = blank_tiles(w, h)

    entities = []
    if "entities" in root:
        entities = [_from_tag(comp) for comp in root["entities"]]

    return {
        "width": w,
        "height": h,
        "tileSize": int(root.get("tileSize") or 32),
        "map": tiles,
        "player": None,
        "entities": entities,
    }
