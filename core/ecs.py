"""
core/ecs.py — Entity-Component-System world and entity index

Entities are ints. Components are any object, stored by type.
Query by component types to get matching entities.

    w = World()
    e = w.spawn()
    w.add(e, Identity(name="Alex Smith", kind="npc"))
    w.add(e, Position(5, 3))

    for eid, ident, pos in w.query(Identity, Position):
        ...

On top of the component stores the world is the authoritative entity
index: every entity with an ``Identity`` sits in exactly one type bucket
(``Identity.kind``) and every entity with a ``Position`` in exactly one
tile bucket.  Movement systems mutate ``Position`` freely during a tick;
``reindex()`` then moves changed entities between tile buckets by
comparing against the tile each entity was last filed under.
"""

from __future__ import annotations
from typing import Any, Iterator

from components.rendering import Identity
from components.spatial import Position
from components.resources import MapInfo


class World:
    def __init__(self):
        self._next_id = 0
        self._stores: dict[type, dict[int, Any]] = {}
        self._dead: set[int] = set()
        # kind → ids, tile → ids, id → tile it is currently filed under
        self._type_index: dict[str, set[int]] = {}
        self._tile_index: dict[tuple[int, int], set[int]] = {}
        self._indexed_tile: dict[int, tuple[int, int]] = {}

    # -- Entities --

    def spawn(self) -> int:
        self._next_id += 1
        return self._next_id

    def spawn_with_id(self, eid: int) -> int:
        """Reuse *eid* if it is free (map loading), else allocate a new id."""
        if eid <= 0 or self.exists(eid):
            return self.spawn()
        self._next_id = max(self._next_id, eid)
        return eid

    def exists(self, eid: int) -> bool:
        return any(eid in store for store in self._stores.values())

    def kill(self, eid: int):
        """Mark *eid* for removal.  It disappears at the next ``purge()``."""
        self._dead.add(eid)
        ident = self.get(eid, Identity)
        if ident is not None:
            ident.active = False

    def alive(self, eid: int) -> bool:
        """Exists and is not marked for removal."""
        return eid not in self._dead and self.exists(eid)

    def marked(self) -> set[int]:
        """Entities killed during the current pass, not yet purged."""
        return set(self._dead)

    def purge(self):
        """Remove dead entities from all stores. Call once per frame."""
        for eid in list(self._dead):
            self._drop(eid)
        self._dead.clear()

    def remove_entity(self, eid: int):
        """Remove *eid* immediately (outside of a tick pass)."""
        self._drop(eid)
        self._dead.discard(eid)

    def clear(self):
        """Drop every entity.  Resources survive."""
        for store in self._stores.values():
            for eid in [e for e in store if e >= 0]:
                del store[eid]
        self._dead.clear()
        self._type_index.clear()
        self._tile_index.clear()
        self._indexed_tile.clear()

    def _drop(self, eid: int):
        ident = self.get(eid, Identity)
        if ident is not None:
            bucket = self._type_index.get(ident.kind)
            if bucket is not None:
                bucket.discard(eid)
                if not bucket:
                    del self._type_index[ident.kind]
        self._unfile_tile(eid)
        for store in self._stores.values():
            store.pop(eid, None)

    # -- Components --

    def add(self, eid: int, comp: Any):
        t = type(comp)
        if t not in self._stores:
            self._stores[t] = {}
        if t is Identity:
            old = self._stores[t].get(eid)
            if old is not None:
                self._type_index.get(old.kind, set()).discard(eid)
            self._type_index.setdefault(comp.kind, set()).add(eid)
        self._stores[t][eid] = comp
        if t is Position:
            self._unfile_tile(eid)
            self._file_tile(eid, (comp.x, comp.y))

    def get(self, eid: int, comp_type: type) -> Any | None:
        return self._stores.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._stores.get(comp_type, {})

    def remove(self, eid: int, comp_type: type):
        store = self._stores.get(comp_type)
        if store and eid in store:
            if comp_type is Identity:
                self._type_index.get(store[eid].kind, set()).discard(eid)
            if comp_type is Position:
                self._unfile_tile(eid)
            del store[eid]

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for entities that have ALL types."""
        if not types:
            return
        # Iterate over the smallest bucket
        buckets = [(t, self._stores.get(t, {})) for t in types]
        buckets.sort(key=lambda b: len(b[1]))
        smallest = buckets[0][1]
        for eid in list(smallest):
            if eid in self._dead:
                continue
            if all(eid in b for _, b in buckets):
                yield (eid, *(self._stores[t][eid] for t in types))

    def all_of(self, comp_type: type) -> Iterator[tuple[int, Any]]:
        """Yield (eid, component) for every entity with this type."""
        for eid, comp in list(self._stores.get(comp_type, {}).items()):
            if eid not in self._dead and eid >= 0:
                yield eid, comp

    def count(self, comp_type: type) -> int:
        return sum(1 for _ in self.all_of(comp_type))

    # -- Entity index --

    def entities_of_type(self, kind: str) -> list[int]:
        """Snapshot of living entity ids whose ``Identity.kind`` is *kind*.

        Returned in creation order so that "first found" tie-breaks are
        stable between runs.
        """
        return sorted(self._type_index.get(kind, set()) - self._dead)

    def entities_at(self, x: int, y: int) -> list[int]:
        """Snapshot of living entity ids filed under tile (*x*, *y*)."""
        return sorted(self._tile_index.get((x, y), set()) - self._dead)

    def get_entity(self, eid: int) -> Identity | None:
        """Identity of a living entity, or None if removed or marked."""
        if eid in self._dead:
            return None
        return self.get(eid, Identity)

    def all_entities(self) -> list[int]:
        """Every living entity that has an ``Identity``."""
        return sorted(eid for eid, _ in self.all_of(Identity))

    def indexed_tile(self, eid: int) -> tuple[int, int] | None:
        """The tile *eid* is currently filed under (may lag ``Position``)."""
        return self._indexed_tile.get(eid)

    def reindex(self) -> int:
        """Re-bucket every entity whose tile changed since it was filed.

        Returns the number of entities moved between buckets.
        """
        moved = 0
        for eid, pos in self.all_of(Position):
            tile = (pos.x, pos.y)
            if self._indexed_tile.get(eid) != tile:
                self._unfile_tile(eid)
                self._file_tile(eid, tile)
                moved += 1
        return moved

    def map_bounds(self) -> tuple[int, int]:
        """(width, height) of the map in tiles, from the ``MapInfo`` resource."""
        info = self.res(MapInfo)
        if info is None:
            return (0, 0)
        return (info.width, info.height)

    def _file_tile(self, eid: int, tile: tuple[int, int]):
        self._tile_index.setdefault(tile, set()).add(eid)
        self._indexed_tile[eid] = tile

    def _unfile_tile(self, eid: int):
        tile = self._indexed_tile.pop(eid, None)
        if tile is None:
            return
        bucket = self._tile_index.get(tile)
        if bucket is not None:
            bucket.discard(eid)
            if not bucket:
                del self._tile_index[tile]

    # -- Resources (singletons, not tied to entities) --

    def set_res(self, resource: Any):
        t = type(resource)
        if t not in self._stores:
            self._stores[t] = {}
        self._stores[t][-1] = resource

    def res(self, res_type: type) -> Any | None:
        return self._stores.get(res_type, {}).get(-1)
