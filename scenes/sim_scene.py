"""
scenes/sim_scene.py — The town view

Draws the tile map, furniture and townsfolk, and runs ``tick_systems``
every frame.  The side panel shows the clock, the selected agent's needs
and relationships, and the activity console (an ActivityLog listener).

Keys: Space pause, +/- time scale, click select, N spawn NPC, 1-9 place
item, Delete remove, F5 save, F9 load, F6 export NBT, C clear, F4 reload
tuning.
"""

from __future__ import annotations
from collections import deque
from pathlib import Path

import pygame
from core.scene import Scene
from core.app import App
from core.constants import TILE_SIZE, CONSOLE_LINES
from core import tuning as tuning_mod
from core.bootstrap import grass_tiles
from core.save import save_map, load_map, install_map, get_map_file
from core.nbt import save_map_nbt
from components import GameClock, ActivityLog, ItemRegistry, Identity
from components.rendering import KIND_NPC
from logic.tick import tick_systems
from logic.entity_factory import spawn_npc, spawn_item
from logic.items import release_items_of
from scenes.sim_draw import (
    draw_tiles, draw_items, draw_npcs, draw_clock, draw_npc_panel,
    draw_console, draw_help,
)


class SimScene(Scene):
    def __init__(self, tiles: list[list[int]] | None = None):
        self.tiles = tiles
        self.selected: int | None = None
        self.show_grid = True
        self.console: deque[str] = deque(maxlen=CONSOLE_LINES)
        self.map_path = get_map_file("town")
        self.nbt_path = Path("maps") / "town.nbt"

    # -- Activity console --

    def _on_log(self, entry: dict | None):
        if entry is None:
            self.console.clear()
            return
        stamp = entry.get("clock", "")
        self.console.append(f"{stamp} {entry['message']}"[:44])

    def on_enter(self, app: App):
        if self.tiles is None:
            self.tiles = grass_tiles(app.world)
        log = app.world.res(ActivityLog)
        if log is not None:
            log.add_listener(self._on_log)

    def on_exit(self, app: App):
        log = app.world.res(ActivityLog)
        if log is not None:
            log.remove_listener(self._on_log)

    # -- Input --

    def _mouse_tile(self, app: App) -> tuple[int, int] | None:
        mx, my = app.mouse_pos()
        x, y = mx // TILE_SIZE, my // TILE_SIZE
        width, height = app.world.map_bounds()
        if 0 <= x < width and 0 <= y < height:
            return x, y
        return None

    def handle_event(self, event: pygame.event.Event, app: App):
        world = app.world
        clock = world.res(GameClock)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            tile = self._mouse_tile(app)
            self.selected = self._npc_at(app, tile) if tile else None
            return

        if event.type != pygame.KEYDOWN:
            return

        key = event.key
        if key == pygame.K_SPACE and clock:
            clock.paused = not clock.paused
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS) and clock:
            clock.time_scale = clock.time_scale * 2
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS) and clock:
            clock.time_scale = clock.time_scale / 2
        elif key == pygame.K_n:
            tile = self._mouse_tile(app)
            if tile:
                self.selected = spawn_npc(world, *tile)
        elif pygame.K_1 <= key <= pygame.K_9:
            self._place_item(app, key - pygame.K_1)
        elif key in (pygame.K_DELETE, pygame.K_BACKSPACE):
            self._remove_hovered(app)
        elif key == pygame.K_F5:
            save_map(world, self.map_path, self.tiles)
        elif key == pygame.K_F9:
            data = load_map(world, self.map_path)
            if data is not None:
                self.adopt_tiles(data)
                self.selected = None
        elif key == pygame.K_F6:
            save_map_nbt(world, self.nbt_path, self.tiles)
        elif key == pygame.K_c:
            world.clear()
            self.selected = None
            log = world.res(ActivityLog)
            if log is not None:
                log.clear()
        elif key == pygame.K_F4:
            tuning_mod.reload()

    def _npc_at(self, app: App, tile: tuple[int, int]) -> int | None:
        for eid in app.world.entities_at(*tile):
            ident = app.world.get(eid, Identity)
            if ident is not None and ident.kind == KIND_NPC:
                return eid
        return None

    def _place_item(self, app: App, slot: int):
        tile = self._mouse_tile(app)
        registry = app.world.res(ItemRegistry)
        if tile is None or registry is None:
            return
        keys = registry.keys()
        if slot < len(keys):
            spawn_item(app.world, keys[slot], *tile)

    def _remove_hovered(self, app: App):
        tile = self._mouse_tile(app)
        if tile is None:
            return
        hovered = app.world.entities_at(*tile)
        if not hovered:
            return
        # NPCs first, then whatever else sits on the tile
        hovered.sort(key=lambda e: getattr(app.world.get(e, Identity), "kind", "") != KIND_NPC)
        eid = hovered[0]
        release_items_of(app.world, {eid})
        app.world.remove_entity(eid)
        if eid == self.selected:
            self.selected = None

    def adopt_tiles(self, data: dict):
        tiles = data.get("map")
        if isinstance(tiles, list) and tiles and isinstance(tiles[0], list):
            self.tiles = tiles

    def load_data(self, app: App, data: dict, source="map") -> bool:
        """Install an already-read map dict (e.g. from ``load_map_nbt``)."""
        if install_map(app.world, data, source) is None:
            return False
        self.adopt_tiles(data)
        return True

    # -- Frame --

    def update(self, dt: float, app: App):
        tick_systems(app.world, dt)
        if self.selected is not None and app.world.get_entity(self.selected) is None:
            self.selected = None

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill((18, 18, 22))
        draw_tiles(surface, self.tiles, self.show_grid)
        draw_items(surface, app)
        draw_npcs(surface, app, self.selected)

        width, _ = app.world.map_bounds()
        px = width * TILE_SIZE + 10
        panel_w = surface.get_width() - px - 10
        y = draw_clock(surface, app, px, 8)
        y = draw_npc_panel(surface, app, self.selected, px, y + 4, panel_w)
        draw_console(surface, app, list(self.console), px, y + 6)

        registry = app.world.res(ItemRegistry)
        draw_help(surface, app, px, surface.get_height() - 58,
                  registry.keys() if registry else [])
