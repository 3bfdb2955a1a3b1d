"""scenes/sim_draw.py — Rendering helpers for the simulation scene.

All pure-draw functions live here so that SimScene.draw() stays thin.
Every function receives the data it needs as parameters.  Sprites are
placeholders (coloured cells and initials) until tilesets exist; the
``Sprite`` component is still carried so saved maps keep their cells.
"""

from __future__ import annotations
import pygame
from core.app import App
from core.constants import (
    TILE_SIZE, TILE_COLORS, CATEGORY_COLORS, IN_USE_COLOR, NPC_COLOR,
    SELECTED_COLOR, NEED_COLORS,
)
from components import (
    Identity, Position, Motion, Needs, Brain, Social, FunctionalItem,
    Collectible, GameClock,
)
from components.rendering import KIND_NPC, KIND_FUNCTIONAL
from logic.brains.autonomous import goal_state
from logic.social import relationship_status


# ── Tiles ───────────────────────────────────────────────────────────

def draw_tiles(surface: pygame.Surface, tiles: list[list[int]],
               show_grid: bool):
    for row, line in enumerate(tiles):
        for col, tile_id in enumerate(line):
            rect = pygame.Rect(col * TILE_SIZE, row * TILE_SIZE, TILE_SIZE, TILE_SIZE)
            pygame.draw.rect(surface, TILE_COLORS.get(tile_id, (255, 0, 255)), rect)
            if show_grid:
                pygame.draw.rect(surface, (30, 30, 30), rect, 1)


# ── Items ───────────────────────────────────────────────────────────

def draw_items(surface: pygame.Surface, app: App):
    for eid, ident, pos in app.world.query(Identity, Position):
        if ident.kind == KIND_NPC:
            continue
        rect = pygame.Rect(pos.x * TILE_SIZE + 4, pos.y * TILE_SIZE + 4,
                           TILE_SIZE - 8, TILE_SIZE - 8)
        item = app.world.get(eid, FunctionalItem)
        if item is not None:
            color = (CATEGORY_COLORS.get(item.definition.category, (160, 160, 160))
                     if item.is_available() else IN_USE_COLOR)
            pygame.draw.rect(surface, color, rect, border_radius=4)
            if not item.is_available():
                # Use progress along the bottom edge
                frac = min(1.0, item.elapsed / max(item.max_use_time, 0.01))
                pygame.draw.rect(surface, (240, 240, 240),
                                 (rect.x, rect.bottom - 3, int(rect.w * frac), 3))
        elif app.world.has(eid, Collectible):
            pygame.draw.circle(surface, (230, 230, 120), rect.center, 5)
        else:
            pygame.draw.rect(surface, (120, 120, 120), rect, 1)
        app.draw_text(surface, ident.name[:2], rect.x + 3, rect.y + 4,
                      color=(20, 20, 20), font=app.font_sm)


# ── Townsfolk ───────────────────────────────────────────────────────

def draw_npcs(surface: pygame.Surface, app: App, selected: int | None):
    for eid in app.world.entities_of_type(KIND_NPC):
        pos = app.world.get(eid, Position)
        motion = app.world.get(eid, Motion)
        if pos is None:
            continue
        fx, fy = (motion.fx, motion.fy) if motion else (pos.x, pos.y)
        cx = int(fx * TILE_SIZE + TILE_SIZE / 2)
        # Walk-cycle bob
        bob = (motion.frame % 2) * 2 if motion and motion.moving else 0
        cy = int(fy * TILE_SIZE + TILE_SIZE / 2) - bob
        pygame.draw.circle(surface, NPC_COLOR, (cx, cy), TILE_SIZE // 2 - 5)
        if eid == selected:
            pygame.draw.circle(surface, SELECTED_COLOR, (cx, cy), TILE_SIZE // 2 - 2, 2)
        ident = app.world.get(eid, Identity)
        if ident:
            app.draw_text(surface, ident.name[0], cx - 4, cy - 7,
                          color=(30, 30, 30), font=app.font)


# ── HUD / side panel ────────────────────────────────────────────────

def draw_clock(surface: pygame.Surface, app: App, x: int, y: int) -> int:
    clock = app.world.res(GameClock)
    if clock is None:
        return y
    state = "PAUSED" if clock.paused else f"x{clock.time_scale:g}"
    app.draw_text(surface, f"{clock.formatted()}  {clock.segment()}  {state}",
                  x, y, font=app.font_lg)
    return y + 24


def _bar(surface, x, y, w, h, frac, color):
    pygame.draw.rect(surface, (40, 40, 40), (x, y, w, h))
    pygame.draw.rect(surface, color, (x, y, max(0, int(w * frac)), h))
    pygame.draw.rect(surface, (90, 90, 90), (x, y, w, h), 1)


def draw_npc_panel(surface: pygame.Surface, app: App, eid: int | None,
                   x: int, y: int, width: int) -> int:
    """Needs, state and relationships of the selected agent."""
    world = app.world
    ident = world.get(eid, Identity) if eid is not None else None
    if ident is None or not world.alive(eid):
        app.draw_text(surface, "Click a townsperson", x, y, color=(160, 160, 160))
        return y + 20

    app.draw_text(surface, ident.name, x, y, font=app.font_lg)
    y += 22
    brain = world.get(eid, Brain)
    if brain is not None:
        app.draw_text(surface, f"{brain.kind} / {goal_state(brain)}", x, y,
                      color=(180, 180, 180), font=app.font_sm)
        y += 16

    needs = world.get(eid, Needs)
    if needs is not None:
        for kind, need in needs.items():
            app.draw_text(surface, kind.value[:5], x, y, font=app.font_sm)
            _bar(surface, x + 50, y + 2, width - 90, 9, need.ratio,
                 NEED_COLORS.get(kind.value, (200, 200, 200)))
            app.draw_text(surface, f"{need.value:3.0f}", x + width - 34, y,
                          font=app.font_sm)
            y += 15

    social = world.get(eid, Social)
    if social is not None and social.relationships:
        y += 4
        ranked = sorted(social.relationships.items(),
                        key=lambda kv: kv[1].value, reverse=True)
        for other, rel in ranked[:5]:
            other_ident = world.get(other, Identity)
            name = other_ident.name if other_ident else f"e{other}"
            app.draw_text(surface,
                          f"{name[:14]:14} {rel.value:+4.0f} {relationship_status(rel.value)}",
                          x, y, color=(190, 190, 210), font=app.font_sm)
            y += 14
    return y + 6


def draw_console(surface: pygame.Surface, app: App, lines: list[str],
                 x: int, y: int):
    app.draw_text(surface, "Activity", x, y, color=(200, 200, 120))
    y += 18
    for line in lines:
        app.draw_text(surface, line, x, y, color=(200, 200, 200), font=app.font_sm)
        y += 14


def draw_help(surface: pygame.Surface, app: App, x: int, y: int, hotbar: list[str]):
    keys = [
        "Space pause  +/- speed  Click select",
        "N npc  1-9 place item  Del remove",
        "F5 save  F9 load  F6 NBT  C clear  F4 tuning",
    ]
    for line in keys:
        app.draw_text(surface, line, x, y, color=(130, 130, 130), font=app.font_sm)
        y += 13
    app.draw_text(surface, " ".join(f"{i + 1}:{k}" for i, k in enumerate(hotbar[:9])),
                  x, y, color=(130, 130, 130), font=app.font_sm)
