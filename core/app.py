"""
core/app.py — Pygame application shell

Owns the window, the main loop, the scene stack and the shared World.
Simulation code never imports this module; only the viewer does.

    app = App(title="Townsfolk", width=1220, height=640)
    app.push_scene(SimScene())
    app.run()
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.ecs import World


class App:
    def __init__(self, title: str = "Townsfolk", width: int = 1220, height: int = 640):
        pygame.init()
        self._windowed_size = (width, height)
        # All drawing targets this fixed-size surface; it is scaled to the window.
        self._virtual_size = (width, height)
        self._render_surface = pygame.Surface((width, height))
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 60
        self.dt = 0.0
        # Long frames (window drag, breakpoints) are clamped to this.
        self.max_dt = 0.25

        self._scenes: list[Scene] = []

        # The ECS world, shared across all scenes
        self.world = World()

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font_lg = pygame.font.SysFont("monospace", 18)

    # -- Scene management --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self._scenes:
            self._scenes[-1].on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    def pop_scene(self):
        if self._scenes:
            self._scenes[-1].on_exit(self)
            self._scenes.pop()
        if self._scenes:
            self._scenes[-1].on_enter(self)

    # -- Coordinate mapping --

    def _to_virtual(self, pos: tuple[int, int]) -> tuple[int, int]:
        sw, sh = self.screen.get_size()
        vw, vh = self._virtual_size
        return int(pos[0] * vw / sw), int(pos[1] * vh / sh)

    def mouse_pos(self) -> tuple[int, int]:
        """Mouse position in virtual-surface coordinates."""
        return self._to_virtual(pygame.mouse.get_pos())

    def _remap_mouse_event(self, event: pygame.event.Event) -> pygame.event.Event:
        attrs = {k: getattr(event, k) for k in ("button", "buttons", "rel")
                 if hasattr(event, k)}
        attrs["pos"] = self._to_virtual(event.pos)
        return pygame.event.Event(event.type, **attrs)

    # -- Main loop --

    def run(self):
        while self.running:
            self.dt = min(self.clock.tick(self.fps) / 1000.0, self.max_dt)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._windowed_size = (event.w, event.h)
                    self.screen = pygame.display.set_mode(
                        (event.w, event.h), pygame.RESIZABLE)
                elif self.scene:
                    if event.type in (pygame.MOUSEBUTTONDOWN,
                                      pygame.MOUSEBUTTONUP,
                                      pygame.MOUSEMOTION):
                        event = self._remap_mouse_event(event)
                    self.scene.handle_event(event, self)

            if self.scene:
                self.scene.update(self.dt, self)
                self.scene.draw(self._render_surface, self)

            pygame.transform.scale(self._render_surface,
                                   self.screen.get_size(), self.screen)
            pygame.display.flip()

        pygame.quit()

    # -- Convenience --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Quick text draw. Returns the rect for layout chaining."""
        f = font or self.font
        return surface.blit(f.render(text, True, color), (x, y))
