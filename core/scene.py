"""
core/scene.py — Scene interface

A scene is one screen of the viewer.  The App keeps a stack of them and
only the top one receives events, updates and draws; covered scenes
are frozen, simulation included.

    class PausedOverlay(Scene):
        def handle_event(self, event, app):
            if event.type == pygame.KEYDOWN:
                app.pop_scene()
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Scene became the top of the stack (pushed, or uncovered)."""

    def on_exit(self, app: App):
        """Scene is leaving the top of the stack (popped, or covered)."""

    def handle_event(self, event: pygame.event.Event, app: App):
        """One pygame event, mouse positions already in virtual coords."""

    def update(self, dt: float, app: App):
        """Advance by *dt* real seconds."""

    def draw(self, surface: pygame.Surface, app: App):
        """Render onto the virtual surface."""
