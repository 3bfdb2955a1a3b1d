"""logic/brains/registry.py — Brain name → function mapping.

Kept apart from the runner so brain modules can import
``register_brain`` without pulling in ``logic.brains`` itself.
"""

from __future__ import annotations
from typing import Callable


_registry: dict[str, Callable] = {}


def register_brain(name: str, fn: Callable) -> None:
    """Register *fn* as the decision function for *name*."""
    _registry[name] = fn


def get_brain(name: str) -> Callable | None:
    """Return the brain function for *name*, or ``None``."""
    return _registry.get(name)


def registered_names() -> list[str]:
    """Return a sorted list of all registered brain names."""
    return sorted(_registry.keys())
