"""core/tuning.py — Data-driven tuning constants.

Simulation numbers live in ``data/tuning.toml`` and are loaded once at
startup.  Any system can read a value with::

    from core.tuning import get
    radius = get("agent", "help_radius", 3)

Every caller passes its own default, so a missing file (or a test run
that never calls ``load``) still behaves.  ``reload()`` re-reads the
file; in the viewer, press F4.
"""

from __future__ import annotations
import tomllib
from pathlib import Path


_data: dict = {}
_path: Path | None = None


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml`` relative to
    the project root (one level above ``core/``).
    """
    global _data, _path

    if path is None:
        path = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"
    else:
        path = Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found, using defaults")
        _data = {}
        return

    try:
        with open(path, "rb") as f:
            _data = tomllib.load(f)
    except tomllib.TOMLDecodeError as ex:
        print(f"[TUNING] Could not parse {path}: {ex}")
        _data = {}
        return

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"needs.decay"`` looks up ``[needs.decay]``.

    >>> get("needs.decay", "hunger", 0.5)
    0.5
    """
    node = _lookup(section)
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def _lookup(section_path: str):
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
