"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position, Motion
rendering      Identity, Sprite, Collectible
needs          Need, NeedKind, Needs
items          ItemDef, FunctionalItem
ai             Brain, Goal, Personality, Patrol
social         Relationship, Social, Dialogue
clock          GameClock
resources      MapInfo
activity_log   ActivityLog
item_registry  ItemRegistry

All public names are re-exported here so systems can do
``from components import Position, Needs``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Motion

# ── Rendering ────────────────────────────────────────────────────────
from components.rendering import Identity, Sprite, Collectible

# ── Needs ────────────────────────────────────────────────────────────
from components.needs import Need, NeedKind, Needs, NEED_KINDS

# ── Items ────────────────────────────────────────────────────────────
from components.items import ItemDef, FunctionalItem

# ── AI ───────────────────────────────────────────────────────────────
from components.ai import Brain, Goal, Personality, Patrol

# ── Social ───────────────────────────────────────────────────────────
from components.social import Relationship, Social, Dialogue

# ── World resources / singletons ─────────────────────────────────────
from components.clock import GameClock
from components.resources import MapInfo
from components.activity_log import ActivityLog

# ── Registries ───────────────────────────────────────────────────────
from components.item_registry import ItemRegistry

__all__ = [
    # spatial
    "Position", "Motion",
    # rendering
    "Identity", "Sprite", "Collectible",
    # needs
    "Need", "NeedKind", "Needs", "NEED_KINDS",
    # items
    "ItemDef", "FunctionalItem",
    # ai
    "Brain", "Goal", "Personality", "Patrol",
    # social
    "Relationship", "Social", "Dialogue",
    # resources
    "GameClock", "MapInfo", "ActivityLog",
    # registries
    "ItemRegistry",
]
