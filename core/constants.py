"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
All simulation distances are measured in **tiles** and all durations in
real **seconds**:

    Distance / position     tile
    Speed                   tiles/s
    Time (real)             s
    Time (game)             min     (minute of day, see GameClock)
    Needs                   points  (0 – maximum, default 100)

Rendering converts to pixels via ``TILE_SIZE`` (px per tile).
No simulation code should reference pixels, only the renderer.
"""

# Tile IDs  (must match TILE_COLORS)
TILE_VOID       = 0
TILE_GRASS      = 1

# Render
TILE_SIZE = 32
PANEL_WIDTH = 260          # px, side panel right of the map
CONSOLE_LINES = 10

# Simple tile palette: index → color
TILE_COLORS = {
    TILE_VOID: (40, 40, 40),
    TILE_GRASS: (50, 80, 40),
    2: (92, 74, 56),       # wooden floor
    3: (110, 45, 45),      # rug
}

# Placeholder colours until tilesets are drawn (category → colour).
CATEGORY_COLORS = {
    "food":          (220, 140, 60),
    "drink":         (70, 150, 230),
    "furniture":     (150, 110, 80),
    "entertainment": (180, 90, 200),
}
IN_USE_COLOR = (110, 110, 110)
NPC_COLOR = (240, 220, 120)
SELECTED_COLOR = (255, 255, 255)

# Need bar colours, in NEED_KINDS order.
NEED_COLORS = {
    "hunger":    (220, 120, 60),
    "thirst":    (70, 150, 230),
    "sleep":     (140, 120, 220),
    "happiness": (240, 210, 70),
    "social":    (90, 200, 120),
}
