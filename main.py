"""
main.py — Bootstrap

1. Load tuning constants
2. Create the app
3. Install world resources and the item table
4. Load a map (``python main.py maps/town.json`` or ``.nbt``) or
   populate a starter town
5. Push the simulation scene
6. Run
"""

import sys
from pathlib import Path

from core import tuning
from core.app import App
from core.constants import TILE_SIZE, PANEL_WIDTH
from core.bootstrap import setup_world_resources, populate_town, grass_tiles
from core.save import load_map
from core.nbt import load_map_nbt
from components import Identity, Brain
from scenes.sim_scene import SimScene


def main():
    tuning.load()
    width = int(tuning.get("map", "width", 30)) * TILE_SIZE + PANEL_WIDTH
    height = int(tuning.get("map", "height", 20)) * TILE_SIZE
    app = App(title="Townsfolk", width=width, height=height)
    setup_world_resources(app.world)

    scene = SimScene()
    map_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loaded = False
    if map_path is not None:
        if map_path.suffix == ".nbt":
            data = load_map_nbt(map_path)
            if data is not None:
                loaded = scene.load_data(app, data, map_path)
        else:
            data = load_map(app.world, map_path)
            if data is not None:
                scene.adopt_tiles(data)
                loaded = True

    if not loaded:
        populate_town(app.world)
        scene.tiles = grass_tiles(app.world)

    print(f"[MAIN] Starting with {app.world.count(Identity)} entities, "
          f"{app.world.count(Brain)} townsfolk")
    app.push_scene(scene)
    app.run()


if __name__ == "__main__":
    main()
