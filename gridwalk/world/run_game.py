# gridwalk/world/run_game.py
from __future__ import annotations
import os

import arcade

from .scene import GameWindow
from .settings import SETTINGS, load_settings

DEFAULT_WORLD = os.path.join("data", "worlds", "demo.json")
DEFAULT_SETTINGS = os.path.join("config", "settings.yaml")

def main() -> None:
    settings = load_settings(DEFAULT_SETTINGS) if os.path.exists(DEFAULT_SETTINGS) else SETTINGS
    world = DEFAULT_WORLD if os.path.exists(DEFAULT_WORLD) else None
    GameWindow(world, settings)
    arcade.run()

if __name__ == "__main__":
    main()
