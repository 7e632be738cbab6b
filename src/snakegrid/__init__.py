# src/snakegrid/__init__.py
"""Grid snake engine with a pygame front end."""

from snakegrid.config import CFG, Config, Direction
from snakegrid.game import GameEngine, GameState, Phase, Snapshot, TickEvent, place_food
from snakegrid.controls import InputRouter, direction_for_key, resolve_swipe
from snakegrid.storage import HighScoreFile

__all__ = [
    "CFG", "Config", "Direction",
    "GameEngine", "GameState", "Phase", "Snapshot", "TickEvent", "place_food",
    "InputRouter", "direction_for_key", "resolve_swipe",
    "HighScoreFile",
]
