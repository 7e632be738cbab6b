# controls.py
"""Turn raw key symbols, swipes and button presses into engine intents."""
from typing import Optional, Tuple

from .config import CFG, START_KEYS, Direction
from .game import GameEngine, Phase

Point = Tuple[float, float]

KEY_DIRECTIONS = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "↑": Direction.UP,
    "↓": Direction.DOWN,
    "←": Direction.LEFT,
    "→": Direction.RIGHT,
    "▲": Direction.UP,
    "▼": Direction.DOWN,
    "◀": Direction.LEFT,
    "▶": Direction.RIGHT,
}


def direction_for_key(symbol: str) -> Optional[Direction]:
    """Case-insensitive lookup; None for anything that isn't a direction."""
    return KEY_DIRECTIONS.get(symbol.lower())


def is_start_key(symbol: str) -> bool:
    return symbol.lower() in START_KEYS


def resolve_swipe(start: Point, end: Point, threshold: float = CFG.swipe_threshold) -> Optional[Direction]:
    """
    Map a gesture to a direction along its dominant axis.
    Returns None when the movement is shorter than `threshold` on both
    axes, i.e. the gesture was a tap. Screen coordinates: +y points down.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) < threshold and abs(dy) < threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class InputRouter:
    """
    Single entry point for every input modality.
    Directions go through the engine's reversal guard; start intents are
    only honoured while the game is not running.
    """

    def __init__(self, engine: GameEngine, swipe_threshold: Optional[float] = None):
        self.engine = engine
        self.swipe_threshold = (
            swipe_threshold if swipe_threshold is not None else engine.config.swipe_threshold
        )
        self._swipe_start: Optional[Point] = None

    def start(self) -> bool:
        if self.engine.phase not in (Phase.READY, Phase.OVER):
            return False
        return self.engine.start()

    def press(self, direction: Direction) -> bool:
        return self.engine.set_direction(direction)

    def key(self, symbol: str) -> bool:
        """Handle a key press. Returns True if it changed anything."""
        if is_start_key(symbol):
            return self.start()
        direction = direction_for_key(symbol)
        if direction is None:
            return False
        return self.press(direction)

    def begin_swipe(self, point: Point) -> None:
        self._swipe_start = point

    def end_swipe(self, point: Point) -> bool:
        if self._swipe_start is None:
            return False
        start, self._swipe_start = self._swipe_start, None
        direction = resolve_swipe(start, point, self.swipe_threshold)
        if direction is None:
            return self.start()
        return self.press(direction)
