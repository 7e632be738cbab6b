from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ----- Window & layout -----
BOARD_PX = 400
PANEL_H = 60
DPAD_H = 180
MARGIN = 10
WIDTH = BOARD_PX + 2 * MARGIN
HEIGHT = PANEL_H + BOARD_PX + DPAD_H
FPS = 60

# ----- Colors -----
BG     = (10, 10, 15)
GRID   = (0, 60, 0)
HEAD   = (0, 255, 0)
BODY   = (0, 204, 0)
FOOD   = (255, 0, 102)
TEXT   = (0, 255, 0)
ACCENT = (255, 0, 102)
RECORD = (255, 255, 0)
MUTED  = (120, 120, 130)

# ----- Input -----
START_KEYS = frozenset({"space", " ", "return", "enter"})


# ----- Directions (dx, dy), y grows downward -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass
class Config:
    grid_size: int = 20
    initial_speed_ms: int = 150
    speed_step_ms: int = 5
    min_speed_ms: int = 50
    score_per_food: int = 10
    swipe_threshold: float = 30.0
    food_pulse_ms: int = 200
    initial_direction: Direction = Direction.RIGHT
    seed: Optional[int] = None

    def __post_init__(self):
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.min_speed_ms <= 0:
            raise ValueError(f"min_speed_ms must be positive, got {self.min_speed_ms}")
        if self.initial_speed_ms < self.min_speed_ms:
            raise ValueError(
                f"initial_speed_ms ({self.initial_speed_ms}) is below "
                f"min_speed_ms ({self.min_speed_ms})"
            )
        if self.speed_step_ms < 0:
            raise ValueError(f"speed_step_ms must not be negative, got {self.speed_step_ms}")
        if self.score_per_food <= 0:
            raise ValueError(f"score_per_food must be positive, got {self.score_per_food}")
        if self.swipe_threshold <= 0:
            raise ValueError(f"swipe_threshold must be positive, got {self.swipe_threshold}")

    @property
    def origin(self):
        """Starting cell of every new game: the middle of the board."""
        return (self.grid_size // 2, self.grid_size // 2)


CFG = Config()
