# game.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol, Tuple
import logging
import random

import numpy as np  # type: ignore

from .config import CFG, Config, Direction

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

# Cell codes used by Snapshot.grid()
EMPTY, BODY, HEAD, FOOD = 0, 1, 2, 3


class Phase(Enum):
    READY = "ready"
    RUNNING = "running"
    OVER = "over"


class TickEvent(Enum):
    IDLE = "idle"      # engine not running, nothing happened
    MOVED = "moved"
    ATE = "ate"
    DIED = "died"
    WON = "won"        # the snake filled the whole board


# ---------- Collaborators ----------
class Timer(Protocol):
    def schedule(self, callback: Callable[[], object], period_ms: int) -> None: ...
    def cancel(self) -> None: ...


class HighScoreStore(Protocol):
    def load(self) -> int: ...
    def save(self, score: int) -> None: ...


# ---------- Helpers ----------
def place_food(snake: List[Cell], grid_size: int, rng: random.Random) -> Optional[Cell]:
    """
    Sample uniformly random cells until one is off the snake.
    Returns None when the snake covers the whole board, since no free
    cell exists and sampling would never terminate.
    """
    occupied = set(snake)
    if len(occupied) >= grid_size * grid_size:
        return None
    while True:
        cell = (rng.randrange(grid_size), rng.randrange(grid_size))
        if cell not in occupied:
            return cell


def in_bounds(cell: Cell, grid_size: int) -> bool:
    x, y = cell
    return 0 <= x < grid_size and 0 <= y < grid_size


# ---------- State ----------
@dataclass
class GameState:
    snake: List[Cell]              # head at index 0
    direction: Direction           # last applied by tick
    pending: Direction             # applied on the next tick
    food: Optional[Cell]
    score: int
    speed_ms: int                  # current tick period
    phase: Phase = Phase.READY
    ate: bool = False              # food eaten on the most recent tick
    new_high_score: bool = False
    won: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine handed to the presentation layer."""
    snake: Tuple[Cell, ...]
    food: Optional[Cell]
    score: int
    high_score: int
    speed_ms: int
    phase: Phase
    ate: bool
    new_high_score: bool
    won: bool
    grid_size: int = CFG.grid_size

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def grid(self) -> np.ndarray:
        """Occupancy codes as an (N, N) array indexed [x, y]."""
        board = np.full((self.grid_size, self.grid_size), EMPTY, dtype=np.uint8)
        for x, y in self.snake[1:]:
            board[x, y] = BODY
        if self.food is not None:
            board[self.food] = FOOD
        board[self.head] = HEAD
        return board


# ---------- Engine ----------
class GameEngine:
    """
    Owns the authoritative game state.

    The clock calls tick() every `speed_ms`; input handlers only call
    set_direction() and start(). When a timer is supplied the engine arms it
    on start, rearms it whenever the speed changes and cancels it when the
    game ends or the engine is closed.
    """

    def __init__(
        self,
        config: Config = CFG,
        store: Optional[HighScoreStore] = None,
        timer: Optional[Timer] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.store = store
        self.timer = timer
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.high_score = self._load_high_score()
        self.closed = False
        self._armed_ms: Optional[int] = None
        self.state = self._fresh_state()

    # -- read access --------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def speed_ms(self) -> int:
        return self.state.speed_ms

    def snapshot(self) -> Snapshot:
        s = self.state
        return Snapshot(
            snake=tuple(s.snake),
            food=s.food,
            score=s.score,
            high_score=self.high_score,
            speed_ms=s.speed_ms,
            phase=s.phase,
            ate=s.ate,
            new_high_score=s.new_high_score,
            won=s.won,
            grid_size=self.config.grid_size,
        )

    # -- intents ------------------------------------------------------------
    def start(self) -> bool:
        """Begin a new game from READY or OVER. Ignored while running."""
        if self.closed or self.state.phase == Phase.RUNNING:
            return False
        self.state = self._fresh_state()
        self.state.phase = Phase.RUNNING
        logger.debug("Game started, food at %s", self.state.food)
        self._sync_timer()
        return True

    def set_direction(self, direction: Direction) -> bool:
        """Queue a direction for the next tick (no 180° turns)."""
        if direction == self.state.direction.opposite:
            return False
        self.state.pending = direction
        return True

    def tick(self) -> TickEvent:
        """Advance the snake by one cell."""
        s = self.state
        if self.closed or s.phase != Phase.RUNNING:
            return TickEvent.IDLE

        s.ate = False
        # Commit direction once per tick
        s.direction = s.pending

        hx, hy = s.snake[0]
        new_head = (hx + s.direction.dx, hy + s.direction.dy)

        # Wall, then self (the tail counts even though it is about to move)
        if not in_bounds(new_head, self.config.grid_size) or new_head in s.snake:
            self._finish(won=False)
            return TickEvent.DIED

        s.snake.insert(0, new_head)

        if new_head != s.food:
            s.snake.pop()
            return TickEvent.MOVED

        s.ate = True
        s.score += self.config.score_per_food
        s.speed_ms = max(self.config.min_speed_ms, s.speed_ms - self.config.speed_step_ms)
        s.food = place_food(s.snake, self.config.grid_size, self.rng)
        logger.debug("Food eaten: score=%d speed=%dms", s.score, s.speed_ms)
        if s.food is None:
            self._finish(won=True)
            return TickEvent.WON
        self._sync_timer()
        return TickEvent.ATE

    def close(self) -> None:
        """Tear down: stop the timer; no tick runs after this."""
        self.closed = True
        self._cancel_timer()

    # -- internals ----------------------------------------------------------
    def _fresh_state(self) -> GameState:
        cfg = self.config
        snake = [cfg.origin]
        return GameState(
            snake=snake,
            direction=cfg.initial_direction,
            pending=cfg.initial_direction,
            food=place_food(snake, cfg.grid_size, self.rng),
            score=0,
            speed_ms=cfg.initial_speed_ms,
        )

    def _finish(self, won: bool) -> None:
        s = self.state
        s.phase = Phase.OVER
        s.won = won
        self._cancel_timer()
        logger.info("Game over (%s), score=%d", "won" if won else "collision", s.score)

        if s.score > self.high_score:
            s.new_high_score = True
            self.high_score = s.score
            logger.info("New high score: %d", s.score)
            self._save_high_score(s.score)

    def _load_high_score(self) -> int:
        if self.store is None:
            return 0
        try:
            return self.store.load()
        except Exception as exc:
            logger.warning("Could not load high score: %s", exc)
            return 0

    def _save_high_score(self, score: int) -> None:
        if self.store is None:
            return
        try:
            self.store.save(score)
        except Exception as exc:  # store errors never reach the game loop
            logger.warning("Could not save high score %d: %s", score, exc)

    def _sync_timer(self) -> None:
        if self.timer is None or self.state.phase != Phase.RUNNING:
            return
        if self._armed_ms == self.state.speed_ms:
            return
        self._cancel_timer()
        self.timer.schedule(self.tick, self.state.speed_ms)
        self._armed_ms = self.state.speed_ms

    def _cancel_timer(self) -> None:
        if self.timer is not None and self._armed_ms is not None:
            self.timer.cancel()
        self._armed_ms = None
