# main.py
from __future__ import annotations
import argparse
import logging
from typing import Callable, Optional, Tuple

import pygame  # type: ignore

from .config import WIDTH, HEIGHT, FPS, Config
from .controls import InputRouter
from .game import GameEngine
from .render import button_at, draw_frame, on_board
from .storage import DEFAULT_PATH, HighScoreFile

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1


class PygameTimer:
    """Repeating timer on top of pygame's event queue."""

    def __init__(self, event_type: int = TICK_EVENT):
        self.event_type = event_type
        self.callback: Optional[Callable[[], object]] = None

    def schedule(self, callback: Callable[[], object], period_ms: int) -> None:
        self.callback = callback
        pygame.time.set_timer(self.event_type, period_ms)

    def cancel(self) -> None:
        pygame.time.set_timer(self.event_type, 0)
        self.callback = None

    def fire(self) -> object:
        if self.callback is None:
            return None
        return self.callback()


def _left_click(event) -> bool:
    # Touch input also arrives as FINGER* events; skip the emulated mouse copy
    return event.button == 1 and not getattr(event, "touch", False)


def _finger_pos(event) -> Tuple[int, int]:
    # Finger coordinates are normalized to the window
    return (int(event.x * WIDTH), int(event.y * HEIGHT))


def pointer_down(router: InputRouter, pos) -> None:
    """D-pad buttons act immediately; presses on the board may start a swipe."""
    direction = button_at(pos)
    if direction is not None:
        router.press(direction)
    elif on_board(pos):
        router.begin_swipe(pos)


def handle_input(event, router: InputRouter) -> bool:
    """Route one pygame input event. Returns False when the player asked to quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key in (pygame.K_ESCAPE, pygame.K_q):
            return False
        router.key(pygame.key.name(event.key))
    elif event.type == pygame.MOUSEBUTTONDOWN and _left_click(event):
        pointer_down(router, event.pos)
    elif event.type == pygame.MOUSEBUTTONUP and _left_click(event):
        router.end_swipe(event.pos)
    elif event.type == pygame.FINGERDOWN:
        pointer_down(router, _finger_pos(event))
    elif event.type == pygame.FINGERUP:
        router.end_swipe(_finger_pos(event))
    return True


def on_tick(timer: PygameTimer, engine: GameEngine) -> bool:
    """Run the scheduled tick. Returns True when food was eaten on it."""
    if timer.fire() is None:
        return False
    return engine.snapshot().ate


def run(config: Config, high_score_file: str) -> None:
    pygame.init()
    font = pygame.font.SysFont(None, 32)
    small = pygame.font.SysFont(None, 20)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    timer = PygameTimer()
    engine = GameEngine(config, store=HighScoreFile(high_score_file), timer=timer)
    router = InputRouter(engine)
    pulse_until = 0
    running = True

    try:
        while running:
            # 1) input + clock
            for event in pygame.event.get():
                if event.type == TICK_EVENT:
                    if on_tick(timer, engine):
                        pulse_until = pygame.time.get_ticks() + config.food_pulse_ms
                elif not handle_input(event, router):
                    running = False

            # 2) render
            pulse = pygame.time.get_ticks() < pulse_until
            draw_frame(screen, font, small, engine.snapshot(), pulse)
            pygame.display.flip()
            clock.tick(FPS)  # movement is paced by the tick timer, not the frame rate
    finally:
        engine.close()
        pygame.quit()


def main():
    parser = argparse.ArgumentParser(description="Grid snake")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--grid-size", type=int, default=Config.grid_size)
    parser.add_argument(
        "--high-score-file",
        type=str,
        default=str(DEFAULT_PATH),
        help="Where the best score is kept between runs",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = Config(grid_size=args.grid_size, seed=args.seed)
    except ValueError as exc:
        parser.error(str(exc))
    logger.info("Starting with %s", config)
    run(config, args.high_score_file)


if __name__ == "__main__":
    main()
