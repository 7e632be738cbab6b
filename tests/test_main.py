import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from snakegrid.config import WIDTH, HEIGHT, Config, Direction  # noqa: E402
from snakegrid.controls import InputRouter  # noqa: E402
from snakegrid.game import GameEngine, Phase  # noqa: E402
from snakegrid.main import PygameTimer, handle_input, on_tick  # noqa: E402
from snakegrid.render import BOARD_RECT, arrow_points, dpad_buttons  # noqa: E402


@pytest.fixture(autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


def make_router(config=None, timer=None):
    engine = GameEngine(config or Config(), timer=timer, rng=random.Random(3))
    return engine, InputRouter(engine)


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def mouse(kind, pos, touch=False):
    return pygame.event.Event(kind, pos=pos, button=1, touch=touch)


def finger(kind, pos):
    return pygame.event.Event(kind, x=pos[0] / WIDTH, y=pos[1] / HEIGHT, touch_id=0, finger_id=0)


def tap(router, pos, down=pygame.FINGERDOWN, up=pygame.FINGERUP):
    handle_input(finger(down, pos), router)
    handle_input(finger(up, pos), router)


def test_space_starts_and_arrows_steer():
    engine, router = make_router()
    assert handle_input(key(pygame.K_SPACE), router)
    assert engine.phase == Phase.RUNNING
    handle_input(key(pygame.K_DOWN), router)
    assert engine.state.pending == Direction.DOWN
    handle_input(key(pygame.K_a), router)
    assert engine.state.pending == Direction.LEFT


def test_quit_requests():
    _, router = make_router()
    assert not handle_input(pygame.event.Event(pygame.QUIT), router)
    assert not handle_input(key(pygame.K_ESCAPE), router)


def test_mouse_click_on_dpad_presses_button():
    engine, router = make_router()
    engine.start()
    center = dpad_buttons()[Direction.DOWN].center
    handle_input(mouse(pygame.MOUSEBUTTONDOWN, center), router)
    handle_input(mouse(pygame.MOUSEBUTTONUP, center), router)
    assert engine.state.pending == Direction.DOWN
    assert engine.phase == Phase.RUNNING


def test_mouse_drag_on_board_swipes():
    engine, router = make_router()
    engine.start()
    cx, cy = BOARD_RECT.center
    handle_input(mouse(pygame.MOUSEBUTTONDOWN, (cx, cy)), router)
    handle_input(mouse(pygame.MOUSEBUTTONUP, (cx + 5, cy - 60)), router)
    assert engine.state.pending == Direction.UP


def test_finger_tap_on_dpad_presses_button():
    engine, router = make_router()
    engine.start()
    tap(router, dpad_buttons()[Direction.DOWN].center)
    assert engine.state.pending == Direction.DOWN
    assert engine.phase == Phase.RUNNING


def test_finger_tap_on_board_starts_game():
    engine, router = make_router()
    tap(router, BOARD_RECT.center)
    assert engine.phase == Phase.RUNNING


def test_finger_swipe_on_board_steers():
    engine, router = make_router()
    engine.start()
    cx, cy = BOARD_RECT.center
    handle_input(finger(pygame.FINGERDOWN, (cx, cy)), router)
    handle_input(finger(pygame.FINGERUP, (cx, cy + 80)), router)
    assert engine.state.pending == Direction.DOWN


def test_finger_on_panel_is_not_a_swipe():
    engine, router = make_router()
    tap(router, (WIDTH // 2, 10))
    assert engine.phase == Phase.READY


def test_mouse_copy_of_touch_is_ignored():
    engine, router = make_router()
    cx, cy = BOARD_RECT.center
    handle_input(mouse(pygame.MOUSEBUTTONDOWN, (cx, cy), touch=True), router)
    handle_input(mouse(pygame.MOUSEBUTTONUP, (cx, cy), touch=True), router)
    assert engine.phase == Phase.READY


def test_timer_fires_until_cancelled():
    calls = []
    timer = PygameTimer()
    timer.schedule(lambda: calls.append(1) or "ticked", 100)
    assert timer.fire() == "ticked"
    timer.cancel()
    assert timer.fire() is None
    assert calls == [1]


def test_on_tick_reports_food_eaten():
    timer = PygameTimer()
    engine, _ = make_router(timer=timer)
    engine.start()
    engine.state.food = (11, 10)
    assert on_tick(timer, engine)
    engine.state.food = (0, 0)
    assert not on_tick(timer, engine)
    engine.close()
    assert not on_tick(timer, engine)


def test_on_tick_reports_final_bite():
    timer = PygameTimer()
    engine, _ = make_router(config=Config(grid_size=2), timer=timer)
    engine.start()
    s = engine.state
    s.snake = [(0, 0), (0, 1), (1, 1)]
    s.direction = s.pending = Direction.RIGHT
    s.food = (1, 0)
    assert on_tick(timer, engine)
    assert s.won
    assert not on_tick(timer, engine)


@pytest.mark.parametrize("direction", list(Direction))
def test_dpad_arrows_point_their_way(direction):
    rect = dpad_buttons()[direction]
    points = arrow_points(direction, rect)
    assert all(rect.collidepoint(p) for p in points)
    along = [p[0] * direction.dx + p[1] * direction.dy for p in points]
    assert along[0] == max(along)
    assert along[1] == along[2] < along[0]
