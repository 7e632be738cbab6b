# render.py
from typing import Dict, List, Optional, Tuple
import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import (
    WIDTH, BOARD_PX, PANEL_H, MARGIN,
    BG, GRID, HEAD, BODY, FOOD, TEXT, ACCENT, RECORD, MUTED,
    Direction,
)
from .game import EMPTY, BODY as BODY_CELL, HEAD as HEAD_CELL, FOOD as FOOD_CELL
from .game import Phase, Snapshot

BOARD_RECT = pygame.Rect(MARGIN, PANEL_H, BOARD_PX, BOARD_PX)

# Palette indexed by Snapshot.grid() cell codes
PALETTE = np.zeros((4, 3), dtype=np.uint8)
PALETTE[EMPTY] = BG
PALETTE[BODY_CELL] = BODY
PALETTE[HEAD_CELL] = HEAD
PALETTE[FOOD_CELL] = BG  # food is drawn as a circle on top

BUTTON = 48
GAP = 4
ARROW_INSET = 14


# ---------- Layout ----------
def dpad_buttons() -> Dict[Direction, pygame.Rect]:
    """Rects of the on-screen d-pad below the board."""
    cx = WIDTH // 2 - BUTTON // 2
    top = PANEL_H + BOARD_PX + 20
    step = BUTTON + GAP
    return {
        Direction.UP:    pygame.Rect(cx, top, BUTTON, BUTTON),
        Direction.LEFT:  pygame.Rect(cx - step, top + step, BUTTON, BUTTON),
        Direction.RIGHT: pygame.Rect(cx + step, top + step, BUTTON, BUTTON),
        Direction.DOWN:  pygame.Rect(cx, top + 2 * step, BUTTON, BUTTON),
    }


def button_at(pos: Tuple[int, int]) -> Optional[Direction]:
    for direction, rect in dpad_buttons().items():
        if rect.collidepoint(pos):
            return direction
    return None


def on_board(pos: Tuple[int, int]) -> bool:
    return BOARD_RECT.collidepoint(pos)


def cell_rect(cell: Tuple[int, int], grid_size: int) -> pygame.Rect:
    size = BOARD_PX / grid_size
    return pygame.Rect(
        BOARD_RECT.x + int(cell[0] * size),
        BOARD_RECT.y + int(cell[1] * size),
        int(size) + 1,
        int(size) + 1,
    )


# ---------- Draw ----------
def draw_board(screen: pygame.Surface, snap: Snapshot, pulse: bool) -> None:
    # One pixel per cell, then scaled up to the board size
    pixels = PALETTE[snap.grid()]
    board = pygame.transform.scale(pygame.surfarray.make_surface(pixels), BOARD_RECT.size)
    screen.blit(board, BOARD_RECT.topleft)

    size = BOARD_PX / snap.grid_size
    for i in range(snap.grid_size + 1):
        offset = int(i * size)
        pygame.draw.line(screen, GRID, (BOARD_RECT.x + offset, BOARD_RECT.y),
                         (BOARD_RECT.x + offset, BOARD_RECT.bottom))
        pygame.draw.line(screen, GRID, (BOARD_RECT.x, BOARD_RECT.y + offset),
                         (BOARD_RECT.right, BOARD_RECT.y + offset))

    if snap.food is not None:
        rect = cell_rect(snap.food, snap.grid_size)
        radius = rect.width // 2 if not pulse else int(rect.width * 0.75)
        pygame.draw.circle(screen, FOOD, rect.center, radius)

    pygame.draw.rect(screen, TEXT, BOARD_RECT, 1)


def draw_panel(screen: pygame.Surface, font: pygame.font.Font, small: pygame.font.Font,
               snap: Snapshot) -> None:
    score = font.render(f"SCORE: {snap.score:04d}", True, TEXT)
    high = font.render(f"HIGH: {snap.high_score:04d}", True, ACCENT)
    screen.blit(score, (MARGIN, 8))
    screen.blit(high, high.get_rect(topright=(WIDTH - MARGIN, 8)))

    if snap.phase == Phase.RUNNING:
        status, color = "PLAYING", TEXT
    elif snap.phase == Phase.OVER:
        status, color = "GAME OVER", ACCENT
    else:
        status, color = "STANDBY", MUTED
    label = small.render(status, True, color)
    screen.blit(label, label.get_rect(center=(WIDTH // 2, PANEL_H - 14)))


def arrow_points(direction: Direction, rect: pygame.Rect) -> List[Tuple[int, int]]:
    """Triangle inside `rect` pointing along `direction`."""
    cx, cy = rect.center
    reach = rect.width // 2 - ARROW_INSET
    dx, dy = direction.value
    tip = (cx + dx * reach, cy + dy * reach)
    # Base corners sit behind the centre, spread across the perpendicular axis
    base = (cx - dx * reach, cy - dy * reach)
    return [
        tip,
        (base[0] + dy * reach, base[1] + dx * reach),
        (base[0] - dy * reach, base[1] - dx * reach),
    ]


def draw_dpad(screen: pygame.Surface) -> None:
    # Drawn as shapes: the default font has no arrow glyphs
    for direction, rect in dpad_buttons().items():
        pygame.draw.rect(screen, BODY, rect, 2, border_radius=8)
        pygame.draw.polygon(screen, TEXT, arrow_points(direction, rect))


def draw_overlay(screen: pygame.Surface, font: pygame.font.Font, small: pygame.font.Font,
                 snap: Snapshot) -> None:
    """Dim the board and show the READY or GAME OVER card."""
    if snap.phase == Phase.RUNNING:
        return
    overlay = pygame.Surface(BOARD_RECT.size, pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 200))  # RGBA
    screen.blit(overlay, BOARD_RECT.topleft)

    cx, cy = BOARD_RECT.center
    if snap.phase == Phase.READY:
        lines = [
            (font, "READY?", TEXT),
            (small, "WASD OR ARROWS TO MOVE", TEXT),
            (small, "SWIPE OR USE THE D-PAD", TEXT),
            (small, "PRESS SPACE OR TAP TO START", MUTED),
        ]
    else:
        lines = [
            (font, "YOU WIN!" if snap.won else "GAME OVER", ACCENT),
            (small, f"SCORE: {snap.score}", TEXT),
        ]
        if snap.new_high_score:
            lines.append((small, "NEW HIGH SCORE!", RECORD))
        lines.append((small, "PRESS SPACE OR TAP TO PLAY AGAIN", MUTED))

    y = cy - 16 * len(lines)
    for face, text, color in lines:
        surf = face.render(text, True, color)
        screen.blit(surf, surf.get_rect(center=(cx, y)))
        y += 32


def draw_frame(screen: pygame.Surface, font: pygame.font.Font, small: pygame.font.Font,
               snap: Snapshot, pulse: bool = False) -> None:
    screen.fill(BG)
    draw_panel(screen, font, small, snap)
    draw_board(screen, snap, pulse)
    draw_overlay(screen, font, small, snap)
    draw_dpad(screen)
