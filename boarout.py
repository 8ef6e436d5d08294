#!/usr/bin/env python3
"""
Boar-out! — a tiny Breakout on a 30x40 logical grid.

The whole game lives in ``GameState``: ``update`` advances one tick from an
input snapshot, ``render`` draws flat rectangles onto a logical canvas and
``layout`` reports that canvas size. ``App`` is the pygame host loop that
scales the canvas up to the window.

Controls:
  • ← / →  = move paddle
  • ESC    = pause / resume (the game starts paused)
  • =      = toggle debug mode
  • J / K  = speed up / down        (debug)
  • F      = log FPS every tick     (debug)
  • R      = rainbow paddle         (debug)

Deps:
  pip install pygame
"""


from __future__ import annotations
import enum
import logging
import random
import sys
from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple

import pygame

logger = logging.getLogger(__name__)

# --------------------------- Config --------------------------- #
SCREEN_WIDTH, SCREEN_HEIGHT = 30, 40   # logical units
WINDOW_SIZE = (640, 480)
CAPTION = "Boar-out!"
FPS = 60

PADDLE_WIDTH, PADDLE_HEIGHT = 6, 2
PADDLE_Y = 25
PADDLE_OVERSHOOT = 4                   # paddle may travel this far past the right edge
PADDLE_HIT_BAND = (25.0, 25.9)

BALL_SIZE = 1
BRICK_W, BRICK_H = 2, 1
BRICK_COUNT = 46
BRICK_PADDING = 3.0
BRICK_TOP = 2.0
BRICK_ROW_STEP = 2.0
BRICK_START_LIFE = 4

START_SPEED = 0.85
SPEED_STEP = 0.1
LIVES = 3

# Palette
BG     = (0, 0, 0)
RED    = (255, 0, 0)
BLUE   = (0, 0, 255)
GREEN  = (0, 255, 0)
INK    = (230, 236, 255)

# Key bindings
LEFT_KEY = pygame.K_LEFT
RIGHT_KEY = pygame.K_RIGHT
EDGE_KEYS: Dict[str, int] = {
    "pause": pygame.K_ESCAPE,
    "debug": pygame.K_EQUALS,
    "speed_up": pygame.K_j,
    "speed_down": pygame.K_k,
    "fps": pygame.K_f,
    "rainbow": pygame.K_r,
}


def clamp(n, lo, hi):
    return lo if n < lo else hi if n > hi else n

# --------------------------- Entities --------------------------- #
class Phase(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game over"


class Vertical(enum.Enum):
    UP = -1
    DOWN = 1


class Horizontal(enum.Enum):
    LEFT = -1
    RIGHT = 1


@dataclass
class Brick:
    x: float = 0.0
    y: float = 0.0
    life: int = 0

    @property
    def active(self) -> bool:
        return self.life > 0


@dataclass
class Ball:
    x: float
    y: float
    vertical: Vertical = Vertical.DOWN
    horizontal: Horizontal = Horizontal.RIGHT

    def step(self, speed: float):
        self.y += self.vertical.value * speed
        self.x += self.horizontal.value * speed


@dataclass(frozen=True)
class InputSnapshot:
    """Key state for one tick: ``left``/``right`` are held, the rest are edges."""
    left: bool = False
    right: bool = False
    pause: bool = False
    debug: bool = False
    speed_up: bool = False
    speed_down: bool = False
    fps: bool = False
    rainbow: bool = False
    current_fps: float = 0.0


class KeyboardInput:
    """Turns ``pygame.key.get_pressed()`` into snapshots, tracking edges between polls."""

    def __init__(self, edge_keys: Mapping[str, int] = EDGE_KEYS):
        self.edge_keys = dict(edge_keys)
        self._was_down = {name: False for name in self.edge_keys}

    def poll(self, keys, current_fps: float = 0.0) -> InputSnapshot:
        edges = {}
        for name, key in self.edge_keys.items():
            down = bool(keys[key])
            edges[name] = down and not self._was_down[name]
            self._was_down[name] = down
        return InputSnapshot(left=bool(keys[LEFT_KEY]), right=bool(keys[RIGHT_KEY]),
                             current_fps=current_fps, **edges)

# --------------------------- Level --------------------------- #
def create_bricks() -> List[Brick]:
    """Lay bricks left to right, wrapping to a new (weaker) row past the right edge.

    The last slot is never filled and stays a spent zero brick.
    """
    bricks = [Brick() for _ in range(BRICK_COUNT)]
    height = BRICK_TOP
    life = BRICK_START_LIFE

    bricks[0] = Brick(BRICK_PADDING + 3, height, life)
    for i in range(1, len(bricks) - 1):
        prev = bricks[i - 1]
        if prev.x + BRICK_PADDING > SCREEN_WIDTH:
            height += BRICK_ROW_STEP
            life -= 1
            bricks[i].x = BRICK_PADDING + 3
        else:
            bricks[i].x = prev.x + BRICK_PADDING
        bricks[i].y = height
        bricks[i].life = life
    return bricks


def serve_ball() -> Ball:
    return Ball(SCREEN_WIDTH / 2, SCREEN_HEIGHT / 3)

# --------------------------- Game state --------------------------- #
class GameState:
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng if rng is not None else random.Random()
        self.bricks: List[Brick] = create_bricks()
        self.ball = serve_ball()
        self.paddle_x: float = SCREEN_WIDTH // 2 + PADDLE_WIDTH // 3
        self.score = 0
        self.lives = LIVES
        self.speed = START_SPEED
        self.phase = Phase.PAUSED

        # debug
        self.debug = False
        self.print_fps = False
        self.rainbow_paddle = False

        self._font: pygame.font.Font | None = None

    # ---------------- update ---------------- #
    def update(self, inputs: InputSnapshot):
        if self.phase is Phase.GAME_OVER:
            return

        if inputs.pause:
            self.phase = Phase.RUNNING if self.phase is Phase.PAUSED else Phase.PAUSED
            logger.debug("phase: %s", self.phase.value)
        if self.phase is Phase.PAUSED:
            return

        self._move_paddle(inputs)
        self._move_ball()
        self._collide_paddle()
        self._collide_bricks()
        self._check_floor()
        self._debug_keys(inputs)

    def _move_paddle(self, inputs: InputSnapshot):
        right_limit = SCREEN_WIDTH + PADDLE_OVERSHOOT
        if inputs.left:
            if self.paddle_x > 0:
                self.paddle_x = clamp(self.paddle_x - self.speed, 0, right_limit)
        elif inputs.right:
            if self.paddle_x < right_limit:
                self.paddle_x = clamp(self.paddle_x + self.speed, 0, right_limit)

    def _move_ball(self):
        ball = self.ball
        # only one wall per tick, ceiling first
        if ball.y <= 0:
            ball.vertical = Vertical.DOWN
        elif ball.x <= 0:
            ball.horizontal = Horizontal.RIGHT
        elif ball.x >= SCREEN_WIDTH:
            ball.horizontal = Horizontal.LEFT
        ball.step(self.speed)

    def _collide_paddle(self):
        ball = self.ball
        lo, hi = PADDLE_HIT_BAND
        if lo <= ball.y <= hi and self.paddle_x - 1 <= ball.x <= self.paddle_x + PADDLE_WIDTH:
            ball.vertical = Vertical.UP
            ball.horizontal = Horizontal.LEFT if self.rng.randrange(2) == 1 else Horizontal.RIGHT

    def _collide_bricks(self):
        # every brick is checked; overlapping bricks can all take a hit in one tick
        ball = self.ball
        for b in self.bricks:
            if not b.active or not (b.x - 2 <= ball.x <= b.x):
                continue
            if b.y <= ball.y <= b.y + 0.9:
                ball.vertical = Vertical.DOWN
            elif b.y + 1 <= ball.y <= b.y + 1.9:
                ball.vertical = Vertical.UP
            else:
                continue
            b.life -= 1
            if b.life <= 0:
                self.score += 1

    def _check_floor(self):
        if self.ball.y < SCREEN_HEIGHT:
            return
        self.lives -= 1
        self.ball = Ball(SCREEN_WIDTH / 2, SCREEN_HEIGHT / 3, Vertical.UP, self.ball.horizontal)
        logger.debug("ball lost, %d lives left", self.lives)
        if self.lives <= 0:
            self.phase = Phase.GAME_OVER
            logger.debug("phase: %s (score %d)", self.phase.value, self.score)

    def _debug_keys(self, inputs: InputSnapshot):
        if inputs.debug:
            self.debug = not self.debug
            logger.info("Debug Mode = %s", self.debug)
        if not self.debug:
            return

        if inputs.speed_up:
            self.speed += SPEED_STEP
            logger.info("Speed = %f", self.speed)
        elif inputs.speed_down:
            self.speed -= SPEED_STEP
            logger.info("Speed = %f", self.speed)

        if inputs.fps:
            self.print_fps = not self.print_fps
        if inputs.rainbow:
            self.rainbow_paddle = not self.rainbow_paddle
        if self.print_fps:
            logger.info("FPS: %.1f", inputs.current_fps)

    # ---------------- draw ---------------- #
    def render(self, surface: pygame.Surface):
        if self.phase is Phase.GAME_OVER:
            self._game_over(surface)
            return

        pygame.draw.rect(surface, self.paddle_color(),
                         (int(self.paddle_x), PADDLE_Y, PADDLE_WIDTH, PADDLE_HEIGHT))
        pygame.draw.rect(surface, BLUE, (int(self.ball.x), int(self.ball.y), BALL_SIZE, BALL_SIZE))
        for b in self.bricks:
            if not b.active: continue
            pygame.draw.rect(surface, GREEN, (int(b.x), int(b.y), BRICK_W, BRICK_H))

        if self.phase is Phase.PAUSED:
            right = surface.get_width() - 1
            pygame.draw.rect(surface, INK, (right - 3, 1, 1, 3))
            pygame.draw.rect(surface, INK, (right - 1, 1, 1, 3))

    def paddle_color(self) -> pygame.Color:
        if not self.rainbow_paddle:
            return pygame.Color(RED)
        col = pygame.Color(0, 0, 0)
        col.hsva = ((pygame.time.get_ticks() // 5) % 360, 100, 100, 100)
        return col

    def _game_over(self, surface: pygame.Surface):
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont("consolas, menlo, ui-monospace, monospace", 9)
        y = 0
        for line in (str(self.score), "Bricks"):
            txt = self._font.render(line, False, INK)
            surface.blit(txt, (0, y))
            y += txt.get_height()

    def layout(self, outside_width: int = 0, outside_height: int = 0) -> Tuple[int, int]:
        # (height, width) on purpose: the canvas is the grid turned on its side
        return SCREEN_HEIGHT, SCREEN_WIDTH


def new_game(rng: random.Random | None = None) -> GameState:
    return GameState(rng)

# --------------------------- Host loop --------------------------- #
class App:
    def __init__(self, state: GameState | None = None):
        pygame.init()
        pygame.display.set_caption(CAPTION)
        self.screen = pygame.display.set_mode(WINDOW_SIZE)
        self.clock = pygame.time.Clock()
        self.state = state if state is not None else new_game()
        self.keyboard = KeyboardInput()
        self.canvas = pygame.Surface(self.state.layout(*self.screen.get_size()))

    def run(self):
        while self.step():
            pass

    def step(self) -> bool:
        self.clock.tick(FPS)
        if not self.events(): return False
        inputs = self.keyboard.poll(pygame.key.get_pressed(), self.clock.get_fps())
        self.state.update(inputs)
        self.draw()
        return True

    def events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT: return False
        return True

    def draw(self):
        self.canvas.fill(BG)
        self.state.render(self.canvas)
        pygame.transform.scale(self.canvas, self.screen.get_size(), self.screen)
        pygame.display.flip()

# --------------------------- main --------------------------- #
def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        App().run()
    except pygame.error as exc:
        logger.error("pygame: %s", exc)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
