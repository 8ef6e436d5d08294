import os
import random
from collections import defaultdict

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

import boarout


class FixedChoice:
    """Stands in for ``random.Random``: hands out ``randrange`` results from a list."""

    def __init__(self, *values):
        self.values = list(values)

    def randrange(self, n):
        return self.values.pop(0)


@pytest.fixture
def state():
    return boarout.new_game(random.Random(1234))


@pytest.fixture
def running(state):
    state.phase = boarout.Phase.RUNNING
    return state


@pytest.fixture
def canvas(state):
    return pygame.Surface(state.layout())


def keys(*pressed):
    return defaultdict(bool, {k: True for k in pressed})
