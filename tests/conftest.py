import os
import random

# headless pygame for the audio wrapper tests
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from minigames.clock import TickClock
from minigames.score_store import ScoreStore


class FakeTime:
    """Millisecond time source moved by hand."""

    def __init__(self, start=0.0):
        self.t = float(start)

    def __call__(self):
        return self.t

    def advance(self, ms):
        self.t += ms


class FixedRandom:
    """Stands in for random.Random where only random() is used."""

    def __init__(self, *values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0) if len(self.values) > 1 else self.values[0]


@pytest.fixture()
def fake_time():
    return FakeTime()


@pytest.fixture()
def clock(fake_time):
    return TickClock(fake_time)


@pytest.fixture()
def store():
    return ScoreStore()


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def run(fake_time, clock):
    """Advance time in fixed steps, pumping the clock after each step."""

    def _run(ms, step=10):
        elapsed = 0
        while elapsed < ms:
            delta = min(step, ms - elapsed)
            fake_time.advance(delta)
            clock.pump()
            elapsed += delta

    return _run
