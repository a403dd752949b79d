import os
import random

import pytest

# Headless pygame for surfaces, fonts and the mixer
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from invaders.game import Session
from invaders.server import create_app
from invaders.server.config import Config


class FixedRandom(random.Random):
    """Random source that always rolls the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def make_session(clock):
    def _make(roll=0.99):
        s = Session(rng=FixedRandom(roll), clock=clock)
        s.start("Ada")
        return s
    return _make


@pytest.fixture()
def session(make_session):
    # 0.99 never beats the enemy fire rate, so nothing shoots back unless a test asks
    return make_session()


@pytest.fixture()
def leaderboard_file(tmp_path):
    return str(tmp_path / 'data' / 'leaderboard.json')


@pytest.fixture()
def make_app(leaderboard_file):
    def _make():
        class TestConfig(Config):
            TESTING = True
            LEADERBOARD_FILE = leaderboard_file
        return create_app(TestConfig)
    return _make


@pytest.fixture()
def flask_app(make_app):
    return make_app()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
