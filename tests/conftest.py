"""Pytest fixtures for PyroShow tests."""
import os
import random

# Headless pygame: set before anything imports pygame
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT


@pytest.fixture
def rng():
    """Seeded random source for reproducible physics."""
    return random.Random(1234)


@pytest.fixture
def viewport():
    from pyroshow.core.config import Viewport
    return Viewport(1280, 720, 1.0)


@pytest.fixture
def bus():
    from pyroshow.core.events import EventBus
    return EventBus()


@pytest.fixture
def show_script():
    """The shipped show script."""
    from pyroshow.core.config import load_show_script
    return load_show_script()


@pytest.fixture
def opener_script():
    """Gold peony at frame 20, two white peonies at frame 140."""
    return {
        "end_frame": 600,
        "triggers": [
            {"kind": "once", "frame": 20, "actions": [
                {"do": "launch", "x": 0.5, "target": 0.35, "color": "gold", "shell": "peony"},
            ]},
            {"kind": "once", "frame": 140, "actions": [
                {"do": "launch", "x": 0.3, "target": 0.45, "color": "white", "shell": "peony"},
                {"do": "launch", "x": 0.7, "target": 0.45, "color": "white", "shell": "peony"},
            ]},
        ],
    }


@pytest.fixture
def make_state(viewport, bus):
    """Build a ShowState from a script dict."""
    from pyroshow.core.director import Director
    from pyroshow.core.simulation import ShowState

    def factory(script, seed=1234):
        return ShowState(
            director=Director.from_script(script),
            viewport=viewport,
            bus=bus,
            rng=random.Random(seed),
        )
    return factory


@pytest.fixture
def opener_state(make_state, opener_script):
    return make_state(opener_script)


@pytest.fixture(autouse=True)
def restore_show_logger():
    """Undo setup_logging() so caplog keeps seeing "pyroshow" records."""
    import logging
    logger = logging.getLogger("pyroshow")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.level, logger.propagate = saved[1], saved[2]
