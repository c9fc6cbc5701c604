"""PyroShow Core - Show Logic"""
from .particles import Particle, Behavior, BEHAVIOR_PROFILES
from .shells import ShellType, ShellSpec, SHELL_CATALOG
from .rockets import Rocket
from .rasterizer import rasterize
from .events import (
    EventBus,
    OverlayEvent,
    AudioCueEvent,
    RocketLaunchedEvent,
    RocketExplodedEvent,
    ShowFinishedEvent,
)
from .director import Director, OneShot, Periodic, ScheduleError
from .simulation import ShowState, step, run_frames
