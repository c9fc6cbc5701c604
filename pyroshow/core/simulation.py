"""
Simulation Loop
One explicit state object and one function that advances it by a frame.

ShowState owns the frame counter and both entity collections. step() is
their only mutator: it applies the Director's commands, integrates, hands
everything to the renderer, and purges the dead, always in that order.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from .commands import LaunchRocket, SpawnFountain, SpawnCommand
from .config import Viewport
from .director import Director
from .events import (
    EventBus, AudioCueEvent, RocketLaunchedEvent, RocketExplodedEvent, ShowFinishedEvent
)
from .particles import Particle
from .rockets import Rocket
from .shells import SHELL_CATALOG, burst

logger = logging.getLogger("pyroshow")


@dataclass
class ShowState:
    """Everything one running show owns."""
    director: Director
    viewport: Viewport = field(default_factory=Viewport)
    bus: EventBus = field(default_factory=EventBus)
    catalog: Mapping = field(default_factory=lambda: SHELL_CATALOG)
    rng: Any = field(default_factory=random.Random)
    frame: int = 0
    rockets: List[Rocket] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    pending_resize: Optional[Tuple[int, int]] = None
    finished: bool = False

    def request_resize(self, width: int, height: int) -> None:
        """Queue a surface resize; applied before the next frame starts.

        Non-positive sizes (minimized windows) are ignored.
        """
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring resize to {width}x{height}")
            return
        self.pending_resize = (width, height)

    @property
    def sky_empty(self) -> bool:
        return not self.rockets and not self.particles


def _apply_resize(state: ShowState, renderer) -> None:
    width, height = state.pending_resize
    state.pending_resize = None
    state.viewport = state.viewport.resized(width, height)
    font_size = state.viewport.text_font_size
    for rocket in state.rockets:
        rocket.font_size = font_size
    if renderer is not None:
        renderer.resize(width, height)


def apply_command(state: ShowState, command: SpawnCommand) -> None:
    """Add the rocket or particles a spawn command asks for."""
    vp = state.viewport
    if isinstance(command, LaunchRocket):
        rocket = Rocket.launch(
            x=command.x * vp.width,
            target_y=command.target * vp.height,
            viewport_height=vp.height,
            hue=command.hue, sat=command.sat, light=command.light,
            shell=command.shell, char=command.char, tilt=command.tilt,
            rng=state.rng, catalog=state.catalog,
            font_size=vp.text_font_size, scale=vp.scale,
        )
        rocket.launch_frame = state.frame
        state.rockets.append(rocket)
        state.bus.publish(RocketLaunchedEvent(
            shell=command.shell.value, pos=rocket.pos, frame=state.frame
        ))
    elif isinstance(command, SpawnFountain):
        state.particles.extend(burst(
            state.catalog[command.shell], command.x * vp.width, vp.height,
            command.hue, command.sat, command.light,
            rng=state.rng, scale=vp.scale,
        ))
    else:
        raise TypeError(f"Not a spawn command: {command!r}")


def step(state: ShowState, renderer=None) -> None:
    """Advance the show by exactly one frame.

    Args:
        state: The show to advance
        renderer: Anything with fade/begin_additive/draw_rocket/
            draw_particle/end_frame/resize, or None to run headless
    """
    if state.pending_resize is not None:
        _apply_resize(state, renderer)

    # 1-2. Time, then the schedule
    state.frame += 1
    for command in state.director.tick(state.frame, state.bus):
        apply_command(state, command)

    # 3. Integrate
    for rocket in state.rockets:
        state.particles.extend(rocket.update(state.rng))
    for particle in state.particles:
        particle.update(state.rng)

    # 4-6. Fade with normal blending, then entities additively
    if renderer is not None:
        renderer.fade()
        renderer.begin_additive()
        for rocket in state.rockets:
            if not rocket.exploded:
                renderer.draw_rocket(rocket)
        for particle in state.particles:
            if particle.alive:
                renderer.draw_particle(particle)
        renderer.end_frame()

    # 7. Purge
    live_rockets = []
    for rocket in state.rockets:
        if rocket.exploded:
            state.bus.publish(RocketExplodedEvent(
                shell=rocket.shell.value, pos=rocket.pos,
                particle_count=rocket.burst_size,
                launch_frame=rocket.launch_frame, frame=state.frame,
            ))
            state.bus.publish(AudioCueEvent(kind="explosion", frame=state.frame))
        else:
            live_rockets.append(rocket)
    state.rockets = live_rockets
    state.particles = [p for p in state.particles if p.alive]

    if (not state.finished and state.frame >= state.director.end_frame
            and state.sky_empty):
        state.finished = True
        state.bus.publish(ShowFinishedEvent(frame=state.frame))


def run_frames(state: ShowState, frames: int, renderer=None) -> None:
    """Step the show `frames` times."""
    for _ in range(frames):
        step(state, renderer)
