"""
Shell Catalog
Explosion archetypes and the code that turns one into a particle batch.

SHELL_CATALOG is pure data: count, radial speed, spread, resulting particle
behavior, and hue jitter per shell type. burst() and text_burst() are the
only places that read it to spawn particles.
"""
import math
import random
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Optional, Sequence, Tuple

from .config import TEXT_VELOCITY_SCALE, TEXT_VELOCITY_JITTER, MINE_LAUNCH_SPEED
from .particles import Behavior, Particle


class ShellType(Enum):
    """Explosion archetype carried by a rocket."""
    PEONY = "peony"
    GLITTER = "glitter"
    HORSETAIL = "horsetail"
    MINE = "mine"
    FOUNTAIN_UP = "fountain_up"
    FOUNTAIN_DOWN = "fountain_down"
    TEXT = "text"


@dataclass(frozen=True)
class ShellSpec:
    """Spawn parameters for one shell type.

    Angles are in degrees in screen space (y grows downward),
    so -90 points straight up.
    """
    behavior: Behavior
    count: Optional[int]                      # None: one particle per text point
    power: Tuple[float, float] = (5.0, 9.0)   # max radial speed, drawn per burst
    radial_exponent: float = 0.5              # speed = power * u ** exponent
    arc: Optional[Tuple[float, float]] = None  # (center, spread) or None = full circle
    hue_jitter: float = 10.0
    launch_speed: Optional[float] = None      # fixed ascent speed, ignores target height
    size: float = 2.0

    @property
    def is_text(self) -> bool:
        return self.count is None

    def angle_range(self) -> Tuple[float, float]:
        """Angle bounds in radians."""
        if self.arc is None:
            return (0.0, 2 * math.pi)
        center, spread = self.arc
        return (math.radians(center - spread / 2), math.radians(center + spread / 2))


SHELL_CATALOG = MappingProxyType({
    ShellType.PEONY: ShellSpec(behavior=Behavior.NORMAL, count=150),
    ShellType.GLITTER: ShellSpec(behavior=Behavior.GLITTER, count=120, power=(4.0, 7.0)),
    ShellType.HORSETAIL: ShellSpec(behavior=Behavior.HEAVY, count=90, power=(3.0, 6.0),
                                   arc=(-90.0, 160.0), size=2.5),
    ShellType.MINE: ShellSpec(behavior=Behavior.HEAVY, count=100, power=(6.0, 10.0),
                              arc=(-90.0, 60.0), launch_speed=MINE_LAUNCH_SPEED),
    ShellType.FOUNTAIN_UP: ShellSpec(behavior=Behavior.FOUNTAIN, count=60, power=(3.0, 6.0),
                                     arc=(-90.0, 40.0), hue_jitter=15.0, size=1.5),
    ShellType.FOUNTAIN_DOWN: ShellSpec(behavior=Behavior.FOUNTAIN, count=80, power=(2.0, 4.0),
                                       arc=(90.0, 70.0), size=1.5),
    ShellType.TEXT: ShellSpec(behavior=Behavior.TEXT, count=None, hue_jitter=0.0),
})


def shell_type(name: str) -> ShellType:
    """Look up a shell type by its script name, e.g. "peony"."""
    try:
        return ShellType(name)
    except ValueError:
        raise ValueError(f"Unknown shell type: {name!r}") from None


def _jittered_hue(spec: ShellSpec, hue: float, rng) -> float:
    if spec.hue_jitter:
        return hue + rng.uniform(-spec.hue_jitter, spec.hue_jitter)
    return hue


def burst(spec: ShellSpec, x: float, y: float,
          hue: float, sat: float, light: float,
          rng=random, scale: float = 1.0) -> List[Particle]:
    """Spawn a radial or arc burst at (x, y).

    Speed is power * sqrt(u), which fills the disc evenly by area and so
    puts more particles near the rim than sampling the radius uniformly.
    """
    if spec.is_text:
        raise ValueError("Text shells need rasterized points, use text_burst()")

    power = rng.uniform(*spec.power)
    lo, hi = spec.angle_range()
    particles = []
    for _ in range(spec.count):
        angle = rng.uniform(lo, hi)
        speed = power * rng.random() ** spec.radial_exponent
        particles.append(Particle(
            x, y,
            math.cos(angle) * speed,
            math.sin(angle) * speed,
            _jittered_hue(spec, hue, rng), sat, light,
            behavior=spec.behavior,
            size=spec.size * scale,
            rng=rng,
        ))
    return particles


def text_burst(spec: ShellSpec, points: Sequence[Tuple[float, float]],
               x: float, y: float, hue: float, sat: float, light: float,
               rng=random, scale: float = 1.0) -> List[Particle]:
    """Spawn one particle per glyph point, moving outward from (x, y).

    Velocity is proportional to the point's offset, so the glyph starts
    as a dot and grows into its shape while the particles slow down.
    """
    particles = []
    for px, py in points:
        vx = px * TEXT_VELOCITY_SCALE + rng.uniform(-TEXT_VELOCITY_JITTER, TEXT_VELOCITY_JITTER)
        vy = py * TEXT_VELOCITY_SCALE + rng.uniform(-TEXT_VELOCITY_JITTER, TEXT_VELOCITY_JITTER)
        particles.append(Particle(
            x, y, vx, vy,
            _jittered_hue(spec, hue, rng), sat, light,
            behavior=spec.behavior,
            size=spec.size * scale,
            rng=rng,
        ))
    return particles
