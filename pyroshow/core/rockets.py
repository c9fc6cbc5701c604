"""
Rockets
Launched projectiles that climb to a target height and burst into a shell.
"""
import math
import random
from typing import List, Optional

from .config import (
    ROCKET_GRAVITY, ROCKET_DRAG_X, ROCKET_JITTER_X, LAUNCH_SPEED_FACTOR,
    APEX_VELOCITY_THRESHOLD, ROCKET_TRAIL_CHANCE, TEXT_FONT_SIZE
)
from .particles import Behavior, Particle
from .rasterizer import rasterize
from .shells import SHELL_CATALOG, ShellSpec, ShellType, burst, text_burst


def launch_speed(rise: float, gravity: float = ROCKET_GRAVITY,
                 factor: float = LAUNCH_SPEED_FACTOR) -> float:
    """Upward speed needed to climb `rise` pixels before stalling.

    Free fall gives v0 = sqrt(2 * g * rise); `factor` makes up for the
    height lost to the per-frame integration so the apex is not short.
    """
    return math.sqrt(2 * gravity * max(rise, 0.0)) * factor


class Rocket:
    """A rising shell. Explodes exactly once, then is inert."""

    def __init__(self, x: float, y: float, vx: float, vy: float, target_y: float,
                 hue: float, sat: float, light: float,
                 shell: ShellType = ShellType.PEONY, char: Optional[str] = None,
                 spec: Optional[ShellSpec] = None,
                 font_size: int = TEXT_FONT_SIZE, scale: float = 1.0):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.target_y = target_y
        self.hue = hue
        self.sat = sat
        self.light = light
        self.shell = shell
        self.spec = spec or SHELL_CATALOG[shell]
        self.char = char
        self.font_size = font_size
        self.scale = scale
        self.exploded = False
        self.burst_size = 0  # particles produced by the explosion
        self.launch_frame = 0

    @classmethod
    def launch(cls, x: float, target_y: float, viewport_height: float,
               hue: float, sat: float, light: float,
               shell: ShellType = ShellType.PEONY, char: Optional[str] = None,
               tilt: float = 0.0, rng=random, catalog=SHELL_CATALOG,
               font_size: int = TEXT_FONT_SIZE, scale: float = 1.0) -> "Rocket":
        """Create a rocket at the bottom edge aimed at `target_y`.

        Args:
            x: Launch x in pixels
            target_y: Screen y where the rocket must burst
            viewport_height: Launch y (bottom of the surface)
            tilt: Launch angle from vertical in degrees, positive leans right
        """
        spec = catalog[shell]
        if spec.launch_speed is not None:
            speed = spec.launch_speed
        else:
            speed = launch_speed(viewport_height - target_y)
        vx = rng.uniform(-ROCKET_JITTER_X, ROCKET_JITTER_X) + speed * math.sin(math.radians(tilt))
        return cls(x, viewport_height, vx, -speed, target_y,
                   hue, sat, light, shell=shell, char=char, spec=spec,
                   font_size=font_size, scale=scale)

    @property
    def pos(self) -> tuple:
        return (self.x, self.y)

    @property
    def at_apex(self) -> bool:
        """Stalled, or already at/above the target height."""
        return self.vy >= -APEX_VELOCITY_THRESHOLD or self.y <= self.target_y

    def update(self, rng=random) -> List[Particle]:
        """Advance one frame. Returns newly spawned particles."""
        if self.exploded:
            return []

        self.vy += ROCKET_GRAVITY
        self.vx *= ROCKET_DRAG_X
        self.x += self.vx
        self.y += self.vy

        spawned = []
        if rng.random() < ROCKET_TRAIL_CHANCE:
            spawned.append(Particle(
                self.x, self.y,
                rng.uniform(-0.3, 0.3), rng.uniform(0.5, 1.5),
                self.hue, self.sat, 70,
                behavior=Behavior.TRAIL, size=1.5 * self.scale, rng=rng,
            ))

        if self.at_apex:
            spawned.extend(self.explode(rng))
        return spawned

    def explode(self, rng=random) -> List[Particle]:
        """Burst into the shell's particles. Later calls return nothing."""
        if self.exploded:
            return []
        self.exploded = True

        if self.spec.is_text:
            points = rasterize(self.char, self.font_size) if self.char else ()
            particles = text_burst(self.spec, points, self.x, self.y,
                                   self.hue, self.sat, self.light,
                                   rng=rng, scale=self.scale)
        else:
            particles = burst(self.spec, self.x, self.y,
                              self.hue, self.sat, self.light,
                              rng=rng, scale=self.scale)
        self.burst_size = len(particles)
        return particles

    def __repr__(self) -> str:
        return (f"Rocket({self.shell.value}, pos=({self.x:.1f}, {self.y:.1f}), "
                f"vy={self.vy:.2f}, exploded={self.exploded})")
