"""
Particles
Point-masses spawned by explosions, rocket trails, and ground fountains.

Every particle carries a Behavior tag. The tag selects a BehaviorProfile
from BEHAVIOR_PROFILES, so motion and decay differ only in data, never in
branching scattered through the update code.
"""
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .config import (
    TRAIL_LENGTH, SHRINK_BELOW_OPACITY, SHRINK_FACTOR, GLITTER_FLICKER_CHANCE
)


class Behavior(Enum):
    """Motion and decay profile applied during integration."""
    NORMAL = "normal"
    HEAVY = "heavy"
    GLITTER = "glitter"
    TEXT = "text"
    FOUNTAIN = "fountain"
    TRAIL = "trail"


@dataclass(frozen=True)
class BehaviorProfile:
    """Integration parameters for one behavior."""
    drag: float                      # velocity multiplier per frame, in (0, 1)
    gravity: float                   # added to vy per frame
    decay: Tuple[float, float]       # opacity lost per frame, drawn once
    death_threshold: float = 0.0     # dead once opacity <= this
    trail_length: int = TRAIL_LENGTH
    flicker_chance: float = 0.0      # chance per frame to sparkle


BEHAVIOR_PROFILES = {
    # Strong drag makes the burst hang in the air, then drift down slowly
    Behavior.NORMAL: BehaviorProfile(drag=0.95, gravity=0.035, decay=(0.004, 0.010)),
    Behavior.HEAVY: BehaviorProfile(drag=0.975, gravity=0.07, decay=(0.005, 0.011),
                                    trail_length=5),
    Behavior.GLITTER: BehaviorProfile(drag=0.94, gravity=0.03, decay=(0.005, 0.012),
                                      flicker_chance=GLITTER_FLICKER_CHANCE),
    Behavior.TEXT: BehaviorProfile(drag=0.95, gravity=0.012, decay=(0.006, 0.010)),
    Behavior.FOUNTAIN: BehaviorProfile(drag=0.98, gravity=0.06, decay=(0.010, 0.020),
                                       death_threshold=0.05),
    Behavior.TRAIL: BehaviorProfile(drag=0.80, gravity=0.01, decay=(0.05, 0.08),
                                    death_threshold=0.05, trail_length=2),
}


class Particle:
    """A single point-mass with HSL color and fading opacity."""

    def __init__(self, x: float, y: float, vx: float, vy: float,
                 hue: float, sat: float, light: float,
                 behavior: Behavior = Behavior.NORMAL,
                 size: float = 2.0, rng=random):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.hue = hue % 360
        self.sat = sat
        self.light = light
        self.behavior = behavior
        self.size = size
        self.opacity = 1.0
        self.sparkling = False

        self.profile = BEHAVIOR_PROFILES[behavior]
        self.decay = rng.uniform(*self.profile.decay)
        # Previous positions, oldest first; the current position is not included
        self.history = deque([(x, y)], maxlen=self.profile.trail_length)

    @property
    def alive(self) -> bool:
        return self.opacity > self.profile.death_threshold

    @property
    def pos(self) -> tuple:
        return (self.x, self.y)

    @property
    def display_light(self) -> float:
        """Lightness to draw with; glitter flashes to full white."""
        return 100.0 if self.sparkling else self.light

    def update(self, rng=random) -> None:
        """Advance one frame: history, drag, gravity, move, decay, shrink."""
        profile = self.profile

        self.history.append((self.x, self.y))

        # Velocity first, then position (semi-implicit Euler)
        self.vx *= profile.drag
        self.vy *= profile.drag
        self.vy += profile.gravity
        self.x += self.vx
        self.y += self.vy

        self.opacity -= self.decay

        if profile.flicker_chance:
            self.sparkling = rng.random() < profile.flicker_chance

        if self.opacity < SHRINK_BELOW_OPACITY:
            self.size *= SHRINK_FACTOR

    def __repr__(self) -> str:
        return (f"Particle({self.behavior.value}, pos=({self.x:.1f}, {self.y:.1f}), "
                f"opacity={self.opacity:.2f})")
