"""
Commands
Value objects emitted by the Director for one frame.
The simulation loop is the only code that applies them.
"""
from dataclasses import dataclass
from typing import Optional

from .shells import ShellType


@dataclass(frozen=True)
class LaunchRocket:
    """Launch one rocket from the bottom edge"""
    x: float                 # fraction of viewport width
    target: float            # burst height as fraction of viewport height
    hue: float
    sat: float
    light: float
    shell: ShellType = ShellType.PEONY
    char: Optional[str] = None
    tilt: float = 0.0        # degrees from vertical


@dataclass(frozen=True)
class SpawnFountain:
    """Emit ambient fountain sparks from the ground"""
    x: float                 # fraction of viewport width
    hue: float
    sat: float
    light: float
    shell: ShellType = ShellType.FOUNTAIN_UP


@dataclass(frozen=True)
class ShowOverlay:
    """Ask the host to show a named text overlay"""
    name: str


@dataclass(frozen=True)
class HideOverlay:
    """Ask the host to hide a named text overlay"""
    name: str


@dataclass(frozen=True)
class PlayCue:
    """Ask the audio collaborator to play a cue ("launch" or "explosion")"""
    kind: str


# Commands the loop applies to its own collections
SpawnCommand = LaunchRocket | SpawnFountain

# Type alias for any command
Command = LaunchRocket | SpawnFountain | ShowOverlay | HideOverlay | PlayCue
