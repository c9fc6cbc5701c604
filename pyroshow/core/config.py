"""
PyroShow Configuration
Contains show constants, physics tunables, file paths, and the viewport.

Units are pixels and frames unless noted otherwise. The physics values were
tuned by eye at 60 FPS and have no intrinsic physical meaning.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Paths
PACKAGE_ROOT = Path(__file__).parent.parent
DATA_DIR = PACKAGE_ROOT / "data"
SHOW_SCRIPT = DATA_DIR / "show.json"

# Display
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
TITLE = "PyroShow"

# Fade overlay painted before every frame (alpha 0..1, lower = longer trails)
FADE_ALPHA = 0.15
BACKGROUND = (0, 0, 0)

# Palette as (hue, saturation, lightness)
GOLD = (45, 100, 50)
WHITE = (0, 0, 100)
RED = (0, 80, 60)
YELLOW = (45, 100, 50)
GREEN = (120, 60, 50)
BLUE = (210, 90, 60)

PALETTE = {
    "gold": GOLD,
    "white": WHITE,
    "red": RED,
    "yellow": YELLOW,
    "green": GREEN,
    "blue": BLUE,
}

# Rocket ascent
ROCKET_GRAVITY = 0.12          # added to vy every frame
ROCKET_DRAG_X = 0.99           # horizontal velocity multiplier per frame
ROCKET_JITTER_X = 0.3          # max horizontal launch drift
LAUNCH_SPEED_FACTOR = 1.02     # compensates the Euler step losing height
APEX_VELOCITY_THRESHOLD = 0.5  # explode once vy >= -threshold
MINE_LAUNCH_SPEED = 14.0       # fixed ascent speed for mine shells
ROCKET_TRAIL_CHANCE = 0.6      # chance per frame to drop a trail spark

# Particles
TRAIL_LENGTH = 3               # history samples kept for motion blur
SHRINK_BELOW_OPACITY = 0.3
SHRINK_FACTOR = 0.96
GLITTER_FLICKER_CHANCE = 0.3

# Text shells
TEXT_FONT_SIZE = 180
TEXT_SAMPLE_STEP = 4
TEXT_ALPHA_THRESHOLD = 128
TEXT_VELOCITY_SCALE = 0.05
TEXT_VELOCITY_JITTER = 0.2
TEXT_MAX_HEIGHT_RATIO = 0.3    # glyphs never exceed this share of the screen


@dataclass
class Viewport:
    """Drawing surface size plus the device-pixel-ratio used for sizing."""
    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    scale: float = 1.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must be positive, got {self.width}x{self.height}")
        if self.scale <= 0:
            raise ValueError(f"Viewport scale must be positive, got {self.scale}")

    @property
    def text_font_size(self) -> int:
        """Font size for text shells, bounded by the screen height."""
        size = min(TEXT_FONT_SIZE * self.scale, self.height * TEXT_MAX_HEIGHT_RATIO)
        return max(1, int(size))

    @property
    def line_width(self) -> int:
        return max(1, round(2 * self.scale))

    def resized(self, width: int, height: int) -> "Viewport":
        return Viewport(width, height, self.scale)


def load_show_script(path: Optional[Path] = None) -> dict:
    """Load the show script (schedule of launches and overlay cues)"""
    with open(path or SHOW_SCRIPT, "r") as f:
        return json.load(f)
