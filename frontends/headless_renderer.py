"""
Headless Renderer
Same interface as PygameRenderer, but only counts what it is asked to draw.

Used by --headless runs and by the tests to check the draw order of a frame.
"""
from typing import List, Tuple


class HeadlessRenderer:
    """Records the frame protocol instead of drawing it."""

    def __init__(self, keep_calls: bool = True):
        self.keep_calls = keep_calls
        self.calls: List[Tuple[str, object]] = []
        self.frames = 0
        self.rockets_drawn = 0
        self.particles_drawn = 0
        self.additive = False
        self.size = None
        self.overlays: List[str] = []

    def _record(self, name: str, arg: object = None) -> None:
        if self.keep_calls:
            self.calls.append((name, arg))

    def fade(self) -> None:
        self.additive = False
        self._record("fade")

    def begin_additive(self) -> None:
        self.additive = True
        self._record("begin_additive")

    def draw_rocket(self, rocket) -> None:
        if not self.additive:
            raise RuntimeError("Rockets must be drawn in additive mode")
        self.rockets_drawn += 1
        self._record("rocket", rocket)

    def draw_particle(self, particle) -> None:
        if not self.additive:
            raise RuntimeError("Particles must be drawn in additive mode")
        self.particles_drawn += 1
        self._record("particle", particle)

    def end_frame(self) -> None:
        self.additive = False
        self.frames += 1
        self._record("end_frame")

    def resize(self, width: int, height: int) -> None:
        self.size = (width, height)
        self._record("resize", (width, height))

    def handle_input(self) -> dict:
        return {'quit': False, 'resize': None}

    def names(self) -> List[str]:
        """Recorded call names, in order."""
        return [name for name, _ in self.calls]

    def clear(self) -> None:
        self.calls.clear()

    def cleanup(self) -> None:
        self.calls.clear()
