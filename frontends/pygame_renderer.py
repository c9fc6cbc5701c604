"""
Pygame Renderer
Draws the show into a pygame surface with a fading trail and additive light.

DUCK TYPING:
This class has the same interface as HeadlessRenderer:
- fade()
- begin_additive()
- draw_rocket(rocket)
- draw_particle(particle)
- end_frame()
- resize(width, height)
- cleanup()

No shared base class needed! step() just calls these methods.
"""
import math
from typing import Any, Dict, List, Optional, Tuple

import pygame

from pyroshow.core.config import FADE_ALPHA, BACKGROUND, TITLE, Viewport
from pyroshow.core.particles import Behavior


def hsl_to_rgb(hue: float, sat: float, light: float, intensity: float = 1.0) -> Tuple[int, int, int]:
    """HSL (degrees, percent, percent) to RGB, scaled by intensity 0..1.

    Drawing additively on black, scaling the color is the same as drawing
    it with that much opacity.
    """
    color = pygame.Color(0, 0, 0)
    color.hsla = (hue % 360, min(max(sat, 0), 100), min(max(light, 0), 100), 100)
    k = min(max(intensity, 0.0), 1.0)
    return (int(color.r * k), int(color.g * k), int(color.b * k))


class PygameRenderer:
    """Renders rockets and particles with additive blending.

    Every entity is drawn on its own small black scratch surface and
    blitted with BLEND_RGB_ADD, so overlapping sparks sum toward white.
    The fade overlay is blitted with normal alpha blending.
    """

    OVERLAY_COLOR = (255, 255, 255)

    def __init__(self, viewport: Optional[Viewport] = None,
                 surface: Optional[pygame.Surface] = None):
        """Create a renderer.

        Args:
            viewport: Surface size and pixel scale
            surface: Draw into this surface instead of opening a window
        """
        self.viewport = viewport or Viewport()
        self.windowed = surface is None

        if self.windowed:
            pygame.init()
            pygame.display.set_caption(TITLE)
            self.screen = pygame.display.set_mode(
                (self.viewport.width, self.viewport.height), pygame.RESIZABLE
            )
        else:
            self.screen = surface

        self.screen.fill(BACKGROUND)
        self._fade_layer = self._make_fade_layer()
        self._additive = False
        self._font: Optional[pygame.font.Font] = None
        self.overlays: List[str] = []  # overlay texts set by the host

    def _make_fade_layer(self) -> pygame.Surface:
        layer = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        layer.fill((*BACKGROUND, int(255 * FADE_ALPHA)))
        return layer

    # === Frame protocol ===

    def fade(self) -> None:
        """Darken the previous frame a little; leaves additive mode."""
        self._additive = False
        self.screen.blit(self._fade_layer, (0, 0))

    def begin_additive(self) -> None:
        self._additive = True

    def draw_rocket(self, rocket) -> None:
        """A bright head plus a short faint streak behind it."""
        scale = self.viewport.scale
        radius = max(1, round(2 * scale))
        tail = (rocket.x - rocket.vx * 4, rocket.y - rocket.vy * 4)
        head_color = hsl_to_rgb(rocket.hue, rocket.sat, 70)
        tail_color = hsl_to_rgb(rocket.hue, rocket.sat, 50, intensity=0.3)

        def paint(layer, offset):
            ox, oy = offset
            pygame.draw.line(layer, tail_color, (rocket.x - ox, rocket.y - oy),
                             (tail[0] - ox, tail[1] - oy), self.viewport.line_width)
            pygame.draw.circle(layer, head_color, (rocket.x - ox, rocket.y - oy), radius)

        self._composite([rocket.pos, tail], radius + 1, paint)

    def draw_particle(self, particle) -> None:
        """Polyline from the oldest remembered position to the current one."""
        points = list(particle.history) + [particle.pos]
        color = hsl_to_rgb(particle.hue, particle.sat, particle.display_light, particle.opacity)
        width = max(1, round(particle.size * self.viewport.scale))
        sparkle = particle.behavior is Behavior.GLITTER and particle.sparkling
        arm = width * 2 + 1

        def paint(layer, offset):
            ox, oy = offset
            shifted = [(x - ox, y - oy) for x, y in points]
            if len(shifted) > 1:
                pygame.draw.lines(layer, color, False, shifted, width)
            else:
                pygame.draw.circle(layer, color, shifted[0], max(1, width // 2))
            if sparkle:
                cx, cy = shifted[-1]
                pygame.draw.line(layer, color, (cx - arm, cy), (cx + arm, cy))
                pygame.draw.line(layer, color, (cx, cy - arm), (cx, cy + arm))

        self._composite(points, max(width, arm if sparkle else 0) + 1, paint)

    def end_frame(self) -> None:
        """Draw host overlays on top and present the frame."""
        self._additive = False
        for i, text in enumerate(self.overlays):
            self._draw_overlay(text, i)
        if self.windowed:
            pygame.display.flip()

    def _composite(self, points, margin: int, paint) -> None:
        """Paint onto a scratch surface covering `points`, then blend it in."""
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        left = math.floor(min(xs)) - margin
        top = math.floor(min(ys)) - margin
        width = math.ceil(max(xs)) + margin - left + 1
        height = math.ceil(max(ys)) + margin - top + 1
        if not self.screen.get_rect().colliderect((left, top, width, height)):
            return

        layer = pygame.Surface((width, height))
        layer.fill((0, 0, 0))
        paint(layer, (left, top))
        flags = pygame.BLEND_RGB_ADD if self._additive else 0
        self.screen.blit(layer, (left, top), special_flags=flags)

    def _draw_overlay(self, text: str, line: int) -> None:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, max(24, self.viewport.height // 10))
        label = self._font.render(text, True, self.OVERLAY_COLOR)
        rect = label.get_rect(center=(self.viewport.width // 2,
                                      self.viewport.height // 2 + line * label.get_height()))
        self.screen.blit(label, rect)

    # === Host integration ===

    def resize(self, width: int, height: int) -> None:
        """Match a new surface size (applied between frames)."""
        self.viewport = self.viewport.resized(width, height)
        if self.windowed:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        else:
            self.screen = pygame.Surface((width, height))
        self.screen.fill(BACKGROUND)
        self._fade_layer = self._make_fade_layer()
        self._font = None

    def handle_input(self) -> Dict[str, Any]:
        """Process pygame events and return input state."""
        result = {
            'quit': False,
            'resize': None,
        }

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                result['quit'] = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    result['quit'] = True
            elif event.type == pygame.VIDEORESIZE:
                result['resize'] = (event.w, event.h)

        return result

    def cleanup(self) -> None:
        """Clean up pygame resources."""
        if self.windowed:
            pygame.quit()
