"""
Text Rasterizer
Turns a short string into points sampled from its filled glyph area.

The text is rendered once with pygame.font onto an off-screen surface, which
is then scanned on a coarse grid. Every grid pixel that is mostly opaque
becomes one point, expressed as an offset from the center of the rendered
text. Text shells give each point a velocity proportional to its offset,
so the glyph blooms outward from the burst position.
"""
from functools import lru_cache
from typing import Tuple

import pygame

from .config import TEXT_ALPHA_THRESHOLD, TEXT_SAMPLE_STEP

Point = Tuple[float, float]


def _font(font_size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    font = pygame.font.Font(None, font_size)
    font.set_bold(True)
    return font


def _renderable(font: pygame.font.Font, text: str) -> bool:
    """False if any glyph is missing from the font or cannot be encoded."""
    try:
        metrics = font.metrics(text)
    except (UnicodeError, ValueError, pygame.error):
        return False
    return bool(metrics) and all(m is not None for m in metrics)


@lru_cache(maxsize=64)
def rasterize(text: str, font_size: int,
              step: int = TEXT_SAMPLE_STEP,
              threshold: int = TEXT_ALPHA_THRESHOLD) -> Tuple[Point, ...]:
    """Sample the glyph area of `text` rendered at `font_size` pixels.

    Args:
        text: String to rasterize (usually a single character)
        font_size: Font size in pixels
        step: Grid stride in pixels
        threshold: Minimum alpha (0-255, exclusive) for a sample to count

    Returns:
        Offsets (x, y) from the text center in row-major scan order.
        Empty for empty text or glyphs the font cannot draw.
    """
    if not text or font_size <= 0 or step <= 0:
        return ()

    font = _font(font_size)
    if not _renderable(font, text):
        return ()

    try:
        surface = font.render(text, True, (255, 255, 255))
    except (UnicodeError, ValueError, pygame.error):
        # NUL characters and lone surrogates are not drawable
        return ()
    width, height = surface.get_size()
    if width == 0 or height == 0:
        return ()

    cx = width / 2
    cy = height / 2
    points = []
    surface.lock()
    try:
        for y in range(0, height, step):
            for x in range(0, width, step):
                if surface.get_at((x, y)).a > threshold:
                    points.append((x - cx, y - cy))
    finally:
        surface.unlock()
    return tuple(points)
