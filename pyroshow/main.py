#!/usr/bin/env python3
"""
PyroShow - Scripted Fireworks Show
==================================

Run with: python -m pyroshow.main [--verbose] [--headless FRAMES]

Features:
- Rockets aimed at a target height, bursting at their apex
- Peony, glitter, horsetail, mine, fountain and text shells
- Text shells spelling the year in exploding glyphs
- Fading trails with additive light
- Overlay and audio cues delivered through the event bus
"""
import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Callable, Optional

from .core.audio import SoundHandler, NullAudioHandler
from .core.config import FPS, SCREEN_WIDTH, SCREEN_HEIGHT, Viewport, load_show_script
from .core.director import Director, ScheduleError
from .core.events import EventBus, ShowFinishedEvent
from .core.handlers import LoggerHandler, OverlayTracker
from .core.simulation import ShowState, step
from .logger_setup import setup_logging

logger = logging.getLogger("pyroshow")

# Text the host shows for each overlay name
OVERLAY_TEXT = {
    "ready": "READY?",
    "finale": "Happy New Year",
}


class Show:
    """Owns one running show and drives it one frame at a time."""

    def __init__(self, viewport: Optional[Viewport] = None, script: Optional[dict] = None,
                 seed: Optional[int] = None, verbose: bool = False,
                 renderer=None, audio=None,
                 on_finished: Optional[Callable[[ShowFinishedEvent], None]] = None):
        self.bus = EventBus()
        director = Director.from_script(script if script is not None else load_show_script())
        self.state = ShowState(
            director=director,
            viewport=viewport or Viewport(),
            bus=self.bus,
            rng=random.Random(seed),
        )
        self.renderer = renderer
        self.audio = audio or NullAudioHandler()
        self.on_finished = on_finished
        self.running = False

        # Observers
        self.overlays = OverlayTracker(self.bus)
        self.logger = LoggerHandler(self.bus, verbose=verbose)
        self.bus.subscribe(ShowFinishedEvent, self._on_finished)

    @property
    def frame(self) -> int:
        return self.state.frame

    @property
    def finished(self) -> bool:
        return self.state.finished

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        """Cancel the next frame. A frame in progress always completes."""
        self.running = False

    def request_resize(self, width: int, height: int) -> None:
        self.state.request_resize(width, height)

    def advance(self) -> bool:
        """Run one frame turn. Returns whether another frame is scheduled."""
        if not self.running:
            return False
        if self.renderer is not None:
            self.renderer.overlays = [OVERLAY_TEXT.get(name, name)
                                      for name in sorted(self.overlays.visible)]
        step(self.state, self.renderer)
        return self.running

    def _on_finished(self, event: ShowFinishedEvent) -> None:
        self.running = False
        if self.on_finished:
            self.on_finished(event)

    def run(self, max_frames: Optional[int] = None) -> None:
        """Run until the show finishes, the window closes, or max_frames."""
        import pygame
        clock = pygame.time.Clock()
        self.start()
        try:
            while self.running:
                input_state = self.renderer.handle_input()
                if input_state['quit']:
                    self.stop()
                    break
                if input_state['resize']:
                    self.request_resize(*input_state['resize'])

                self.advance()
                if max_frames is not None and self.frame >= max_frames:
                    self.stop()
                clock.tick(FPS)
        finally:
            self.cleanup()

    def run_headless(self, frames: int) -> None:
        """Run up to `frames` frames without waiting for the display."""
        self.start()
        try:
            while self.running and self.frame < frames:
                self.advance()
        finally:
            self.cleanup()

    def cleanup(self) -> None:
        self.stop()
        if self.renderer is not None:
            self.renderer.cleanup()
        self.audio.cleanup()


def make_audio(bus, sounds_dir: Optional[Path], mute: bool = False):
    """A SoundHandler for `sounds_dir`, or a NullAudioHandler when there is nothing to play."""
    if mute or sounds_dir is None:
        return NullAudioHandler()
    if not sounds_dir.is_dir():
        logger.warning(f"Sounds directory {sounds_dir} not found, audio disabled")
        return NullAudioHandler()
    return SoundHandler(bus, sounds_dir, enabled=True)


def main():
    parser = argparse.ArgumentParser(description="PyroShow - scripted fireworks show")
    parser.add_argument('--width', type=int, default=SCREEN_WIDTH,
                       help='Window width in pixels')
    parser.add_argument('--height', type=int, default=SCREEN_HEIGHT,
                       help='Window height in pixels')
    parser.add_argument('--scale', type=float, default=1.0,
                       help='Device pixel ratio used for particle and text sizes')
    parser.add_argument('--seed', type=int, default=None,
                       help='Random seed for a reproducible show')
    parser.add_argument('--sounds', type=Path, metavar='DIR', default=None,
                       help='Directory with launch.wav and explosion.wav (no audio without it)')
    parser.add_argument('--mute', action='store_true',
                       help='Disable audio cues')
    parser.add_argument('--verbose', action='store_true',
                       help='Log every launch and burst')
    parser.add_argument('--headless', type=int, metavar='FRAMES', default=None,
                       help='Run FRAMES frames without a window')
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        viewport = Viewport(args.width, args.height, args.scale)
        script = load_show_script()
    except (OSError, ValueError) as e:
        logger.error(f"Could not set up the show: {e}")
        sys.exit(1)

    if args.headless is not None:
        from frontends.headless_renderer import HeadlessRenderer
        renderer = HeadlessRenderer(keep_calls=False)
    else:
        try:
            from frontends.pygame_renderer import PygameRenderer
        except ImportError as e:
            logger.error(f"pygame is required to open a window: {e}")
            logger.error("Install with: pip install pygame, or use --headless")
            sys.exit(1)
        renderer = PygameRenderer(viewport)

    try:
        show = Show(viewport=viewport, script=script, seed=args.seed,
                    verbose=args.verbose, renderer=renderer)
    except ScheduleError as e:
        logger.error(f"Invalid show script: {e}")
        renderer.cleanup()
        sys.exit(1)

    show.audio = make_audio(show.bus, args.sounds, mute=args.mute or args.headless is not None)

    logger.info(f"PyroShow started ({viewport.width}x{viewport.height}, "
                f"{show.state.director.end_frame} frames)")

    try:
        if args.headless is not None:
            show.run_headless(args.headless)
            logger.info(f"Rendered {renderer.frames} frames: {renderer.rockets_drawn} rocket "
                        f"and {renderer.particles_drawn} particle draws")
        else:
            show.run()
    except KeyboardInterrupt:
        pass

    if show.finished:
        logger.info("Show complete.")
    else:
        logger.info(f"Show stopped at frame {show.frame}.")


if __name__ == '__main__':
    main()
