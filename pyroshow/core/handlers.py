"""
PyroShow Event Handlers

Observers that hang off a show's EventBus. The show never calls them
directly; they subscribe themselves and react to what is published.
"""
import logging
from typing import List, Set

from .events import (
    EventBus, OverlayEvent, AudioCueEvent, RocketLaunchedEvent,
    RocketExplodedEvent, ShowFinishedEvent
)

logger = logging.getLogger("pyroshow")


class LoggerHandler:
    """Logs show events. Launches and bursts only in verbose mode."""

    def __init__(self, bus: EventBus, verbose: bool = False):
        self.verbose = verbose
        bus.subscribe(OverlayEvent, self.on_overlay)
        bus.subscribe(ShowFinishedEvent, self.on_finished)
        if verbose:
            bus.subscribe(RocketLaunchedEvent, self.on_launch)
            bus.subscribe(RocketExplodedEvent, self.on_explosion)
            bus.subscribe(AudioCueEvent, self.on_cue)

    def on_overlay(self, event: OverlayEvent) -> None:
        state = "show" if event.visible else "hide"
        logger.info(f"[OVERLAY] frame {event.frame}: {state} '{event.name}'")

    def on_launch(self, event: RocketLaunchedEvent) -> None:
        logger.info(f"[LAUNCH] frame {event.frame}: {event.shell} from x={event.pos[0]:.0f}")

    def on_explosion(self, event: RocketExplodedEvent) -> None:
        logger.info(
            f"[BURST] frame {event.frame}: {event.shell} at "
            f"({event.pos[0]:.0f}, {event.pos[1]:.0f}), {event.particle_count} particles "
            f"(launched frame {event.launch_frame})"
        )

    def on_cue(self, event: AudioCueEvent) -> None:
        logger.debug(f"[CUE] frame {event.frame}: {event.kind}")

    def on_finished(self, event: ShowFinishedEvent) -> None:
        logger.info(f"[SHOW] finished at frame {event.frame}")


class OverlayTracker:
    """Keeps the set of overlays the host should currently display."""

    def __init__(self, bus: EventBus):
        self.visible: Set[str] = set()
        self.log: List[OverlayEvent] = []
        bus.subscribe(OverlayEvent, self.on_overlay)

    def on_overlay(self, event: OverlayEvent) -> None:
        self.log.append(event)
        if event.visible:
            self.visible.add(event.name)
        else:
            self.visible.discard(event.name)

    def is_visible(self, name: str) -> bool:
        return name in self.visible
