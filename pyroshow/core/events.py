"""
PyroShow Events

Signals the show sends to its host: overlay changes, audio cues,
rocket launches and bursts, and completion.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Any

AUDIO_CUES = ("launch", "explosion")


# === Event Dataclasses ===

@dataclass
class OverlayEvent:
    """Fired when a text overlay should appear or disappear."""
    name: str
    visible: bool
    frame: int


@dataclass
class AudioCueEvent:
    """Fired when the audio collaborator should play a cue."""
    kind: str  # "launch" or "explosion"
    frame: int


@dataclass
class RocketLaunchedEvent:
    """Fired when a rocket leaves the ground."""
    shell: str
    pos: tuple
    frame: int


@dataclass
class RocketExplodedEvent:
    """Fired when an exploded rocket is purged from the show."""
    shell: str
    pos: tuple
    particle_count: int
    launch_frame: int
    frame: int


@dataclass
class ShowFinishedEvent:
    """Fired once when the schedule is done and the sky is empty."""
    frame: int


# === EventBus ===

class EventBus:
    """Dispatches events to handlers subscribed by event type."""

    def __init__(self):
        self._subscribers: Dict[type, List[Callable]] = {}
        self._event_history: List[Any] = []  # For debugging/replay
        self._recording = False

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Register a handler for an event type."""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)

    def unsubscribe(self, event_type: type, handler: Callable) -> None:
        """Remove a handler from an event type."""
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(handler)
            except ValueError:
                pass

    def publish(self, event: Any) -> None:
        """Notify all handlers subscribed to this event's type."""
        if self._recording:
            self._event_history.append(event)

        event_type = type(event)
        for handler in list(self._subscribers.get(event_type, [])):
            handler(event)

    def clear(self) -> None:
        """Clear all subscribers."""
        self._subscribers.clear()

    def start_recording(self) -> None:
        """Start recording events for replay/debugging."""
        self._recording = True
        self._event_history.clear()

    def stop_recording(self) -> List[Any]:
        """Stop recording and return event history."""
        self._recording = False
        return self._event_history.copy()

    @property
    def history(self) -> List[Any]:
        """Events recorded so far (copy)."""
        return self._event_history.copy()
