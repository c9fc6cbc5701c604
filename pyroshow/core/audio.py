"""
Audio Handler - event-driven sound cues for the show.

Audio is optional: the show looks the same with or without sound files,
a working mixer, or this handler at all. Every failure is handled here and
never reaches the frame loop.
"""
import logging
from pathlib import Path
from typing import Dict, Optional

from .events import EventBus, AudioCueEvent

logger = logging.getLogger("pyroshow")


class SoundHandler:
    """Plays "launch" and "explosion" cues published on the show's bus.

    Uses pygame.mixer for playback.
    Gracefully degrades if the mixer is unavailable or sounds don't exist.
    """

    # Sound file paths (relative to sounds_dir)
    SOUND_FILES = {
        "launch": "launch.wav",
        "explosion": "explosion.wav",
    }

    VOLUME = {
        "launch": 0.25,
        "explosion": 0.4,
    }

    def __init__(self, bus: EventBus, sounds_dir: Optional[Path] = None, enabled: bool = True):
        """Initialize sound handler.

        Args:
            bus: Event bus of the show to listen on
            sounds_dir: Directory holding the cue files
            enabled: Whether to enable audio (False for headless/tests)
        """
        self.bus = bus
        self.enabled = enabled
        self.sounds: Dict[str, object] = {}
        self._mixer_initialized = False

        if not enabled or sounds_dir is None:
            self.enabled = False
            return

        try:
            import pygame.mixer
            pygame.mixer.init()
            self._mixer_initialized = True
            self._load_sounds(sounds_dir)
        except Exception as e:
            logger.warning(f"Audio init failed: {e}")
            self.enabled = False

        if self.enabled:
            bus.subscribe(AudioCueEvent, self.on_cue)

    def _load_sounds(self, sounds_dir: Path) -> None:
        """Load sound files from directory. Missing files are skipped."""
        import pygame.mixer

        for key, filename in self.SOUND_FILES.items():
            filepath = sounds_dir / filename
            if not filepath.exists():
                logger.debug(f"No sound for cue '{key}' at {filepath}")
                continue
            try:
                sound = pygame.mixer.Sound(str(filepath))
                sound.set_volume(self.VOLUME.get(key, 0.3))
                self.sounds[key] = sound
            except Exception as e:
                logger.warning(f"Could not load sound {filename}: {e}")

    def on_cue(self, event: AudioCueEvent) -> None:
        """Play the sound for a cue event."""
        self.play(event.kind)

    def play(self, cue: str) -> None:
        """Play a cue by name. Playback errors are logged and ignored."""
        if not self.enabled or cue not in self.sounds:
            return
        try:
            self.sounds[cue].play()
        except Exception as e:
            logger.warning(f"Playing cue '{cue}' failed: {e}")

    def cleanup(self) -> None:
        """Unsubscribe and release the mixer."""
        self.bus.unsubscribe(AudioCueEvent, self.on_cue)
        if self._mixer_initialized:
            try:
                import pygame.mixer
                pygame.mixer.quit()
            except Exception:
                logger.debug("Mixer shutdown failed", exc_info=True)
            self._mixer_initialized = False


class NullAudioHandler:
    """No-op audio handler for muted/headless mode.

    Same interface as SoundHandler, does nothing.
    """

    def __init__(self, *args, **kwargs):
        self.enabled = False

    def on_cue(self, event) -> None:
        pass

    def play(self, cue: str) -> None:
        pass

    def cleanup(self) -> None:
        pass
