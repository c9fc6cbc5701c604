"""
Director
The show timeline: a fixed schedule of triggers keyed on the frame counter.

Two trigger kinds exist:
- OneShot fires its commands when frame == N.
- Periodic fires on every `period`-th frame inside [start, end). Each shot
  gets an index (frame - start) // period that shifts x, tilt and hue, which
  gives left-to-right sweeps and scattered ambient filler without any
  randomness.

The schedule is static, trusted data, so it is validated once at startup
and malformed entries raise ScheduleError instead of being skipped.
"""
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .commands import (
    Command, SpawnCommand, LaunchRocket, SpawnFountain, ShowOverlay, HideOverlay, PlayCue
)
from .config import PALETTE
from .events import EventBus, OverlayEvent, AudioCueEvent, AUDIO_CUES
from .shells import ShellType, shell_type

Color = Tuple[float, float, float]


class ScheduleError(ValueError):
    """Raised when the show script is malformed."""


@dataclass(frozen=True)
class OneShot:
    """Commands fired exactly once, on one frame."""
    frame: int
    commands: Tuple[Command, ...]

    def fires_at(self, frame: int) -> bool:
        return frame == self.frame

    def commands_at(self, frame: int) -> Tuple[Command, ...]:
        return self.commands if self.fires_at(frame) else ()

    @property
    def last_frame(self) -> int:
        return self.frame


@dataclass(frozen=True)
class Periodic:
    """A spawn command repeated every `period` frames within [start, end)."""
    start: int
    end: int
    period: int
    template: SpawnCommand
    x_step: float = 0.0           # added to x per shot, wraps around 1.0
    tilt_step: float = 0.0        # degrees added per shot (rockets only)
    hue_cycle: Tuple[Color, ...] = ()

    def fires_at(self, frame: int) -> bool:
        return self.start <= frame < self.end and (frame - self.start) % self.period == 0

    def shot_index(self, frame: int) -> int:
        return (frame - self.start) // self.period

    @property
    def shots(self) -> int:
        return len(range(self.start, self.end, self.period))

    @property
    def last_frame(self) -> int:
        return self.end - 1

    def commands_at(self, frame: int) -> Tuple[Command, ...]:
        if not self.fires_at(frame):
            return ()
        index = self.shot_index(frame)
        changes = {}
        if self.x_step:
            changes["x"] = (self.template.x + index * self.x_step) % 1.0
        if self.tilt_step and isinstance(self.template, LaunchRocket):
            changes["tilt"] = self.template.tilt + index * self.tilt_step
        if self.hue_cycle:
            hue, sat, light = self.hue_cycle[index % len(self.hue_cycle)]
            changes.update(hue=hue, sat=sat, light=light)
        return (replace(self.template, **changes),)


Trigger = OneShot | Periodic


class Director:
    """Maps the frame counter to commands, in declaration order."""

    def __init__(self, triggers: Sequence[Trigger], end_frame: int):
        self.triggers: Tuple[Trigger, ...] = tuple(triggers)
        self.end_frame = end_frame
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.end_frame, int) or self.end_frame < 1:
            raise ScheduleError(f"end_frame must be a positive integer, got {self.end_frame!r}")
        for i, trigger in enumerate(self.triggers):
            where = f"trigger #{i}"
            if isinstance(trigger, OneShot):
                if not 1 <= trigger.frame < self.end_frame:
                    raise ScheduleError(
                        f"{where}: frame {trigger.frame} outside [1, {self.end_frame})")
                if not trigger.commands:
                    raise ScheduleError(f"{where}: no actions")
                commands: Iterable[Command] = trigger.commands
            elif isinstance(trigger, Periodic):
                if trigger.period < 1:
                    raise ScheduleError(f"{where}: period must be >= 1, got {trigger.period}")
                if not 1 <= trigger.start < trigger.end <= self.end_frame:
                    raise ScheduleError(
                        f"{where}: window [{trigger.start}, {trigger.end}) invalid "
                        f"for a show ending at {self.end_frame}")
                if not isinstance(trigger.template, (LaunchRocket, SpawnFountain)):
                    raise ScheduleError(f"{where}: periodic triggers only spawn rockets or fountains")
                commands = (trigger.template,)
            else:
                raise ScheduleError(f"{where}: unknown trigger {trigger!r}")
            for command in commands:
                _validate_command(command, where)

    def commands_at(self, frame: int) -> List[Command]:
        """All commands due on `frame`. Pure: no side effects."""
        commands = []
        for trigger in self.triggers:
            commands.extend(trigger.commands_at(frame))
        return commands

    def tick(self, frame: int, bus: Optional[EventBus] = None) -> List[SpawnCommand]:
        """Deliver this frame's signals to the bus and return spawn commands.

        Overlay and cue commands become OverlayEvent / AudioCueEvent.
        Every rocket launch also publishes a "launch" cue.
        """
        spawns = []
        for command in self.commands_at(frame):
            if isinstance(command, (LaunchRocket, SpawnFountain)):
                spawns.append(command)
                if isinstance(command, LaunchRocket) and bus is not None:
                    bus.publish(AudioCueEvent(kind="launch", frame=frame))
            elif bus is None:
                continue
            elif isinstance(command, ShowOverlay):
                bus.publish(OverlayEvent(name=command.name, visible=True, frame=frame))
            elif isinstance(command, HideOverlay):
                bus.publish(OverlayEvent(name=command.name, visible=False, frame=frame))
            elif isinstance(command, PlayCue):
                bus.publish(AudioCueEvent(kind=command.kind, frame=frame))
        return spawns

    @property
    def last_trigger_frame(self) -> int:
        return max((t.last_frame for t in self.triggers), default=0)

    @classmethod
    def from_script(cls, script: dict) -> "Director":
        """Build a Director from the JSON show script.

        Script layout:
            {"end_frame": 900,
             "triggers": [
                {"kind": "once", "frame": 20, "actions": [{"do": "launch", ...}]},
                {"kind": "periodic", "start": 300, "end": 420, "period": 30,
                 "action": {"do": "launch", ...}, "x_step": 0.1}]}
        """
        if not isinstance(script, dict):
            raise ScheduleError("Show script must be a JSON object")
        end_frame = script.get("end_frame")
        raw_triggers = script.get("triggers")
        if not isinstance(raw_triggers, list):
            raise ScheduleError("Show script needs a 'triggers' list")

        triggers = []
        for i, raw in enumerate(raw_triggers):
            where = f"trigger #{i}"
            try:
                triggers.append(_parse_trigger(raw))
            except ScheduleError as e:
                raise ScheduleError(f"{where}: {e}") from None
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise ScheduleError(f"{where}: malformed entry ({e})") from None
        return cls(triggers, end_frame)


# === Script parsing ===

def parse_color(raw) -> Color:
    """A palette name ("gold") or an [h, s, l] triple."""
    if isinstance(raw, str):
        if raw not in PALETTE:
            raise ScheduleError(f"unknown color {raw!r}")
        return PALETTE[raw]
    if isinstance(raw, (list, tuple)) and len(raw) == 3:
        return tuple(float(v) for v in raw)
    raise ScheduleError(f"color must be a palette name or [h, s, l], got {raw!r}")


def _parse_action(raw: dict) -> Command:
    kind = raw["do"]
    if kind == "launch":
        hue, sat, light = parse_color(raw.get("color", "white"))
        try:
            shell = shell_type(raw.get("shell", "peony"))
        except ValueError as e:
            raise ScheduleError(str(e)) from None
        return LaunchRocket(
            x=float(raw["x"]), target=float(raw["target"]),
            hue=hue, sat=sat, light=light,
            shell=shell, char=raw.get("char"),
            tilt=float(raw.get("tilt", 0.0)),
        )
    if kind == "fountain":
        hue, sat, light = parse_color(raw.get("color", "gold"))
        try:
            shell = shell_type(raw.get("shell", "fountain_up"))
        except ValueError as e:
            raise ScheduleError(str(e)) from None
        return SpawnFountain(x=float(raw["x"]), hue=hue, sat=sat, light=light, shell=shell)
    if kind == "overlay":
        if raw.get("visible", True):
            return ShowOverlay(name=str(raw["name"]))
        return HideOverlay(name=str(raw["name"]))
    if kind == "cue":
        return PlayCue(kind=str(raw["kind"]))
    raise ScheduleError(f"unknown action {kind!r}")


def _parse_trigger(raw: dict) -> Trigger:
    kind = raw.get("kind")
    if kind == "once":
        actions = raw["actions"]
        if not isinstance(actions, list):
            raise ScheduleError("'actions' must be a list")
        return OneShot(frame=int(raw["frame"]),
                       commands=tuple(_parse_action(a) for a in actions))
    if kind == "periodic":
        hue_cycle = tuple(parse_color(c) for c in raw.get("hue_cycle", ()))
        return Periodic(
            start=int(raw["start"]), end=int(raw["end"]), period=int(raw["period"]),
            template=_parse_action(raw["action"]),
            x_step=float(raw.get("x_step", 0.0)),
            tilt_step=float(raw.get("tilt_step", 0.0)),
            hue_cycle=hue_cycle,
        )
    raise ScheduleError(f"unknown trigger kind {kind!r}")


def _validate_command(command: Command, where: str) -> None:
    if isinstance(command, (LaunchRocket, SpawnFountain)):
        if not 0.0 <= command.x <= 1.0:
            raise ScheduleError(f"{where}: x fraction {command.x} outside [0, 1]")
    if isinstance(command, SpawnFountain) and command.shell is ShellType.TEXT:
        raise ScheduleError(f"{where}: fountains cannot use text shells")
    if isinstance(command, LaunchRocket):
        if not 0.0 < command.target < 1.0:
            raise ScheduleError(f"{where}: target fraction {command.target} outside (0, 1)")
        if command.shell is ShellType.TEXT and not command.char:
            raise ScheduleError(f"{where}: text shell without a character")
    if isinstance(command, PlayCue) and command.kind not in AUDIO_CUES:
        raise ScheduleError(f"{where}: unknown audio cue {command.kind!r}")
    if isinstance(command, (ShowOverlay, HideOverlay)) and not command.name:
        raise ScheduleError(f"{where}: overlay without a name")
