"""Test the show timeline."""
import pytest
from pyroshow.core.commands import (
    LaunchRocket, SpawnFountain, ShowOverlay, HideOverlay, PlayCue
)
from pyroshow.core.config import GOLD, PALETTE
from pyroshow.core.director import Director, OneShot, Periodic, ScheduleError, parse_color
from pyroshow.core.events import EventBus, OverlayEvent, AudioCueEvent
from pyroshow.core.shells import ShellType


def rocket(x=0.5, target=0.4, **kwargs):
    return LaunchRocket(x=x, target=target, hue=45, sat=100, light=50, **kwargs)


class TestOneShot:
    """Tests for one-shot triggers."""

    def test_fires_only_on_its_frame(self):
        director = Director([OneShot(20, (rocket(),))], end_frame=100)
        assert director.commands_at(19) == []
        assert director.commands_at(20) == [rocket()]
        assert director.commands_at(21) == []

    def test_declaration_order_preserved(self):
        a, b, c = rocket(x=0.1), rocket(x=0.2), rocket(x=0.3)
        director = Director([OneShot(5, (a, b)), OneShot(5, (c,))], end_frame=10)
        assert director.commands_at(5) == [a, b, c]

    def test_commands_at_is_repeatable(self):
        director = Director([OneShot(5, (rocket(),))], end_frame=10)
        assert director.commands_at(5) == director.commands_at(5)


class TestPeriodic:
    """Tests for periodic triggers."""

    def test_fires_every_period_within_window(self):
        trigger = Periodic(start=10, end=40, period=10, template=rocket())
        director = Director([trigger], end_frame=100)
        fired = [f for f in range(1, 100) if director.commands_at(f)]
        assert fired == [10, 20, 30]
        assert trigger.shots == 3
        assert trigger.last_frame == 39

    def test_end_is_exclusive(self):
        trigger = Periodic(start=10, end=30, period=10, template=rocket())
        assert trigger.fires_at(20)
        assert not trigger.fires_at(30)

    def test_shot_index(self):
        trigger = Periodic(start=10, end=60, period=5, template=rocket())
        assert trigger.shot_index(10) == 0
        assert trigger.shot_index(25) == 3

    def test_x_step_wraps(self):
        trigger = Periodic(start=1, end=10, period=1, template=rocket(x=0.8), x_step=0.3)
        xs = [trigger.commands_at(f)[0].x for f in (1, 2, 3)]
        assert xs == pytest.approx([0.8, 0.1, 0.4])

    def test_x_kept_without_step(self):
        trigger = Periodic(start=1, end=10, period=1, template=rocket(x=1.0))
        assert trigger.commands_at(5)[0].x == 1.0

    def test_tilt_step(self):
        trigger = Periodic(start=1, end=10, period=2, template=rocket(tilt=-8),
                           tilt_step=4)
        tilts = [trigger.commands_at(f)[0].tilt for f in (1, 3, 5, 7)]
        assert tilts == [-8, -4, 0, 4]

    def test_hue_cycle(self):
        colors = (PALETTE["red"], PALETTE["blue"])
        trigger = Periodic(start=1, end=10, period=1, template=rocket(),
                           hue_cycle=colors)
        shots = [trigger.commands_at(f)[0] for f in (1, 2, 3)]
        assert [(s.hue, s.sat, s.light) for s in shots] == [colors[0], colors[1], colors[0]]

    def test_fountain_template(self):
        template = SpawnFountain(x=0.1, hue=45, sat=100, light=50)
        trigger = Periodic(start=1, end=10, period=1, template=template,
                           x_step=0.5, tilt_step=3)
        command = trigger.commands_at(2)[0]
        assert isinstance(command, SpawnFountain)
        assert command.x == pytest.approx(0.6)


class TestTick:
    """Tests for Director.tick()."""

    def test_returns_spawns_and_publishes_signals(self):
        director = Director([OneShot(3, (
            ShowOverlay("ready"), rocket(), PlayCue("explosion"), HideOverlay("ready"),
        ))], end_frame=10)
        bus = EventBus()
        bus.start_recording()
        spawns = director.tick(3, bus)
        events = bus.stop_recording()

        assert spawns == [rocket()]
        assert events == [
            OverlayEvent("ready", True, 3),
            AudioCueEvent("launch", 3),
            AudioCueEvent("explosion", 3),
            OverlayEvent("ready", False, 3),
        ]

    def test_fountains_have_no_launch_cue(self):
        fountain = SpawnFountain(x=0.5, hue=45, sat=100, light=50)
        director = Director([OneShot(3, (fountain,))], end_frame=10)
        bus = EventBus()
        bus.start_recording()
        assert director.tick(3, bus) == [fountain]
        assert bus.stop_recording() == []

    def test_without_bus(self):
        director = Director([OneShot(3, (ShowOverlay("ready"), rocket()))], end_frame=10)
        assert director.tick(3) == [rocket()]

    def test_quiet_frame(self):
        director = Director([OneShot(3, (rocket(),))], end_frame=10)
        assert director.tick(4, EventBus()) == []


class TestValidation:
    """Malformed schedules are rejected up front."""

    @pytest.mark.parametrize("trigger, end_frame", [
        (OneShot(0, (rocket(),)), 10),
        (OneShot(10, (rocket(),)), 10),
        (OneShot(5, ()), 10),
        (OneShot(5, (rocket(x=1.5),)), 10),
        (OneShot(5, (rocket(target=0.0),)), 10),
        (OneShot(5, (rocket(target=1.0),)), 10),
        (OneShot(5, (rocket(shell=ShellType.TEXT),)), 10),
        (OneShot(5, (PlayCue("whistle"),)), 10),
        (OneShot(5, (ShowOverlay(""),)), 10),
        (OneShot(5, (SpawnFountain(0.5, 45, 100, 50, shell=ShellType.TEXT),)), 10),
        (Periodic(start=1, end=5, period=0, template=rocket()), 10),
        (Periodic(start=5, end=5, period=1, template=rocket()), 10),
        (Periodic(start=1, end=11, period=1, template=rocket()), 10),
        (Periodic(start=1, end=5, period=1, template=ShowOverlay("ready")), 10),
    ])
    def test_invalid_trigger(self, trigger, end_frame):
        with pytest.raises(ScheduleError):
            Director([trigger], end_frame=end_frame)

    @pytest.mark.parametrize("end_frame", [0, -5, 2.5, None])
    def test_invalid_end_frame(self, end_frame):
        with pytest.raises(ScheduleError):
            Director([], end_frame=end_frame)

    def test_text_shell_with_char_accepted(self):
        Director([OneShot(5, (rocket(shell=ShellType.TEXT, char="2"),))], end_frame=10)

    def test_schedule_error_is_value_error(self):
        assert issubclass(ScheduleError, ValueError)


class TestFromScript:
    """Tests for loading the JSON show script."""

    def test_shipped_show_loads(self, show_script):
        director = Director.from_script(show_script)
        assert director.end_frame == show_script["end_frame"]
        assert len(director.triggers) == len(show_script["triggers"])
        assert director.last_trigger_frame < director.end_frame

    def test_shipped_show_spells_year(self, show_script):
        director = Director.from_script(show_script)
        commands = director.commands_at(560)
        assert "".join(c.char for c in commands) == "2026"
        assert all(c.shell is ShellType.TEXT for c in commands)

    def test_parses_actions(self):
        director = Director.from_script({"end_frame": 50, "triggers": [
            {"kind": "once", "frame": 1, "actions": [
                {"do": "overlay", "name": "ready"},
                {"do": "overlay", "name": "ready", "visible": False},
                {"do": "cue", "kind": "explosion"},
                {"do": "fountain", "x": 0.2, "color": [10, 20, 30]},
                {"do": "launch", "x": 0.5, "target": 0.3, "color": "gold",
                 "shell": "horsetail", "tilt": 5},
            ]},
        ]})
        assert director.commands_at(1) == [
            ShowOverlay("ready"),
            HideOverlay("ready"),
            PlayCue("explosion"),
            SpawnFountain(x=0.2, hue=10.0, sat=20.0, light=30.0),
            LaunchRocket(x=0.5, target=0.3, hue=GOLD[0], sat=GOLD[1], light=GOLD[2],
                         shell=ShellType.HORSETAIL, tilt=5.0),
        ]

    def test_parses_periodic(self):
        director = Director.from_script({"end_frame": 50, "triggers": [
            {"kind": "periodic", "start": 10, "end": 30, "period": 10,
             "action": {"do": "launch", "x": 0.1, "target": 0.3},
             "x_step": 0.2, "hue_cycle": ["red", "blue"]},
        ]})
        second = director.commands_at(20)[0]
        assert second.x == pytest.approx(0.3)
        assert (second.hue, second.sat, second.light) == PALETTE["blue"]

    @pytest.mark.parametrize("script", [
        [],
        {"end_frame": 10},
        {"end_frame": 10, "triggers": "nope"},
        {"end_frame": 10, "triggers": ["nope"]},
        {"end_frame": 10, "triggers": [{"kind": "sometimes"}]},
        {"end_frame": 10, "triggers": [{"kind": "once", "frame": 1}]},
        {"end_frame": 10, "triggers": [{"kind": "once", "frame": "x", "actions": []}]},
        {"end_frame": 10, "triggers": [{"kind": "once", "frame": 1, "actions": [{"do": "dance"}]}]},
        {"end_frame": 10, "triggers": [{"kind": "once", "frame": 1, "actions": [
            {"do": "launch", "x": 0.5, "target": 0.3, "shell": "willow"}]}]},
        {"end_frame": 10, "triggers": [{"kind": "once", "frame": 1, "actions": [
            {"do": "launch", "x": 0.5, "target": 0.3, "color": "mauve"}]}]},
        {"end_frame": 10, "triggers": [{"kind": "once", "frame": 1, "actions": [
            {"do": "launch", "x": 0.5}]}]},
    ])
    def test_malformed_script(self, script):
        with pytest.raises(ScheduleError):
            Director.from_script(script)

    def test_error_names_trigger(self):
        with pytest.raises(ScheduleError, match="trigger #1"):
            Director.from_script({"end_frame": 10, "triggers": [
                {"kind": "once", "frame": 1, "actions": [{"do": "cue", "kind": "launch"}]},
                {"kind": "once", "frame": 2, "actions": [{"do": "dance"}]},
            ]})


class TestParseColor:
    """Tests for parse_color()."""

    def test_palette_name(self):
        assert parse_color("gold") == GOLD

    def test_triple(self):
        assert parse_color([200, 50, 40]) == (200.0, 50.0, 40.0)

    @pytest.mark.parametrize("raw", ["mauve", [1, 2], 7, None])
    def test_invalid(self, raw):
        with pytest.raises(ScheduleError):
            parse_color(raw)
