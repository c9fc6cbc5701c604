"""Test particle integration."""
import pytest
from pyroshow.core.particles import Particle, Behavior, BEHAVIOR_PROFILES
from pyroshow.core.config import SHRINK_BELOW_OPACITY


def make(behavior=Behavior.NORMAL, rng=None, **kwargs):
    params = dict(x=100.0, y=100.0, vx=3.0, vy=-2.0, hue=45, sat=100, light=50)
    params.update(kwargs)
    if rng is not None:
        params["rng"] = rng
    return Particle(behavior=behavior, **params)


class TestBehaviorProfiles:
    """Tests for the behavior table."""

    def test_every_behavior_has_a_profile(self):
        assert set(BEHAVIOR_PROFILES) == set(Behavior)

    @pytest.mark.parametrize("behavior", list(Behavior))
    def test_drag_strictly_between_zero_and_one(self, behavior):
        assert 0.0 < BEHAVIOR_PROFILES[behavior].drag < 1.0

    def test_heavy_falls_faster_and_straighter(self):
        normal = BEHAVIOR_PROFILES[Behavior.NORMAL]
        heavy = BEHAVIOR_PROFILES[Behavior.HEAVY]
        assert heavy.drag > normal.drag
        assert heavy.gravity > normal.gravity

    def test_trail_decays_fastest(self):
        trail = BEHAVIOR_PROFILES[Behavior.TRAIL]
        for behavior, profile in BEHAVIOR_PROFILES.items():
            if behavior is not Behavior.TRAIL:
                assert trail.decay[0] > profile.decay[1]
                assert trail.drag < profile.drag


class TestParticle:
    """Tests for Particle.update()."""

    def test_particle_creation(self, rng):
        p = make(rng=rng)
        assert p.opacity == 1.0
        assert p.alive
        lo, hi = BEHAVIOR_PROFILES[Behavior.NORMAL].decay
        assert lo <= p.decay <= hi

    @pytest.mark.parametrize("behavior", list(Behavior))
    def test_opacity_never_increases(self, behavior, rng):
        p = make(behavior, rng=rng)
        previous = p.opacity
        for _ in range(400):
            p.update(rng)
            assert p.opacity <= previous
            previous = p.opacity

    @pytest.mark.parametrize("behavior", list(Behavior))
    def test_dead_particle_stays_dead(self, behavior, rng):
        p = make(behavior, rng=rng)
        died = False
        for _ in range(500):
            p.update(rng)
            if died:
                assert not p.alive
            died = died or not p.alive
        assert died

    def test_velocity_updated_before_position(self):
        p = make(vx=10.0, vy=0.0)
        profile = BEHAVIOR_PROFILES[Behavior.NORMAL]
        p.update()
        assert p.vx == pytest.approx(10.0 * profile.drag)
        assert p.x == pytest.approx(100.0 + 10.0 * profile.drag)
        assert p.vy == pytest.approx(profile.gravity)
        assert p.y == pytest.approx(100.0 + profile.gravity)

    def test_history_is_bounded(self):
        p = make()
        limit = BEHAVIOR_PROFILES[Behavior.NORMAL].trail_length
        for _ in range(20):
            p.update()
            assert len(p.history) <= limit
        # Oldest sample first, last one is the previous position
        assert p.history[-1] != p.pos

    def test_history_records_previous_position(self):
        p = make()
        before = p.pos
        p.update()
        assert p.history[-1] == before

    def test_size_shrinks_when_faint(self):
        p = make(size=4.0)
        p.opacity = SHRINK_BELOW_OPACITY + 0.001
        p.decay = 0.01
        p.update()
        assert p.size < 4.0

    def test_size_kept_while_bright(self):
        p = make(size=4.0)
        p.update()
        assert p.size == 4.0

    def test_fountain_dies_at_threshold(self):
        p = make(Behavior.FOUNTAIN)
        p.opacity = 0.05
        assert not p.alive

    def test_glitter_flickers_to_full_lightness(self, rng):
        p = make(Behavior.GLITTER, rng=rng, light=50)
        seen = set()
        for _ in range(60):
            p.update(rng)
            seen.add(p.display_light)
        assert seen == {50, 100.0}
        # The stored color is never changed by flicker
        assert p.light == 50

    def test_normal_particles_never_sparkle(self, rng):
        p = make(Behavior.NORMAL, rng=rng)
        for _ in range(50):
            p.update(rng)
            assert not p.sparkling
