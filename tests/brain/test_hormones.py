"""
TESTS/BRAIN/TEST_HORMONES.PY
══════════════════════════════════════════════════════════════════════════════
Unit tests for homeostasis and the circadian rhythm table.
══════════════════════════════════════════════════════════════════════════════
"""

from datetime import datetime

import pytest

from psyche.brain.circadian import BiologicalClock
from psyche.brain.hormones import HormonalSystem


@pytest.fixture
def hormones(clock):
    return HormonalSystem(decay_rate=10.0, time_provider=clock)


def at(hour: int) -> datetime:
    return datetime(2026, 1, 1, hour, 0, 0)


class TestHormonalUpdate:
    def test_initial_levels(self, hormones):
        assert hormones.get_state() == {
            "cortisol": 0.0,
            "oxytocin": 0.0,
            "melatonin": 0.0,
            "serotonin": 50.0,
        }

    def test_stress_raises_cortisol(self, hormones):
        hormones.update(40, 0)
        assert hormones.get_status() == (40.0, 0.0)

    def test_affection_buffers_stress(self, hormones):
        hormones.update(40, 0)
        hormones.update(0, 30)
        assert hormones.get_status() == (10.0, 30.0)

    def test_levels_clamped(self, hormones):
        hormones.update(250, 0)
        hormones.update(0, 500)
        cortisol, oxytocin = hormones.get_status()
        assert cortisol == 0.0
        assert oxytocin == 100.0

    def test_reset(self, hormones):
        hormones.update(80, 20)
        hormones.reset()
        assert hormones.get_status() == (0.0, 0.0)


class TestDecay:
    def test_linear_decay(self, hormones, clock):
        hormones.update(60, 0)
        hormones.update(0, 10)  # cortisol 50, oxytocin 10
        clock.advance(hours=2)
        hormones.decay()
        assert hormones.get_status() == (30.0, 0.0)

    def test_stress_boost_only_affects_cortisol(self, hormones, clock):
        hormones.update(90, 0)
        hormones.update(0, 30)  # cortisol 60, oxytocin 30
        clock.advance(hours=1)
        hormones.decay(stress_boost=2.0)
        assert hormones.get_status() == (40.0, 20.0)

    def test_no_elapsed_time(self, hormones):
        hormones.update(60, 0)
        hormones.decay()
        assert hormones.get_status() == (60.0, 0.0)


class TestCircadian:
    @pytest.mark.parametrize(
        "hour,melatonin,serotonin",
        [
            (0, 100.0, 20.0),
            (3, 75.0, 20.0),
            (6, 10.0, 60.0),
            (9, 10.0, 80.0),
            (12, 10.0, 100.0),
            (17, 10.0, 80.0),
            (22, 80.0, 20.0),
            (23, 90.0, 20.0),
        ],
    )
    def test_rhythm_table(self, hormones, hour, melatonin, serotonin):
        hormones.update_circadian_rhythm(at(hour))
        state = hormones.get_state()
        assert state["melatonin"] == pytest.approx(melatonin)
        assert state["serotonin"] == pytest.approx(serotonin)

    def test_effects_at_midnight(self, hormones):
        hormones.update_circadian_rhythm(at(0))
        effects = hormones.get_circadian_effects()
        assert effects.motivation_cap == pytest.approx(0.5)
        assert effects.emotional_sensitivity == pytest.approx(1.2)
        assert effects.cortisol_decay_boost == pytest.approx(1.2)

    def test_effects_at_noon(self, hormones):
        hormones.update_circadian_rhythm(at(12))
        effects = hormones.get_circadian_effects()
        assert effects.motivation_cap == pytest.approx(0.95)
        assert effects.cortisol_decay_boost == pytest.approx(2.0)

    def test_configurable_breakpoints(self):
        clock = BiologicalClock(day_start=7, night_start=21)
        assert clock.levels_at(21) == (80.0, 20.0)
        assert clock.is_night(6)
        assert not clock.is_night(7)
