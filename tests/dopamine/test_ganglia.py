"""
TESTS/DOPAMINE/TEST_GANGLIA.PY
══════════════════════════════════════════════════════════════════════════════
Unit tests for the reward prediction error unit.
══════════════════════════════════════════════════════════════════════════════
"""

import pytest

from psyche.dopamine.ganglia import BasalGanglia, level_label


class TestRewardPrediction:
    def test_fixed_point(self):
        """Reward exactly as predicted changes nothing."""
        ganglia = BasalGanglia()
        assert ganglia.update_motivation(50) == 0
        assert ganglia.get_motivation() == 50
        assert ganglia.get_predicted_reward() == 50

    def test_better_than_expected(self):
        ganglia = BasalGanglia()
        ganglia.update_motivation(100)
        assert ganglia.get_motivation() == 75
        assert ganglia.get_predicted_reward() == pytest.approx(65)

    def test_worse_than_expected(self):
        ganglia = BasalGanglia()
        ganglia.update_motivation(0)
        assert ganglia.get_motivation() == 25
        assert ganglia.get_predicted_reward() == pytest.approx(35)

    def test_positive_bound(self):
        ganglia = BasalGanglia()
        for _ in range(200):
            ganglia.update_motivation(100)
            assert ganglia.motivation <= 100
        assert ganglia.get_predicted_reward() > 99

    def test_negative_bound(self):
        ganglia = BasalGanglia()
        for _ in range(200):
            ganglia.update_motivation(0)
            assert ganglia.motivation >= 0
        assert ganglia.get_predicted_reward() < 1


class TestDecay:
    @pytest.mark.parametrize("start,expected", [(90, 88), (10, 12), (50, 50)])
    def test_pulls_towards_baseline(self, start, expected):
        ganglia = BasalGanglia()
        ganglia.set_motivation(start)
        ganglia.decay()
        assert ganglia.get_motivation() == expected


class TestHelpers:
    @pytest.mark.parametrize(
        "value,label",
        [(80, "very_high"), (60, "high"), (40, "normal"), (20, "low"), (19, "very_low")],
    )
    def test_level_label(self, value, label):
        assert level_label(value) == label

    def test_should_take_action(self):
        ganglia = BasalGanglia()
        assert ganglia.should_take_action(40)
        ganglia.set_motivation(30)
        assert not ganglia.should_take_action(40)

    def test_reward_from_emotion(self):
        """Emotional intensity is fed through the same RPE step."""
        ganglia = BasalGanglia()
        assert ganglia.reward_from_emotion(100.0) == 50
        assert ganglia.get_motivation() == 75
        assert ganglia.get_predicted_reward() == pytest.approx(65)

    def test_reward_from_neutral_emotion(self):
        ganglia = BasalGanglia()
        assert ganglia.reward_from_emotion(50.0) == 0
        assert ganglia.get_motivation() == 50

    def test_set_motivation_clamped(self):
        ganglia = BasalGanglia()
        ganglia.set_motivation(150)
        assert ganglia.get_motivation() == 100
        assert ganglia.get_motivation_level() == "very_high"

    def test_reset(self):
        ganglia = BasalGanglia()
        ganglia.update_motivation(100)
        ganglia.reset()
        assert ganglia.get_motivation() == 50
        assert ganglia.get_predicted_reward() == 50
