"""
TESTS/BRAIN/TEST_MIRROR.PY
══════════════════════════════════════════════════════════════════════════════
Unit tests for the empathy blender.
══════════════════════════════════════════════════════════════════════════════
"""

import pytest

from psyche.brain.amygdala import Amygdala
from psyche.brain.emotions import EmotionCode, EmotionValue, EmotionVector
from psyche.brain.mirror import MirrorSystem

J, A = EmotionCode.JOY, EmotionCode.ANGER


@pytest.fixture
def mirror(senses):
    return MirrorSystem(Amygdala(tokenizer=senses))


class TestSimulation:
    def test_other_emotion_is_strongest(self, mirror):
        other = mirror.simulate_other_emotion("好き バカ")
        assert (other.code, other.value) == (A, 80)

    def test_unknown_text(self, mirror):
        other = mirror.simulate_other_emotion("なにか")
        assert other.code == EmotionCode.NEUTRAL


class TestEmpathy:
    def test_initial_level(self, mirror):
        assert mirror.get_empathy_level() == 0.5

    @pytest.mark.parametrize("oxytocin,expected", [(0, 0.2), (50, 0.6), (100, 1.0)])
    def test_level_follows_oxytocin(self, mirror, oxytocin, expected):
        mirror.update_empathy_level(oxytocin)
        assert mirror.get_empathy_level() == pytest.approx(expected)


class TestBlend:
    def test_contagion_added(self):
        own = EmotionVector([(J, 50)])
        blended = MirrorSystem.blend(EmotionValue(code=A, value=80), own, 0.5)
        assert blended.get(A) == 20
        assert blended.get(J) == 50
        assert A not in own

    def test_existing_code_is_accumulated(self):
        own = EmotionVector([(A, 70)])
        blended = MirrorSystem.blend(EmotionValue(code=A, value=80), own, 1.0)
        assert blended.items() == [(A, 100)]

    def test_no_contagion(self):
        own = EmotionVector([(J, 50)])
        blended = MirrorSystem.blend(EmotionValue(code=A, value=80), own, 0.0)
        assert blended == own
