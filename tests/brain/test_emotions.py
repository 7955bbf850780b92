"""
TESTS/BRAIN/TEST_EMOTIONS.PY
══════════════════════════════════════════════════════════════════════════════
Unit tests for emotion codes and the emotion vector.
══════════════════════════════════════════════════════════════════════════════
"""

import pytest
from pydantic import ValidationError

from psyche.brain.emotions import EmotionCode, EmotionValue, EmotionVector

J, A, F, G = EmotionCode.JOY, EmotionCode.ANGER, EmotionCode.FEAR, EmotionCode.GRIEF


class TestEmotionCode:
    def test_sadness_is_grief(self):
        """Sadness and Grief are one affect under two labels."""
        assert EmotionCode.SADNESS is EmotionCode.GRIEF
        assert EmotionCode("G") is EmotionCode.GRIEF

    def test_value_bounds(self):
        with pytest.raises(ValidationError):
            EmotionValue(code=J, value=101)
        with pytest.raises(ValidationError):
            EmotionValue(code=J, value=-1)

    def test_label(self):
        assert EmotionValue(code=J, value=10).label() == "喜び"


class TestEmotionVector:
    def test_contributions_accumulate(self):
        vector = EmotionVector()
        vector.add(J, 30)
        vector.add(J, 25)
        assert vector.get(J) == 55
        assert len(vector) == 1

    def test_clamped_at_bounds(self):
        vector = EmotionVector([(J, 80), (J, 50), (A, 10), (A, -40)])
        assert vector.get(J) == 100
        assert vector.get(A) == 0

    def test_sadness_merges_with_grief(self):
        vector = EmotionVector([(EmotionCode.SADNESS, 30), (G, 20)])
        assert vector.items() == [(G, 50)]

    def test_display_order_is_descending(self):
        vector = EmotionVector([(A, 20), (J, 90), (F, 50)])
        assert [v.code for v in vector.to_values()] == [J, F, A]
        assert vector.sorted().codes() == [J, F, A]

    def test_dominant(self):
        assert EmotionVector().dominant() is None
        dominant = EmotionVector([(A, 20), (F, 70)]).dominant()
        assert (dominant.code, dominant.value) == (F, 70)

    def test_copy_is_independent(self):
        vector = EmotionVector([(J, 10)])
        clone = vector.copy()
        clone.add(J, 10)
        assert vector.get(J) == 10
        assert clone.get(J) == 20

    def test_average(self):
        assert EmotionVector().average() == 0.0
        assert EmotionVector([(J, 80), (A, 40)]).average() == 60.0

    def test_neutral(self):
        assert EmotionVector.neutral(10).items() == [(EmotionCode.NEUTRAL, 10)]
