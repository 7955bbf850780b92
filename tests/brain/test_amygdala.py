"""
TESTS/BRAIN/TEST_AMYGDALA.PY
══════════════════════════════════════════════════════════════════════════════
Unit tests for the affect extractor.
Uses the real Janome tokenizer for the lexicon checks.
══════════════════════════════════════════════════════════════════════════════
"""

import pytest

from psyche.brain.amygdala import EMOTION_LEXICON, Amygdala
from psyche.brain.emotions import EmotionCode
from psyche.soma.senses import Morpheme


@pytest.fixture(scope="module")
def amygdala():
    return Amygdala()


class TestLexicon:
    def test_lexicon_size(self):
        assert len(EMOTION_LEXICON) == 47

    def test_sample_entries(self):
        assert EMOTION_LEXICON["最高"].code == EmotionCode.JOY
        assert EMOTION_LEXICON["最悪"].code == EmotionCode.GRIEF
        assert EMOTION_LEXICON["バグ"].value == 80


class TestAssessWithJanome:
    def test_empty_text_is_neutral(self, amygdala):
        assert amygdala.assess("").items() == [(EmotionCode.NEUTRAL, 10)]

    def test_unknown_text_is_neutral(self, amygdala):
        assert amygdala.assess("机の上に本がある").items() == [(EmotionCode.NEUTRAL, 10)]

    def test_joy(self, amygdala):
        assert EmotionCode.JOY in amygdala.assess("嬉しい")

    def test_fear(self, amygdala):
        assert EmotionCode.FEAR in amygdala.assess("バグ")

    def test_fear_and_joy(self, amygdala):
        vector = amygdala.assess("バグ 最高")
        assert EmotionCode.FEAR in vector
        assert EmotionCode.JOY in vector


class TestAssess:
    def test_hits_accumulate_and_clamp(self, senses):
        vector = Amygdala(tokenizer=senses).assess("最高 最高")
        assert vector.items() == [(EmotionCode.JOY, 100)]

    def test_strongest_first(self, senses):
        vector = Amygdala(tokenizer=senses).assess("バグ 最高")
        assert vector.codes() == [EmotionCode.JOY, EmotionCode.FEAR]

    def test_base_form_fallback(self):
        class Conjugated:
            def tokenize(self, text):
                return [Morpheme(surface="楽しかっ", base_form="楽しい", pos="形容詞")]

        vector = Amygdala(tokenizer=Conjugated()).assess("楽しかった")
        assert vector.items() == [(EmotionCode.JOY, 80)]
