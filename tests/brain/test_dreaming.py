"""
TESTS/BRAIN/TEST_DREAMING.PY
══════════════════════════════════════════════════════════════════════════════
Unit tests for mind-wandering (default mode network).
══════════════════════════════════════════════════════════════════════════════
"""

import random
from datetime import timedelta

import pytest

from psyche.brain.dreaming import Dreamer, summarize
from psyche.brain.emotions import EmotionCode, EmotionValue, EmotionVector
from psyche.brain.engram import RuneMemory
from psyche.brain.hippocampus import Hippocampus, MoodTendency
from psyche.brain.hormones import HormonalSystem
from psyche.brain.prefrontal import PrefrontalCortex
from psyche.dopamine.ganglia import BasalGanglia


@pytest.fixture
def dreamer(clock):
    return Dreamer(
        Hippocampus(rng=random.Random(5), clock=clock),
        HormonalSystem(time_provider=clock),
        PrefrontalCortex(),
        BasalGanglia(),
    )


class TestSummary:
    def test_long_text_truncated(self):
        memory = RuneMemory(
            text="あ" * 40, emotions=[EmotionValue(code=EmotionCode.FEAR, value=60)]
        )
        assert summarize(memory) == f"「{'あ' * 30}...」を思い出した（恐れ）"

    def test_without_emotion(self):
        assert summarize(RuneMemory(text="空")) == "「空」を思い出した（中立）"


class TestMood:
    @pytest.mark.parametrize(
        "sanity,motivation,mood",
        [
            (20, 80, MoodTendency.NEGATIVE),
            (80, 20, MoodTendency.NEGATIVE),
            (80, 80, MoodTendency.POSITIVE),
            (80, 50, MoodTendency.NEUTRAL),
            (70, 90, MoodTendency.NEUTRAL),
        ],
    )
    def test_tendency(self, dreamer, sanity, motivation, mood):
        dreamer.prefrontal.set_sanity(sanity)
        dreamer.ganglia.set_motivation(motivation)
        assert dreamer.mood_tendency() == mood

    @pytest.mark.asyncio
    async def test_current_emotions_default(self, dreamer):
        assert (await dreamer.current_emotions()).items() == [(EmotionCode.NEUTRAL, 50)]


class TestWander:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "duration,expected",
        [(timedelta(minutes=30), 1), (timedelta(hours=3), 3), (timedelta(hours=10), 5)],
    )
    async def test_recall_count_follows_duration(self, dreamer, duration, expected):
        for i in range(8):
            await dreamer.hippocampus.add_memory(
                f"思い出{i}", EmotionVector([(EmotionCode.JOY, 50)])
            )
        log = await dreamer.wander(duration)
        lines = log.splitlines()
        assert lines[0] == "【マインドワンダリング】"
        assert len(lines) == 1 + expected

    def test_ruminate(self, dreamer):
        memory = RuneMemory(
            text="x",
            emotions=[
                EmotionValue(code=EmotionCode.ANGER, value=50),
                EmotionValue(code=EmotionCode.JOY, value=30),
                EmotionValue(code=EmotionCode.SURPRISE, value=40),
            ],
        )
        dreamer.ruminate(memory)
        assert dreamer.hormones.get_status() == (2.0, 3.0)
