"""
PSYCHE/BRAIN/DREAMING.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: DEFAULT MODE NETWORK (LA RÊVERIE) 🌙
PURPOSE: Pensée spontanée pendant l'inactivité.
      1 souvenir par heure d'inactivité (1 à 5), choisi selon l'humeur.
      Chaque souvenir est reconsolidé puis rumine : 10% de son émotion
      repasse dans les hormones.
══════════════════════════════════════════════════════════════════════════════
"""

from datetime import timedelta
from typing import List
from loguru import logger

from psyche.brain.emotions import (
    AFFILIATIVE_EMOTIONS,
    EMOTION_LABELS,
    EmotionVector,
    NEGATIVE_EMOTIONS,
)
from psyche.brain.engram import RuneMemory
from psyche.brain.hippocampus import Hippocampus, MoodTendency
from psyche.brain.hormones import HormonalSystem
from psyche.brain.prefrontal import PrefrontalCortex
from psyche.dna.conscience import NEUTRAL_BIAS_INTENSITY
from psyche.dopamine.ganglia import BasalGanglia

MAX_RECALLS = 5
SUMMARY_LENGTH = 30
RUMINATION_RATE = 0.1

HEADER = "【マインドワンダリング】\n"
NO_MEMORY = "（まだ記憶が形成されていない...）"


def summarize(memory: RuneMemory) -> str:
    """「first 30 chars...」を思い出した（dominant label）"""
    text = memory.text
    if len(text) > SUMMARY_LENGTH:
        text = text[:SUMMARY_LENGTH] + "..."

    dominant = memory.emotion_vector().dominant()
    label = "中立"
    if dominant is not None and dominant.value > 0:
        label = EMOTION_LABELS[dominant.code]
    return f"「{text}」を思い出した（{label}）"


class Dreamer:
    """Le Réseau du Mode par Défaut."""

    def __init__(
        self,
        hippocampus: Hippocampus,
        hormones: HormonalSystem,
        prefrontal: PrefrontalCortex,
        ganglia: BasalGanglia,
    ):
        self.hippocampus = hippocampus
        self.hormones = hormones
        self.prefrontal = prefrontal
        self.ganglia = ganglia

    def mood_tendency(self) -> MoodTendency:
        sanity = self.prefrontal.get_sanity()
        motivation = self.ganglia.get_motivation()
        if sanity < 30 or motivation < 30:
            return MoodTendency.NEGATIVE
        if sanity > 70 and motivation > 70:
            return MoodTendency.POSITIVE
        return MoodTendency.NEUTRAL

    async def current_emotions(self) -> EmotionVector:
        """Feelings of the latest episode, or a calm neutral."""
        recent = await self.hippocampus.recent_context(limit=1)
        if not recent:
            return EmotionVector.neutral(NEUTRAL_BIAS_INTENSITY)
        return recent[0].emotion_vector()

    async def wander(self, duration: timedelta) -> str:
        """Returns the narrative log of one mind-wandering session."""
        hours = int(duration.total_seconds() // 3600)
        count = max(1, min(MAX_RECALLS, hours))

        mood = self.mood_tendency()
        current = await self.current_emotions()
        memories = await self.hippocampus.recall(count, mood, current)

        logger.info(f"🌙 [DMN] Wandering ({mood.value}): {len(memories)}/{count} memories")
        if not memories:
            return HEADER + NO_MEMORY

        lines: List[str] = []
        for i, memory in enumerate(memories, start=1):
            lines.append(f"{i}. {summarize(memory)}\n")
            self.ruminate(memory)
        return HEADER + "".join(lines)

    def ruminate(self, memory: RuneMemory):
        for emotion in memory.emotions:
            echo = int(emotion.value * RUMINATION_RATE)
            if emotion.code in NEGATIVE_EMOTIONS:
                self.hormones.update(echo, 0)
            elif emotion.code in AFFILIATIVE_EMOTIONS:
                self.hormones.update(0, echo)
