"""
PSYCHE/BRAIN/MIRROR.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: MIRROR NEURONS (L'EMPATHIE) 🪞
PURPOSE: Devine l'émotion de l'interlocuteur et la laisse "déteindre"
      sur la nôtre (contagion émotionnelle), pondérée par l'empathie.
      Empathie = 0.2 + 0.8 × (Oxytocine / 100)
══════════════════════════════════════════════════════════════════════════════
"""

import threading
from loguru import logger

from psyche.brain.amygdala import Amygdala
from psyche.brain.emotions import EmotionCode, EmotionValue, EmotionVector


class MirrorSystem:
    """
    Cognition Sociale.
    Réutilise l'Amygdale pour simuler ce que ressent l'autre.
    """

    def __init__(self, amygdala: Amygdala):
        self._lock = threading.Lock()
        self.amygdala = amygdala
        self.empathy_level = 0.5

    def simulate_other_emotion(self, text: str) -> EmotionValue:
        """The other party's presumed emotion: the strongest reflex in the text."""
        strongest = self.amygdala.assess(text).dominant()
        if strongest is None:
            return EmotionValue(code=EmotionCode.NEUTRAL, value=50)
        return strongest

    def update_empathy_level(self, oxytocin: float):
        with self._lock:
            self.empathy_level = max(0.0, min(1.0, 0.2 + (oxytocin / 100.0) * 0.8))

    def get_empathy_level(self) -> float:
        with self._lock:
            return self.empathy_level

    @staticmethod
    def blend(
        other: EmotionValue, own: EmotionVector, empathy: float
    ) -> EmotionVector:
        """Emotional contagion. Returns a new vector, `own` is left untouched."""
        contagion = round(other.value * empathy * 0.5)
        if contagion <= 0:
            return own

        blended = own.copy()
        blended.add(other.code, contagion)
        logger.debug(
            f"🪞 [MIRROR] Contagion {other.code.value}+{contagion} (empathy {empathy:.2f})"
        )
        return blended
