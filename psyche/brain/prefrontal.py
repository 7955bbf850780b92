"""
PSYCHE/BRAIN/PREFRONTAL.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: PREFRONTAL CORTEX (LA RAISON) 🧠
PURPOSE: Arbitrage rationnel de la réaction brute.
      Raison (Sanity) 0-100. Sous 30 : effondrement, tout passe.
      Au-dessus : les émotions négatives sont freinées, les positives
      légèrement encouragées. Le stress (cortisol) affaiblit le frein,
      l'attachement (oxytocine) peut changer la colère en chagrin.
══════════════════════════════════════════════════════════════════════════════
"""

import math
import random
import threading
from typing import Optional
from loguru import logger

from psyche.brain.emotions import (
    EmotionCode,
    EmotionVector,
    NEGATIVE_EMOTIONS,
    POSITIVE_EMOTIONS,
)
from psyche.dna.conscience import (
    AFFILIATION_ALERT,
    INTENSITY_MAX,
    INTENSITY_MIN,
    SANITY_BREAKDOWN,
    SANITY_INITIAL,
    STRESS_ALERT,
    clamp_intensity,
)
from psyche.dopamine.ganglia import level_label

# Converted anger comes out a little milder
GRIEF_CONVERSION_DAMPING = 0.9


class PrefrontalCortex:
    """
    Le Cortex Préfrontal.
    Seule étape stochastique du pipeline : la source aléatoire est injectable.
    """

    def __init__(self, sanity: int = SANITY_INITIAL, rng: Optional[random.Random] = None):
        self._lock = threading.Lock()
        self.sanity = max(INTENSITY_MIN, min(INTENSITY_MAX, int(sanity)))
        self.rng = rng or random.Random()

    def arbitrate(
        self, raw: EmotionVector, cortisol: float, oxytocin: float
    ) -> EmotionVector:
        """Returns the displayed reaction. `raw` is never mutated."""
        with self._lock:
            sanity = self.sanity

        if sanity < SANITY_BREAKDOWN:
            logger.debug(f"🧠 [PFC] Breakdown (sanity {sanity}), no control")
            return raw.copy()

        suppression = sanity / 100.0
        stress_excess = max(0.0, cortisol - STRESS_ALERT) / 100.0
        if cortisol > STRESS_ALERT:
            # Cortisol 100 halves the brake
            suppression *= 1.0 - stress_excess

        arbitrated = EmotionVector()
        for code, value in raw.items():
            if code in NEGATIVE_EMOTIONS:
                current = float(value)
                if cortisol > STRESS_ALERT:
                    current *= 1.0 + stress_excess

                if code == EmotionCode.ANGER and oxytocin > AFFILIATION_ALERT:
                    # Oxytocin 50 -> 0%, 100 -> 50%
                    probability = (oxytocin - AFFILIATION_ALERT) / 100.0
                    if self.rng.random() < probability:
                        code = EmotionCode.GRIEF
                        current *= GRIEF_CONVERSION_DAMPING
                        logger.debug("🧠 [PFC] Anger redirected to grief")

                # Grief may already exist: merge instead of duplicating
                arbitrated.add(code, clamp_intensity(current - current * suppression * 0.5))

            elif code in POSITIVE_EMOTIONS:
                boost = math.ceil(value * suppression * 0.1)
                arbitrated.add(code, value + boost)

            else:
                arbitrated.add(code, value)

        return arbitrated

    def get_sanity(self) -> int:
        with self._lock:
            return self.sanity

    def set_sanity(self, value: int):
        with self._lock:
            self.sanity = max(INTENSITY_MIN, min(INTENSITY_MAX, int(value)))

    def update_sanity(self, delta: int):
        with self._lock:
            self.sanity = max(INTENSITY_MIN, min(INTENSITY_MAX, self.sanity + int(delta)))

    def apply_stress(self, stress_level: int):
        """Stress 0-100 costs up to 20 points of sanity."""
        self.update_sanity(-(stress_level // 5))
        sanity = self.get_sanity()
        if sanity < SANITY_BREAKDOWN:
            logger.warning(f"🧠 [PFC] Sanity collapsed to {sanity}")

    def rest(self, rest_quality: int):
        """Rest 0-100 restores up to 25 points of sanity."""
        self.update_sanity(rest_quality // 4)

    def get_sanity_level(self) -> str:
        return level_label(self.get_sanity())

    def can_control_emotions(self) -> bool:
        return self.get_sanity() >= SANITY_BREAKDOWN

    def suppression_rate(self) -> float:
        sanity = self.get_sanity()
        if sanity < SANITY_BREAKDOWN:
            return 0.0
        return sanity / 100.0

    def emotional_impact(self, emotions: EmotionVector) -> int:
        """Weight of hostile feelings (A, F, D) once reason has had its say."""
        negative_total = sum(
            value
            for code, value in emotions.items()
            if code in (EmotionCode.ANGER, EmotionCode.FEAR, EmotionCode.DISGUST)
        )
        return int(negative_total * (1.0 - self.suppression_rate() * 0.5))

    def reset(self):
        with self._lock:
            self.sanity = SANITY_INITIAL
        logger.info("🧠 [PFC] Sanity reset")
