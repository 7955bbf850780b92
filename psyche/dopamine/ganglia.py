"""
PSYCHE/DOPAMINE/GANGLIA.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: BASAL GANGLIA (LA DOPAMINE) 🎯
PURPOSE: Apprentissage par erreur de prédiction de récompense (RPE).
      δ = Récompense réelle - Récompense attendue
      Motivation += 0.5 δ   |   Attente += 0.3 δ
      Mieux que prévu -> motivation. Pire que prévu -> démotivation.
══════════════════════════════════════════════════════════════════════════════
"""

import threading
from loguru import logger

from psyche.dna.conscience import NEUTRAL_BASELINE, clamp_hormone

LEARNING_RATE_MOTIVATION = 0.5
LEARNING_RATE_PREDICTION = 0.3
DECAY_FACTOR = 0.95


def level_label(value: float) -> str:
    """Shared five-step scale for motivation and sanity."""
    if value >= 80:
        return "very_high"
    if value >= 60:
        return "high"
    if value >= 40:
        return "normal"
    if value >= 20:
        return "low"
    return "very_low"


class BasalGanglia:
    """
    Le Circuit de la Récompense.
    Motivation et récompense attendue démarrent toutes deux à 50.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.motivation = NEUTRAL_BASELINE
        self.predicted_reward = NEUTRAL_BASELINE

    def update_motivation(self, actual_reward: float) -> float:
        """Applies one RPE step. Returns the prediction error δ."""
        with self._lock:
            rpe = actual_reward - self.predicted_reward
            self.motivation = clamp_hormone(
                self.motivation + rpe * LEARNING_RATE_MOTIVATION
            )
            self.predicted_reward = clamp_hormone(
                self.predicted_reward + rpe * LEARNING_RATE_PREDICTION
            )
            motivation = self.motivation

        if abs(rpe) >= 30:
            icon = "📈" if rpe > 0 else "📉"
            logger.debug(f"🎯 [DOPA] {icon} RPE {rpe:+.1f} -> motivation {motivation:.1f}")
        return rpe

    def decay(self):
        """Pulls motivation back towards baseline (50) from either side."""
        with self._lock:
            distance = self.motivation - NEUTRAL_BASELINE
            self.motivation = NEUTRAL_BASELINE + distance * DECAY_FACTOR

    def get_motivation(self) -> int:
        with self._lock:
            return int(self.motivation)

    def get_predicted_reward(self) -> float:
        with self._lock:
            return self.predicted_reward

    def get_motivation_level(self) -> str:
        return level_label(self.get_motivation())

    def should_take_action(self, threshold: int = 40) -> bool:
        return self.get_motivation() >= threshold

    def reward_from_emotion(self, value: float) -> float:
        """An emotional intensity taken as the reward signal. Returns δ."""
        return self.update_motivation(value)

    def set_motivation(self, value: float):
        with self._lock:
            self.motivation = clamp_hormone(value)

    def reset(self):
        with self._lock:
            self.motivation = NEUTRAL_BASELINE
            self.predicted_reward = NEUTRAL_BASELINE
        logger.info("🎯 [DOPA] Reset to baseline")
