"""
PSYCHE/BRAIN/HORMONES.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: HORMONAL SYSTEM (HOMÉOSTASIE) 🧪
PURPOSE: Équilibre hormonal du psychisme.
VALEURS (0-100):
  - Cortisol: Stress. Monte avec les émotions négatives.
  - Oxytocine: Attachement. Monte avec l'affection ET tamponne le cortisol.
  - Mélatonine: Sommeil. Pilotée par l'horloge uniquement.
  - Sérotonine: Éveil. Pilotée par l'horloge uniquement.
══════════════════════════════════════════════════════════════════════════════
"""

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Tuple
from loguru import logger

from psyche.brain.circadian import BiologicalClock
from psyche.dna.conscience import STRESS_ALERT, clamp_hormone


@dataclass(frozen=True)
class CircadianEffects:
    motivation_cap: float  # 0.5-1.0
    emotional_sensitivity: float  # 1.0-1.2
    cortisol_decay_boost: float  # 1.0-2.0


class HormonalSystem:
    """
    Le Moteur Hormonal.
    Deux axes indépendants : événements (cortisol/oxytocine) et horloge
    (mélatonine/sérotonine).
    """

    def __init__(
        self,
        decay_rate: float = 10.0,
        clock: Optional[BiologicalClock] = None,
        time_provider: Callable[[], datetime] = datetime.now,
    ):
        self._lock = threading.Lock()
        self.time_provider = time_provider
        self.clock = clock or BiologicalClock()

        # Base Levels
        self.cortisol = 0.0
        self.oxytocin = 0.0
        self.melatonin = 0.0
        self.serotonin = 50.0
        self.last_updated = self.time_provider()

        # Linear decay per hour (Metabolism)
        self.decay_rate = decay_rate

    def update(self, stressor: float, affection: float):
        """External stimulus. Affection raises oxytocin and buffers cortisol."""
        with self._lock:
            if stressor > 0:
                self.cortisol += stressor

            if affection > 0:
                self.oxytocin += affection
                self.cortisol -= affection

            self._clamp()
            self.last_updated = self.time_provider()
            cortisol = self.cortisol

        if cortisol > STRESS_ALERT:
            logger.warning(f"🧪 [HORM] Stress! Cortisol {cortisol:.1f}")

    def decay(self, stress_boost: float = 1.0):
        """Linear metabolic decay towards 0 for every hour since the last update."""
        with self._lock:
            now = self.time_provider()
            elapsed = (now - self.last_updated).total_seconds() / 3600.0
            if elapsed <= 0:
                return

            amount = self.decay_rate * elapsed
            if self.cortisol > 0:
                self.cortisol = max(0.0, self.cortisol - amount * stress_boost)
            if self.oxytocin > 0:
                self.oxytocin = max(0.0, self.oxytocin - amount)

            self.last_updated = now

    def update_circadian_rhythm(self, now: datetime):
        with self._lock:
            self.melatonin, self.serotonin = self.clock.levels_at(now.hour)
            self._clamp()

    def get_circadian_effects(self) -> CircadianEffects:
        with self._lock:
            return CircadianEffects(
                # Melatonin 0 -> cap 1.0, 100 -> cap 0.5
                motivation_cap=max(0.5, 1.0 - self.melatonin / 200.0),
                # Night makes us sentimental: 1.0x -> 1.2x
                emotional_sensitivity=1.0 + self.melatonin / 500.0,
                # Daylight speeds stress recovery: 1.0x -> 2.0x
                cortisol_decay_boost=1.0 + self.serotonin / 100.0,
            )

    def get_status(self) -> Tuple[float, float]:
        """Returns (cortisol, oxytocin)."""
        with self._lock:
            return self.cortisol, self.oxytocin

    def get_state(self) -> dict:
        with self._lock:
            return {
                "cortisol": round(self.cortisol, 2),
                "oxytocin": round(self.oxytocin, 2),
                "melatonin": round(self.melatonin, 2),
                "serotonin": round(self.serotonin, 2),
            }

    def reset(self):
        """Reset hormonal levels to baseline (calm state)."""
        with self._lock:
            self.cortisol = 0.0
            self.oxytocin = 0.0
            self.melatonin = 0.0
            self.serotonin = 50.0
            self.last_updated = self.time_provider()
        logger.info("🧪 [HORM] Reset to baseline")

    def _clamp(self):
        self.cortisol = clamp_hormone(self.cortisol)
        self.oxytocin = clamp_hormone(self.oxytocin)
        self.melatonin = clamp_hormone(self.melatonin)
        self.serotonin = clamp_hormone(self.serotonin)
