"""
PSYCHE/BRAIN/THALAMUS.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: THALAMUS (LE RELAIS SENSORIEL) 🚦
PURPOSE: Filtre d'habituation. Un stimulus répété perd de sa force :
      Gain = 1 / (1 + 0.5 × répétitions)
      0 → 1.0, 1 → 0.67, 2 → 0.5, 3 → 0.4 ... jamais 0.
══════════════════════════════════════════════════════════════════════════════
"""

import threading
from loguru import logger


class Thalamus:
    """
    Le Relais Sensoriel.
    Compare chaque entrée à la précédente et atténue les répétitions.
    """

    def __init__(self, similarity_threshold: float = 0.8):
        self._lock = threading.Lock()
        self.last_input_text = ""
        self.repetition_count = 0
        self.satiation_level = 0.5  # 0.0-1.0, high = craving novelty
        self.similarity_threshold = similarity_threshold

    def filter(self, text: str) -> float:
        """Returns the habituation gain (0, 1] for this input."""
        with self._lock:
            if self._is_similar(text, self.last_input_text):
                self.repetition_count += 1
            else:
                self.repetition_count = 0
                self.last_input_text = text

            gain = 1.0 / (1.0 + 0.5 * self.repetition_count)
            self.satiation_level = min(1.0, self.repetition_count / 10.0)
            repetitions = self.repetition_count

        if repetitions:
            logger.debug(f"🚦 [THALAMUS] Repetition x{repetitions} (gain {gain:.2f})")
        return gain

    def _is_similar(self, text1: str, text2: str) -> bool:
        if not text1 or not text2:
            return False
        if text1 == text2:
            return True

        norm1 = text1.strip().lower()
        norm2 = text2.strip().lower()
        if norm1 == norm2:
            return True

        shorter, longer = sorted((norm1, norm2), key=len)
        if shorter and shorter in longer:
            return len(shorter) / len(longer) >= self.similarity_threshold
        return False

    def get_satiation_level(self) -> float:
        with self._lock:
            return self.satiation_level

    def get_repetition_count(self) -> int:
        with self._lock:
            return self.repetition_count

    def reset(self):
        with self._lock:
            self.last_input_text = ""
            self.repetition_count = 0
            self.satiation_level = 0.5
        logger.info("🚦 [THALAMUS] Reset")
