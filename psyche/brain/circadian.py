"""
PSYCHE/BRAIN/CIRCADIAN.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: CIRCADIAN (L'HORLOGE BIOLOGIQUE) ⏰
PURPOSE: Table des rythmes quotidiens : pour chaque plage horaire,
      la rampe de Mélatonine (sommeil) et de Sérotonine (éveil).
      Linéaire à l'intérieur d'une plage.
══════════════════════════════════════════════════════════════════════════════
"""

from dataclasses import dataclass
from typing import List, Tuple

NOON = 12
MIDNIGHT = 24


@dataclass(frozen=True)
class RhythmPhase:
    """A [start, end) hour range with a (from, to) ramp for each hormone."""

    start_hour: int
    end_hour: int
    melatonin: Tuple[float, float]
    serotonin: Tuple[float, float]

    def contains(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour

    def levels_at(self, hour: int) -> Tuple[float, float]:
        progress = (hour - self.start_hour) / (self.end_hour - self.start_hour)
        return _ramp(self.melatonin, progress), _ramp(self.serotonin, progress)


def _ramp(bounds: Tuple[float, float], progress: float) -> float:
    start, end = bounds
    return start + (end - start) * progress


class BiologicalClock:
    """
    L'Horloge Biologique.
    Nuit : la mélatonine monte jusqu'à minuit puis redescend vers l'aube.
    Jour : la sérotonine culmine à midi.
    """

    def __init__(self, day_start: int = 6, night_start: int = 22):
        self.day_start = day_start
        self.night_start = night_start
        self.rhythm: List[RhythmPhase] = [
            # Evening: sleep pressure builds towards midnight
            RhythmPhase(night_start, MIDNIGHT, (80.0, 100.0), (20.0, 20.0)),
            # Deep night: melatonin recedes towards dawn
            RhythmPhase(0, day_start, (100.0, 50.0), (20.0, 20.0)),
            # Morning: serotonin climbs to its noon peak
            RhythmPhase(day_start, NOON, (10.0, 10.0), (60.0, 100.0)),
            # Afternoon: slow serotonin decline
            RhythmPhase(NOON, night_start, (10.0, 10.0), (100.0, 60.0)),
        ]

    def levels_at(self, hour: int) -> Tuple[float, float]:
        """Returns (melatonin, serotonin) targets for an hour of the day."""
        for phase in self.rhythm:
            if phase.contains(hour):
                return phase.levels_at(hour)
        return 10.0, 60.0

    def is_night(self, hour: int) -> bool:
        return hour >= self.night_start or hour < self.day_start
