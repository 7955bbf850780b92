"""
PSYCHE/BRAIN/EMOTIONS.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: EMOTION CODES (LA PALETTE) 🎨
PURPOSE: Codes émotionnels (roue de Plutchik simplifiée) et vecteur d'intensités.
INVARIANT: Un code apparaît au plus une fois ; les contributions s'additionnent
      et sont bornées à [0, 100], jamais remplacées.
══════════════════════════════════════════════════════════════════════════════
"""

from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union
from pydantic import BaseModel, Field

from psyche.dna.conscience import INTENSITY_MAX, INTENSITY_MIN, clamp_intensity


class EmotionCode(str, Enum):
    JOY = "J"  # Dopamine, reward prediction
    SURPRISE = "S"  # Attention, learning trigger
    ANGER = "A"  # Noradrenaline, fight
    FEAR = "F"  # Amygdala activation, flight
    LOVE = "L"  # Oxytocin, trust and bonding
    DISGUST = "D"  # Insula, rejection
    HOPE = "H"  # Serotonin, raised expectations
    GRIEF = "G"  # Loss response
    SADNESS = "G"  # Alias of GRIEF: two labels, one affect
    NEUTRAL = "N"  # Baseline


NEGATIVE_EMOTIONS = frozenset(
    {EmotionCode.ANGER, EmotionCode.FEAR, EmotionCode.DISGUST, EmotionCode.GRIEF}
)
POSITIVE_EMOTIONS = frozenset({EmotionCode.JOY, EmotionCode.LOVE, EmotionCode.HOPE})
# Joy and Love feed oxytocin; Hope is positive but not affiliative.
AFFILIATIVE_EMOTIONS = frozenset({EmotionCode.JOY, EmotionCode.LOVE})
# Codes amplified at night by melatonin.
NOCTURNAL_EMOTIONS = frozenset({EmotionCode.GRIEF, EmotionCode.LOVE, EmotionCode.FEAR})

EMOTION_LABELS = {
    EmotionCode.JOY: "喜び",
    EmotionCode.SURPRISE: "驚き",
    EmotionCode.ANGER: "怒り",
    EmotionCode.FEAR: "恐れ",
    EmotionCode.LOVE: "愛",
    EmotionCode.DISGUST: "嫌悪",
    EmotionCode.HOPE: "希望",
    EmotionCode.GRIEF: "悲嘆",
    EmotionCode.NEUTRAL: "中立",
}


class EmotionValue(BaseModel):
    """Un code émotionnel et son intensité (0-100)."""

    code: EmotionCode
    value: int = Field(ge=INTENSITY_MIN, le=INTENSITY_MAX)

    def label(self) -> str:
        return EMOTION_LABELS.get(self.code, "中立")


EmotionLike = Union[EmotionValue, Tuple[EmotionCode, int]]


class EmotionVector:
    """
    Ordered code -> intensity mapping.
    Insertion order is kept; `to_values()` gives the display order
    (descending intensity, stable).
    """

    __slots__ = ("_levels",)

    def __init__(self, values: Iterable[EmotionLike] = ()):
        self._levels: Dict[EmotionCode, int] = {}
        for item in values:
            if isinstance(item, EmotionValue):
                self.add(item.code, item.value)
            else:
                code, value = item
                self.add(EmotionCode(code), value)

    @classmethod
    def neutral(cls, value: int) -> "EmotionVector":
        return cls([(EmotionCode.NEUTRAL, value)])

    def add(self, code: EmotionCode, value: float) -> int:
        """Accumulates a contribution and returns the new clamped level."""
        level = clamp_intensity(self._levels.get(code, 0) + int(value))
        self._levels[code] = level
        return level

    def get(self, code: EmotionCode, default: int = 0) -> int:
        return self._levels.get(code, default)

    def copy(self) -> "EmotionVector":
        clone = EmotionVector()
        clone._levels = dict(self._levels)
        return clone

    def items(self) -> List[Tuple[EmotionCode, int]]:
        return list(self._levels.items())

    def codes(self) -> List[EmotionCode]:
        return list(self._levels)

    def total(self) -> int:
        return sum(self._levels.values())

    def average(self) -> float:
        if not self._levels:
            return 0.0
        return self.total() / len(self._levels)

    def dominant(self) -> Optional[EmotionValue]:
        """Strongest entry; ties go to the earliest inserted code."""
        if not self._levels:
            return None
        code = max(self._levels, key=lambda c: self._levels[c])
        return EmotionValue(code=code, value=self._levels[code])

    def to_values(self) -> List[EmotionValue]:
        ordered = sorted(self._levels.items(), key=lambda kv: kv[1], reverse=True)
        return [EmotionValue(code=code, value=value) for code, value in ordered]

    def sorted(self) -> "EmotionVector":
        return EmotionVector(self.to_values())

    def __iter__(self) -> Iterator[EmotionValue]:
        for code, value in self._levels.items():
            yield EmotionValue(code=code, value=value)

    def __contains__(self, code: object) -> bool:
        return code in self._levels

    def __len__(self) -> int:
        return len(self._levels)

    def __bool__(self) -> bool:
        return bool(self._levels)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EmotionVector):
            return self._levels == other._levels
        return NotImplemented

    def __repr__(self) -> str:
        inner = ", ".join(f"{code.value}:{value}" for code, value in self._levels.items())
        return f"EmotionVector({inner})"
