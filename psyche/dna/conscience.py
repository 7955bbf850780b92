"""
PSYCHE/DNA/CONSCIENCE.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: SACRED CONSTANTS (LA CONSCIENCE) ⚖️
PURPOSE: Les lois immuables du psychisme.
      Bornes des intensités, points neutres, seuils de rupture.
      PURE - Aucun état, aucune I/O.
══════════════════════════════════════════════════════════════════════════════
"""

# ════════════════════════════════════════════════════════════════════════════
# 1. BORNES (Intensités & Hormones)
# ════════════════════════════════════════════════════════════════════════════
INTENSITY_MIN = 0
INTENSITY_MAX = 100

HORMONE_MIN = 0.0
HORMONE_MAX = 100.0

# ════════════════════════════════════════════════════════════════════════════
# 2. POINTS NEUTRES
# ════════════════════════════════════════════════════════════════════════════
NEUTRAL_BASELINE = 50.0  # Motivation & predicted reward start here
NEUTRAL_FALLBACK_INTENSITY = 10  # Amygdala "nothing matched" reaction
NEUTRAL_BIAS_INTENSITY = 50  # Personality bias / mood without memories

# ════════════════════════════════════════════════════════════════════════════
# 3. SEUILS
# ════════════════════════════════════════════════════════════════════════════
SANITY_INITIAL = 80
SANITY_BREAKDOWN = 30  # Below this the PFC lets everything through
STRESS_ALERT = 50.0  # Cortisol level where reason starts to weaken
AFFILIATION_ALERT = 50.0  # Oxytocin level where anger turns to grief
PERSONALITY_THRESHOLD = 30  # Min average intensity to shape personality


def clamp_intensity(value: float) -> int:
    """Truncate to int and keep inside [INTENSITY_MIN, INTENSITY_MAX]."""
    return max(INTENSITY_MIN, min(INTENSITY_MAX, int(value)))


def clamp_hormone(value: float) -> float:
    return max(HORMONE_MIN, min(HORMONE_MAX, value))
