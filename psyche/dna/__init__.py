"""
PACKAGE: DNA (Code Génétique) 🧬
PURPOSE: Configuration, Constantes et Chemins.
"""

from .genome import genome, MindConfig
from .conscience import INTENSITY_MAX, INTENSITY_MIN, NEUTRAL_BASELINE

__all__ = ["genome", "MindConfig", "INTENSITY_MAX", "INTENSITY_MIN", "NEUTRAL_BASELINE"]
